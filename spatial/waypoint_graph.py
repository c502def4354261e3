# spatial/waypoint_graph.py

"""Waypoint graph navigable surface backed by an R-tree."""

import heapq
import itertools
import math
from collections.abc import Hashable
from dataclasses import dataclass
from typing import Any, Optional

import rtree.index

from core.exceptions import WaypointGraphError
from core.logging import get_logger

from .entities import Point3
from .metrics import distance_full
from .navigation import CornerBuffer
from .projection import to_space

logger = get_logger(__name__)


@dataclass
class Waypoint:
    """Graph node: a walkable position tagged with an area index."""

    key: int
    position: Point3
    area: int = 0


class WaypointGraph:
    """Navigable surface made of waypoints joined by walkable edges.

    Nearest-point queries go through a 3D R-tree; routes are found with A*
    over the waypoints whose area is enabled in the requested mask. Edge
    costs default to the 3D length of the edge.
    """

    def __init__(self):
        """Initialize waypoint graph with R-tree backend."""
        self._rtree = self._new_rtree()
        self._nodes: dict[Hashable, Waypoint] = {}
        self._edges: dict[Hashable, dict[Hashable, float]] = {}
        self._keys = itertools.count()

        self.logger = get_logger(f"{__name__}.WaypointGraph")
        self.logger.info("waypoint_graph.created")

    @staticmethod
    def _new_rtree() -> rtree.index.Index:
        properties = rtree.index.Property()
        properties.dimension = 3
        return rtree.index.Index(properties=properties)

    @staticmethod
    def _bbox(position: Point3) -> tuple:
        # Point with no extent
        return (position[0], position[1], position[2],
                position[0], position[1], position[2])

    def add_node(self, node_id: Hashable, position: Any, area: int = 0) -> None:
        """Insert a waypoint, or move an existing one.

        Args:
            node_id: Caller-chosen waypoint identifier
            position: Waypoint position (2D positions sit at height zero)
            area: Area index checked against query masks
        """
        point = to_space(position)
        existing = self._nodes.get(node_id)
        if existing is not None:
            self._rtree.delete(existing.key, self._bbox(existing.position))
            existing.position = point
            existing.area = area
            self._rtree.insert(existing.key, self._bbox(point), obj=node_id)
            return

        waypoint = Waypoint(key=next(self._keys), position=point, area=area)
        self._rtree.insert(waypoint.key, self._bbox(point), obj=node_id)
        self._nodes[node_id] = waypoint
        self._edges[node_id] = {}

        self.logger.debug("waypoint.indexed", node_id=str(node_id), position=point, area=area)

    def connect(self, a: Hashable, b: Hashable, cost: Optional[float] = None) -> None:
        """Join two waypoints with an undirected edge.

        Raises:
            WaypointGraphError: If either waypoint is unknown
        """
        for node_id in (a, b):
            if node_id not in self._nodes:
                raise WaypointGraphError(f"Unknown waypoint: {node_id!r}")
        if cost is None:
            cost = distance_full(self._nodes[a].position, self._nodes[b].position)
        self._edges[a][b] = cost
        self._edges[b][a] = cost

    def remove_node(self, node_id: Hashable) -> None:
        """Remove a waypoint and its edges; unknown ids are ignored."""
        waypoint = self._nodes.pop(node_id, None)
        if waypoint is None:
            return

        self._rtree.delete(waypoint.key, self._bbox(waypoint.position))
        for neighbour in self._edges.pop(node_id):
            self._edges[neighbour].pop(node_id, None)

        self.logger.debug("waypoint.removed", node_id=str(node_id))

    def get_node_count(self) -> int:
        return len(self._nodes)

    def get_position(self, node_id: Hashable) -> Point3:
        try:
            return self._nodes[node_id].position
        except KeyError:
            raise WaypointGraphError(f"Unknown waypoint: {node_id!r}") from None

    def clear(self) -> None:
        """Remove every waypoint."""
        self._rtree = self._new_rtree()
        self._nodes.clear()
        self._edges.clear()

        self.logger.info("waypoint_graph.cleared")

    def _eligible(self, node_id: Hashable, area_mask: int) -> bool:
        return bool(area_mask & (1 << self._nodes[node_id].area))

    def _nearest_node(self, point: Point3, max_radius: float, area_mask: int) -> Optional[Hashable]:
        if not self._nodes:
            return None

        # R-tree yields candidates in increasing distance
        for item in self._rtree.nearest(self._bbox(point), len(self._nodes), objects=True):
            node_id = item.object
            if distance_full(point, self._nodes[node_id].position) > max_radius:
                return None
            if self._eligible(node_id, area_mask):
                return node_id
        return None

    def nearest_point(self, point: Any, max_radius: float, area_mask: int) -> Optional[Point3]:
        """Closest eligible waypoint position within ``max_radius``."""
        node_id = self._nearest_node(to_space(point), max_radius, area_mask)
        if node_id is None:
            return None
        return self._nodes[node_id].position

    def compute_route(
        self,
        start: Any,
        end: Any,
        area_mask: int,
        corners: CornerBuffer,
    ) -> Optional[int]:
        """Route from ``start`` through the graph to the waypoint nearest ``end``.

        Args:
            start: Route start; the route begins here and joins the graph
                at its nearest eligible waypoint
            end: Route end, snapped the same way
            area_mask: Areas the route may cross
            corners: Buffer receiving the waypoint positions

        Returns:
            Number of corners written, or None when no route exists
        """
        origin = to_space(start)
        source = self._nearest_node(origin, math.inf, area_mask)
        target = self._nearest_node(to_space(end), math.inf, area_mask)
        if source is None or target is None:
            return None

        nodes = self._astar(source, target, area_mask)
        if nodes is None:
            self.logger.debug(
                "waypoint_graph.route_not_found",
                source=str(source),
                target=str(target),
                area_mask=area_mask,
            )
            return None

        points = [self._nodes[n].position for n in nodes]
        if origin != points[0]:
            points.insert(0, origin)
        return corners.write(points)

    def _astar(self, source: Hashable, target: Hashable, area_mask: int) -> Optional[list]:
        goal = self._nodes[target].position
        counter = itertools.count()
        open_set = [(distance_full(self._nodes[source].position, goal), next(counter), source)]
        g_scores = {source: 0.0}
        parents: dict[Hashable, Hashable] = {}
        closed: set = set()

        while open_set:
            _, _, current = heapq.heappop(open_set)
            if current in closed:
                continue
            if current == target:
                path = [current]
                while current in parents:
                    current = parents[current]
                    path.append(current)
                path.reverse()
                return path

            closed.add(current)
            for neighbour, cost in self._edges[current].items():
                if neighbour in closed or not self._eligible(neighbour, area_mask):
                    continue
                tentative = g_scores[current] + cost
                if tentative < g_scores.get(neighbour, math.inf):
                    g_scores[neighbour] = tentative
                    parents[neighbour] = current
                    f_score = tentative + distance_full(self._nodes[neighbour].position, goal)
                    heapq.heappush(open_set, (f_score, next(counter), neighbour))

        return None
