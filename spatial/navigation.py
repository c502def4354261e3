# spatial/navigation.py

"""Waypoint paths across a navigable surface.

The surface itself (navmesh, waypoint graph, engine binding) is a
collaborator implementing NavigableSurface. PathFinder wraps it with a
fixed policy: identical start and goal give a single waypoint, a successful
route gives its corners, and anything else gives a straight two-point line.
Callers always get a usable path back.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, MutableSequence, Optional, Protocol, runtime_checkable

from core.config import config
from core.exceptions import NavigableSurfaceError
from core.logging import get_logger

from .entities import Point2, Point3
from .projection import project, to_space

logger = get_logger(__name__)

# Area mask selecting every category of navigable surface
ALL_AREAS = -1


@dataclass(frozen=True)
class AreaFilter:
    """Query filter carrying the area mask for a path request."""

    area_mask: int = ALL_AREAS

    def allows(self, area: int) -> bool:
        """Whether surface tagged with ``area`` is eligible."""
        return bool(self.area_mask & (1 << area))


@runtime_checkable
class HasAreaMask(Protocol):
    """Any filter object exposing an area mask."""

    area_mask: int


class CornerBuffer:
    """Reusable storage for the corners of a computed route.

    A buffer belongs to one owner at a time. Sharing one between overlapping
    path requests mixes their corners.
    """

    def __init__(self, capacity: Optional[int] = None):
        """Initialize corner buffer.

        Args:
            capacity: Initial number of corner slots, defaults to the
                configured corner capacity
        """
        self._corners: list[Optional[Point3]] = []
        self.resize(capacity)

    @property
    def capacity(self) -> int:
        return len(self._corners)

    def resize(self, size: Optional[int] = None) -> None:
        """Reallocate the buffer, discarding its contents.

        Args:
            size: New capacity; negative sizes are treated as zero
        """
        if size is None:
            size = config.corner_capacity
        self._corners = [None] * max(size, 0)

    def write(self, corners: Iterable[Point3]) -> int:
        """Store corners from the start of the buffer, doubling when full.

        Args:
            corners: Ordered route corners

        Returns:
            Number of corners written
        """
        count = 0
        for corner in corners:
            if count >= len(self._corners):
                self._corners.extend([None] * max(len(self._corners), 1))
            self._corners[count] = to_space(corner)
            count += 1
        return count

    def read(self, count: int) -> list[Point3]:
        """Copy out the first ``count`` corners."""
        return list(self._corners[:count])

    def clear(self) -> None:
        """Forget stored corners while keeping the capacity."""
        for i in range(len(self._corners)):
            self._corners[i] = None


@runtime_checkable
class NavigableSurface(Protocol):
    """Pathfinding service answering nearest-point and route queries."""

    def nearest_point(self, point: Point3, max_radius: float, area_mask: int) -> Optional[Point3]:
        """Closest navigable point within ``max_radius``, or None."""
        ...

    def compute_route(
        self,
        start: Point3,
        end: Point3,
        area_mask: int,
        corners: CornerBuffer,
    ) -> Optional[int]:
        """Write the route corners into ``corners`` and return their count, or None."""
        ...


class PathFinder:
    """Computes waypoint paths on a navigable surface.

    Each PathFinder owns its corner buffer, so it is not reentrant: give
    every agent, thread or task its own instance rather than sharing one.
    """

    def __init__(
        self,
        surface: NavigableSurface,
        *,
        area_mask: Optional[int] = None,
        capacity: Optional[int] = None,
        nearest_radius: Optional[float] = None,
        anchor_endpoints: bool = False,
        line_of_sight: Optional[Callable[[Point3, Point3], bool]] = None,
    ):
        """Initialize path finder.

        Args:
            surface: Navigable surface to query
            area_mask: Default area mask, defaults to the configured mask
            capacity: Initial corner buffer capacity
            nearest_radius: Search radius when snapping the goal onto the
                surface, defaults to the configured radius (unbounded)
            anchor_endpoints: Insert the requested start and goal when the
                route does not begin or end on them
            line_of_sight: Visibility test used to drop corners already
                visible from an anchored start or goal
        """
        self.surface = surface
        self.area_mask = config.default_area_mask if area_mask is None else area_mask
        self.nearest_radius = config.nearest_point_radius if nearest_radius is None else nearest_radius
        self.anchor_endpoints = anchor_endpoints
        self.line_of_sight = line_of_sight
        self._buffer = CornerBuffer(capacity)

    @property
    def capacity(self) -> int:
        return self._buffer.capacity

    def resize_cache(self, size: Optional[int] = None) -> None:
        """Reallocate the corner buffer (defaults to the configured capacity)."""
        self._buffer.resize(size)

    def find_path(self, start: Any, goal: Any, mask: Optional[int] = None) -> list[Point3]:
        """Compute waypoints from ``start`` to ``goal``.

        Args:
            start: Start position
            goal: Goal position
            mask: Area mask, defaults to this finder's mask

        Returns:
            ``[start]`` when start equals goal, the route corners when a
            route exists, otherwise ``[start, goal]``
        """
        start_point = to_space(start)
        goal_point = to_space(goal)

        if start_point == goal_point:
            return [start_point]

        if mask is None:
            mask = self.area_mask

        snapped, count = self._route(start_point, goal_point, mask)
        corners = self._buffer.read(count) if count else []
        self._buffer.clear()

        # A lone corner other than start still needs start to form a path
        if len(corners) == 1 and corners[0] != start_point:
            corners.insert(0, start_point)

        if len(corners) < 2:
            logger.debug(
                "path.fallback",
                start=start_point,
                goal=goal_point,
                area_mask=mask,
                snapped=snapped is not None,
            )
            return [start_point, goal_point]

        if self.anchor_endpoints:
            corners = self._anchor(corners, start_point, goal_point, snapped)

        logger.debug("path.routed", start=start_point, goal=goal_point, corners=len(corners))
        return corners

    def find_path_with_filter(self, start: Any, goal: Any, area_filter: HasAreaMask) -> list[Point3]:
        """find_path using the mask carried by a filter object."""
        return self.find_path(start, goal, area_filter.area_mask)

    def find_path_into(
        self,
        start: Any,
        goal: Any,
        path: MutableSequence,
        mask: Optional[int] = None,
    ) -> int:
        """Clear ``path`` and fill it with the computed waypoints.

        Returns:
            Number of waypoints written
        """
        path.clear()
        path.extend(self.find_path(start, goal, mask))
        return len(path)

    def find_path_ground(self, start: Any, goal: Any, mask: Optional[int] = None) -> list[Point2]:
        """find_path projected onto the ground plane."""
        return [project(corner) for corner in self.find_path(start, goal, mask)]

    def _route(self, start: Point3, goal: Point3, mask: int) -> tuple[Optional[Point3], Optional[int]]:
        """Snap the goal and request one route; (snapped goal, corner count)."""
        try:
            snapped = self.surface.nearest_point(goal, self.nearest_radius, mask)
            if snapped is None:
                return None, None
            snapped = to_space(snapped)
            return snapped, self.surface.compute_route(start, snapped, mask, self._buffer)
        except NavigableSurfaceError as e:
            logger.warning("path.surface_error", error=str(e), start=start, goal=goal)
            return None, None

    def _anchor(
        self,
        corners: list[Point3],
        start: Point3,
        goal: Point3,
        snapped: Point3,
    ) -> list[Point3]:
        if start != corners[0]:
            if self.line_of_sight is not None:
                skipped = 0
                for corner in corners[1:]:
                    if not self.line_of_sight(start, corner):
                        break
                    skipped += 1
                corners = corners[skipped:]
            corners.insert(0, start)

        if goal != snapped:
            if self.line_of_sight is not None:
                # Never pull the inserted start
                while len(corners) > 2 and self.line_of_sight(goal, corners[-2]):
                    corners.pop()
            corners.append(goal)

        return corners
