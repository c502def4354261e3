"""Pytest configuration and shared fixtures."""

from dataclasses import dataclass, field
from typing import Optional

import pytest

from core.exceptions import NavigableSurfaceError
from spatial import WaypointGraph


@dataclass
class ScriptedSurface:
    """Navigable surface returning canned answers and recording calls."""

    snapped: Optional[tuple] = None
    corners: Optional[list] = None
    error: Optional[str] = None
    calls: list = field(default_factory=list)

    def nearest_point(self, point, max_radius, area_mask):
        self.calls.append(("nearest_point", point, max_radius, area_mask))
        if self.error:
            raise NavigableSurfaceError(self.error)
        return self.snapped

    def compute_route(self, start, end, area_mask, corners):
        self.calls.append(("compute_route", start, end, area_mask))
        if self.corners is None:
            return None
        return corners.write(self.corners)


@pytest.fixture
def unreachable_surface():
    """Surface where no point projects onto the navigable area."""
    return ScriptedSurface()


@pytest.fixture
def routed_surface():
    """Surface with a four-corner route ending at (10, 0, 0)."""
    return ScriptedSurface(
        snapped=(10.0, 0.0, 0.0),
        corners=[(0.0, 0.0, 0.0), (3.0, 0.0, 1.0), (7.0, 0.0, -1.0), (10.0, 0.0, 0.0)],
    )


@pytest.fixture
def corridor_graph():
    """Waypoint graph shaped like an L with a detour through area 1.

    a(0,0,0) - b(5,0,0) - c(10,0,0)
                  |
                 d(5,0,5)  [area 1] - e(10,0,5)
    """
    graph = WaypointGraph()
    graph.add_node("a", (0.0, 0.0, 0.0))
    graph.add_node("b", (5.0, 0.0, 0.0))
    graph.add_node("c", (10.0, 0.0, 0.0))
    graph.add_node("d", (5.0, 0.0, 5.0), area=1)
    graph.add_node("e", (10.0, 0.0, 5.0))
    graph.connect("a", "b")
    graph.connect("b", "c")
    graph.connect("b", "d")
    graph.connect("d", "e")
    return graph


@pytest.fixture
def scripted_surface():
    """Factory for surfaces with custom canned answers."""
    return ScriptedSurface
