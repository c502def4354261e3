# spatial/projection.py

"""Conversions between ground-plane (x, z) points and (x, y, z) points.

Axis 1 is up. Projecting drops it; expanding inserts a height of zero, so
``project(expand(p)) == p`` always holds while ``expand(project(p))`` loses
the original height.
"""

from typing import Any

from .entities import Point2, Point3, resolve_position


def project(point: Point3) -> Point2:
    """Drop the vertical axis of a 3D point."""
    return (point[0], point[2])


def expand(point: Point2) -> Point3:
    """Lift a ground-plane point into space at height zero."""
    return (point[0], 0.0, point[1])


def to_ground(source: Any) -> Point2:
    """Resolve any position-like value to its ground-plane point."""
    position = resolve_position(source)
    if len(position) == 3:
        return project(position)
    return position


def to_space(source: Any) -> Point3:
    """Resolve any position-like value to a 3D point."""
    position = resolve_position(source)
    if len(position) == 2:
        return expand(position)
    return position
