# spatial/metrics.py

"""Distance, containment and direction queries.

Every query comes in a ground-plane flavour, which projects both positions
onto the (x, z) plane first, and a full-space flavour working on all three
axes. Inputs may be 2D points, 3D points or anything resolve_position accepts.
"""

import math
from collections.abc import Iterable
from enum import Enum
from typing import Any, Optional, Sequence

from .entities import Vector2, Vector3
from .projection import to_ground, to_space

# Squared-length threshold below which a direction is degenerate
EPSILON = 1e-15


def distance_ground(a: Any, b: Any) -> float:
    """Calculate Euclidean distance between two positions on the ground plane.

    Args:
        a: First position
        b: Second position

    Returns:
        Distance ignoring height
    """
    pa, pb = to_ground(a), to_ground(b)
    dx = pb[0] - pa[0]
    dz = pb[1] - pa[1]
    return (dx * dx + dz * dz) ** 0.5


def distance_full(a: Any, b: Any) -> float:
    """Calculate 3D Euclidean distance between two positions.

    2D positions are lifted to height zero before measuring.

    Args:
        a: First position
        b: Second position

    Returns:
        3D distance in same units as positions
    """
    pa, pb = to_space(a), to_space(b)
    dx = pb[0] - pa[0]
    dy = pb[1] - pa[1]
    dz = pb[2] - pa[2]
    return (dx * dx + dy * dy + dz * dz) ** 0.5


def within_ground(a: Any, b: Any, radius: float) -> bool:
    """Whether two positions are at most ``radius`` apart on the ground plane."""
    return distance_ground(a, b) <= radius


def within_full(a: Any, b: Any, radius: float) -> bool:
    """Whether two positions are at most ``radius`` apart in space."""
    return distance_full(a, b) <= radius


def beyond_ground(a: Any, b: Any, radius: float) -> bool:
    """Whether two positions are at least ``radius`` apart on the ground plane.

    Inclusive like within_ground, so both hold at exactly ``radius``.
    """
    return distance_ground(a, b) >= radius


def beyond_full(a: Any, b: Any, radius: float) -> bool:
    """Whether two positions are at least ``radius`` apart in space.

    Inclusive like within_full, so both hold at exactly ``radius``.
    """
    return distance_full(a, b) >= radius


def between_ground(a: Any, b: Any, minimum: float, maximum: float) -> bool:
    """Whether the ground distance lies in ``[minimum, maximum]``."""
    distance = distance_ground(a, b)
    return minimum <= distance <= maximum


def between_full(a: Any, b: Any, minimum: float, maximum: float) -> bool:
    """Whether the 3D distance lies in ``[minimum, maximum]``."""
    distance = distance_full(a, b)
    return minimum <= distance <= maximum


def direction_ground(a: Any, b: Any) -> Vector2:
    """Unnormalized ground-plane vector pointing from ``b`` toward ``a``."""
    pa, pb = to_ground(a), to_ground(b)
    return (pa[0] - pb[0], pa[1] - pb[1])


def direction_full(a: Any, b: Any) -> Vector3:
    """Unnormalized 3D vector pointing from ``b`` toward ``a``."""
    pa, pb = to_space(a), to_space(b)
    return (pa[0] - pb[0], pa[1] - pb[1], pa[2] - pb[2])


def magnitude(vector: Sequence[float]) -> float:
    """Length of a 2D or 3D vector."""
    return sum(c * c for c in vector) ** 0.5


def normalize_vector(vector: Sequence[float]) -> tuple:
    """Normalize a 2D or 3D vector to unit length.

    Args:
        vector: Vector components

    Returns:
        Unit vector of the same dimension, or the zero vector when the
        input has no length
    """
    length = magnitude(vector)
    if length == 0:
        return tuple(0.0 for _ in vector)
    return tuple(c / length for c in vector)


def nearest(
    position: Any,
    targets: Iterable[Any],
    full: bool = False,
) -> tuple[Optional[Any], float]:
    """Find the target closest to a position.

    Args:
        position: Reference position
        targets: Candidate positions or position sources
        full: Measure in 3D instead of on the ground plane

    Returns:
        (target, distance) tuple; (None, inf) when there are no targets.
        Ties keep the first target seen.
    """
    measure = distance_full if full else distance_ground
    origin = to_space(position) if full else to_ground(position)
    best, best_distance = None, math.inf
    for target in targets:
        current = measure(origin, target)
        if best is not None and current >= best_distance:
            continue
        best, best_distance = target, current
    return best, best_distance


def farthest(
    position: Any,
    targets: Iterable[Any],
    full: bool = False,
) -> tuple[Optional[Any], float]:
    """Find the target farthest from a position.

    Returns:
        (target, distance) tuple; (None, -inf) when there are no targets
    """
    measure = distance_full if full else distance_ground
    origin = to_space(position) if full else to_ground(position)
    best, best_distance = None, -math.inf
    for target in targets:
        current = measure(origin, target)
        if best is not None and current <= best_distance:
            continue
        best, best_distance = target, current
    return best, best_distance


class AngleSortMode(int, Enum):
    """How signed angles to targets are ordered."""

    MAGNITUDE = 0  # closest to straight ahead on either side
    SMALLEST = 1  # most clockwise first
    LARGEST = 2  # most counter-clockwise first


def _angle_key(angle: float, mode: AngleSortMode) -> float:
    if mode == AngleSortMode.SMALLEST:
        return angle
    if mode == AngleSortMode.LARGEST:
        return -angle
    return abs(angle)


def sort_by_distance(
    position: Any,
    targets: Iterable[Any],
    farthest: bool = False,
    *,
    full: bool = False,
    mode: Optional[AngleSortMode] = None,
    forward: Any = None,
) -> list:
    """Sort targets by distance from a position (stable).

    Args:
        position: Reference position
        targets: Candidate positions or position sources
        farthest: Sort descending
        full: Measure in 3D instead of on the ground plane
        mode: When given with ``forward``, equal distances are ordered by
            their angle from ``forward``
        forward: Facing vector for the angle tie-break

    Returns:
        New sorted list of the targets
    """
    measure = distance_full if full else distance_ground
    origin = to_space(position) if full else to_ground(position)

    def key(target):
        distance = measure(origin, target)
        primary = -distance if farthest else distance
        if mode is None or forward is None:
            return (primary,)
        return (primary, _angle_key(angle_to(origin, forward, target), mode))

    return sorted(targets, key=key)


def sort_by_angle(
    position: Any,
    forward: Any,
    targets: Iterable[Any],
    mode: AngleSortMode = AngleSortMode.MAGNITUDE,
    farthest: Optional[bool] = None,
) -> list:
    """Sort targets by their ground-plane angle from ``forward`` (stable).

    Args:
        position: Viewer position
        forward: Viewer facing vector
        targets: Candidate positions or position sources
        mode: Angle ordering
        farthest: None keeps equal angles in input order; otherwise they
            are ordered by ground distance, descending when True

    Returns:
        New sorted list of the targets
    """
    origin = to_ground(position)

    def key(target):
        primary = _angle_key(angle_to(origin, forward, target), mode)
        if farthest is None:
            return (primary,)
        distance = distance_ground(origin, target)
        return (primary, -distance if farthest else distance)

    return sorted(targets, key=key)


def _signed_angle(source: Vector2, target: Vector2) -> float:
    denominator = ((source[0] ** 2 + source[1] ** 2) * (target[0] ** 2 + target[1] ** 2)) ** 0.5
    if denominator < EPSILON:
        return 0.0
    dot = (source[0] * target[0] + source[1] * target[1]) / denominator
    unsigned = math.degrees(math.acos(max(-1.0, min(1.0, dot))))
    cross = source[0] * target[1] - source[1] * target[0]
    return -unsigned if cross < 0 else unsigned


def angle_to(position: Any, forward: Any, target: Any) -> float:
    """Signed angle in degrees from ``forward`` to the direction of ``target``.

    Measured on the ground plane, counter-clockwise positive. Degenerate
    vectors give 0.
    """
    return _signed_angle(to_ground(forward), direction_ground(target, position))


def in_view(position: Any, forward: Any, target: Any, fov: float) -> bool:
    """Whether ``target`` lies inside a ground-plane field of view.

    Args:
        position: Viewer position
        forward: Viewer facing vector
        target: Observed position
        fov: Full field of view in degrees

    Returns:
        True if the target is within ``fov / 2`` of forward. Degenerate
        forward or direction vectors are never in view.
    """
    fx, fz = to_ground(forward)
    dx, dz = direction_ground(target, position)
    if fx * fx + fz * fz < EPSILON or dx * dx + dz * dz < EPSILON:
        return False
    fx, fz = normalize_vector((fx, fz))
    dx, dz = normalize_vector((dx, dz))
    return fx * dx + fz * dz >= math.cos(math.radians(fov / 2.0))
