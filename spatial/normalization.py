# spatial/normalization.py

"""Rewrite observed positions into an agent-centric frame."""

from enum import Enum
from typing import Any, MutableSequence, Sequence

from .entities import resolve_position
from .metrics import normalize_vector
from .projection import to_ground


class NormalizationMode(int, Enum):
    """How observed positions are reported to a decision subsystem."""

    NONE = 0  # world positions, untouched
    LOCAL = 1  # relative to the observer
    NORMALIZED = 2  # relative to the observer, scaled into [-1, 1]


def normalize_value(value: float, original: float, minimum: float = -1.0, maximum: float = 1.0) -> float:
    """Scale ``value`` by ``original`` and clamp into ``[minimum, maximum]``."""
    return max(minimum, min(maximum, value / original))


def normalize_components(vector: Sequence[float], original: float) -> tuple:
    """Apply normalize_value to every component of a vector."""
    return tuple(normalize_value(c, original) for c in vector)


def _offsets(origin, position) -> tuple:
    """Component-wise ``position - origin`` across mixed dimensions.

    A 2D origin (x, z) shifts the x and z of a 3D position and leaves its
    height alone. A 3D origin shifts a 2D position by its x and z.
    """
    if len(origin) == len(position):
        return tuple(p - o for p, o in zip(position, origin))
    if len(origin) == 2:
        return (position[0] - origin[0], position[1], position[2] - origin[1])
    return (position[0] - origin[0], position[1] - origin[2])


def normalize_positions(
    origin: Any,
    distance: float,
    positions: MutableSequence,
    mode: NormalizationMode = NormalizationMode.LOCAL,
) -> None:
    """Rewrite ``positions`` in place relative to ``origin``.

    Args:
        origin: Observer position, 2D or 3D
        distance: Reference distance such as a sensor range. Must be non-zero
            for NORMALIZED; this is not checked.
        positions: Mutable sequence of 2D and/or 3D points
        mode: NONE leaves every element untouched, LOCAL subtracts the
            origin, NORMALIZED also divides by ``distance`` and clamps each
            component to [-1, 1]
    """
    if mode == NormalizationMode.NONE:
        return

    center = resolve_position(origin)
    for i, position in enumerate(positions):
        local = _offsets(center, position)
        if mode == NormalizationMode.NORMALIZED:
            local = normalize_components(local, distance)
        positions[i] = local


def normalized_positions(
    origin: Any,
    distance: float,
    positions: Sequence,
    mode: NormalizationMode = NormalizationMode.LOCAL,
) -> list:
    """Return a rewritten copy of ``positions``, leaving the input as is."""
    result = list(positions)
    normalize_positions(origin, distance, result, mode)
    return result


def _facing_ground(value, position, forward, original) -> tuple:
    fx, fz = normalize_vector(forward)
    rx, rz = value[0] - position[0], value[1] - position[1]
    # Right-hand side of forward on the ground plane
    right = rx * fz - rz * fx
    ahead = rx * fx + rz * fz
    return (normalize_value(right, original), normalize_value(ahead, original))


def to_facing_frame(value: Any, position: Any, forward: Any, original: float) -> tuple:
    """Express ``value`` in the frame of an observer facing ``forward``.

    The first component is the offset to the observer's right, the last the
    offset ahead of it; a 3D result keeps the height difference in the
    middle. Every component is divided by ``original`` and clamped to
    [-1, 1].

    Args:
        value: Observed position
        position: Observer position
        forward: Observer facing vector
        original: Reference distance such as a sensor range

    Returns:
        2D result when ``value`` is 2D. A 3D ``value`` gives a 3D result; if
        the observer is only known in 2D the height is dropped and reported
        as zero.
    """
    value = resolve_position(value)
    position = resolve_position(position)
    forward = resolve_position(forward)

    if len(value) == 2:
        return _facing_ground(value, to_ground(position), to_ground(forward), original)

    if len(position) == 2 or len(forward) == 2:
        x, z = _facing_ground(to_ground(value), to_ground(position), to_ground(forward), original)
        return (x, 0.0, z)

    fx, fy, fz = normalize_vector(forward)
    rx, ry, rz = (v - p for v, p in zip(value, position))
    # Up crossed with forward, i.e. the horizontal right-hand axis
    ux, uz = normalize_vector((fz, -fx))
    return (
        normalize_value(rx * ux + rz * uz, original),
        normalize_value(ry, original),
        normalize_value(rx * fx + ry * fy + rz * fz, original),
    )
