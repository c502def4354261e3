# spatial/steering.py

"""Ground-plane steering vectors toward and away from targets.

The returned vectors are raw desired velocities. Arbitration between
behaviours and applying them to a body are left to the caller.
"""

from typing import Any

from .entities import Point2, Vector2, Vector3
from .metrics import (
    direction_full,
    direction_ground,
    distance_full,
    distance_ground,
    magnitude,
    normalize_vector,
)
from .projection import to_ground


def seek(position: Any, speed: float, target: Any) -> Vector2:
    """Velocity of magnitude ``speed`` from ``position`` toward ``target``.

    Args:
        position: Agent position
        speed: Desired speed
        target: Position to move toward

    Returns:
        (vx, vz) vector; the zero vector when position and target coincide
    """
    dx, dz = normalize_vector(direction_ground(target, position))
    return (dx * speed, dz * speed)


def flee(position: Any, speed: float, target: Any) -> Vector2:
    """Velocity of magnitude ``speed`` from ``position`` away from ``target``."""
    dx, dz = normalize_vector(direction_ground(position, target))
    return (dx * speed, dz * speed)


def velocity(current: Any, previous: Any, delta: float) -> Vector2:
    """Ground-plane velocity between two samples ``delta`` seconds apart."""
    dx, dz = direction_ground(current, previous)
    return (dx / delta, dz / delta)


def speed(current: Any, previous: Any, delta: float) -> float:
    """Ground-plane speed between two samples ``delta`` seconds apart."""
    return magnitude(velocity(current, previous, delta))


def velocity_full(current: Any, previous: Any, delta: float) -> Vector3:
    """3D velocity between two samples ``delta`` seconds apart."""
    dx, dy, dz = direction_full(current, previous)
    return (dx / delta, dy / delta, dz / delta)


def speed_full(current: Any, previous: Any, delta: float) -> float:
    """3D speed between two samples ``delta`` seconds apart."""
    return distance_full(current, previous) / delta


def _predict(position: Any, target: Any, previous: Any, speed_: float, delta: float) -> Point2:
    target_point = to_ground(target)
    target_velocity = velocity(target_point, previous, delta)
    # Time for the agent to close the current gap at combined speed; no
    # motion on either side means no lookahead
    closing = speed_ + magnitude(target_velocity)
    lookahead = distance_ground(target_point, position) / closing if closing else 0.0
    return (
        target_point[0] + target_velocity[0] * lookahead,
        target_point[1] + target_velocity[1] * lookahead,
    )


def pursue(
    position: Any,
    target: Any,
    previous: Any,
    speed: float,
    delta: float,
) -> tuple[Vector2, Point2]:
    """Seek the point a moving target is predicted to reach.

    Args:
        position: Agent position
        target: Current target position
        previous: Target position one sample earlier
        speed: Agent speed
        delta: Seconds between the target samples

    Returns:
        (steering vector, predicted target position) tuple
    """
    future = _predict(position, target, previous, speed, delta)
    return seek(position, speed, future), future


def evade(
    position: Any,
    target: Any,
    previous: Any,
    speed: float,
    delta: float,
) -> tuple[Vector2, Point2]:
    """Flee from the point a moving target is predicted to reach.

    Returns:
        (steering vector, predicted target position) tuple
    """
    future = _predict(position, target, previous, speed, delta)
    return flee(position, speed, future), future
