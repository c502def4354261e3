# spatial/entities.py

"""Position types and resolution of position-like inputs."""

from collections.abc import Mapping
from typing import Any, Protocol, Union, runtime_checkable

from core.exceptions import PositionResolutionError


# Type aliases for positions on the ground plane (x, z) and in space (x, y, z)
Point2 = tuple[float, float]
Point3 = tuple[float, float, float]
Position = Union[Point2, Point3]

Vector2 = tuple[float, float]
Vector3 = tuple[float, float, float]

ZERO2: Vector2 = (0.0, 0.0)
ZERO3: Vector3 = (0.0, 0.0, 0.0)


@runtime_checkable
class PositionSource(Protocol):
    """Anything that can report its current position in space.

    Scene-graph nodes, tracked entities and agents expose a ``position``
    attribute holding an (x, y, z) sequence.
    """

    @property
    def position(self) -> Point3: ...


def resolve_position(source: Any) -> Position:
    """Resolve a position-like value to a 2D or 3D point.

    Args:
        source: Tuple or list of 2 or 3 numbers, mapping with x/y/z keys,
            or a PositionSource

    Returns:
        (x, z) tuple for 2D input, (x, y, z) tuple otherwise

    Raises:
        PositionResolutionError: If the value is not position-like
    """
    if isinstance(source, (list, tuple)):
        if len(source) == 2:
            return (float(source[0]), float(source[1]))
        elif len(source) == 3:
            return (float(source[0]), float(source[1]), float(source[2]))
        else:
            raise PositionResolutionError(
                f"Position must have 2 or 3 coordinates, got {len(source)}"
            )
    elif isinstance(source, Mapping):
        x = source.get("x", source.get("X"))
        y = source.get("y", source.get("Y"))
        z = source.get("z", source.get("Z"))
        if x is None or z is None:
            raise PositionResolutionError("Position mapping must have 'x' and 'z' keys")
        if y is None:
            return (float(x), float(z))
        return (float(x), float(y), float(z))
    elif isinstance(source, PositionSource):
        position = source.position
        if position is None:
            raise PositionResolutionError(f"{type(source).__name__} has no position")
        if len(position) != 3:
            raise PositionResolutionError(
                f"Position source must report 3 coordinates, got {len(position)}"
            )
        return (float(position[0]), float(position[1]), float(position[2]))
    else:
        raise PositionResolutionError(f"Invalid position type: {type(source)}")
