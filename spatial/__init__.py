# spatial/__init__.py

"""Spatial query layer - projection, metrics, steering, normalization and paths."""

from .entities import (
    Point2,
    Point3,
    Position,
    PositionSource,
    Vector2,
    Vector3,
    resolve_position,
)
from .metrics import (
    AngleSortMode,
    angle_to,
    beyond_full,
    beyond_ground,
    between_full,
    between_ground,
    direction_full,
    direction_ground,
    distance_full,
    distance_ground,
    farthest,
    in_view,
    magnitude,
    nearest,
    normalize_vector,
    sort_by_angle,
    sort_by_distance,
    within_full,
    within_ground,
)
from .navigation import (
    ALL_AREAS,
    AreaFilter,
    CornerBuffer,
    NavigableSurface,
    PathFinder,
)
from .normalization import (
    NormalizationMode,
    normalize_positions,
    normalized_positions,
    to_facing_frame,
)
from .projection import expand, project, to_ground, to_space
from .steering import evade, flee, pursue, seek, speed, speed_full, velocity, velocity_full
from .waypoint_graph import WaypointGraph

__all__ = [
    # Types
    "Point2",
    "Point3",
    "Position",
    "PositionSource",
    "Vector2",
    "Vector3",
    "resolve_position",
    # Projection
    "project",
    "expand",
    "to_ground",
    "to_space",
    # Metrics
    "distance_ground",
    "distance_full",
    "within_ground",
    "within_full",
    "beyond_ground",
    "beyond_full",
    "between_ground",
    "between_full",
    "direction_ground",
    "direction_full",
    "magnitude",
    "normalize_vector",
    "nearest",
    "farthest",
    "sort_by_distance",
    "AngleSortMode",
    "sort_by_angle",
    "angle_to",
    "in_view",
    # Steering
    "seek",
    "flee",
    "velocity",
    "speed",
    "velocity_full",
    "speed_full",
    "pursue",
    "evade",
    # Normalization
    "NormalizationMode",
    "normalize_positions",
    "normalized_positions",
    "to_facing_frame",
    # Paths
    "ALL_AREAS",
    "AreaFilter",
    "CornerBuffer",
    "NavigableSurface",
    "PathFinder",
    "WaypointGraph",
]
