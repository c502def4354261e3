"""Core services shared by the spatial query layer."""

from .config import NavQueryConfig, config
from .exceptions import (
    NavigableSurfaceError,
    NavigationException,
    NavQueryException,
    PositionResolutionError,
    WaypointGraphError,
)
from .logging import configure_logging, get_logger

__all__ = [
    # Configuration
    "NavQueryConfig",
    "config",
    # Logging
    "configure_logging",
    "get_logger",
    # Exceptions
    "NavQueryException",
    "PositionResolutionError",
    "NavigationException",
    "NavigableSurfaceError",
    "WaypointGraphError",
]
