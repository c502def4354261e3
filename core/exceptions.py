# core/exceptions.py

"""Exception hierarchy for navquery."""


class NavQueryException(Exception):
    """Base exception for all navquery errors."""

    pass


# Position Exceptions
class PositionResolutionError(NavQueryException, ValueError):
    """Raised when a value cannot be resolved to a 2D or 3D position."""

    pass


# Navigation Exceptions
class NavigationException(NavQueryException):
    """Base exception for navigable surface operations."""

    pass


class NavigableSurfaceError(NavigationException):
    """Raised by a navigable surface when a query cannot be answered."""

    pass


class WaypointGraphError(NavigationException):
    """Raised when a waypoint graph is used with unknown nodes."""

    pass
