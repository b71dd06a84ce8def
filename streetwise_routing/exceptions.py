"""
Error taxonomy for safety scoring and safer-route planning.
"""


class StreetwiseError(Exception):
    """Base class for all routing and scoring errors."""


class DataLookupError(StreetwiseError, LookupError):
    """Incident, police station or route data could not be retrieved."""


class DirectionsError(DataLookupError):
    """The directions provider failed (transport error or non-OK response)."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class RouteValidationError(StreetwiseError, ValueError):
    """Malformed route geometry, coordinates or bounds."""


class NoRouteFoundError(StreetwiseError):
    """The directions provider returned no route for the requested waypoints."""
