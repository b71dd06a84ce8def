"""
Base abstract class for turn-by-turn directions providers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..data.distance_utils import Coordinate


@dataclass
class DirectionsRoute:
    """One route returned by a directions provider."""
    duration: float  # seconds
    distance: float  # meters
    geometry: Dict[str, Any]  # GeoJSON LineString
    legs: List[Dict[str, Any]] = field(default_factory=list)
    steps: List[Dict[str, Any]] = field(default_factory=list)


class DirectionsProvider(ABC):
    """
    Abstract directions provider.

    Implementations turn an ordered list of (lon, lat) waypoints into
    routes passing through them in order.
    """

    @abstractmethod
    def compute_routes(self, waypoints: Sequence[Coordinate],
                       alternatives: bool = False) -> List[DirectionsRoute]:
        """
        Calculate routes through the waypoints.

        Args:
            waypoints: Ordered (lon, lat) coordinates, start first and end last
            alternatives: Ask the provider for alternative routes as well

        Returns:
            Routes, best first; empty when no route exists

        Raises:
            DirectionsError: If the provider cannot be reached or errors
            RouteValidationError: If the waypoints are malformed
        """
        pass

    def compute_route(self, waypoints: Sequence[Coordinate]) -> Optional[DirectionsRoute]:
        """Best route through the waypoints, or None when no route exists."""
        routes = self.compute_routes(waypoints)
        return routes[0] if routes else None
