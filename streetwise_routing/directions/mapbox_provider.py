"""
Mapbox Directions API client.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import requests

from ..data.distance_utils import Coordinate
from ..data.models import validate_coordinate
from ..exceptions import DirectionsError, RouteValidationError
from .base_provider import DirectionsProvider, DirectionsRoute

logger = logging.getLogger(__name__)

MAPBOX_DIRECTIONS_URL = "https://api.mapbox.com/directions/v5/mapbox"
MAX_WAYPOINTS = 25  # Mapbox limit per request


class MapboxDirectionsProvider(DirectionsProvider):
    """
    Directions provider backed by the Mapbox Directions v5 API.
    """

    def __init__(self, access_token: str, profile: str = 'walking',
                 timeout: float = 10.0, session: Optional[requests.Session] = None):
        """
        Initialize the Mapbox client.

        Args:
            access_token: Mapbox access token
            profile: Routing profile ('walking', 'cycling', 'driving')
            timeout: Per-request timeout in seconds
            session: Optional requests session to reuse connections
        """
        if not access_token:
            raise ValueError("A Mapbox access token is required")
        self.access_token = access_token
        self.profile = profile
        self.timeout = timeout
        self.session = session or requests.Session()

    def _build_url(self, waypoints: Sequence[Coordinate]) -> str:
        if len(waypoints) < 2:
            raise RouteValidationError("At least a start and an end coordinate are required")
        if len(waypoints) > MAX_WAYPOINTS:
            raise RouteValidationError(f"Too many waypoints: {len(waypoints)} (max {MAX_WAYPOINTS})")

        coords = ';'.join(f"{lon},{lat}" for lon, lat in
                          (validate_coordinate(w[0], w[1]) for w in waypoints))
        return f"{MAPBOX_DIRECTIONS_URL}/{self.profile}/{coords}"

    def compute_routes(self, waypoints: Sequence[Coordinate],
                       alternatives: bool = False) -> List[DirectionsRoute]:
        url = self._build_url(waypoints)
        params = {
            'access_token': self.access_token,
            'geometries': 'geojson',
            'steps': 'true',
            'overview': 'full',
            'language': 'en',
            'annotations': 'duration,distance',
        }
        if alternatives:
            params['alternatives'] = 'true'

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise DirectionsError(f"Directions request failed: {e}")

        if response.status_code == 404:
            # Mapbox answers 404 with code NoRoute/NoSegment when nothing connects
            logger.info("Mapbox found no route for the requested waypoints")
            return []
        if not response.ok:
            raise DirectionsError(f"Failed to fetch routes: HTTP {response.status_code}",
                                  status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise DirectionsError(f"Invalid directions response: {e}")

        routes = [self._parse_route(route) for route in data.get('routes') or []]
        logger.debug(f"Mapbox returned {len(routes)} route(s) for {len(waypoints)} waypoints")
        return routes

    @staticmethod
    def _parse_route(route: Dict[str, Any]) -> DirectionsRoute:
        legs = route.get('legs') or []
        steps = [step for leg in legs for step in leg.get('steps') or []]
        return DirectionsRoute(
            duration=float(route.get('duration', 0.0)),
            distance=float(route.get('distance', 0.0)),
            geometry=route['geometry'],
            legs=legs,
            steps=steps,
        )
