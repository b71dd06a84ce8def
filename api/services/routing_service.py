"""
Service layer for the safer routing API.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import geojson

from streetwise_routing.algorithms.optimization.route_planner import (
    RouteCandidate,
    SaferRoutePlanner,
    detour_percentage,
)
from streetwise_routing.algorithms.scoring.safety_scorer import SafetyAssessment, SafetyScorer
from streetwise_routing.config import AppSettings, SafetyConfig
from streetwise_routing.data.data_loader import load_incidents, load_police_stations
from streetwise_routing.data.models import IncidentRecord, PoliceStationRecord, to_linestring
from streetwise_routing.data.record_store import InMemoryRecordStore
from streetwise_routing.directions import DirectionsProvider, MapboxDirectionsProvider
from streetwise_routing.exceptions import DirectionsError
from api.schemas.routing import (
    HealthResponse,
    PlannedRoute,
    RoutePlanRequest,
    RoutePlanResponse,
    SafetyRequest,
    SafetyResponse,
)

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


class StreetwiseRoutingService:
    """
    Service class that wires the record store, directions provider,
    scorer and planner together for the API.
    """

    def __init__(self, store: Optional[InMemoryRecordStore] = None,
                 directions_provider: Optional[DirectionsProvider] = None,
                 config: Optional[SafetyConfig] = None,
                 settings: Optional[AppSettings] = None):
        """
        Initialize the routing service.

        Args:
            store: Record store; loaded from the settings' data files when omitted
            directions_provider: Directions provider; Mapbox when a token is configured
            config: Safety configuration
            settings: Runtime settings, read from the environment when omitted
        """
        self.config = config or SafetyConfig()
        self.settings = settings or AppSettings.from_env()
        self.store = store if store is not None else self._load_store()
        self.directions_provider = directions_provider or self._create_directions_provider()
        self.scorer = SafetyScorer(self.store, self.config)
        self.planner = (SaferRoutePlanner(self.directions_provider, self.scorer, self.config)
                        if self.directions_provider else None)

    def _load_store(self) -> InMemoryRecordStore:
        """Load incident and police station records from the configured files."""
        logger.info("Initializing record store...")
        incidents: List[IncidentRecord] = []
        stations: List[PoliceStationRecord] = []

        if os.path.exists(self.settings.incidents_path):
            try:
                incidents = load_incidents(self.settings.incidents_path)
            except ValueError as e:
                logger.error(f"Failed to load incidents: {e}")
        else:
            logger.warning(f"Incident data file not found at {self.settings.incidents_path}")

        if os.path.exists(self.settings.police_stations_path):
            try:
                stations = load_police_stations(self.settings.police_stations_path)
            except ValueError as e:
                logger.error(f"Failed to load police stations: {e}")
        else:
            logger.warning(f"Police station data file not found at {self.settings.police_stations_path}")

        return InMemoryRecordStore(incidents, stations, self.config)

    def _create_directions_provider(self) -> Optional[DirectionsProvider]:
        if not self.settings.mapbox_access_token:
            logger.warning("MAPBOX_ACCESS_TOKEN not set - route planning disabled")
            return None
        return MapboxDirectionsProvider(
            self.settings.mapbox_access_token,
            profile=self.settings.mapbox_profile,
            timeout=self.settings.mapbox_timeout_sec,
        )

    def get_health_status(self) -> HealthResponse:
        """Get the health status of the routing service."""
        return HealthResponse(
            status="healthy" if self.planner else "degraded",
            version=API_VERSION,
            directions_available=self.planner is not None,
            incidents_count=self.store.incident_count,
            police_stations_count=self.store.police_station_count,
        )

    def plan_routes(self, request: RoutePlanRequest) -> RoutePlanResponse:
        """
        Plan the fastest route and, when available, a safer alternative.

        Raises:
            DirectionsError: If no directions provider is configured or it fails
            NoRouteFoundError: If no route connects the locations
            RouteValidationError: If a location is invalid
        """
        if self.planner is None:
            raise DirectionsError("Route planning unavailable - no directions provider configured")

        start = request.start.to_coordinate()
        end = request.destination.to_coordinate()

        planned = self.planner.plan_routes(start, end)

        routes = [self._to_planned_route(route, planned[0]) for route in planned]
        message = ("Safer alternative found" if len(planned) > 1
                   else "No safer alternative available")
        return RoutePlanResponse(
            success=True,
            message=message,
            routes=routes,
            route_geojson=self._routes_to_geojson(planned),
        )

    def score_route(self, request: SafetyRequest) -> SafetyResponse:
        """Score a route geometry."""
        assessment = self.scorer.score_route(request.geometry.model_dump())
        return self.to_safety_response(assessment)

    @staticmethod
    def to_safety_response(assessment: SafetyAssessment) -> SafetyResponse:
        return SafetyResponse(**assessment.to_dict())

    @staticmethod
    def _to_planned_route(route: RouteCandidate, primary: RouteCandidate) -> PlannedRoute:
        return PlannedRoute(
            route_type=route.route_type,
            duration_s=route.duration,
            distance_m=route.distance,
            safety_score=route.safety_score,
            incident_count=route.incident_count,
            total_penalty=route.total_penalty,
            police_station_count=route.police_station_count,
            detour_percentage=round(detour_percentage(route.distance, primary.distance), 1),
            geometry=route.geometry,
            steps=route.steps,
        )

    @staticmethod
    def _routes_to_geojson(routes: List[RouteCandidate]) -> Dict[str, Any]:
        """
        Convert planned routes to a GeoJSON FeatureCollection.

        Args:
            routes: Planned routes, fastest first

        Returns:
            FeatureCollection with one LineString per route plus start and end points
        """
        features = []
        for route in routes:
            features.append(geojson.Feature(
                geometry=to_linestring(route.geometry),
                properties={
                    "route_type": route.route_type,
                    "distance_m": route.distance,
                    "duration_s": route.duration,
                    "safety_score": route.safety_score,
                    "incident_count": route.incident_count,
                }
            ))

        coords = routes[0].geometry['coordinates']
        features.append(geojson.Feature(
            geometry=geojson.Point(coords[0]),
            properties={"type": "start", "name": "Start Point"}
        ))
        features.append(geojson.Feature(
            geometry=geojson.Point(coords[-1]),
            properties={"type": "end", "name": "End Point"}
        ))

        return geojson.FeatureCollection(features)

    def create_incident(self, category: str, latitude: float, longitude: float) -> IncidentRecord:
        return self.store.add_incident(category, latitude, longitude)

    def incidents_in_bounds(self, north: float, south: float, east: float,
                            west: float) -> List[IncidentRecord]:
        return self.store.incidents_in_bounds(north, south, east, west,
                                              self.config.max_incident_age_days)

    def police_stations_in_bounds(self, north: float, south: float, east: float,
                                  west: float) -> List[PoliceStationRecord]:
        return self.store.police_stations_in_bounds(north, south, east, west)


# Global service instance
routing_service = StreetwiseRoutingService()
