"""
Incident and police station record sources.

RecordStore is the capability the safety scorer consumes: given a route
polyline and a buffer distance, return the records near it. The in-memory
implementation answers those queries with shapely distance-to-polyline in a
local metric projection.
"""

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, List, Optional, Sequence

import numpy as np
import shapely
from shapely.geometry import LineString, Point

from ..config.safety_config import SafetyConfig
from ..exceptions import RouteValidationError
from .distance_utils import Coordinate, project_to_local_meters
from .models import (
    IncidentRecord,
    PoliceStationRecord,
    RouteGeometry,
    ensure_utc,
    extract_coordinates,
    validate_coordinate,
)

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecordStore(ABC):
    """
    Abstract source of incident and police station records.

    Implementations back onto whatever persistence the deployment uses.
    """

    @abstractmethod
    def find_incidents_near_route(self, geometry: RouteGeometry, buffer_meters: float,
                                  max_age_days: float) -> List[IncidentRecord]:
        """
        Find incidents within buffer_meters of the route and no older than max_age_days.

        Raises:
            DataLookupError: If incident data is unavailable
        """
        pass

    @abstractmethod
    def find_police_stations_near_route(self, geometry: RouteGeometry,
                                        buffer_meters: float) -> List[PoliceStationRecord]:
        """Find police stations within buffer_meters of the route."""
        pass


def validate_bounds(north: float, south: float, east: float, west: float) -> None:
    validate_coordinate(east, north)
    validate_coordinate(west, south)
    if south > north:
        raise RouteValidationError(f"Invalid bounds: south ({south}) is above north ({north})")


def longitude_in_bounds(longitude: float, east: float, west: float) -> bool:
    """Longitude inside [west, east]; a box with west > east wraps across the antimeridian."""
    if west <= east:
        return west <= longitude <= east
    return longitude >= west or longitude <= east


def distances_to_route(route: Sequence[Coordinate], points: Sequence[Coordinate]) -> np.ndarray:
    """
    Distance in meters from each point to the route polyline.

    Args:
        route: Route vertices as (lon, lat)
        points: Query points as (lon, lat)

    Returns:
        Array of distances, one per point
    """
    if len(points) == 0:
        return np.empty(0)

    origin_lat = float(np.mean([lat for _, lat in route]))
    route_xy = project_to_local_meters(route, origin_lat)
    if len(route_xy) == 1:
        line = Point(route_xy[0])
    else:
        line = LineString(route_xy)

    query = shapely.points(project_to_local_meters(points, origin_lat))
    return shapely.distance(line, query)


class InMemoryRecordStore(RecordStore):
    """
    Record store holding incidents and police stations in memory.
    """

    def __init__(self, incidents: Optional[Iterable[IncidentRecord]] = None,
                 police_stations: Optional[Iterable[PoliceStationRecord]] = None,
                 config: Optional[SafetyConfig] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize the store.

        Args:
            incidents: Initial incident records
            police_stations: Initial police station records
            config: Safety configuration (severity table for new incidents)
            clock: Returns the current time, defaults to UTC now
        """
        self.config = config or SafetyConfig()
        self.clock = clock or _utc_now
        self._incidents: List[IncidentRecord] = list(incidents or [])
        self._police_stations: List[PoliceStationRecord] = list(police_stations or [])
        self._lock = threading.Lock()

        logger.info(f"InMemoryRecordStore initialized with {len(self._incidents)} incidents, "
                    f"{len(self._police_stations)} police stations")

    @property
    def incident_count(self) -> int:
        return len(self._incidents)

    @property
    def police_station_count(self) -> int:
        return len(self._police_stations)

    def add_incident(self, category: str, latitude: float, longitude: float) -> IncidentRecord:
        """
        Record a new incident report.

        Severity comes from the category's configured severity.
        """
        if not category:
            raise RouteValidationError("Incident type is required")
        validate_coordinate(longitude, latitude)

        incident = IncidentRecord(
            id=str(uuid.uuid4()),
            category=category,
            latitude=float(latitude),
            longitude=float(longitude),
            severity=self.config.get_incident_severity(category),
            created_at=ensure_utc(self.clock()),
        )
        with self._lock:
            self._incidents.append(incident)

        logger.info(f"Saved {category} incident {incident.id} at ({latitude}, {longitude})")
        return incident

    def add_police_station(self, station: PoliceStationRecord) -> None:
        with self._lock:
            self._police_stations.append(station)

    def _recent_incidents(self, max_age_days: float) -> List[IncidentRecord]:
        cutoff = ensure_utc(self.clock()) - timedelta(days=max_age_days)
        with self._lock:
            return [i for i in self._incidents if ensure_utc(i.created_at) >= cutoff]

    def find_incidents_near_route(self, geometry: RouteGeometry, buffer_meters: float,
                                  max_age_days: float) -> List[IncidentRecord]:
        route = extract_coordinates(geometry)
        candidates = self._recent_incidents(max_age_days)

        distances = distances_to_route(route, [i.location for i in candidates])
        nearby = [incident for incident, d in zip(candidates, distances) if d <= buffer_meters]

        logger.debug(f"{len(nearby)}/{len(candidates)} recent incidents within {buffer_meters}m of route")
        return nearby

    def find_police_stations_near_route(self, geometry: RouteGeometry,
                                        buffer_meters: float) -> List[PoliceStationRecord]:
        route = extract_coordinates(geometry)
        with self._lock:
            stations = list(self._police_stations)

        distances = distances_to_route(route, [s.location for s in stations])
        return [station for station, d in zip(stations, distances) if d <= buffer_meters]

    def incidents_in_bounds(self, north: float, south: float, east: float, west: float,
                            max_age_days: Optional[float] = None) -> List[IncidentRecord]:
        """Recent incidents inside a bounding box, newest first."""
        validate_bounds(north, south, east, west)
        if max_age_days is None:
            max_age_days = self.config.max_incident_age_days

        matches = [
            incident for incident in self._recent_incidents(max_age_days)
            if south <= incident.latitude <= north
            and longitude_in_bounds(incident.longitude, east, west)
        ]
        return sorted(matches, key=lambda i: ensure_utc(i.created_at), reverse=True)

    def police_stations_in_bounds(self, north: float, south: float, east: float,
                                  west: float) -> List[PoliceStationRecord]:
        validate_bounds(north, south, east, west)
        with self._lock:
            return [
                station for station in self._police_stations
                if south <= station.latitude <= north
                and longitude_in_bounds(station.longitude, east, west)
            ]
