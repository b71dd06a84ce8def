"""
Route safety scoring from nearby incident reports and police stations.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ...config.safety_config import SafetyConfig
from ...data.models import IncidentRecord, PoliceStationRecord, RouteGeometry, extract_coordinates
from ...data.record_store import RecordStore
from .time_decay import time_weight

logger = logging.getLogger(__name__)


def round_half_up(value: float, digits: int = 1) -> float:
    """
    Round to the given number of decimals, halves away from zero for positives.

    Python's round() rounds half to even, which turns 8.25 into 8.2.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


@dataclass
class SafetyAssessment:
    """Safety score of one route geometry and the records behind it."""
    safety_score: float
    incident_count: int
    total_penalty: float
    police_bonus: float
    incidents: List[IncidentRecord] = field(default_factory=list)
    police_stations: List[PoliceStationRecord] = field(default_factory=list)

    @property
    def police_station_count(self) -> int:
        return len(self.police_stations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'safetyScore': self.safety_score,
            'incidentCount': self.incident_count,
            'policeStationCount': self.police_station_count,
            'totalPenalty': self.total_penalty,
            'policeBonus': self.police_bonus,
            'incidents': [i.to_dict() for i in self.incidents],
            'policeStations': [p.to_dict() for p in self.police_stations],
        }


class SafetyScorer:
    """
    Scores a route geometry out of 10.

    Each incident near the route costs its category penalty scaled by its
    time weight; each police station near the route adds a capped bonus.
    """

    def __init__(self, record_store: RecordStore, config: Optional[SafetyConfig] = None):
        """
        Initialize the scorer.

        Args:
            record_store: Source of incidents and police stations near a route
            config: Safety configuration
        """
        self.record_store = record_store
        self.config = config or SafetyConfig()

    def score_route(self, geometry: RouteGeometry,
                    incident_buffer_m: Optional[float] = None,
                    police_buffer_m: Optional[float] = None,
                    max_age_days: Optional[float] = None,
                    now: Optional[datetime] = None) -> SafetyAssessment:
        """
        Calculate the safety assessment for a route.

        Args:
            geometry: GeoJSON LineString (or [lon, lat] list) of the route
            incident_buffer_m: Incident search distance, defaults to config
            police_buffer_m: Police station search distance, defaults to config
            max_age_days: Oldest incident to consider, defaults to config
            now: Reference time for incident ages

        Returns:
            SafetyAssessment

        Raises:
            RouteValidationError: If the geometry is malformed
            DataLookupError: If incidents cannot be retrieved
        """
        extract_coordinates(geometry)
        cfg = self.config
        if incident_buffer_m is None:
            incident_buffer_m = cfg.buffer_distance_meters
        if police_buffer_m is None:
            police_buffer_m = cfg.police_station_buffer_meters
        if max_age_days is None:
            max_age_days = cfg.max_incident_age_days
        if now is None:
            now = datetime.now(timezone.utc)

        incidents = self.record_store.find_incidents_near_route(geometry, incident_buffer_m, max_age_days)
        police_stations = self._find_police_stations(geometry, police_buffer_m)

        logger.info(f"Found {len(incidents)} incidents and {len(police_stations)} police stations near route")

        total_penalty = self.calculate_total_penalty(incidents, now)
        police_bonus = self.calculate_police_bonus(len(police_stations))

        safety_score = cfg.base_safety_score - total_penalty + police_bonus
        safety_score = max(cfg.min_safety_score, min(cfg.max_safety_score, safety_score))

        logger.info(f"Final safety score: {safety_score:.2f} "
                    f"(penalties: -{total_penalty:.2f}, police bonus: +{police_bonus:.2f})")

        return SafetyAssessment(
            safety_score=round_half_up(safety_score),
            incident_count=len(incidents),
            total_penalty=round_half_up(total_penalty),
            police_bonus=round_half_up(police_bonus),
            incidents=list(incidents),
            police_stations=police_stations,
        )

    def calculate_total_penalty(self, incidents: List[IncidentRecord], now: datetime) -> float:
        """Sum of category penalties weighted by incident age."""
        total = 0.0
        for incident in incidents:
            penalty = self.config.get_incident_penalty(incident.category)
            total += penalty * time_weight(incident.created_at, now, self.config)
        return total

    def calculate_police_bonus(self, station_count: int) -> float:
        return min(station_count * self.config.police_station_bonus,
                   self.config.max_police_station_bonus)

    def _find_police_stations(self, geometry: RouteGeometry,
                              buffer_m: float) -> List[PoliceStationRecord]:
        """Police stations near the route, or none if the lookup fails."""
        try:
            stations = self.record_store.find_police_stations_near_route(geometry, buffer_m)
        except Exception as e:
            logger.warning(f"Police station lookup failed, scoring without bonus: {e}")
            return []

        # A station near several segments can be returned more than once
        unique = {}
        for station in stations or []:
            unique.setdefault(station.id, station)
        return list(unique.values())
