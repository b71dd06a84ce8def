"""
Safer route planning around danger clusters.

The planner scores the fastest route, groups the incidents along it into
danger clusters and probes detour waypoints around those clusters under a
fixed attempt budget, keeping the safest acceptable detour.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ...config.safety_config import SafetyConfig
from ...data.distance_utils import Coordinate
from ...data.models import IncidentRecord, RouteGeometry, validate_coordinate
from ...directions.base_provider import DirectionsProvider, DirectionsRoute
from ...exceptions import NoRouteFoundError
from ..clustering.danger_clusterer import DangerCluster, find_danger_clusters
from ..clustering.direction_prober import CompassDirection, generate_waypoint, get_safest_direction
from ..scoring.safety_scorer import SafetyAssessment, SafetyScorer

logger = logging.getLogger(__name__)

ROUTE_TYPE_FASTEST = 'fastest'
ROUTE_TYPE_SAFEST = 'safest'


@dataclass
class RouteCandidate:
    """A directions-provider route together with its safety assessment."""
    duration: float  # seconds
    distance: float  # meters
    geometry: Dict[str, Any]
    steps: List[Dict[str, Any]] = field(default_factory=list)
    legs: List[Dict[str, Any]] = field(default_factory=list)
    safety: Optional[SafetyAssessment] = None
    route_type: str = ROUTE_TYPE_FASTEST
    waypoints: List[Coordinate] = field(default_factory=list)  # detour waypoints, empty for direct routes

    @classmethod
    def from_directions(cls, route: DirectionsRoute, safety: Optional[SafetyAssessment] = None,
                        route_type: str = ROUTE_TYPE_FASTEST,
                        waypoints: Optional[Sequence[Coordinate]] = None) -> 'RouteCandidate':
        return cls(
            duration=route.duration,
            distance=route.distance,
            geometry=route.geometry,
            steps=list(route.steps),
            legs=list(route.legs),
            safety=safety,
            route_type=route_type,
            waypoints=list(waypoints or []),
        )

    @property
    def safety_score(self) -> Optional[float]:
        return self.safety.safety_score if self.safety else None

    @property
    def incident_count(self) -> Optional[int]:
        return self.safety.incident_count if self.safety else None

    @property
    def total_penalty(self) -> Optional[float]:
        return self.safety.total_penalty if self.safety else None

    @property
    def police_station_count(self) -> Optional[int]:
        return self.safety.police_station_count if self.safety else None


def detour_percentage(distance: float, original_distance: float) -> float:
    """Relative increase of distance over original_distance, in percent."""
    if original_distance <= 0:
        return 0.0 if distance <= 0 else math.inf
    return (distance - original_distance) / original_distance * 100


class AlternativeRouteSearch:
    """
    One bounded search for a safer detour.

    Owns the attempt counter and the accepted alternatives for the duration
    of a single planning call. Every probe counts against the budget,
    including probes that fail.
    """

    def __init__(self, planner: 'SaferRoutePlanner', start: Coordinate, end: Coordinate,
                 primary: RouteCandidate, primary_assessment: SafetyAssessment):
        self.planner = planner
        self.config = planner.config
        self.start = start
        self.end = end
        self.primary = primary
        self.primary_assessment = primary_assessment
        self.incidents: List[IncidentRecord] = list(primary_assessment.incidents)
        self.clusters: List[DangerCluster] = []
        self.attempts = 0
        self.alternatives: List[RouteCandidate] = []

    @property
    def max_attempts(self) -> int:
        return self.config.max_alternative_route_attempts

    def has_budget(self) -> bool:
        return self.attempts < self.max_attempts

    @property
    def clusters_to_avoid(self) -> int:
        return min(len(self.clusters), self.config.max_danger_clusters_to_avoid)

    def run(self) -> None:
        """Run every phase whose preconditions hold, in order."""
        if not self.incidents:
            logger.info("No incidents found, no need for alternative")
            return

        self.clusters = find_danger_clusters(self.incidents, self.config)
        if not self.clusters:
            logger.info("No danger clusters identified")
            return

        logger.info(f"Found {len(self.clusters)} danger clusters to avoid")

        self.run_single_cluster_phase()
        self.run_multi_cluster_phase()
        self.run_alternative_direction_phase()

    def run_single_cluster_phase(self) -> None:
        """Phase 1: detour around each top cluster in its safest direction."""
        logger.info("Phase 1: Single-cluster avoidance")

        for cluster_idx in range(self.clusters_to_avoid):
            if not self.has_budget():
                break
            cluster = self.clusters[cluster_idx]
            direction = get_safest_direction(cluster.center, self.incidents, self.config)

            logger.info(f"Cluster {cluster_idx + 1}/{self.clusters_to_avoid} at {cluster.center}, "
                        f"safest: {direction.value}")

            for distance in self.config.waypoint_offset_distances:
                if not self.has_budget():
                    break
                waypoint = generate_waypoint(cluster.center, direction, distance)
                self.probe([waypoint], f"waypoint at {distance:.0f}m {direction.value}")

    def run_multi_cluster_phase(self) -> None:
        """Phase 2: detour around the first two, then three, clusters jointly."""
        if not self.has_budget() or self.clusters_to_avoid < 2:
            return

        logger.info("Phase 2: Multi-cluster avoidance")
        distance = self.config.waypoint_offset_distances[0]

        for group_size in (2, 3):
            if self.clusters_to_avoid < group_size or not self.has_budget():
                break
            waypoints = []
            for cluster in self.clusters[:group_size]:
                direction = get_safest_direction(cluster.center, self.incidents, self.config)
                waypoints.append(generate_waypoint(cluster.center, direction, distance))
            self.probe(waypoints, f"avoiding clusters 1-{group_size}")

    def run_alternative_direction_phase(self) -> None:
        """Phase 3: push the primary cluster's waypoint in every direction."""
        if not self.has_budget() or len(self.alternatives) >= 2:
            return

        logger.info("Phase 3: Alternative directions")
        offsets = self.config.waypoint_offset_distances
        distance = offsets[len(offsets) // 2]
        primary_cluster = self.clusters[0]

        for name in self.config.compass_directions:
            if not self.has_budget():
                break
            direction = CompassDirection(name)
            waypoint = generate_waypoint(primary_cluster.center, direction, distance)
            self.probe([waypoint], f"primary cluster, direction {direction.value}")

    def probe(self, waypoints: List[Coordinate], description: str) -> Optional[RouteCandidate]:
        """
        Request and evaluate one detour route.

        Returns:
            The accepted candidate, or None if the probe failed or was rejected
        """
        self.attempts += 1
        logger.info(f"Attempt {self.attempts}/{self.max_attempts}: {description}")

        try:
            route = self.planner.directions_provider.compute_route([self.start, *waypoints, self.end])
        except Exception as e:
            logger.warning(f"  Failed to get route: {e}")
            return None

        if route is None:
            logger.info("  No route through waypoints")
            return None

        detour = detour_percentage(route.distance, self.primary.distance)
        if detour > self.config.max_detour_percentage:
            logger.info(f"  Detour too long: {detour:.1f}%")
            return None

        try:
            assessment = self.planner.scorer.score_route(route.geometry)
        except Exception as e:
            logger.warning(f"  Failed to calculate safety: {e}")
            return None

        logger.info(f"  Safety: {assessment.safety_score}/10, detour: {detour:.1f}%, "
                    f"incidents: {assessment.incident_count}, police: {assessment.police_station_count}")

        if assessment.safety_score <= self.primary_assessment.safety_score:
            return None

        candidate = RouteCandidate.from_directions(route, assessment, ROUTE_TYPE_SAFEST, waypoints)
        self.alternatives.append(candidate)
        return candidate

    def best(self) -> Optional[RouteCandidate]:
        """Highest-scoring accepted alternative, first found on ties."""
        if not self.alternatives:
            logger.info("No safer alternatives found")
            return None

        best = self.alternatives[0]
        for candidate in self.alternatives[1:]:
            if candidate.safety_score > best.safety_score:
                best = candidate

        logger.info(f"Found {len(self.alternatives)} alternatives, best safety: {best.safety_score}/10 "
                    f"(used {self.attempts} of {self.max_attempts} attempts)")
        return best


class SaferRoutePlanner:
    """
    Plans the fastest route and, where incidents justify it, a safer detour.
    """

    def __init__(self, directions_provider: DirectionsProvider, scorer: SafetyScorer,
                 config: Optional[SafetyConfig] = None):
        """
        Initialize the planner.

        Args:
            directions_provider: Computes routes through ordered waypoints
            scorer: Scores route geometries
            config: Safety configuration
        """
        self.directions_provider = directions_provider
        self.scorer = scorer
        self.config = config or scorer.config
        self.config.validate()

    def score_route(self, geometry: RouteGeometry) -> SafetyAssessment:
        return self.scorer.score_route(geometry)

    def plan_routes(self, start: Coordinate, end: Coordinate) -> List[RouteCandidate]:
        """
        Find the fastest route and, if one exists, a strictly safer alternative.

        Args:
            start: (lon, lat) of the route start
            end: (lon, lat) of the route end

        Returns:
            [fastest] or [fastest, safest]

        Raises:
            RouteValidationError: If start or end is not a valid coordinate
            NoRouteFoundError: If no route connects start and end
            DirectionsError: If the directions provider fails
        """
        start = validate_coordinate(*start)
        end = validate_coordinate(*end)
        logger.info(f"Planning routes from {start} to {end}")

        routes = self.directions_provider.compute_routes([start, end], alternatives=True)
        if not routes:
            raise NoRouteFoundError(f"No route found from {start} to {end}")

        primary_route = routes[0]
        try:
            primary_assessment = self.scorer.score_route(primary_route.geometry)
        except Exception as e:
            logger.error(f"Failed to score primary route, returning it unscored: {e}")
            return [RouteCandidate.from_directions(primary_route)]

        primary = RouteCandidate.from_directions(primary_route, primary_assessment)
        logger.info(f"Primary route (fastest): {primary.safety_score}/10 safety, "
                    f"{primary.incident_count} incidents, {primary.police_station_count} police stations")

        planned = [primary]
        alternative = self.generate_safer_alternative(start, end, primary, primary_assessment)

        if alternative is None:
            logger.info("No safer alternative available, showing only primary route")
            return planned

        improvement = alternative.safety_score - primary.safety_score
        detour = detour_percentage(alternative.distance, primary.distance)

        if improvement > self.config.significant_improvement:
            planned.append(alternative)
            logger.info(f"Safer alternative found: {alternative.safety_score}/10 safety "
                        f"(+{improvement:.1f}), {detour:.1f}% longer, {alternative.incident_count} incidents")
        elif improvement > self.config.min_improvement:
            planned.append(alternative)
            logger.info(f"Slightly safer alternative: {alternative.safety_score}/10 safety "
                        f"(+{improvement:.1f}), {detour:.1f}% longer")
        else:
            logger.info("Alternative not safer, keeping only primary route")

        return planned

    def search_alternatives(self, start: Coordinate, end: Coordinate, primary: RouteCandidate,
                            primary_assessment: SafetyAssessment) -> AlternativeRouteSearch:
        """Run a full alternative-route search and return it for inspection."""
        search = AlternativeRouteSearch(self, start, end, primary, primary_assessment)
        search.run()
        return search

    def generate_safer_alternative(self, start: Coordinate, end: Coordinate, primary: RouteCandidate,
                                   primary_assessment: SafetyAssessment) -> Optional[RouteCandidate]:
        """
        Search for a detour that scores strictly better than the primary route.

        Returns:
            The safest accepted detour, or None
        """
        logger.info("Attempting to generate safer alternative routes...")
        return self.search_alternatives(start, end, primary, primary_assessment).best()
