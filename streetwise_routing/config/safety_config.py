"""
Configuration for safety scoring and safer-route generation.

Every numeric constant that affects a route's safety score or the
alternative-route search lives here.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

DEFAULT_INCIDENT_EMOJI = '⚠️'  # warning sign


@dataclass(frozen=True)
class SafetyConfig:
    """Scoring and search parameters for walking-route safety."""

    # Incident lookup
    buffer_distance_meters: float = 100.0  # incidents within this distance of the route count
    max_incident_age_days: float = 30.0
    recent_threshold_days: float = 7.0
    recent_incident_multiplier: float = 1.5
    decay_rate: float = 0.05  # per day, applied between the recent threshold and max age
    min_time_weight: float = 0.3

    # Score range
    base_safety_score: float = 10.0
    min_safety_score: float = 0.0
    max_safety_score: float = 10.0

    # Severity 1-10 per incident category (higher = more dangerous)
    incident_severity: Dict[str, int] = field(default_factory=lambda: {
        'harassment': 10,
        'aggressive': 9,
        'pickpocket': 2,
        'suspicious': 7,
        'vandalism': 5,
        'protest': 1,
        'insecurity': 5,
        'passage': 2,
        'animal': 1,
        'poorlight': 5,
    })
    default_severity: int = 5

    # Points deducted per incident, before time weighting
    penalty_per_incident: Dict[str, float] = field(default_factory=lambda: {
        'harassment': 1.0,
        'aggressive': 0.9,
        'pickpocket': 0.2,
        'suspicious': 0.7,
        'vandalism': 0.5,
        'protest': 0.1,
        'insecurity': 0.5,
        'passage': 0.2,
        'animal': 0.1,
        'poorlight': 0.5,
    })
    default_penalty: float = 0.5

    incident_emojis: Dict[str, str] = field(default_factory=lambda: {
        'harassment': '\U0001f620',
        'aggressive': '\U0001f44a',
        'pickpocket': '\U0001f4b0',
        'suspicious': '\U0001f440',
        'vandalism': '\U0001f528',
        'protest': '\U0001f4e2',
        'insecurity': DEFAULT_INCIDENT_EMOJI,
        'passage': '\U0001f6a7',
        'animal': '\U0001f415',
        'poorlight': '\U0001f4a1',
    })

    # Police stations
    police_station_buffer_meters: float = 300.0
    police_station_bonus: float = 0.5
    max_police_station_bonus: float = 3.0

    # Safer route generation
    waypoint_offset_distances: Tuple[float, ...] = (50.0, 150.0, 500.0)  # meters, tried in order
    max_detour_percentage: float = 90.0
    danger_cluster_radius_meters: float = 150.0
    max_danger_clusters_to_avoid: int = 2
    direction_check_box_width_meters: float = 100.0
    direction_check_box_length_meters: float = 200.0
    max_alternative_route_attempts: int = 8
    compass_directions: Tuple[str, ...] = ('north', 'south', 'east', 'west')

    # A safer alternative is surfaced only above these improvements
    significant_improvement: float = 0.1
    min_improvement: float = 0.0

    @property
    def incident_categories(self) -> Tuple[str, ...]:
        return tuple(self.incident_severity.keys())

    def get_incident_severity(self, category: str) -> int:
        """Severity for an incident category, medium severity when unknown."""
        return self.incident_severity.get(category, self.default_severity)

    def get_incident_penalty(self, category: str) -> float:
        """Base penalty for an incident category, default penalty when unknown."""
        return self.penalty_per_incident.get(category, self.default_penalty)

    def get_incident_emoji(self, category: str) -> str:
        return self.incident_emojis.get(category, DEFAULT_INCIDENT_EMOJI)

    def validate(self) -> None:
        """Validate configuration parameters."""
        if self.buffer_distance_meters <= 0 or self.police_station_buffer_meters <= 0:
            raise ValueError("buffer distances must be positive")
        if self.max_incident_age_days <= 0:
            raise ValueError("max_incident_age_days must be positive")
        if not 0 <= self.recent_threshold_days <= self.max_incident_age_days:
            raise ValueError("recent_threshold_days must be between 0 and max_incident_age_days")
        if not self.min_safety_score <= self.base_safety_score <= self.max_safety_score:
            raise ValueError("base_safety_score must lie within the score range")
        for category, severity in self.incident_severity.items():
            if not 1 <= severity <= 10:
                raise ValueError(f"severity for '{category}' must be between 1 and 10")
        if not self.waypoint_offset_distances:
            raise ValueError("waypoint_offset_distances must not be empty")
        if self.max_alternative_route_attempts < 0:
            raise ValueError("max_alternative_route_attempts must be >= 0")
        if self.max_danger_clusters_to_avoid < 1:
            raise ValueError("max_danger_clusters_to_avoid must be >= 1")
        unknown = set(self.compass_directions) - {'north', 'south', 'east', 'west'}
        if unknown:
            raise ValueError(f"Unsupported compass directions: {sorted(unknown)}")

    @classmethod
    def create_default_config(cls) -> 'SafetyConfig':
        """Create the production configuration (default)."""
        return cls()

    @classmethod
    def create_wide_search_config(cls) -> 'SafetyConfig':
        """
        Create configuration that searches harder for a safer route.

        Tolerates longer detours and spends more probes, useful in dense
        incident areas where the short offsets rarely leave the cluster.
        """
        return cls(
            waypoint_offset_distances=(100.0, 300.0, 800.0),
            max_detour_percentage=150.0,
            max_danger_clusters_to_avoid=3,
            max_alternative_route_attempts=12,
        )


SAFETY_CONFIG = SafetyConfig()


def get_incident_severity(category: str) -> int:
    return SAFETY_CONFIG.get_incident_severity(category)


def get_incident_penalty(category: str) -> float:
    return SAFETY_CONFIG.get_incident_penalty(category)


def get_incident_emoji(category: str) -> str:
    return SAFETY_CONFIG.get_incident_emoji(category)
