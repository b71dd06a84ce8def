"""
Time-decay weighting of incident reports.
"""

import math
from datetime import datetime, timezone
from typing import Optional

from ...config.safety_config import SafetyConfig
from ...data.models import ensure_utc

SECONDS_PER_DAY = 86400.0


def incident_age_days(created_at: datetime, now: Optional[datetime] = None) -> float:
    """Age of an incident in fractional days."""
    if now is None:
        now = datetime.now(timezone.utc)
    return (ensure_utc(now) - ensure_utc(created_at)).total_seconds() / SECONDS_PER_DAY


def weight_for_age(age_days: float, config: Optional[SafetyConfig] = None) -> float:
    """
    Score multiplier for an incident of the given age.

    Incidents older than the max age weigh nothing, incidents inside the
    recent threshold get the flat recency multiplier, and everything in
    between decays exponentially down to a floor.
    """
    config = config or SafetyConfig()

    if age_days > config.max_incident_age_days:
        return 0.0

    if age_days <= config.recent_threshold_days:
        return config.recent_incident_multiplier

    return max(config.min_time_weight, math.exp(-config.decay_rate * age_days))


def time_weight(created_at: datetime, now: Optional[datetime] = None,
                config: Optional[SafetyConfig] = None) -> float:
    """
    Score multiplier for an incident reported at created_at.

    Args:
        created_at: Incident creation timestamp (naive values are UTC)
        now: Reference time, defaults to the current UTC time
        config: Safety configuration

    Returns:
        0 for expired incidents, the recency multiplier for recent ones,
        exponential decay floored at min_time_weight otherwise
    """
    return weight_for_age(incident_age_days(created_at, now), config)
