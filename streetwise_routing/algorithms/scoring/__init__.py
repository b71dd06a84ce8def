"""
Safety scoring of route geometries.
"""

from .time_decay import time_weight, weight_for_age, incident_age_days
from .safety_scorer import SafetyScorer, SafetyAssessment, round_half_up

__all__ = [
    'time_weight',
    'weight_for_age',
    'incident_age_days',
    'SafetyScorer',
    'SafetyAssessment',
    'round_half_up'
]
