"""
Scoring, clustering and route search algorithms.

This module contains:
- Route safety scoring with time-decayed incident penalties
- Danger clustering and compass-direction probing
- Safer alternative route search
"""

from .scoring import SafetyScorer, SafetyAssessment, time_weight
from .clustering import DangerCluster, CompassDirection, find_danger_clusters, get_safest_direction
from .optimization import SaferRoutePlanner, RouteCandidate

__all__ = [
    'SafetyScorer',
    'SafetyAssessment',
    'time_weight',
    'DangerCluster',
    'CompassDirection',
    'find_danger_clusters',
    'get_safest_direction',
    'SaferRoutePlanner',
    'RouteCandidate'
]
