"""
Danger clustering and detour-direction probing.
"""

from .danger_clusterer import DangerCluster, find_danger_clusters
from .direction_prober import (
    CompassDirection,
    count_incidents_in_direction,
    get_safest_direction,
    generate_waypoint,
)

__all__ = [
    'DangerCluster',
    'find_danger_clusters',
    'CompassDirection',
    'count_incidents_in_direction',
    'get_safest_direction',
    'generate_waypoint'
]
