"""
Safer route search around danger clusters.
"""

from .route_planner import (
    SaferRoutePlanner,
    AlternativeRouteSearch,
    RouteCandidate,
    detour_percentage,
)

__all__ = ['SaferRoutePlanner', 'AlternativeRouteSearch', 'RouteCandidate', 'detour_percentage']
