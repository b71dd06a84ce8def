"""
Directions providers used to compute primary and detour routes.
"""

from .base_provider import DirectionsProvider, DirectionsRoute
from .mapbox_provider import MapboxDirectionsProvider

__all__ = ['DirectionsProvider', 'DirectionsRoute', 'MapboxDirectionsProvider']
