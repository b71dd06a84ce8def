"""
Distance, bearing and degree/meter conversion utilities.

Coordinates passed as pairs are (longitude, latitude), the GeoJSON order.
Degree/meter conversions use a planar approximation (111 km per degree of
latitude) which is accurate at city scale only; it drifts at high latitudes
and over long distances.
"""

import math
from typing import Sequence, Tuple

import numpy as np

EARTH_RADIUS_M = 6371000
METERS_PER_DEGREE = 111000.0

Coordinate = Tuple[float, float]  # (lon, lat)


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points on Earth.

    Args:
        lat1, lon1: First point coordinates
        lat2, lon2: Second point coordinates

    Returns:
        Distance in meters
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def distance_between(a: Coordinate, b: Coordinate) -> float:
    """Great circle distance in meters between two (lon, lat) pairs."""
    return haversine_distance(a[1], a[0], b[1], b[0])


def meters_per_degree(at_latitude: float, axis: str) -> float:
    if axis == 'lat':
        return METERS_PER_DEGREE
    if axis == 'lon':
        return METERS_PER_DEGREE * math.cos(math.radians(at_latitude))
    raise ValueError(f"axis must be 'lat' or 'lon', got {axis!r}")


def meters_to_degrees(meters: float, at_latitude: float, axis: str) -> float:
    """
    Convert a distance in meters to degrees along one axis.

    Args:
        meters: Distance in meters
        at_latitude: Latitude at which the conversion applies
        axis: 'lat' for degrees of latitude, 'lon' for degrees of longitude

    Returns:
        Distance in degrees
    """
    return meters / meters_per_degree(at_latitude, axis)


def offset_coordinate(origin: Coordinate, east_meters: float, north_meters: float) -> Coordinate:
    """Shift a (lon, lat) coordinate by the given east/north distances in meters."""
    lon, lat = origin
    return (
        lon + meters_to_degrees(east_meters, lat, 'lon'),
        lat + meters_to_degrees(north_meters, lat, 'lat'),
    )


def bearing_between(a: Coordinate, b: Coordinate) -> float:
    """
    Initial bearing from a to b.

    Returns:
        Compass bearing in degrees, in [0, 360)
    """
    lat1 = math.radians(a[1])
    lat2 = math.radians(b[1])
    delta_lon = math.radians(b[0] - a[0])

    y = math.sin(delta_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(delta_lon)

    bearing = math.degrees(math.atan2(y, x))
    return (bearing + 360) % 360


def project_to_local_meters(coords: Sequence[Coordinate], origin_lat: float) -> np.ndarray:
    """
    Project (lon, lat) pairs onto a local planar frame measured in meters.

    Uses the same per-degree constants as meters_to_degrees, with longitude
    scaled at origin_lat. Only valid for city-scale extents.

    Returns:
        Array of shape [N, 2] with (x_east, y_north) in meters
    """
    points = np.asarray(coords, dtype=float).reshape(-1, 2)
    scale = np.array([meters_per_degree(origin_lat, 'lon'), METERS_PER_DEGREE])
    return points * scale
