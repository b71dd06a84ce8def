"""
Compass-direction probing around a danger cluster.

A probe box is an axis-aligned rectangle anchored at the cluster center,
box length along the probed direction and box width across it.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np

from ...config.safety_config import SafetyConfig
from ...data.distance_utils import Coordinate, meters_to_degrees, offset_coordinate
from ...data.models import IncidentRecord

logger = logging.getLogger(__name__)


class CompassDirection(Enum):
    """Directions a detour waypoint can be pushed in."""
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


# Unit (east, north) vector for each direction
_DIRECTION_VECTORS: Dict[CompassDirection, Tuple[int, int]] = {
    CompassDirection.NORTH: (0, 1),
    CompassDirection.SOUTH: (0, -1),
    CompassDirection.EAST: (1, 0),
    CompassDirection.WEST: (-1, 0),
}


def probe_box(center: Coordinate, direction: CompassDirection,
              config: Optional[SafetyConfig] = None) -> Tuple[float, float, float, float]:
    """
    Bounds of the probe rectangle for one direction.

    Returns:
        (min_lon, min_lat, max_lon, max_lat)
    """
    config = config or SafetyConfig()
    lon, lat = center
    width = config.direction_check_box_width_meters
    length = config.direction_check_box_length_meters

    if direction in (CompassDirection.NORTH, CompassDirection.SOUTH):
        half_width = meters_to_degrees(width, lat, 'lon') / 2
        length_deg = meters_to_degrees(length, lat, 'lat')
        if direction == CompassDirection.NORTH:
            return (lon - half_width, lat, lon + half_width, lat + length_deg)
        return (lon - half_width, lat - length_deg, lon + half_width, lat)

    half_width = meters_to_degrees(width, lat, 'lat') / 2
    length_deg = meters_to_degrees(length, lat, 'lon')
    if direction == CompassDirection.EAST:
        return (lon, lat - half_width, lon + length_deg, lat + half_width)
    return (lon - length_deg, lat - half_width, lon, lat + half_width)


def count_incidents_in_direction(center: Coordinate, direction: CompassDirection,
                                 incidents: List[IncidentRecord],
                                 config: Optional[SafetyConfig] = None) -> int:
    """Count incidents inside the probe box (edges inclusive)."""
    if not incidents:
        return 0

    min_lon, min_lat, max_lon, max_lat = probe_box(center, direction, config)
    points = np.array([(i.longitude, i.latitude) for i in incidents])
    inside = (
        (points[:, 0] >= min_lon) & (points[:, 0] <= max_lon) &
        (points[:, 1] >= min_lat) & (points[:, 1] <= max_lat)
    )
    return int(inside.sum())


def get_safest_direction(center: Coordinate, incidents: List[IncidentRecord],
                         config: Optional[SafetyConfig] = None) -> CompassDirection:
    """
    Direction whose probe box holds the fewest incidents.

    Ties go to the earliest configured direction (north, south, east, west).
    """
    config = config or SafetyConfig()
    directions = [CompassDirection(d) for d in config.compass_directions]

    counts = [(d, count_incidents_in_direction(center, d, incidents, config)) for d in directions]
    safest, safest_count = min(counts, key=lambda item: item[1])

    logger.info(f"Safest direction: {safest.value} ({safest_count} incidents)")
    return safest


def generate_waypoint(center: Coordinate, direction: CompassDirection,
                      distance_meters: float) -> Coordinate:
    """Coordinate distance_meters away from center in the given direction."""
    east, north = _DIRECTION_VECTORS[direction]
    return offset_coordinate(center, east * distance_meters, north * distance_meters)
