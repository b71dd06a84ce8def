"""
Record types and route geometry helpers.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Union

import geojson

from ..exceptions import RouteValidationError
from .distance_utils import Coordinate

RouteGeometry = Union[Dict[str, Any], Sequence[Sequence[float]]]


@dataclass(frozen=True)
class IncidentRecord:
    """A geotagged incident report. Severity is derived from the category at intake."""
    id: str
    category: str
    latitude: float
    longitude: float
    severity: int
    created_at: datetime

    @property
    def location(self) -> Coordinate:
        return (self.longitude, self.latitude)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'type': self.category,
            'severity': self.severity,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'created_at': self.created_at.isoformat(),
            'location': [self.longitude, self.latitude],
        }


@dataclass(frozen=True)
class PoliceStationRecord:
    """A police station location."""
    id: str
    name: str
    latitude: float
    longitude: float
    address: Optional[str] = None
    phone: Optional[str] = None

    @property
    def location(self) -> Coordinate:
        return (self.longitude, self.latitude)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'address': self.address,
            'phone': self.phone,
            'location': [self.longitude, self.latitude],
        }


def ensure_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """Parse an ISO-8601 timestamp (a trailing 'Z' is accepted)."""
    if isinstance(value, datetime):
        return ensure_utc(value)
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    return ensure_utc(datetime.fromisoformat(text))


def validate_coordinate(lon: float, lat: float) -> Coordinate:
    """Check a (lon, lat) pair is numeric, finite and within WGS84 bounds."""
    try:
        lon = float(lon)
        lat = float(lat)
    except (TypeError, ValueError):
        raise RouteValidationError(f"Coordinate values must be numbers: ({lon!r}, {lat!r})")
    if math.isnan(lon) or math.isnan(lat) or math.isinf(lon) or math.isinf(lat):
        raise RouteValidationError(f"Coordinate values must be finite: ({lon}, {lat})")
    if not -180 <= lon <= 180:
        raise RouteValidationError(f"Invalid longitude {lon}. Must be between -180 and 180")
    if not -90 <= lat <= 90:
        raise RouteValidationError(f"Invalid latitude {lat}. Must be between -90 and 90")
    return (lon, lat)


def extract_coordinates(geometry: RouteGeometry) -> List[Coordinate]:
    """
    Extract the (lon, lat) vertices of a route geometry.

    Args:
        geometry: GeoJSON LineString mapping or a sequence of [lon, lat] pairs

    Returns:
        List of validated (lon, lat) tuples

    Raises:
        RouteValidationError: If the geometry is missing, empty or malformed
    """
    if geometry is None:
        raise RouteValidationError("Invalid route geometry: missing")

    if isinstance(geometry, dict):
        geom_type = geometry.get('type')
        if geom_type is not None and geom_type != 'LineString':
            raise RouteValidationError(f"Invalid route geometry type: {geom_type}")
        raw = geometry.get('coordinates')
    else:
        raw = geometry

    if not raw:
        raise RouteValidationError("Invalid route geometry: no coordinates")

    coordinates = []
    for point in raw:
        if not isinstance(point, (list, tuple)) or len(point) < 2:
            raise RouteValidationError(f"Invalid route coordinate: {point!r}")
        coordinates.append(validate_coordinate(point[0], point[1]))
    return coordinates


def to_linestring(geometry: RouteGeometry) -> geojson.LineString:
    """Normalize a route geometry to a GeoJSON LineString."""
    return geojson.LineString([list(coord) for coord in extract_coordinates(geometry)])
