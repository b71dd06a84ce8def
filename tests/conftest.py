"""Shared fixtures for the Streetwise routing test suite.

Routes are built around a north-south street in central Paris. Distances
use the same planar constants as the library (111 km per degree of
latitude), so offsets in meters can be turned into coordinates directly.
"""

import os
import uuid
from datetime import datetime, timedelta, timezone

import pytest

# Keep the module-level API service from picking up a real token
os.environ.pop("MAPBOX_ACCESS_TOKEN", None)

from streetwise_routing.config import SafetyConfig  # noqa: E402
from streetwise_routing.data.distance_utils import offset_coordinate  # noqa: E402
from streetwise_routing.data.models import IncidentRecord, PoliceStationRecord  # noqa: E402
from streetwise_routing.data.record_store import InMemoryRecordStore  # noqa: E402
from streetwise_routing.directions.base_provider import DirectionsProvider, DirectionsRoute  # noqa: E402

FIXED_NOW = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)

START = (2.3522, 48.8566)  # (lon, lat)
END = offset_coordinate(START, 0, 2000)  # 2 km due north
MIDPOINT = offset_coordinate(START, 0, 1000)

PRIMARY_GEOMETRY = {"type": "LineString", "coordinates": [list(START), list(END)]}
# Parallel street ~300m east of the primary route
EAST_DETOUR_GEOMETRY = {
    "type": "LineString",
    "coordinates": [
        list(START),
        list(offset_coordinate(START, 300, 0)),
        list(offset_coordinate(END, 300, 0)),
        list(END),
    ],
}


def make_incident(category="harassment", location=MIDPOINT, age_days=1.0, now=None, severity=None):
    """Incident record at a (lon, lat) location, age_days before now."""
    config = SafetyConfig()
    now = now or datetime.now(timezone.utc)
    return IncidentRecord(
        id=str(uuid.uuid4()),
        category=category,
        latitude=location[1],
        longitude=location[0],
        severity=severity if severity is not None else config.get_incident_severity(category),
        created_at=now - timedelta(days=age_days),
    )


def make_station(location, station_id=None, name="Commissariat"):
    return PoliceStationRecord(
        id=station_id or str(uuid.uuid4()),
        name=name,
        latitude=location[1],
        longitude=location[0],
    )


def make_route(geometry, distance=2000.0, duration=1500.0):
    return DirectionsRoute(
        duration=duration,
        distance=distance,
        geometry=geometry,
        legs=[{"steps": [{"maneuver": {"type": "depart"}}]}],
        steps=[{"maneuver": {"type": "depart"}}],
    )


class FakeDirectionsProvider(DirectionsProvider):
    """Directions provider answering from canned routes.

    Direct requests (start and end only) get `primary_routes`. Requests
    through detour waypoints are answered by `detour`, a callable taking
    the waypoint list and returning a route, None, or raising.
    """

    def __init__(self, primary_routes=None, detour=None):
        self.primary_routes = primary_routes if primary_routes is not None else [make_route(PRIMARY_GEOMETRY)]
        self.detour = detour or (lambda waypoints: None)
        self.calls = []

    def compute_routes(self, waypoints, alternatives=False):
        self.calls.append(list(waypoints))
        if len(waypoints) == 2:
            return list(self.primary_routes)
        route = self.detour(list(waypoints))
        return [route] if route is not None else []

    @property
    def detour_calls(self):
        return [call for call in self.calls if len(call) > 2]


@pytest.fixture()
def config():
    return SafetyConfig()


@pytest.fixture()
def fixed_store():
    """Empty store whose clock is pinned to FIXED_NOW."""
    return InMemoryRecordStore(clock=lambda: FIXED_NOW)


@pytest.fixture()
def store():
    """Empty store on the real clock."""
    return InMemoryRecordStore()
