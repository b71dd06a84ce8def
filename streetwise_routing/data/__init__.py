"""
Data model, record sources and geographic utilities.

This module contains:
- Incident and police station record types
- GeoJSON record loading
- Record stores answering near-route queries
- Distance, bearing and degree/meter conversions
"""

from .models import IncidentRecord, PoliceStationRecord, extract_coordinates, to_linestring
from .data_loader import load_incidents, load_police_stations
from .record_store import RecordStore, InMemoryRecordStore
from .distance_utils import (
    haversine_distance,
    distance_between,
    meters_to_degrees,
    bearing_between,
)

__all__ = [
    'IncidentRecord',
    'PoliceStationRecord',
    'extract_coordinates',
    'to_linestring',
    'load_incidents',
    'load_police_stations',
    'RecordStore',
    'InMemoryRecordStore',
    'haversine_distance',
    'distance_between',
    'meters_to_degrees',
    'bearing_between'
]
