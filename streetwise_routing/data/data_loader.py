"""
GeoJSON loaders for incident and police station records.
"""

import json
import logging
import os
from typing import Any, Dict, List

from ..config.safety_config import SAFETY_CONFIG
from .models import IncidentRecord, PoliceStationRecord, parse_timestamp

logger = logging.getLogger(__name__)


def _read_feature_collection(data_path: str) -> List[Dict[str, Any]]:
    if not os.path.exists(data_path):
        raise FileNotFoundError(f"Data file not found: {data_path}")

    try:
        with open(data_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON format in data file: {e}")

    if 'features' not in data:
        raise ValueError("Data must be in GeoJSON format with 'features' key")

    return data['features']


def _point_coordinates(feature: Dict[str, Any]):
    geometry = feature.get('geometry') or {}
    if geometry.get('type') != 'Point':
        return None
    coords = geometry.get('coordinates') or []
    if len(coords) < 2:
        return None
    lon, lat = float(coords[0]), float(coords[1])
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        return None
    return lon, lat


def load_incidents(data_path: str) -> List[IncidentRecord]:
    """
    Load incident reports from a GeoJSON FeatureCollection of Points.

    Each feature needs 'id', 'type' and 'created_at' properties. A missing
    'severity' is derived from the category.

    Args:
        data_path: Path to the GeoJSON file

    Returns:
        List of IncidentRecord

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not GeoJSON
    """
    incidents = []
    skipped = 0

    for index, feature in enumerate(_read_feature_collection(data_path)):
        props = feature.get('properties') or {}
        try:
            coords = _point_coordinates(feature)
            if coords is None:
                skipped += 1
                continue
            category = str(props['type'])
            severity = props.get('severity')
            incidents.append(IncidentRecord(
                id=str(props.get('id', feature.get('id', index))),
                category=category,
                latitude=coords[1],
                longitude=coords[0],
                severity=int(severity) if severity is not None else SAFETY_CONFIG.get_incident_severity(category),
                created_at=parse_timestamp(props['created_at']),
            ))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping incident feature {index}: {e}")
            skipped += 1

    logger.info(f"Loaded {len(incidents)} incidents from {data_path} ({skipped} skipped)")
    return incidents


def load_police_stations(data_path: str) -> List[PoliceStationRecord]:
    """
    Load police stations from a GeoJSON FeatureCollection of Points.

    Args:
        data_path: Path to the GeoJSON file

    Returns:
        List of PoliceStationRecord
    """
    stations = []
    skipped = 0

    for index, feature in enumerate(_read_feature_collection(data_path)):
        props = feature.get('properties') or {}
        try:
            coords = _point_coordinates(feature)
        except (TypeError, ValueError) as e:
            logger.warning(f"Skipping police station feature {index}: {e}")
            coords = None
        if coords is None:
            skipped += 1
            continue
        stations.append(PoliceStationRecord(
            id=str(props.get('id', feature.get('id', index))),
            name=str(props.get('name', 'Police station')),
            latitude=coords[1],
            longitude=coords[0],
            address=props.get('address'),
            phone=props.get('phone'),
        ))

    logger.info(f"Loaded {len(stations)} police stations from {data_path} ({skipped} skipped)")
    return stations
