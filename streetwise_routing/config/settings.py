"""
Runtime settings for the routing service, read from the environment.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', 'data')


@dataclass
class AppSettings:
    """Service-level settings (credentials, data locations, timeouts)."""

    mapbox_access_token: Optional[str] = None
    mapbox_profile: str = 'walking'
    mapbox_timeout_sec: float = 10.0
    incidents_path: str = os.path.join(DEFAULT_DATA_DIR, 'incidents.geojson')
    police_stations_path: str = os.path.join(DEFAULT_DATA_DIR, 'police_stations.geojson')

    @classmethod
    def from_env(cls) -> 'AppSettings':
        """Build settings from environment variables (and a local .env file)."""
        load_dotenv()
        defaults = cls()
        return cls(
            mapbox_access_token=os.environ.get('MAPBOX_ACCESS_TOKEN') or None,
            mapbox_profile=os.environ.get('MAPBOX_PROFILE', defaults.mapbox_profile),
            mapbox_timeout_sec=float(os.environ.get('MAPBOX_TIMEOUT_SEC', defaults.mapbox_timeout_sec)),
            incidents_path=os.environ.get('STREETWISE_INCIDENTS_PATH', defaults.incidents_path),
            police_stations_path=os.environ.get('STREETWISE_POLICE_STATIONS_PATH',
                                                defaults.police_stations_path),
        )
