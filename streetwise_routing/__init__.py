"""
Streetwise Routing - safety scoring and safer walking routes.

Scores walking routes from geotagged incident reports and nearby police
stations, and searches for a detour that scores better without an
excessive increase in distance.

## Quick Start

```python
from streetwise_routing import (
    InMemoryRecordStore, MapboxDirectionsProvider, SafetyScorer, SaferRoutePlanner,
    load_incidents, load_police_stations,
)

store = InMemoryRecordStore(load_incidents("incidents.geojson"),
                            load_police_stations("police_stations.geojson"))
planner = SaferRoutePlanner(MapboxDirectionsProvider(token), SafetyScorer(store))

routes = planner.plan_routes(
    start=(2.3522, 48.8566),   # (lon, lat)
    end=(2.3601, 48.8809),
)
```

## Architecture

- `algorithms/`: scoring, danger clustering and safer-route search
- `data/`: records, record stores, GeoJSON loading and geo math
- `directions/`: directions provider interface and Mapbox client
- `config/`: scoring constants and runtime settings
"""

from .algorithms import SafetyScorer, SafetyAssessment, SaferRoutePlanner, RouteCandidate
from .config import SafetyConfig, SAFETY_CONFIG, AppSettings
from .data import (
    IncidentRecord,
    PoliceStationRecord,
    RecordStore,
    InMemoryRecordStore,
    load_incidents,
    load_police_stations,
)
from .directions import DirectionsProvider, DirectionsRoute, MapboxDirectionsProvider
from .exceptions import (
    StreetwiseError,
    DataLookupError,
    DirectionsError,
    RouteValidationError,
    NoRouteFoundError,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    'SaferRoutePlanner',
    'SafetyScorer',
    'SafetyAssessment',
    'RouteCandidate',
    'SafetyConfig',
    'SAFETY_CONFIG',
    'AppSettings',

    # Records and capabilities
    'IncidentRecord',
    'PoliceStationRecord',
    'RecordStore',
    'InMemoryRecordStore',
    'DirectionsProvider',
    'DirectionsRoute',
    'MapboxDirectionsProvider',
    'load_incidents',
    'load_police_stations',

    # Errors
    'StreetwiseError',
    'DataLookupError',
    'DirectionsError',
    'RouteValidationError',
    'NoRouteFoundError',

    '__version__'
]
