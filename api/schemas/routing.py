"""
Pydantic schemas for the route planning and safety scoring API.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class LocationRequest(BaseModel):
    """Request model for a single location."""
    latitude: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude coordinate")

    def to_coordinate(self):
        """(lon, lat) pair, the order used throughout the routing core."""
        return (self.longitude, self.latitude)


class RoutePlanRequest(BaseModel):
    """Request model for route planning."""
    start: LocationRequest = Field(..., description="Starting location")
    destination: LocationRequest = Field(..., description="Destination location")


class LineStringGeometry(BaseModel):
    """GeoJSON LineString of a route."""
    type: str = Field(default="LineString", description="GeoJSON geometry type")
    coordinates: List[List[float]] = Field(..., description="[longitude, latitude] pairs")

    @field_validator('type')
    @classmethod
    def validate_type(cls, v):
        if v != "LineString":
            raise ValueError("geometry type must be 'LineString'")
        return v

    @field_validator('coordinates')
    @classmethod
    def validate_coordinates(cls, v):
        if not v:
            raise ValueError("geometry must contain at least one coordinate")
        for point in v:
            if len(point) < 2:
                raise ValueError("each coordinate must be a [longitude, latitude] pair")
        return v


class SafetyRequest(BaseModel):
    """Request model for scoring a route geometry."""
    geometry: LineStringGeometry = Field(..., description="Route geometry to score")


class IncidentSummary(BaseModel):
    id: str
    type: str
    severity: int
    latitude: float
    longitude: float
    created_at: str
    location: List[float]


class PoliceStationSummary(BaseModel):
    id: str
    name: str
    latitude: float
    longitude: float
    address: Optional[str] = None
    phone: Optional[str] = None
    location: List[float]


class SafetyResponse(BaseModel):
    """Safety assessment of a route."""
    safetyScore: float = Field(..., ge=0.0, le=10.0, description="Safety score out of 10")
    incidentCount: int = Field(..., description="Incidents near the route")
    policeStationCount: int = Field(..., description="Police stations near the route")
    totalPenalty: float = Field(..., description="Points deducted for incidents")
    policeBonus: float = Field(..., description="Points added for police stations")
    incidents: List[IncidentSummary] = Field(default_factory=list)
    policeStations: List[PoliceStationSummary] = Field(default_factory=list)


class PlannedRoute(BaseModel):
    """One planned route with its safety summary."""
    route_type: str = Field(..., description="'fastest' or 'safest'")
    duration_s: float = Field(..., description="Estimated travel time in seconds")
    distance_m: float = Field(..., description="Route distance in meters")
    safety_score: Optional[float] = Field(default=None, description="Safety score out of 10, null if unscored")
    incident_count: Optional[int] = Field(default=None, description="Incidents near the route")
    total_penalty: Optional[float] = Field(default=None, description="Points deducted for incidents")
    police_station_count: Optional[int] = Field(default=None, description="Police stations near the route")
    detour_percentage: float = Field(default=0.0, description="Extra distance relative to the fastest route")
    geometry: Dict[str, Any] = Field(..., description="Route as a GeoJSON LineString")
    steps: List[Dict[str, Any]] = Field(default_factory=list, description="Turn-by-turn steps")


class RoutePlanResponse(BaseModel):
    """Response model for route planning."""
    success: bool = Field(..., description="Whether planning succeeded")
    message: str = Field(..., description="Status message")
    routes: List[PlannedRoute] = Field(default_factory=list, description="Fastest route first")
    route_geojson: Optional[Dict[str, Any]] = Field(default=None, description="Routes as a GeoJSON FeatureCollection")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    directions_available: bool = Field(..., description="Whether a directions provider is configured")
    incidents_count: int = Field(..., description="Number of incidents held")
    police_stations_count: int = Field(..., description="Number of police stations held")


class ErrorResponse(BaseModel):
    """Error response model."""
    success: bool = Field(False, description="Always false for error responses")
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Detailed error message")
    details: Optional[Any] = Field(None, description="Additional error details")
