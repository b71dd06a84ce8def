"""
Pydantic schemas for incident reporting and map-bounds queries.
"""

from typing import Dict, List

from pydantic import BaseModel, Field, model_validator

from api.schemas.routing import IncidentSummary, PoliceStationSummary


class IncidentCreateRequest(BaseModel):
    """Request model for reporting an incident."""
    type: str = Field(..., min_length=1, description="Incident category, e.g. 'harassment'")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude coordinate")


class IncidentCreateResponse(BaseModel):
    success: bool = True
    incident: IncidentSummary


class BoundsRequest(BaseModel):
    """Map viewport bounds. West greater than east means the box crosses the antimeridian."""
    north: float = Field(..., ge=-90, le=90)
    south: float = Field(..., ge=-90, le=90)
    east: float = Field(..., ge=-180, le=180)
    west: float = Field(..., ge=-180, le=180)

    @model_validator(mode='after')
    def validate_ordering(self):
        if self.south > self.north:
            raise ValueError("south must not be greater than north")
        return self


class IncidentsInBoundsResponse(BaseModel):
    incidents: List[IncidentSummary] = Field(default_factory=list, description="Newest first")
    count: int


class PoliceStationsInBoundsResponse(BaseModel):
    stations: List[PoliceStationSummary] = Field(default_factory=list)


class IncidentCategory(BaseModel):
    type: str
    severity: int
    penalty: float
    emoji: str


class IncidentCategoriesResponse(BaseModel):
    categories: List[IncidentCategory]
    recent_threshold_days: float
    max_incident_age_days: float
    penalty_multipliers: Dict[str, float]
