"""
FastAPI routes for incident reports and police stations.
"""

from fastapi import APIRouter, HTTPException, status
import logging

from api.schemas.incidents import (
    BoundsRequest,
    IncidentCategoriesResponse,
    IncidentCategory,
    IncidentCreateRequest,
    IncidentCreateResponse,
    IncidentsInBoundsResponse,
    PoliceStationsInBoundsResponse,
)
from api.services.routing_service import routing_service
from streetwise_routing.exceptions import RouteValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["incidents"])


@router.post("/incidents", response_model=IncidentCreateResponse,
             status_code=status.HTTP_201_CREATED, summary="Report an Incident")
def create_incident(request: IncidentCreateRequest):
    """
    Report an incident at a location.

    Severity is derived from the incident type; unknown types get a medium
    severity.
    """
    try:
        incident = routing_service.create_incident(request.type, request.latitude, request.longitude)
        return IncidentCreateResponse(success=True, incident=incident.to_dict())

    except RouteValidationError as e:
        logger.warning(f"Invalid incident report: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error saving incident: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save incident"
        )


@router.post("/incidents/in-bounds", response_model=IncidentsInBoundsResponse,
             summary="Recent Incidents in Bounds")
def incidents_in_bounds(bounds: BoundsRequest):
    """Incidents from the last 30 days inside the map bounds, newest first."""
    try:
        incidents = routing_service.incidents_in_bounds(bounds.north, bounds.south,
                                                        bounds.east, bounds.west)
        return IncidentsInBoundsResponse(
            incidents=[i.to_dict() for i in incidents],
            count=len(incidents),
        )

    except RouteValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error fetching incidents in bounds: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch incidents"
        )


@router.get("/incidents/categories", response_model=IncidentCategoriesResponse,
            summary="Incident Categories")
async def incident_categories():
    """Incident categories with their severity, penalty and display emoji."""
    config = routing_service.config
    return IncidentCategoriesResponse(
        categories=[
            IncidentCategory(
                type=category,
                severity=config.get_incident_severity(category),
                penalty=config.get_incident_penalty(category),
                emoji=config.get_incident_emoji(category),
            )
            for category in config.incident_categories
        ],
        recent_threshold_days=config.recent_threshold_days,
        max_incident_age_days=config.max_incident_age_days,
        penalty_multipliers={
            "recent": config.recent_incident_multiplier,
            "minimum": config.min_time_weight,
        },
    )


@router.post("/police-stations/in-bounds", response_model=PoliceStationsInBoundsResponse,
             summary="Police Stations in Bounds", tags=["police"])
def police_stations_in_bounds(bounds: BoundsRequest):
    """Police stations inside the map bounds."""
    try:
        stations = routing_service.police_stations_in_bounds(bounds.north, bounds.south,
                                                             bounds.east, bounds.west)
        return PoliceStationsInBoundsResponse(stations=[s.to_dict() for s in stations])

    except RouteValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error fetching police stations: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch police stations"
        )
