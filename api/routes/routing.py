"""
FastAPI routes for route planning and safety scoring endpoints.
"""

from fastapi import APIRouter, HTTPException, status
import logging

from api.schemas.routing import (
    HealthResponse,
    RoutePlanRequest,
    RoutePlanResponse,
    SafetyRequest,
    SafetyResponse,
)
from api.services.routing_service import routing_service
from streetwise_routing.exceptions import DataLookupError, NoRouteFoundError, RouteValidationError

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/routing", tags=["routing"])


@router.get("/health", response_model=HealthResponse, summary="Health Check")
async def health_check():
    """
    Check the health status of the routing service.

    Returns:
        HealthResponse: Service health information
    """
    try:
        return routing_service.get_health_status()
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Health check failed"
        )


@router.post("/plan", response_model=RoutePlanResponse, summary="Plan Fastest and Safer Routes")
def plan_routes(request: RoutePlanRequest):
    """
    Plan a walking route between two locations.

    Always returns the fastest route. When incidents lie along it and a
    detour around them scores better, a second "safest" route is returned.

    Example:
        ```json
        {
            "start": {"latitude": 48.8566, "longitude": 2.3522},
            "destination": {"latitude": 48.8809, "longitude": 2.3601}
        }
        ```
    """
    try:
        logger.info(f"Route planning request from "
                    f"({request.start.latitude}, {request.start.longitude}) to "
                    f"({request.destination.latitude}, {request.destination.longitude})")
        return routing_service.plan_routes(request)

    except RouteValidationError as e:
        logger.warning(f"Route planning validation error: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NoRouteFoundError as e:
        logger.info(f"No route found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DataLookupError as e:
        logger.error(f"Route planning lookup failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except Exception as e:
        logger.error(f"Route planning failed with unexpected error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error during route planning"
        )


@router.post("/safety", response_model=SafetyResponse, summary="Calculate Route Safety")
def calculate_safety(request: SafetyRequest):
    """
    Calculate the safety score of a route geometry.

    Incidents within 100m of the route (last 30 days) lower the score;
    police stations within 300m raise it, up to a cap.
    """
    try:
        return routing_service.score_route(request)

    except RouteValidationError as e:
        logger.warning(f"Invalid route geometry: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DataLookupError as e:
        logger.error(f"Error fetching incidents: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to fetch incidents")
    except Exception as e:
        logger.error(f"Error calculating safety score: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.get("/", summary="API Information")
async def get_api_info():
    """
    Get information about the Streetwise Routing API.

    Returns:
        dict: API information and available endpoints
    """
    return {
        "api": "Streetwise Routing API",
        "version": "1.0.0",
        "description": "Score walking routes for safety and find safer alternatives",
        "endpoints": {
            "POST /api/routing/plan": "Plan the fastest route and a safer alternative",
            "POST /api/routing/safety": "Calculate the safety score of a route geometry",
            "GET /api/routing/health": "Check service health status",
            "GET /api/routing/": "This information endpoint",
            "POST /api/incidents": "Report an incident",
            "POST /api/incidents/in-bounds": "Recent incidents inside map bounds",
            "GET /api/incidents/categories": "Incident categories with severity and penalty",
            "POST /api/police-stations/in-bounds": "Police stations inside map bounds"
        }
    }
