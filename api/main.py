"""
Streetwise Routing API - FastAPI Main Application

A RESTful API for scoring walking routes against community incident reports
and finding safer alternatives.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from api.routes.routing import router as routing_router
from api.routes.incidents import router as incidents_router
from api.services.routing_service import routing_service

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - startup and shutdown events.
    """
    logger.info("Starting Streetwise Routing API...")

    health = routing_service.get_health_status()
    if health.directions_available:
        logger.info(f"Routing service ready with {health.incidents_count} incidents, "
                    f"{health.police_stations_count} police stations")
    else:
        logger.warning("Routing service running in degraded mode - route planning disabled")

    yield

    logger.info("Shutting down Streetwise Routing API...")


app = FastAPI(
    title="Streetwise Routing API",
    description="""
    **Safer walking routes from community incident reports**

    Scores walking routes out of 10 using incidents reported near the route
    (recent reports weigh more) and police stations along it, then searches
    for a detour around danger clusters that scores better.

    ## Features

    - **Route Safety Score**: time-weighted incident penalties and police station bonus
    - **Safer Alternatives**: bounded detour search around danger clusters
    - **Incident Reporting**: categorised community reports
    - **GeoJSON Output**: planned routes as a FeatureCollection

    ## Quick Start

    1. Check service health: `GET /api/routing/health`
    2. Plan routes: `POST /api/routing/plan`
    3. Score an existing route: `POST /api/routing/safety`
    """,
    version="1.0.0",
    license_info={
        "name": "MIT License",
        "url": "https://opensource.org/licenses/MIT",
    },
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request validation errors with detailed information.
    """
    logger.warning(f"Validation error for {request.url}: {exc}")
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": "validation_error",
            "message": "Request validation failed",
            "details": jsonable_errors(exc)
        }
    )


HTTP_ERROR_NAMES = {
    400: "invalid_request",
    404: "not_found",
    500: "internal_server_error",
    502: "upstream_lookup_failed",
}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Render HTTP errors raised by the routes in the common error format.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": HTTP_ERROR_NAMES.get(exc.status_code, "http_error"),
            "message": str(exc.detail),
            "details": None
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle unexpected errors gracefully.
    """
    logger.error(f"Unexpected error for {request.url}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
            "details": None
        }
    )


def jsonable_errors(exc: RequestValidationError):
    """Validation errors with non-serializable context (exceptions) stringified."""
    errors = []
    for error in exc.errors():
        error = dict(error)
        if 'ctx' in error:
            error['ctx'] = {key: str(value) for key, value in error['ctx'].items()}
        errors.append(error)
    return errors


app.include_router(routing_router)
app.include_router(incidents_router)


@app.get("/", tags=["general"])
async def root():
    """
    API root endpoint with basic information.
    """
    return {
        "api": "Streetwise Routing API",
        "version": "1.0.0",
        "status": "operational",
        "documentation": "/docs",
        "health_check": "/api/routing/health"
    }


@app.get("/health", tags=["general"])
async def api_health():
    """
    Simple health check endpoint.
    """
    try:
        service_health = routing_service.get_health_status()
        return {
            "api_status": "healthy",
            "service_status": service_health.status,
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "api_status": "unhealthy",
                "error": str(e),
            }
        )


if __name__ == "__main__":
    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
