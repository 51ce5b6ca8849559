"""Health check and monitoring API endpoints."""

import time
from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..models.response import HealthResponse
from ..config import get_settings

router = APIRouter(prefix="/api/v1", tags=["health"])
settings = get_settings()

# Import the global search engine instance
from ..engine_instance import search_engine

# Track application start time
app_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the search service"
)
async def health_check() -> HealthResponse:
    """
    Perform a health check on the search service.

    The service is degraded while the article collection is not loaded
    or the last load attempt failed; both are retryable states.
    """
    uptime = time.time() - app_start_time

    dependencies = {
        "article_collection": (
            "healthy" if search_engine.is_loaded and not search_engine.load_error else "degraded"
        ),
        "search_engine": "healthy",
    }

    # Exercise the exact path; it must never raise for data-driven input
    try:
        search_engine.classify("health check")
    except Exception:
        dependencies["search_engine"] = "unhealthy"

    if all(status == "healthy" for status in dependencies.values()):
        status = "healthy"
    elif any(status == "unhealthy" for status in dependencies.values()):
        status = "unhealthy"
    else:
        status = "degraded"

    return HealthResponse(
        status=status,
        version=settings.app_version,
        uptime=uptime,
        dependencies=dependencies,
        load_error=search_engine.load_error
    )


@router.get(
    "/health/ready",
    summary="Readiness check",
    description="Check if the article collection is loaded and searchable"
)
async def readiness_check() -> JSONResponse:
    """
    Check if the service is ready to accept requests.

    Returns 503 until the article collection has loaded.
    """
    if not search_engine.is_loaded:
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "error": search_engine.load_error or "Article collection not loaded",
                "timestamp": datetime.utcnow().isoformat()
            }
        )

    return JSONResponse(
        status_code=200,
        content={
            "status": "ready",
            "timestamp": datetime.utcnow().isoformat(),
            "total_articles": len(search_engine.articles)
        }
    )


@router.get(
    "/health/live",
    summary="Liveness check",
    description="Check if the service is alive and responding"
)
async def liveness_check() -> JSONResponse:
    """Simple liveness check."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "alive",
            "timestamp": datetime.utcnow().isoformat(),
            "uptime": time.time() - app_start_time
        }
    )


@router.get(
    "/status",
    summary="Service status",
    description="Get detailed status information about the service"
)
async def service_status() -> JSONResponse:
    """Get configuration, statistics and uptime in one document."""
    stats = search_engine.get_stats()

    config_info = {
        "law_data_source": settings.law_data_source,
        "browse_size": settings.browse_size,
        "fuzzy_threshold": settings.fuzzy_threshold,
        "max_query_length": settings.max_query_length,
        "normalize_cache_size": settings.normalize_cache_size,
        "proximity_window": settings.proximity_window,
        "debug": settings.debug
    }

    return JSONResponse(
        status_code=200,
        content={
            "service": {
                "name": settings.app_name,
                "version": settings.app_version,
                "status": "running",
                "uptime": time.time() - app_start_time,
                "start_time": datetime.fromtimestamp(app_start_time).isoformat()
            },
            "configuration": config_info,
            "statistics": stats,
            "timestamp": datetime.utcnow().isoformat()
        }
    )
