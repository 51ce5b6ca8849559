"""Metrics and monitoring API endpoints."""

import psutil
from datetime import datetime

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from ..models.response import MetricsResponse
from ..config import get_settings

router = APIRouter(prefix="/api/v1", tags=["metrics"])
settings = get_settings()

# Import the global search engine instance
from ..engine_instance import search_engine


def _cache_hit_rate(cache: dict) -> float:
    lookups = cache.get("hits", 0) + cache.get("misses", 0)
    return cache.get("hits", 0) / lookups if lookups else 0.0


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Get performance metrics",
    description="Get query statistics, cache efficiency and process memory"
)
async def get_metrics() -> MetricsResponse:
    """
    Get performance metrics for the search engine.

    Query counts come from the engine; memory is the resident set size
    of this process.
    """
    try:
        stats = search_engine.get_stats()
        memory_usage_mb = psutil.Process().memory_info().rss / (1024 * 1024)

        return MetricsResponse(
            total_queries=stats["total_queries"],
            exact_searches=stats["exact_searches"],
            fuzzy_searches=stats["fuzzy_searches"],
            browse_requests=stats["browse_requests"],
            no_matches=stats["no_matches"],
            average_response_time_ms=stats["average_execution_time_ms"],
            cache_hit_rate=_cache_hit_rate(stats["cache"]),
            total_articles=stats["total_articles"],
            memory_usage_mb=memory_usage_mb
        )

    except psutil.Error as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to get metrics: {str(e)}"
        )


@router.get(
    "/metrics/detailed",
    summary="Get detailed metrics",
    description="Get engine statistics together with system resource usage"
)
async def get_detailed_metrics() -> JSONResponse:
    """Get detailed metrics including system memory and CPU usage."""
    stats = search_engine.get_stats()
    memory_info = psutil.virtual_memory()

    return JSONResponse(
        status_code=200,
        content={
            "query_metrics": {
                "total_queries": stats["total_queries"],
                "exact_searches": stats["exact_searches"],
                "fuzzy_searches": stats["fuzzy_searches"],
                "browse_requests": stats["browse_requests"],
                "no_matches": stats["no_matches"],
                "no_match_rate": stats["no_match_rate"],
                "average_response_time_ms": stats["average_execution_time_ms"],
                "total_execution_time_ms": stats["total_execution_time"]
            },
            "collection_metrics": {
                "total_articles": stats["total_articles"],
                "load_error": search_engine.load_error
            },
            "cache_metrics": {
                **stats["cache"],
                "cache_hit_rate": _cache_hit_rate(stats["cache"])
            },
            "system_metrics": {
                "memory_usage_mb": memory_info.used / (1024 * 1024),
                "memory_usage_percent": memory_info.percent,
                "cpu_usage_percent": psutil.cpu_percent(interval=None),
                "available_memory_mb": memory_info.available / (1024 * 1024)
            },
            "timestamp": datetime.utcnow().isoformat()
        }
    )
