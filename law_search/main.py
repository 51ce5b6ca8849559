"""Main FastAPI application for Law Search."""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import structlog

from .api import (
    search_router,
    articles_router,
    history_router,
    health_router,
    metrics_router,
)
from .config import get_settings
from .engine_instance import search_engine
from .models.response import ErrorResponse

settings = get_settings()

logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Law Search service", version=settings.app_version)

    # A failed load leaves the engine empty; /api/v1/articles/reload retries
    articles = await search_engine.initialize(settings.law_data_source)
    if articles:
        logger.info("Law data loaded", total_articles=len(articles))
    else:
        logger.warning(
            "Law data unavailable, serving empty results",
            source=settings.law_data_source,
            error=search_engine.load_error
        )

    yield

    # Shutdown
    logger.info("Shutting down Law Search service")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Exact and fuzzy search over a collection of legal articles",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next) -> Response:
    """Log every HTTP request under a per-request id."""
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    request.state.request_id = request_id
    log = logger.bind(request_id=request_id, method=request.method, path=request.url.path)
    start_time = time.perf_counter()

    log.info(
        "Request started",
        query_string=request.url.query or None,
        client_ip=request.client.host if request.client else None
    )

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    log.info(
        "Request completed",
        status_code=response.status_code,
        process_time_ms=round((time.perf_counter() - start_time) * 1000, 2)
    )

    return response


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Turn unexpected failures into an ErrorResponse."""
    request_id = getattr(request.state, "request_id", None)
    logger.error(
        "Unhandled exception",
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        error=str(exc),
        exc_info=True
    )

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            message="An unexpected error occurred",
            details={"exception": str(exc)} if settings.debug else None,
            request_id=request_id
        ).model_dump(mode="json")
    )


# Include API routers
app.include_router(search_router)
app.include_router(articles_router)
app.include_router(history_router)
app.include_router(health_router)
app.include_router(metrics_router)


# Root endpoint
@app.get("/", summary="Root endpoint", description="Get basic information about the API")
async def root() -> dict:
    """Root endpoint with basic API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Exact and fuzzy search over a collection of legal articles",
        "docs_url": "/docs",
        "health_url": "/api/v1/health",
        "status": "running"
    }


# API info endpoint
@app.get("/api", summary="API information", description="Get detailed API information")
async def api_info() -> dict:
    """Get detailed API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Exact and fuzzy search over a collection of legal articles",
        "endpoints": {
            "search": "/api/v1/search?q={query}",
            "suggestions": "/api/v1/suggestions/{query}",
            "highlight": "/api/v1/highlight",
            "articles": "/api/v1/articles",
            "article": "/api/v1/articles/{article_number}",
            "filters": "/api/v1/filters",
            "history": "/api/v1/history",
            "health": "/api/v1/health",
            "metrics": "/api/v1/metrics"
        },
        "features": [
            "Article number lookup ('Article 12', 'Art. 12', '12')",
            "Quoted phrase matching",
            "Whole-word single and multi-word matching",
            "Accent and case insensitive matching",
            "Fuzzy matching with typo tolerance",
            "Chapter, part, tag and source filters",
            "Recent search history"
        ],
        "limits": {
            "browse_size": settings.browse_size,
            "max_query_length": settings.max_query_length
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "law_search.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level=settings.log_level.lower()
    )
