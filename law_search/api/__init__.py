"""API endpoints for law search."""

from .search import router as search_router
from .articles import router as articles_router
from .history import router as history_router
from .health import router as health_router
from .metrics import router as metrics_router

__all__ = [
    "search_router",
    "articles_router",
    "history_router",
    "health_router",
    "metrics_router",
]
