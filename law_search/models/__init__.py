"""Data models for law search."""

from .article import Article, FilterSet, SearchResult
from .response import (
    SearchResponse,
    QuickFiltersResponse,
    HighlightResponse,
    HistoryResponse,
    ErrorResponse,
    HealthResponse,
    MetricsResponse,
)
from .request import SearchRequest

__all__ = [
    "Article",
    "FilterSet",
    "SearchResult",
    "SearchResponse",
    "QuickFiltersResponse",
    "HighlightResponse",
    "HistoryResponse",
    "ErrorResponse",
    "HealthResponse",
    "MetricsResponse",
    "SearchRequest",
]
