"""Response models for API endpoints."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .article import SearchResult


class SearchResponse(BaseModel):
    """Response for search queries."""

    query: str = Field(..., description="Original search query")
    mode: str = Field(
        ..., description="Query mode (article_number, phrase, word, terms, fuzzy or browse)"
    )
    match_type: Optional[str] = Field(None, description="exact, fuzzy, or None when browsing")
    total_results: int = Field(..., description="Total number of results")
    results: List[SearchResult] = Field(..., description="Ranked, filtered results")
    execution_time_ms: float = Field(..., description="Query execution time in milliseconds")
    suggestions: Optional[List[str]] = Field(None, description="Alternative suggestions if no match")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class QuickFiltersResponse(BaseModel):
    """Filter values available in the loaded collection."""

    popular_tags: List[str] = Field(..., description="Curated popular tags")
    all_tags: List[str] = Field(..., description="Every distinct tag, sorted")
    chapters: List[str] = Field(..., description="Every distinct chapter, sorted")
    parts: List[str] = Field(..., description="Every distinct part, sorted")
    law_sources: List[str] = Field(..., description="Every distinct law source, sorted")


class HighlightResponse(BaseModel):
    """Text with query matches wrapped in mark elements."""

    query: str = Field(..., description="Query used for highlighting")
    mode: str = Field(..., description="Query mode that drove the highlight")
    html: str = Field(..., description="Escaped text with <mark> elements")


class HistoryResponse(BaseModel):
    """Recent search queries, most recent first."""

    queries: List[str] = Field(..., description="Recent queries")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")
    request_id: Optional[str] = Field(None, description="Request identifier for tracking")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    uptime: float = Field(..., description="Service uptime in seconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    dependencies: Dict[str, str] = Field(..., description="Dependency status")
    load_error: Optional[str] = Field(None, description="Last collection load failure")


class MetricsResponse(BaseModel):
    """Performance metrics response."""

    total_queries: int = Field(..., description="Total queries processed")
    exact_searches: int = Field(..., description="Exact-mode searches")
    fuzzy_searches: int = Field(..., description="Fuzzy-mode searches")
    browse_requests: int = Field(..., description="Blank-query browse requests")
    no_matches: int = Field(..., description="Searches that returned nothing")
    average_response_time_ms: float = Field(..., description="Average response time")
    cache_hit_rate: float = Field(..., description="Normalization cache hit rate")
    total_articles: int = Field(..., description="Articles in the loaded collection")
    memory_usage_mb: float = Field(..., description="Process resident memory in MB")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Metrics timestamp")
