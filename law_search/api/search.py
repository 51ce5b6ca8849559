"""Search API endpoints."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Path

from ..models.article import FilterSet
from ..models.response import SearchResponse, HighlightResponse
from ..models.request import SearchRequest, HighlightRequest, split_tags
from ..core.highlighter import highlight_search_terms
from ..config import get_settings

router = APIRouter(prefix="/api/v1", tags=["search"])
settings = get_settings()

# Import the global search engine instance
from ..engine_instance import search_engine, search_history


def _check_length(query: str) -> None:
    if len(query) > settings.max_query_length:
        raise HTTPException(
            status_code=400,
            detail=f"Query too long. Maximum length is {settings.max_query_length} characters"
        )


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search articles",
    description="Search articles by number, phrase or words, with optional filters and fuzzy matching"
)
async def search_articles(
    q: str = Query("", description="Search query, blank to browse the first articles"),
    chapter: Optional[str] = Query(None, description="Chapter substring filter"),
    part: Optional[str] = Query(None, description="Part substring filter"),
    tags: Optional[str] = Query(None, description="Comma-separated tag filters (any of)"),
    law_source: Optional[str] = Query(None, description="Exact law source filter"),
    fuzzy: bool = Query(False, description="Use approximate matching")
) -> SearchResponse:
    """
    Search the article collection.

    Quoted queries match a literal phrase, 'Article 12' or '12' finds an
    article by number, and plain words must all appear as whole words.
    """
    _check_length(q)

    filters = FilterSet(chapter=chapter, part=part, tags=split_tags(tags), law_source=law_source)
    response = search_engine.search(q, filters, use_fuzzy=fuzzy)
    search_history.add(q)
    return response


@router.post(
    "/search",
    response_model=SearchResponse,
    summary="Search with request body",
    description="Search articles using a structured request body"
)
async def search_with_body(request: SearchRequest) -> SearchResponse:
    """
    Search articles using a structured request body.

    This endpoint accepts the query, the filter set and the fuzzy toggle
    as one JSON document.
    """
    _check_length(request.query)

    response = search_engine.search(request.query, request.filters, use_fuzzy=request.use_fuzzy)
    if request.record_history:
        search_history.add(request.query)
    return response


@router.get(
    "/suggestions/{query}",
    response_model=list[str],
    summary="Get search suggestions",
    description="Get titles and tags close to a partial or misspelled query"
)
async def get_suggestions(
    query: str = Path(..., description="The query to get suggestions for", min_length=1),
    max_suggestions: int = Query(5, ge=1, le=20, description="Maximum number of suggestions")
) -> list[str]:
    """Get suggestions for a query."""
    return search_engine.get_suggestions(query, max_suggestions)


@router.post(
    "/highlight",
    response_model=HighlightResponse,
    summary="Highlight query matches",
    description="Wrap the matches of a query in <mark> elements, using the same mode as search"
)
async def highlight(request: HighlightRequest) -> HighlightResponse:
    """Highlight query matches in a text fragment."""
    _check_length(request.query)

    descriptor = search_engine.classify(request.query)
    html = highlight_search_terms(request.text, request.query, search_engine.classifier)
    return HighlightResponse(query=request.query, mode=descriptor.mode, html=html)
