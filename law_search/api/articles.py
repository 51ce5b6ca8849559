"""Article collection API endpoints."""

from typing import List

from fastapi import APIRouter, HTTPException, Path
from fastapi.responses import JSONResponse

from ..models.article import Article
from ..models.response import QuickFiltersResponse
from ..config import get_settings

router = APIRouter(prefix="/api/v1", tags=["articles"])
settings = get_settings()

# Import the global search engine instance
from ..engine_instance import search_engine


@router.get(
    "/articles",
    response_model=List[Article],
    summary="List articles",
    description="Get every loaded article in load order"
)
async def list_articles() -> List[Article]:
    """Get all loaded articles."""
    return search_engine.get_articles()


@router.get(
    "/articles/{article_number}",
    response_model=Article,
    summary="Get article",
    description="Get a single article by its number"
)
async def get_article(
    article_number: int = Path(..., description="The article number", ge=0)
) -> Article:
    """Get one article by number."""
    article = search_engine.get_article(article_number)
    if article is None:
        raise HTTPException(
            status_code=404,
            detail=f"Article {article_number} not found"
        )
    return article


@router.get(
    "/filters",
    response_model=QuickFiltersResponse,
    summary="Get quick filters",
    description="Get the tags, chapters, parts and sources present in the collection"
)
async def get_quick_filters() -> QuickFiltersResponse:
    """Get available filter values."""
    return QuickFiltersResponse(**search_engine.get_quick_filters())


@router.post(
    "/articles/reload",
    summary="Reload articles",
    description="Retry or refresh the load of the configured article collection"
)
async def reload_articles() -> JSONResponse:
    """
    Reload the article collection from the configured source.

    A failed load is not an HTTP error of this endpoint's own making: the
    engine keeps serving what it had (nothing, if it never loaded) and the
    response carries the reason with status 503 so clients can offer a retry.
    """
    articles = await search_engine.initialize(settings.law_data_source)

    if search_engine.load_error:
        return JSONResponse(
            status_code=503,
            content={
                "message": "Failed to load articles",
                "error": search_engine.load_error,
                "total_articles": len(search_engine.articles)
            }
        )

    return JSONResponse(
        status_code=200,
        content={
            "message": "Articles loaded successfully",
            "total_articles": len(articles)
        }
    )


@router.delete(
    "/cache",
    summary="Clear normalization cache",
    description="Drop every memoized text normalization"
)
async def clear_cache() -> JSONResponse:
    """Clear the engine's normalization cache."""
    search_engine.clear_cache()
    return JSONResponse(status_code=200, content={"message": "Cache cleared"})
