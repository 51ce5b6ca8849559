"""Recent search history API endpoints."""

from fastapi import APIRouter

from ..models.response import HistoryResponse

router = APIRouter(prefix="/api/v1", tags=["history"])

# Import the global history instance
from ..engine_instance import search_history


@router.get(
    "/history",
    response_model=HistoryResponse,
    summary="Recent searches",
    description="Get the most recent distinct queries, newest first"
)
async def get_history() -> HistoryResponse:
    """Get recent searches."""
    return HistoryResponse(queries=search_history.get())


@router.delete(
    "/history",
    response_model=HistoryResponse,
    summary="Clear recent searches",
    description="Forget every recorded query"
)
async def clear_history() -> HistoryResponse:
    """Clear recent searches."""
    search_history.clear()
    return HistoryResponse(queries=[])
