"""Request models for API endpoints."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .article import FilterSet


class SearchRequest(BaseModel):
    """Request model for search queries."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(default="", description="Search query, blank to browse")
    filters: Optional[FilterSet] = Field(None, description="Optional categorical filters")
    use_fuzzy: bool = Field(default=False, alias="useFuzzy", description="Use approximate matching")
    record_history: bool = Field(default=True, description="Add the query to recent searches")


class HighlightRequest(BaseModel):
    """Request model for highlighting a text fragment."""

    query: str = Field(..., min_length=1, description="Query to highlight")
    text: str = Field(..., description="Text to highlight")

    @field_validator('query')
    @classmethod
    def validate_query(cls, v: str) -> str:
        """Reject blank queries."""
        if not v or not v.strip():
            raise ValueError("Query cannot be empty")
        return v


def split_tags(raw: Optional[str]) -> Optional[List[str]]:
    """Split a comma-separated tag parameter."""
    if not raw:
        return None
    tags = [tag.strip() for tag in raw.split(',') if tag.strip()]
    return tags or None
