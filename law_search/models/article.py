"""Article, result and filter models."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Article(BaseModel):
    """One legal provision in the loaded collection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    article: int = Field(..., description="Unique article number")
    title: str = Field(..., description="Article title")
    chapter: str = Field(..., description="Chapter heading")
    part: str = Field(..., description="Part heading")
    text: str = Field(..., description="Article body")
    tags: List[str] = Field(..., description="Topic tags")
    law_source: Optional[str] = Field(
        None, alias="lawSource", description="Source document for multi-document collections"
    )
    article_number_label: Optional[str] = Field(
        None, alias="articleNumberLabel", description="Display label, e.g. 'Article 13'"
    )

    @model_validator(mode="before")
    @classmethod
    def add_number_label(cls, data: Any) -> Any:
        """Derive the display label from the article number."""
        if isinstance(data, dict) and "article" in data:
            if not data.get("articleNumberLabel") and not data.get("article_number_label"):
                data = {**data, "articleNumberLabel": f"Article {data['article']}"}
        return data


class SearchResult(Article):
    """An article augmented with ranking information."""

    score: Optional[float] = Field(None, description="Relevance score, higher is better")
    match_type: Optional[Literal["exact", "fuzzy"]] = Field(
        None, description="Search path that produced the result"
    )
    matches: Optional[List[Dict[str, Any]]] = Field(
        None, description="Per-field similarity details from the fuzzy backend"
    )

    @classmethod
    def from_article(cls, article: Article, **extra: Any) -> "SearchResult":
        return cls(**article.model_dump(), **extra)


class FilterSet(BaseModel):
    """Independent categorical predicates, ANDed together."""

    model_config = ConfigDict(populate_by_name=True)

    chapter: Optional[str] = Field(None, description="Case-insensitive chapter substring")
    part: Optional[str] = Field(None, description="Case-insensitive part substring")
    tags: Optional[List[str]] = Field(None, description="Any-of tag substrings")
    law_source: Optional[str] = Field(None, alias="lawSource", description="Exact law source")

    def is_empty(self) -> bool:
        return not (self.chapter or self.part or self.tags or self.law_source)
