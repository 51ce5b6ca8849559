"""Post-filtering of ranked results by categorical metadata."""

from typing import List, Optional, Sequence, TypeVar

from ..models.article import Article, FilterSet

ArticleT = TypeVar("ArticleT", bound=Article)


def apply_filters(
    results: Sequence[ArticleT], filters: Optional[FilterSet] = None
) -> Sequence[ArticleT]:
    """
    Filter results by chapter, part, tags and law source.

    Order is preserved and the input is never mutated. Missing filters are
    no-ops; with no filters at all the input itself is returned.

    Args:
        results: Ranked results
        filters: Predicates to apply, ANDed together

    Returns:
        Matching results in their original order
    """
    if filters is None or filters.is_empty():
        return results

    filtered: List[ArticleT] = list(results)

    if filters.chapter:
        chapter = filters.chapter.lower()
        filtered = [r for r in filtered if chapter in r.chapter.lower()]

    if filters.part:
        part = filters.part.lower()
        filtered = [r for r in filtered if part in r.part.lower()]

    if filters.tags:
        # Substring test: an empty tag matches any article that has a tag
        wanted = [tag.lower() for tag in filters.tags]
        filtered = [r for r in filtered if _has_any_tag(r, wanted)]

    if filters.law_source:
        filtered = [r for r in filtered if r.law_source == filters.law_source]

    return filtered


def _has_any_tag(article: Article, wanted: List[str]) -> bool:
    tags = [tag.lower() for tag in article.tags]
    return any(w in tag for w in wanted for tag in tags)
