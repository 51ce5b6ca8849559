"""
Law Search - exact and fuzzy search over an in-memory collection of legal articles.

Queries are classified as article-number references, quoted phrases, single
words or multi-word AND queries, matched with whole-word semantics, ranked by
fixed per-mode score ladders and filtered by chapter, part, tags and source.
"""

__version__ = "1.0.0"

from .core.engine import SearchEngine
from .models.article import Article, FilterSet, SearchResult
from .models.response import SearchResponse

__all__ = [
    "SearchEngine",
    "Article",
    "FilterSet",
    "SearchResult",
    "SearchResponse",
]
