"""Core search engine functionality."""

from .engine import SearchEngine
from .filters import apply_filters
from .fuzzy_matcher import FuzzyMatcher
from .highlighter import highlight_search_terms
from .history import JsonFileStore, SearchHistory
from .loader import CollectionLoadError, load_articles
from .matcher import ArticleMatcher
from .normalizer import TextNormalizer
from .query import QueryClassifier, QueryDescriptor
from .scorer import ArticleScorer

__all__ = [
    "SearchEngine",
    "apply_filters",
    "FuzzyMatcher",
    "highlight_search_terms",
    "JsonFileStore",
    "SearchHistory",
    "CollectionLoadError",
    "load_articles",
    "ArticleMatcher",
    "TextNormalizer",
    "QueryClassifier",
    "QueryDescriptor",
    "ArticleScorer",
]
