"""Main search engine implementation."""

import time
from typing import Any, Dict, List, Optional, Sequence

import structlog

from ..models.article import Article, FilterSet, SearchResult
from ..models.response import SearchResponse
from .filters import apply_filters
from .fuzzy_matcher import FuzzyMatcher
from .loader import CollectionLoadError, load_articles, load_articles_from_source
from .matcher import ArticleMatcher
from .normalizer import TextNormalizer
from .query import QueryClassifier, QueryDescriptor
from .scorer import ArticleScorer
from .strategies import ExactStrategy, FuzzyStrategy

logger = structlog.get_logger(__name__)

POPULAR_TAGS = [
    "rights", "freedom", "citizenship", "justice",
    "education", "assembly", "government", "constitution",
]


class SearchEngine:
    """Search engine over an in-memory collection of legal articles."""

    def __init__(
        self,
        fuzzy_threshold: float = 0.6,
        browse_size: int = 4,
        normalize_cache_size: int = 10000,
        proximity_window: Optional[int] = None,
        fuzzy_min_match_length: int = 2,
        max_suggestions: int = 5
    ) -> None:
        """
        Initialize the search engine.

        Args:
            fuzzy_threshold: Default threshold for fuzzy matching
            browse_size: Articles shown for a blank query
            normalize_cache_size: Bound of the normalization cache (0 = unbounded)
            proximity_window: Optional character window for multi-word queries
            fuzzy_min_match_length: Shortest query the fuzzy path accepts
            max_suggestions: Suggestions offered when nothing matches
        """
        self.fuzzy_threshold = fuzzy_threshold
        self.browse_size = browse_size
        self.max_suggestions = max_suggestions

        self.normalizer = TextNormalizer(max_cache_size=normalize_cache_size)
        self.classifier = QueryClassifier(self.normalizer)
        self.fuzzy_matcher = FuzzyMatcher(
            fuzzy_threshold, fuzzy_min_match_length, self.normalizer
        )
        self.exact_strategy = ExactStrategy(
            self.classifier,
            ArticleMatcher(self.normalizer, proximity_window),
            ArticleScorer(self.normalizer, proximity_window),
        )
        self.fuzzy_strategy = FuzzyStrategy(self.fuzzy_matcher)

        self._articles: List[Article] = []
        self.load_error: Optional[str] = None
        self._stats = self._empty_stats()

    @property
    def articles(self) -> List[Article]:
        return self._articles

    @property
    def is_loaded(self) -> bool:
        return bool(self._articles)

    def load_articles(self, records: Sequence[Any]) -> List[Article]:
        """
        Validate and install a collection, replacing any previous one.

        Args:
            records: Parsed article records in display order

        Returns:
            The loaded articles

        Raises:
            CollectionLoadError: If any record is invalid
        """
        articles = load_articles(records)
        self._install(articles)
        return articles

    async def initialize(self, source: str) -> List[Article]:
        """
        Load the collection from a file path or URL.

        A failure is recorded in ``load_error`` and logged, and an empty
        list is returned. A previously installed collection keeps being
        served; an engine that never loaded stays empty, so later searches
        return nothing instead of raising.

        Args:
            source: Path or http(s) URL of a JSON array of articles

        Returns:
            The loaded articles, empty on failure
        """
        try:
            articles = await load_articles_from_source(source)
        except CollectionLoadError as e:
            self.load_error = str(e)
            logger.error(
                "Failed to load law data",
                source=source,
                error=str(e),
                kept_articles=len(self._articles)
            )
            return []

        self._install(articles)
        return articles

    def _install(self, articles: List[Article]) -> None:
        self._articles = articles
        self.load_error = None
        self.normalizer.clear_cache()
        logger.info("Article collection installed", total_articles=len(articles))

    def classify(self, query: str) -> QueryDescriptor:
        """Classify a query without running it."""
        return self.classifier.classify(query)

    def search(
        self,
        query: str,
        filters: Optional[FilterSet] = None,
        use_fuzzy: bool = False
    ) -> SearchResponse:
        """
        Search the collection.

        A blank query returns the first ``browse_size`` articles in load
        order with no filters applied. Otherwise the exact path (or the fuzzy
        path when ``use_fuzzy`` is set) ranks the matches and the filters
        are applied afterwards.

        Args:
            query: Search query
            filters: Optional categorical filters
            use_fuzzy: Use approximate matching instead of exact matching

        Returns:
            SearchResponse with results and metadata
        """
        start_time = time.time()
        self._stats["total_queries"] += 1

        if not query or not query.strip():
            self._stats["browse_requests"] += 1
            results = [SearchResult.from_article(a) for a in self._articles[:self.browse_size]]
            return self._create_response(query or "", "browse", None, results, start_time)

        if use_fuzzy:
            self._stats["fuzzy_searches"] += 1
            mode = "fuzzy"
            results = self.fuzzy_strategy.evaluate(query.strip(), self._articles)
        else:
            self._stats["exact_searches"] += 1
            descriptor = self.classifier.classify(query)
            mode = descriptor.mode
            results = self.exact_strategy.evaluate_descriptor(descriptor, self._articles)

        results = list(apply_filters(results, filters))

        suggestions = None
        if not results:
            self._stats["no_matches"] += 1
            suggestions = self.get_suggestions(query)

        response = self._create_response(
            query, mode, self.fuzzy_strategy.name if use_fuzzy else self.exact_strategy.name,
            results, start_time, suggestions
        )
        logger.debug(
            "Search completed",
            query=query,
            mode=mode,
            total_results=response.total_results,
            execution_time_ms=round(response.execution_time_ms, 3)
        )
        return response

    def get_suggestions(self, query: str, max_suggestions: Optional[int] = None) -> List[str]:
        """
        Suggest titles and tags close to a query.

        Args:
            query: Query to get suggestions for
            max_suggestions: Maximum number of suggestions

        Returns:
            List of suggested phrases
        """
        candidates = list(dict.fromkeys(
            [a.title for a in self._articles] + [t for a in self._articles for t in a.tags]
        ))
        return self.fuzzy_matcher.suggest_corrections(
            query, candidates, max_suggestions or self.max_suggestions
        )

    def get_article(self, article_number: int) -> Optional[Article]:
        """Get an article by its number."""
        return next((a for a in self._articles if a.article == article_number), None)

    def get_articles(self) -> List[Article]:
        """Get all articles in load order."""
        return list(self._articles)

    def get_quick_filters(self) -> Dict[str, List[str]]:
        """Collect the distinct filter values of the loaded collection."""
        tags, chapters, parts, sources = set(), set(), set(), set()
        for article in self._articles:
            tags.update(article.tags)
            if article.chapter:
                chapters.add(article.chapter)
            if article.part:
                parts.add(article.part)
            if article.law_source:
                sources.add(article.law_source)

        return {
            "popular_tags": list(POPULAR_TAGS),
            "all_tags": sorted(tags),
            "chapters": sorted(chapters),
            "parts": sorted(parts),
            "law_sources": sorted(sources),
        }

    def clear_cache(self) -> None:
        """Clear the normalization cache."""
        self.normalizer.clear_cache()

    def _create_response(
        self,
        query: str,
        mode: str,
        match_type: Optional[str],
        results: List[SearchResult],
        start_time: float,
        suggestions: Optional[List[str]] = None
    ) -> SearchResponse:
        execution_time = (time.time() - start_time) * 1000
        self._stats["total_execution_time"] += execution_time

        return SearchResponse(
            query=query,
            mode=mode,
            match_type=match_type,
            total_results=len(results),
            results=results,
            execution_time_ms=execution_time,
            suggestions=suggestions
        )

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            "total_queries": 0,
            "exact_searches": 0,
            "fuzzy_searches": 0,
            "browse_requests": 0,
            "no_matches": 0,
            "total_execution_time": 0.0,
        }

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics."""
        stats = self._stats.copy()

        # Calculate averages
        if stats["total_queries"] > 0:
            stats["average_execution_time_ms"] = (
                stats["total_execution_time"] / stats["total_queries"]
            )
            stats["no_match_rate"] = stats["no_matches"] / stats["total_queries"]
        else:
            stats["average_execution_time_ms"] = 0.0
            stats["no_match_rate"] = 0.0

        stats["total_articles"] = len(self._articles)
        stats["cache"] = self.normalizer.cache_info()
        return stats

    def clear(self) -> None:
        """Drop the collection, the cache and the statistics."""
        self._articles = []
        self.load_error = None
        self.normalizer.clear_cache()
        self._stats = self._empty_stats()
