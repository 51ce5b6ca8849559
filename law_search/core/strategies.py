"""Interchangeable evaluation strategies for the search engine."""

from typing import List, Sequence

from ..models.article import Article, SearchResult
from .fuzzy_matcher import FuzzyMatcher
from .matcher import ArticleMatcher
from .query import QueryClassifier, QueryDescriptor
from .scorer import ArticleScorer


class ExactStrategy:
    """Classify once, then match and score every article."""

    name = "exact"

    def __init__(
        self,
        classifier: QueryClassifier,
        matcher: ArticleMatcher,
        scorer: ArticleScorer
    ) -> None:
        self.classifier = classifier
        self.matcher = matcher
        self.scorer = scorer

    def evaluate(self, query: str, articles: Sequence[Article]) -> List[SearchResult]:
        """
        Evaluate a query over the full collection.

        Args:
            query: Raw query string
            articles: Collection to scan

        Returns:
            Matches sorted by score (descending), then article number
        """
        return self.evaluate_descriptor(self.classifier.classify(query), articles)

    def evaluate_descriptor(
        self, descriptor: QueryDescriptor, articles: Sequence[Article]
    ) -> List[SearchResult]:
        results = [
            SearchResult.from_article(
                article,
                score=self.scorer.score(article, descriptor),
                match_type="exact"
            )
            for article in articles
            if self.matcher.matches(article, descriptor)
        ]

        results.sort(key=lambda r: (-r.score, r.article))
        return results


class FuzzyStrategy:
    """Delegate matching to the approximate matcher."""

    name = "fuzzy"

    def __init__(self, fuzzy_matcher: FuzzyMatcher) -> None:
        self.fuzzy_matcher = fuzzy_matcher

    def evaluate(self, query: str, articles: Sequence[Article]) -> List[SearchResult]:
        return [
            SearchResult.from_article(
                article,
                score=score,
                match_type="fuzzy",
                matches=details
            )
            for article, score, details in self.fuzzy_matcher.find_matches(query, articles)
        ]
