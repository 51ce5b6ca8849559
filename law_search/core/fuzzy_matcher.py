"""Approximate article matching backed by rapidfuzz."""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from rapidfuzz import fuzz, process

from ..models.article import Article
from .normalizer import TextNormalizer

# Relative weight of each searchable field in the combined score.
FIELD_WEIGHTS: Dict[str, float] = {
    "title": 0.3,
    "text": 0.4,
    "tags": 0.2,
    "chapter": 0.05,
    "part": 0.05,
}

FuzzyMatch = Tuple[Article, float, List[Dict[str, Any]]]


class FuzzyMatcher:
    """Handles typo-tolerant matching of queries against article fields."""

    def __init__(
        self,
        threshold: float = 0.6,
        min_match_length: int = 2,
        normalizer: Optional[TextNormalizer] = None
    ) -> None:
        """
        Initialize the fuzzy matcher.

        Args:
            threshold: Minimum best-field similarity (0-1) for a match
            min_match_length: Queries shorter than this never match
            normalizer: Shared normalizer
        """
        self.threshold = threshold
        self.min_match_length = min_match_length
        self.normalizer = normalizer or TextNormalizer()

    def find_matches(
        self,
        query: str,
        articles: Sequence[Article],
        threshold: Optional[float] = None
    ) -> List[FuzzyMatch]:
        """
        Find articles approximately matching a query.

        An article matches when its best field similarity reaches the
        threshold. The returned score is the weighted mean of all field
        similarities, so an article close in several fields ranks higher.

        Args:
            query: Raw search query
            articles: Collection to scan
            threshold: Custom threshold (uses instance threshold if None)

        Returns:
            List of (article, score, match details), best first
        """
        threshold = self.threshold if threshold is None else threshold
        normalized_query = self.normalizer.normalize(query)

        if len(normalized_query) < self.min_match_length or not articles:
            return []

        matches: List[FuzzyMatch] = []
        total_weight = sum(FIELD_WEIGHTS.values())

        for article in articles:
            details = self._field_similarities(normalized_query, article)
            best = max(detail["score"] for detail in details)
            if best < threshold:
                continue

            weighted = sum(FIELD_WEIGHTS[d["key"]] * d["score"] for d in details)
            matched = [d for d in details if d["score"] >= threshold]
            matches.append((article, round(weighted / total_weight, 4), matched))

        # Sort by score (descending), article number breaks ties
        matches.sort(key=lambda m: (-m[1], m[0].article))
        return matches

    def _field_similarities(self, query: str, article: Article) -> List[Dict[str, Any]]:
        """Similarity (0-1) of the query against each weighted field."""
        details = []
        for key in FIELD_WEIGHTS:
            if key == "tags":
                values = list(article.tags)
            else:
                values = [getattr(article, key)]

            best_value, best_score = None, 0.0
            for value in values:
                normalized = self.normalizer.normalize(value)
                if not normalized:
                    continue
                score = fuzz.partial_ratio(query, normalized) / 100.0
                if score > best_score:
                    best_value, best_score = value, score

            details.append({"key": key, "value": best_value, "score": round(best_score, 4)})

        return details

    def suggest_corrections(
        self,
        query: str,
        candidates: List[str],
        max_suggestions: int = 5
    ) -> List[str]:
        """
        Suggest corrections for a query.

        Args:
            query: Query to get suggestions for
            candidates: Candidate phrases (titles, tags)
            max_suggestions: Maximum number of suggestions

        Returns:
            List of suggested corrections
        """
        if not query or not query.strip() or not candidates:
            return []

        suggestions = process.extract(
            query,
            candidates,
            limit=max_suggestions,
            scorer=fuzz.WRatio,
            processor=self.normalizer.normalize
        )

        # Filter by threshold and return just the candidates
        return [suggestion[0] for suggestion in suggestions
                if suggestion[1] >= self.threshold * 100]
