"""Match testing of a single article against a classified query."""

from typing import List, Optional, Sequence, Tuple

from ..models.article import Article
from .normalizer import TextNormalizer
from .query import (
    ArticleNumberQuery,
    PhraseQuery,
    QueryDescriptor,
    TermsQuery,
    WordQuery,
)


def searchable_text(article: Article, normalizer: TextNormalizer) -> str:
    """Normalized title, body, chapter, part and tags, in that order."""
    fields = [article.title, article.text, article.chapter, article.part, *article.tags]
    return normalizer.normalize(' '.join(field for field in fields if field))


def all_terms_present(
    patterns: Sequence, text: str, window: Optional[int] = None
) -> bool:
    """
    Check that every pattern occurs in the text.

    Args:
        patterns: Compiled whole-word patterns, one per token
        text: Normalized text to search
        window: When set, some occurrence of every token must fit inside a
            span of at most this many characters

    Returns:
        True if all tokens are present (within the window, if any)
    """
    if not patterns:
        return False

    if window is None:
        return all(pattern.search(text) for pattern in patterns)

    occurrences: List[Tuple[int, int]] = []
    for index, pattern in enumerate(patterns):
        found = [(m.start(), index) for m in pattern.finditer(text)]
        if not found:
            return False
        occurrences.extend(found)

    return _smallest_cover(occurrences, len(patterns)) <= window


def _smallest_cover(occurrences: List[Tuple[int, int]], needed: int) -> int:
    """Shortest start-to-start distance spanning one occurrence of every token."""
    occurrences.sort()
    counts = [0] * needed
    covered = 0
    left = 0
    best = occurrences[-1][0] - occurrences[0][0]

    for start, index in occurrences:
        if counts[index] == 0:
            covered += 1
        counts[index] += 1

        while covered == needed:
            left_start, left_index = occurrences[left]
            best = min(best, start - left_start)
            counts[left_index] -= 1
            if counts[left_index] == 0:
                covered -= 1
            left += 1

    return best


class ArticleMatcher:
    """Decides whether an article satisfies a query descriptor."""

    def __init__(
        self,
        normalizer: Optional[TextNormalizer] = None,
        proximity_window: Optional[int] = None
    ) -> None:
        """
        Initialize the matcher.

        Args:
            normalizer: Shared normalizer (and cache)
            proximity_window: Optional character window for multi-word queries
        """
        self.normalizer = normalizer or TextNormalizer()
        self.proximity_window = proximity_window

    def matches(self, article: Article, query: QueryDescriptor) -> bool:
        """
        Test an article against the query's mode.

        There is no fallback between modes: a failed predicate excludes the
        article.

        Args:
            article: Article to test
            query: Classified query

        Returns:
            True if the article matches
        """
        text = searchable_text(article, self.normalizer)

        if isinstance(query, ArticleNumberQuery):
            if article.article == query.number:
                return True
            title = self.normalizer.normalize(article.title)
            return bool(query.pattern.search(title) or query.pattern.search(text))

        if isinstance(query, PhraseQuery):
            return query.pattern.search(text) is not None

        if isinstance(query, WordQuery):
            return query.pattern.search(text) is not None

        if isinstance(query, TermsQuery):
            return all_terms_present(query.patterns, text, self.proximity_window)

        return False
