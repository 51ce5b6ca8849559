"""Deterministic relevance scoring for matched articles."""

from typing import Optional

from ..models.article import Article
from .matcher import all_terms_present, searchable_text
from .normalizer import TextNormalizer
from .query import (
    ArticleNumberQuery,
    PhraseQuery,
    QueryDescriptor,
    TermsQuery,
    WordQuery,
)

# Score ladders, highest tier first. Only the relative order within a mode matters.
ARTICLE_ID_SCORE = 1000.0
ARTICLE_TITLE_START_SCORE = 800.0
ARTICLE_TITLE_SCORE = 600.0
ARTICLE_TEXT_SCORE = 400.0

PHRASE_TITLE_SCORE = 500.0
PHRASE_TEXT_SCORE = 300.0

WORD_TITLE_SCORE = 400.0
WORD_TEXT_SCORE = 200.0

TERMS_TITLE_SCORE = 300.0
TERMS_TEXT_SCORE = 150.0


class ArticleScorer:
    """Scores articles that already satisfied the matcher for the same query."""

    def __init__(
        self,
        normalizer: Optional[TextNormalizer] = None,
        proximity_window: Optional[int] = None
    ) -> None:
        self.normalizer = normalizer or TextNormalizer()
        self.proximity_window = proximity_window

    def score(self, article: Article, query: QueryDescriptor) -> float:
        """
        Score an article with the ladder of the query's mode.

        Each ladder is first-match: the highest satisfied tier is the score.
        Title hits always outrank hits found only in the rest of the text.

        Args:
            article: Matched article
            query: Classified query

        Returns:
            Score, higher is more relevant; 0.0 if no tier applies
        """
        title = self.normalizer.normalize(article.title)
        text = searchable_text(article, self.normalizer)

        if isinstance(query, ArticleNumberQuery):
            if article.article == query.number:
                return ARTICLE_ID_SCORE
            if query.start_pattern.search(title):
                return ARTICLE_TITLE_START_SCORE
            if query.pattern.search(title):
                return ARTICLE_TITLE_SCORE
            if query.pattern.search(text):
                return ARTICLE_TEXT_SCORE
            return 0.0

        if isinstance(query, PhraseQuery):
            if query.pattern.search(title):
                return PHRASE_TITLE_SCORE
            if query.pattern.search(text):
                return PHRASE_TEXT_SCORE
            return 0.0

        if isinstance(query, WordQuery):
            if query.pattern.search(title):
                return WORD_TITLE_SCORE
            if query.pattern.search(text):
                return WORD_TEXT_SCORE
            return 0.0

        if isinstance(query, TermsQuery):
            if all_terms_present(query.patterns, title, self.proximity_window):
                return TERMS_TITLE_SCORE
            if all_terms_present(query.patterns, text, self.proximity_window):
                return TERMS_TEXT_SCORE
            return 0.0

        return 0.0
