"""Display-only highlighting of query matches in article text."""

import html
import re
from typing import List, Optional

from .query import (
    ArticleNumberQuery,
    PhraseQuery,
    QueryClassifier,
    QueryDescriptor,
    TermsQuery,
    WordQuery,
    article_pattern,
)

EXACT_SEARCH_CLASS = "exact-search"
EXACT_MATCH_CLASS = "exact-match"


def highlight_search_terms(
    text: str,
    query: str,
    classifier: Optional[QueryClassifier] = None
) -> str:
    """
    Wrap query matches in ``<mark>`` elements.

    The classifier's mode decision drives what is highlighted, so the marks
    agree with why the article matched. Matches are found on the raw
    text and every segment is HTML-escaped separately, so entities are never
    split by a mark.

    Args:
        text: Raw article text
        query: Raw query string
        classifier: Classifier to reuse (a fresh one if None)

    Returns:
        Escaped text with highlight marks
    """
    if not query or not query.strip():
        return html.escape(text, quote=False)

    classifier = classifier or QueryClassifier()
    descriptor = classifier.classify(query)
    return _highlight(text, descriptor, classifier)


def _highlight(text: str, query: QueryDescriptor, classifier: QueryClassifier) -> str:
    if isinstance(query, ArticleNumberQuery):
        pattern = article_pattern(query.number, flags=re.IGNORECASE)
        return _mark(pattern, text, EXACT_SEARCH_CLASS)

    if isinstance(query, PhraseQuery):
        pattern = re.compile(query.pattern.pattern, re.IGNORECASE)
        return _mark(pattern, text, EXACT_SEARCH_CLASS)

    if isinstance(query, WordQuery):
        pattern = re.compile(query.pattern.pattern, re.IGNORECASE)
        return _mark(pattern, text, EXACT_SEARCH_CLASS)

    if isinstance(query, TermsQuery) and query.tokens:
        alternatives = sorted(set(query.tokens), key=len, reverse=True)
        pattern = re.compile(
            '|'.join(classifier.whole_word_pattern(token).pattern for token in alternatives),
            re.IGNORECASE
        )
        return _mark(pattern, text, EXACT_MATCH_CLASS)

    return html.escape(text, quote=False)


def _mark(pattern: re.Pattern, text: str, css_class: str) -> str:
    """Escape the raw text piecewise, wrapping each match found on it."""
    pieces: List[str] = []
    last = 0
    for match in pattern.finditer(text):
        pieces.append(html.escape(text[last:match.start()], quote=False))
        pieces.append(
            f'<mark class="{css_class}">{html.escape(match.group(0), quote=False)}</mark>'
        )
        last = match.end()
    pieces.append(html.escape(text[last:], quote=False))
    return ''.join(pieces)
