"""Query classification into mode-specific descriptors."""

import re
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .normalizer import TextNormalizer

ARTICLE_QUERY_REGEX = re.compile(r'^(?:(?:article|art\.?)\s*)?(\d+)$')
ARTICLE_KEYWORD = r'(?:article|art\.?)'

# Word-constituent neighbours are rejected with lookarounds instead of \b,
# so tokens that start or end in punctuation still delimit correctly.
WORD_START = r'(?<!\w)'
WORD_END = r'(?!\w)'


class BaseQuery(BaseModel):
    """Fields shared by every query mode."""

    model_config = ConfigDict(frozen=True)

    original_query: str = Field(..., description="Query exactly as received")
    normalized_query: str = Field(..., description="Normalized query without surrounding quotes")
    is_quoted: bool = Field(default=False)
    tokens: List[str] = Field(default_factory=list)

    @property
    def is_article_pattern(self) -> bool:
        return False

    @property
    def article_number(self) -> Optional[int]:
        return None


class ArticleNumberQuery(BaseQuery):
    """A reference to a specific article, e.g. 'Article 25', 'art. 25' or '25'."""

    mode: Literal["article_number"] = "article_number"
    number: int
    pattern: re.Pattern
    start_pattern: re.Pattern

    @property
    def is_article_pattern(self) -> bool:
        return True

    @property
    def article_number(self) -> Optional[int]:
        return self.number


class PhraseQuery(BaseQuery):
    """A double-quoted literal phrase."""

    mode: Literal["phrase"] = "phrase"
    phrase: str
    pattern: re.Pattern


class WordQuery(BaseQuery):
    """A single whole-word token."""

    mode: Literal["word"] = "word"
    token: str
    pattern: re.Pattern


class TermsQuery(BaseQuery):
    """Several tokens that must all appear as whole words."""

    mode: Literal["terms"] = "terms"
    patterns: List[re.Pattern] = Field(default_factory=list)


QueryDescriptor = Union[ArticleNumberQuery, PhraseQuery, WordQuery, TermsQuery]


class QueryClassifier:
    """Parses raw query strings into query descriptors."""

    def __init__(self, normalizer: Optional[TextNormalizer] = None) -> None:
        self.normalizer = normalizer or TextNormalizer()

    def classify(self, query: str) -> QueryDescriptor:
        """
        Classify a raw query.

        Precedence is article number, then quoted phrase, then single word,
        then multi-word AND. Every input yields a descriptor; a blank query
        becomes a TermsQuery without tokens, which matches nothing.

        Args:
            query: Raw query string

        Returns:
            The descriptor for the selected mode
        """
        stripped = query.strip()
        is_quoted = self._is_quoted(stripped)
        unquoted = stripped[1:-1] if is_quoted else stripped
        normalized = self.normalizer.normalize(unquoted)

        article_match = ARTICLE_QUERY_REGEX.match(normalized)
        if article_match:
            number = int(article_match.group(1))
            return ArticleNumberQuery(
                original_query=query,
                normalized_query=normalized,
                is_quoted=is_quoted,
                tokens=normalized.split(' '),
                number=number,
                pattern=article_pattern(number),
                start_pattern=article_pattern(number, anchored=True),
            )

        tokens = self.normalizer.tokenize(normalized)

        if is_quoted:
            return PhraseQuery(
                original_query=query,
                normalized_query=normalized,
                is_quoted=True,
                tokens=tokens,
                phrase=normalized,
                pattern=re.compile(self.normalizer.escape(normalized)),
            )

        if len(tokens) == 1:
            return WordQuery(
                original_query=query,
                normalized_query=normalized,
                tokens=tokens,
                token=tokens[0],
                pattern=self.whole_word_pattern(tokens[0]),
            )

        return TermsQuery(
            original_query=query,
            normalized_query=normalized,
            tokens=tokens,
            patterns=[self.whole_word_pattern(token) for token in tokens],
        )

    def whole_word_pattern(self, token: str, flags: int = 0) -> re.Pattern:
        """Compile a pattern matching the token only as a whole word."""
        return re.compile(WORD_START + self.normalizer.escape(token) + WORD_END, flags)

    @staticmethod
    def _is_quoted(query: str) -> bool:
        return (
            len(query) >= 2
            and query.startswith('"')
            and query.endswith('"')
            and bool(query[1:-1].strip())
        )


def article_pattern(number: int, anchored: bool = False, flags: int = 0) -> re.Pattern:
    """
    Compile the keyword form of an article reference.

    The number must not be followed by another digit, so article 2 does not
    match 'article 25'.

    Args:
        number: Article number
        anchored: Require the reference at the start of the text
        flags: Extra regex flags

    Returns:
        Compiled pattern
    """
    prefix = '^' if anchored else WORD_START
    return re.compile(rf'{prefix}{ARTICLE_KEYWORD}\s*{number}(?!\d)', flags)
