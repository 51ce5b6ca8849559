"""Text normalization utilities for consistent article matching."""

import re
import threading
import unicodedata
from collections import OrderedDict
from typing import Dict, List


class TextNormalizer:
    """Canonicalizes text for comparison and memoizes the results.

    Normalization decomposes the text (NFD), drops combining diacritical
    marks, lowercases, collapses whitespace runs and trims. The result is
    cached per raw input string in an LRU cache.
    """

    def __init__(self, max_cache_size: int = 10000) -> None:
        """
        Initialize the normalizer.

        Args:
            max_cache_size: Maximum cached entries, 0 for no bound
        """
        self.max_cache_size = max_cache_size
        self.whitespace_regex = re.compile(r'\s+')

        self._cache: "OrderedDict[str, str]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def normalize(self, text: str) -> str:
        """
        Normalize text for consistent processing.

        Args:
            text: Input text to normalize

        Returns:
            Normalized text
        """
        if not text:
            return ""

        with self._lock:
            cached = self._cache.get(text)
            if cached is not None:
                self._cache.move_to_end(text)
                self._hits += 1
                return cached
            self._misses += 1

        normalized = self._normalize_uncached(text)

        with self._lock:
            self._cache[text] = normalized
            if self.max_cache_size and len(self._cache) > self.max_cache_size:
                self._cache.popitem(last=False)

        return normalized

    def _normalize_uncached(self, text: str) -> str:
        # Lowercase first: some capitals lowercase into combining sequences
        decomposed = unicodedata.normalize('NFD', text.lower())

        # Remove diacritics
        normalized = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
        normalized = self.whitespace_regex.sub(' ', normalized)

        return normalized.strip()

    def tokenize(self, text: str) -> List[str]:
        """
        Tokenize text into normalized words.

        Args:
            text: Input text

        Returns:
            List of non-empty tokens
        """
        if not text:
            return []

        return [token for token in self.normalize(text).split(' ') if token]

    @staticmethod
    def escape(text: str) -> str:
        """Escape every regular-expression metacharacter in user text."""
        return re.escape(text)

    def clear_cache(self) -> None:
        """Drop every memoized normalization."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def cache_info(self) -> Dict[str, int]:
        """Get cache statistics."""
        with self._lock:
            return {
                "size": len(self._cache),
                "max_size": self.max_cache_size,
                "hits": self._hits,
                "misses": self._misses,
            }
