"""Loading and validating the article collection."""

import json
from typing import Any, List, Sequence

import httpx
import structlog
from pydantic import ValidationError

from ..models.article import Article

logger = structlog.get_logger(__name__)


class CollectionLoadError(Exception):
    """The article collection could not be fetched, parsed or validated."""


def load_articles(records: Sequence[Any]) -> List[Article]:
    """
    Validate parsed article records.

    The load fails as a whole on the first malformed record or duplicate
    article number; nothing is skipped.

    Args:
        records: Parsed JSON objects, in display order

    Returns:
        Articles in load order

    Raises:
        CollectionLoadError: If any record is invalid
    """
    if not isinstance(records, (list, tuple)):
        raise CollectionLoadError("Article collection must be a JSON array")

    articles: List[Article] = []
    seen = set()

    for position, record in enumerate(records):
        try:
            article = Article.model_validate(record)
        except ValidationError as e:
            raise CollectionLoadError(
                f"Invalid article record at position {position}: {e}"
            ) from e

        if article.article in seen:
            raise CollectionLoadError(f"Duplicate article number {article.article}")
        seen.add(article.article)
        articles.append(article)

    return articles


def load_articles_from_file(path: str) -> List[Article]:
    """Read and validate a JSON article collection from disk."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            records = json.load(f)
    except (OSError, ValueError) as e:
        raise CollectionLoadError(f"Failed to read {path}: {e}") from e

    articles = load_articles(records)
    logger.info("Articles loaded from file", path=path, total_articles=len(articles))
    return articles


async def load_articles_from_url(url: str, timeout: float = 10.0) -> List[Article]:
    """Fetch and validate a JSON article collection over HTTP."""
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url)
            response.raise_for_status()
            records = response.json()
    except (httpx.HTTPError, ValueError) as e:
        raise CollectionLoadError(f"Failed to fetch {url}: {e}") from e

    articles = load_articles(records)
    logger.info("Articles loaded from URL", url=url, total_articles=len(articles))
    return articles


async def load_articles_from_source(source: str) -> List[Article]:
    """Load from an http(s) URL or a file path."""
    if source.startswith(("http://", "https://")):
        return await load_articles_from_url(source)
    return load_articles_from_file(source)
