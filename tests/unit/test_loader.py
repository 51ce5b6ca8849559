"""Unit tests for loading the article collection."""

import json

import httpx
import pytest
from law_search.core import loader
from law_search.core.loader import (
    CollectionLoadError,
    load_articles,
    load_articles_from_file,
    load_articles_from_source,
    load_articles_from_url,
)


def record(number, **overrides):
    data = {
        "article": number, "title": f"Title {number}", "chapter": "Chapter",
        "part": "Part", "text": "Text", "tags": ["tag"],
    }
    data.update(overrides)
    return data


class TestLoadArticles:
    """Test cases for record validation."""

    def test_preserves_order_and_derives_label(self):
        """Test load order and the derived display label."""
        articles = load_articles([record(9), record(3, lawSource="statute")])

        assert [a.article for a in articles] == [9, 3]
        assert articles[0].article_number_label == "Article 9"
        assert articles[1].law_source == "statute"

    def test_keeps_explicit_label(self):
        """Test that a provided label is kept."""
        articles = load_articles([record(1, articleNumberLabel="Preamble")])

        assert articles[0].article_number_label == "Preamble"

    @pytest.mark.parametrize("field", ["article", "title", "chapter", "part", "text", "tags"])
    def test_missing_field_fails_whole_load(self, field):
        """Test that a missing required field rejects the collection."""
        bad = record(2)
        del bad[field]

        with pytest.raises(CollectionLoadError):
            load_articles([record(1), bad, record(3)])

    def test_duplicate_numbers_rejected(self):
        """Test the uniqueness of article numbers."""
        with pytest.raises(CollectionLoadError, match="Duplicate"):
            load_articles([record(1), record(1)])

    def test_non_array_rejected(self):
        """Test that the collection must be an array."""
        with pytest.raises(CollectionLoadError):
            load_articles({"article": 1})

    def test_empty_collection(self):
        """Test that an empty array is a valid, empty collection."""
        assert load_articles([]) == []


class TestLoadFromSources:
    """Test cases for file and URL loading."""

    def test_from_file(self, tmp_path):
        """Test reading a JSON file."""
        path = tmp_path / "law.json"
        path.write_text(json.dumps([record(1), record(2)]), encoding="utf-8")

        assert len(load_articles_from_file(str(path))) == 2

    def test_invalid_json_file(self, tmp_path):
        """Test that unparsable files fail the load."""
        path = tmp_path / "law.json"
        path.write_text("[{not json", encoding="utf-8")

        with pytest.raises(CollectionLoadError):
            load_articles_from_file(str(path))

    def test_missing_file(self, tmp_path):
        """Test that a missing file fails the load."""
        with pytest.raises(CollectionLoadError):
            load_articles_from_file(str(tmp_path / "nope.json"))

    def test_non_utf8_file(self, tmp_path):
        """Test that a Latin-1 encoded file fails the load instead of raising."""
        path = tmp_path / "law.json"
        data = json.dumps([record(1, title="\u00c9tat de droit")], ensure_ascii=False)
        path.write_bytes(data.encode("latin-1"))

        with pytest.raises(CollectionLoadError):
            load_articles_from_file(str(path))

    async def test_from_url(self, monkeypatch):
        """Test fetching the collection over HTTP."""
        def handler(request):
            return httpx.Response(200, json=[record(1), record(2)])

        self._patch_transport(monkeypatch, handler)

        articles = await load_articles_from_url("http://example.test/law.json")
        assert [a.article for a in articles] == [1, 2]

    async def test_http_error(self, monkeypatch):
        """Test that HTTP failures fail the load."""
        self._patch_transport(monkeypatch, lambda request: httpx.Response(500))

        with pytest.raises(CollectionLoadError):
            await load_articles_from_url("http://example.test/law.json")

    async def test_non_utf8_body(self, monkeypatch):
        """Test that an undecodable response body fails the load."""
        body = json.dumps([record(1, title="\u00c9tat")], ensure_ascii=False).encode("latin-1")
        self._patch_transport(
            monkeypatch,
            lambda request: httpx.Response(
                200, content=body, headers={"content-type": "application/json"}
            )
        )

        with pytest.raises(CollectionLoadError):
            await load_articles_from_url("http://example.test/law.json")

    async def test_source_dispatch(self, tmp_path):
        """Test that plain paths are read from disk."""
        path = tmp_path / "law.json"
        path.write_text(json.dumps([record(5)]), encoding="utf-8")

        articles = await load_articles_from_source(str(path))
        assert articles[0].article == 5

    @staticmethod
    def _patch_transport(monkeypatch, handler):
        original = httpx.AsyncClient

        def client_factory(*args, **kwargs):
            kwargs["transport"] = httpx.MockTransport(handler)
            return original(*args, **kwargs)

        monkeypatch.setattr(loader.httpx, "AsyncClient", client_factory)
