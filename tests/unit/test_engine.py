"""Unit tests for the search engine core functionality."""

import json

import pytest
from law_search.core.engine import SearchEngine
from law_search.core.loader import CollectionLoadError
from law_search.models.article import FilterSet


class TestSearchEngine:
    """Test cases for the SearchEngine class."""

    @pytest.fixture
    def sample_articles(self):
        """Sample article records, as parsed from the collection JSON."""
        return [
            {"article": 1, "title": "Sovereignty of the People", "chapter": "Chapter One",
             "part": "Part 1", "text": "All sovereign power belongs to the people.",
             "tags": ["sovereignty", "people"], "lawSource": "constitution"},
            {"article": 2, "title": "Supremacy of this Constitution", "chapter": "Chapter One",
             "part": "Part 1", "text": "This Constitution is the supreme law. Article 25 is non-derogable.",
             "tags": ["supremacy"], "lawSource": "constitution"},
            {"article": 25, "title": "Right to a Fair Trial", "chapter": "Chapter Four",
             "part": "Part 2", "text": "The right to a fair trial shall not be limited.",
             "tags": ["justice", "rights"], "lawSource": "constitution"},
            {"article": 27, "title": "Equality and Freedom from Discrimination", "chapter": "Chapter Four",
             "part": "Part 2", "text": "Every person is equal before the law and has rights.",
             "tags": ["equality", "Human Rights"], "lawSource": "constitution"},
            {"article": 37, "title": "Assembly and Petition", "chapter": "Chapter Four",
             "part": "Part 2", "text": "Every person has the right to assemble. This article concerns freedom.",
             "tags": ["assembly", "freedom"], "lawSource": "statute"},
            {"article": 50, "title": "Fair Hearing", "chapter": "Chapter Four",
             "part": "Part 2", "text": "Every dispute is decided in a fair and public hearing.",
             "tags": ["justice"], "lawSource": "constitution"},
        ]

    @pytest.fixture
    def engine(self, sample_articles):
        """Create a search engine with the sample collection loaded."""
        engine = SearchEngine(fuzzy_threshold=0.6)
        engine.load_articles(sample_articles)
        return engine

    def test_load_articles(self, engine):
        """Test loading articles and deriving labels."""
        assert len(engine.articles) == 6
        assert engine.is_loaded is True
        assert engine.articles[0].article_number_label == "Article 1"
        assert engine.load_error is None

    def test_load_rejects_malformed_collection(self, sample_articles):
        """Test that one bad record fails the whole load."""
        engine = SearchEngine()
        del sample_articles[3]["title"]

        with pytest.raises(CollectionLoadError):
            engine.load_articles(sample_articles)
        assert engine.articles == []

    def test_browse_on_blank_query(self, engine):
        """Test that blank queries return the first articles in load order."""
        for query in ["", "   "]:
            response = engine.search(query, FilterSet(tags=["justice"]))

            assert response.mode == "browse"
            assert [r.article for r in response.results] == [1, 2, 25, 27]
            assert all(r.score is None and r.match_type is None for r in response.results)

    def test_browse_on_large_collection(self):
        """Test the browse prefix on a 50-article collection."""
        engine = SearchEngine()
        engine.load_articles([
            {"article": 100 - i, "title": f"Title {i}", "chapter": "c", "part": "p",
             "text": "t", "tags": []}
            for i in range(50)
        ])

        response = engine.search("", FilterSet(), False)
        assert [r.article for r in response.results] == [100, 99, 98, 97]

    def test_article_reference_returns_singleton(self, engine, sample_articles):
        """Test that 'Article N' finds exactly article N when nothing else cites it."""
        for record in sample_articles:
            if record["article"] == 25:
                continue
            response = engine.search(f"Article {record['article']}")

            assert [r.article for r in response.results] == [record["article"]]
            assert response.mode == "article_number"

    def test_bare_number_regression(self, engine):
        """Test that '25' ranks article 25 first at the top of the ladder."""
        response = engine.search("25")

        assert response.results[0].article == 25
        assert response.results[0].score == 1000.0
        assert response.results[0].match_type == "exact"
        # Article 2 cites article 25 in its text
        assert [r.article for r in response.results] == [25, 2]

    def test_bare_number_singleton(self):
        """Test the '25' scenario against a collection with no citations."""
        engine = SearchEngine()
        engine.load_articles([
            {"article": 2, "title": "Supremacy", "chapter": "c", "part": "p", "text": "t", "tags": []},
            {"article": 25, "title": "Right to a Fair Trial", "chapter": "c", "part": "p",
             "text": "t", "tags": []},
            {"article": 250, "title": "Audit", "chapter": "c", "part": "p", "text": "t", "tags": []},
        ])

        response = engine.search("25")
        assert [r.article for r in response.results] == [25]

    def test_title_match_ranks_first(self, engine):
        """Test that a title hit outranks a body-only hit."""
        response = engine.search("equality")

        assert response.results[0].article == 27

        response = engine.search("freedom")
        assert [r.article for r in response.results] == [27, 37]
        assert response.results[0].score > response.results[1].score

    def test_ties_break_on_article_number(self, engine):
        """Test that equal scores sort by ascending article number."""
        response = engine.search("every")

        assert [r.article for r in response.results] == [27, 37, 50]
        assert len({r.score for r in response.results}) == 1

    def test_word_boundary(self, engine):
        """Test that 'art' does not match inside 'article'."""
        response = engine.search("art")

        assert response.total_results == 0
        assert response.results == []

    def test_multi_word_and(self, engine):
        """Test that every token must be present."""
        response = engine.search("fair hearing")

        assert [r.article for r in response.results] == [50]

    def test_quoted_phrase(self, engine):
        """Test quoted phrase matching."""
        response = engine.search('"fair trial"')

        assert response.mode == "phrase"
        assert [r.article for r in response.results] == [25]

    def test_filters_applied_after_ranking(self, engine):
        """Test that filters keep the ranked order."""
        response = engine.search("rights", FilterSet(tags=["rights"]))

        assert [r.article for r in response.results] == [25, 27]

        response = engine.search("freedom", FilterSet(lawSource="statute"))
        assert [r.article for r in response.results] == [37]

    def test_no_match_gives_suggestions(self, engine):
        """Test that an empty result carries fuzzy suggestions."""
        response = engine.search("equalty")

        assert response.total_results == 0
        assert response.suggestions is not None
        assert "equality" in response.suggestions

    def test_regex_special_queries(self, engine):
        """Test that hostile queries never raise."""
        for query in ['"', '"unbalanced', "a(b", "[", "*+?", "\\", "(?<=x)"]:
            response = engine.search(query)
            assert response.total_results == 0

    def test_fuzzy_search(self, engine):
        """Test the fuzzy path tags results and tolerates typos."""
        response = engine.search("sovereignity", use_fuzzy=True)

        assert response.mode == "fuzzy"
        assert response.results
        assert response.results[0].article == 1
        assert all(r.match_type == "fuzzy" for r in response.results)
        assert response.results[0].matches

    def test_fuzzy_search_applies_filters(self, engine):
        """Test that filters also apply to fuzzy results."""
        response = engine.search("justce", FilterSet(chapter="four"), use_fuzzy=True)

        assert response.results
        assert all("Four" in r.chapter for r in response.results)

    def test_uninitialized_engine_returns_empty(self):
        """Test searching before any collection is loaded."""
        engine = SearchEngine()

        assert engine.search("").results == []
        assert engine.search("rights").results == []
        assert engine.search("rights", use_fuzzy=True).results == []

    async def test_initialize_failure_is_recorded(self, tmp_path):
        """Test that a failed load leaves an empty, searchable engine."""
        engine = SearchEngine()
        articles = await engine.initialize(str(tmp_path / "missing.json"))

        assert articles == []
        assert engine.load_error is not None
        assert engine.search("rights").results == []

    async def test_failed_reload_keeps_previous_collection(self, engine, tmp_path):
        """Test that a failed load after a good one keeps serving the old articles."""
        articles = await engine.initialize(str(tmp_path / "missing.json"))

        assert articles == []
        assert engine.load_error is not None
        assert len(engine.articles) == 6
        assert [r.article for r in engine.search("fair hearing").results] == [50]

    async def test_non_utf8_file_is_recorded(self, tmp_path, sample_articles):
        """Test that an undecodable collection file is a recorded load failure."""
        path = tmp_path / "law.json"
        sample_articles[0]["title"] = "\u00c9tat souverain"
        path.write_bytes(json.dumps(sample_articles, ensure_ascii=False).encode("latin-1"))

        engine = SearchEngine()
        assert await engine.initialize(str(path)) == []
        assert engine.load_error is not None
        assert engine.articles == []

    async def test_initialize_from_file(self, tmp_path, sample_articles):
        """Test loading the collection from a JSON file."""
        path = tmp_path / "law.json"
        path.write_text(json.dumps(sample_articles), encoding="utf-8")

        engine = SearchEngine()
        articles = await engine.initialize(str(path))

        assert len(articles) == 6
        assert engine.load_error is None

    def test_get_article(self, engine):
        """Test lookup by article number."""
        assert engine.get_article(25).title == "Right to a Fair Trial"
        assert engine.get_article(999) is None

    def test_quick_filters(self, engine):
        """Test collecting the distinct filter values."""
        filters = engine.get_quick_filters()

        assert filters["chapters"] == ["Chapter Four", "Chapter One"]
        assert filters["parts"] == ["Part 1", "Part 2"]
        assert "Human Rights" in filters["all_tags"]
        assert filters["law_sources"] == ["constitution", "statute"]
        assert "rights" in filters["popular_tags"]

    def test_stats(self, engine):
        """Test statistics tracking."""
        engine.search("")
        engine.search("rights")
        engine.search("zzzz")
        engine.search("rights", use_fuzzy=True)

        stats = engine.get_stats()

        assert stats["total_queries"] == 4
        assert stats["browse_requests"] == 1
        assert stats["exact_searches"] == 2
        assert stats["fuzzy_searches"] == 1
        assert stats["no_matches"] == 1
        assert stats["total_articles"] == 6
        assert stats["cache"]["size"] > 0

    def test_clear_cache(self, engine):
        """Test clearing the normalization cache."""
        engine.search("rights")
        engine.clear_cache()

        assert engine.get_stats()["cache"]["size"] == 0

    def test_clear(self, engine):
        """Test clearing all data and statistics."""
        engine.search("rights")
        engine.clear()

        assert engine.articles == []
        assert engine.get_stats()["total_queries"] == 0
