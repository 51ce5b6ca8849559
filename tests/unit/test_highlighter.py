"""Unit tests for display highlighting."""

import pytest
from law_search.core.highlighter import highlight_search_terms
from law_search.core.query import QueryClassifier


class TestHighlightSearchTerms:
    """Test cases for highlight_search_terms."""

    @pytest.fixture
    def classifier(self):
        return QueryClassifier()

    def test_blank_query_returns_escaped_text(self, classifier):
        """Test that nothing is marked for a blank query."""
        assert highlight_search_terms("a < b", "  ", classifier) == "a &lt; b"

    def test_single_word_whole_word_only(self, classifier):
        """Test that the single-word mark respects word boundaries."""
        html = highlight_search_terms("Art and this article", "art", classifier)

        assert html == '<mark class="exact-search">Art</mark> and this article'

    def test_article_reference(self, classifier):
        """Test that article references are marked without longer numbers."""
        html = highlight_search_terms("See Article 2 and Article 25.", "Article 2", classifier)

        assert html == 'See <mark class="exact-search">Article 2</mark> and Article 25.'

    def test_quoted_phrase(self, classifier):
        """Test phrase marking, case-insensitively."""
        html = highlight_search_terms("The right to a Fair Trial.", '"fair trial"', classifier)

        assert html == 'The right to a <mark class="exact-search">Fair Trial</mark>.'

    def test_multiple_words(self, classifier):
        """Test that each term is marked once, without nesting."""
        html = highlight_search_terms("fair trial, a fair hearing", "fair trial", classifier)

        assert html == (
            '<mark class="exact-match">fair</mark> <mark class="exact-match">trial</mark>, '
            'a <mark class="exact-match">fair</mark> hearing'
        )

    def test_text_is_escaped(self, classifier):
        """Test that markup in the text cannot leak through."""
        html = highlight_search_terms("<b>rights</b>", "rights", classifier)

        assert html == '&lt;b&gt;<mark class="exact-search">rights</mark>&lt;/b&gt;'

    def test_metacharacters_in_query(self, classifier):
        """Test that regex-special queries highlight literally."""
        html = highlight_search_terms("costs (fees) apply", '"(fees)"', classifier)

        assert html == 'costs <mark class="exact-search">(fees)</mark> apply'

    def test_entities_are_never_split(self, classifier):
        """Test that query words cannot match inside escaped entities."""
        assert highlight_search_terms("Rights & duties", "amp", classifier) == "Rights &amp; duties"
        assert highlight_search_terms("a < b", "lt", classifier) == "a &lt; b"

    def test_match_next_to_escaped_character(self, classifier):
        """Test marking a word that sits beside an escaped character."""
        html = highlight_search_terms("Fees & costs", "costs", classifier)

        assert html == 'Fees &amp; <mark class="exact-search">costs</mark>'

    def test_markup_inside_match_is_escaped(self, classifier):
        """Test that a marked phrase is itself escaped."""
        html = highlight_search_terms("Terms: R&D <costs>", '"r&d"', classifier)

        assert html == 'Terms: <mark class="exact-search">R&amp;D</mark> &lt;costs&gt;'
