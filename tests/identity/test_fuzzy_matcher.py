"""Tests for fuzzy contact suggestions."""

import pytest

from src.identity.fuzzy_matcher import FuzzyMatcher, suggest_contacts
from src.models.contact import Contact


@pytest.fixture
def sample_roster() -> list[Contact]:
    """Sample roster for testing."""
    return [
        Contact(id="1", name="Juan Dela Cruz", number="09171111111"),
        Contact(id="2", name="Maria Santos", number="09172222222"),
        Contact(id="3", name="Jose Rizal", number="09173333333"),
        Contact(id="4", name="", number="09174444444"),
    ]


@pytest.fixture
def matcher() -> FuzzyMatcher:
    """Default matcher with 0.6 threshold."""
    return FuzzyMatcher(threshold=0.6)


class TestSuggest:
    """Tests for suggest method."""

    def test_misspelled_name_suggests_contact(
        self, matcher: FuzzyMatcher, sample_roster: list[Contact]
    ):
        """A typo in the sender name still finds the contact."""
        suggestions = matcher.suggest("1 Juan Dela Kruz", sample_roster)

        assert suggestions
        assert suggestions[0].contact.id == "1"
        assert 0.6 <= suggestions[0].score <= 1.0

    def test_status_keyword_is_ignored(
        self, matcher: FuzzyMatcher, sample_roster: list[Contact]
    ):
        """The keyword does not count against the score."""
        suggestions = matcher.suggest("safe Jose Rizal", sample_roster)

        assert suggestions[0].contact.id == "3"
        assert suggestions[0].score == 1.0

    def test_word_order_independent(
        self, matcher: FuzzyMatcher, sample_roster: list[Contact]
    ):
        """token_sort_ratio ignores token order."""
        suggestions = matcher.suggest("2 Santos Maria", sample_roster)

        assert suggestions[0].contact.id == "2"
        assert suggestions[0].score == 1.0

    def test_unrelated_text_has_no_suggestions(
        self, matcher: FuzzyMatcher, sample_roster: list[Contact]
    ):
        """Nothing above threshold returns an empty list."""
        assert matcher.suggest("1 xyzzy qwerty", sample_roster) == []

    def test_empty_inputs(self, matcher: FuzzyMatcher, sample_roster: list[Contact]):
        """Empty text or roster yields no suggestions."""
        assert matcher.suggest("", sample_roster) == []
        assert matcher.suggest("1", sample_roster) == []
        assert matcher.suggest("1 Juan", []) == []

    def test_limit(self, sample_roster: list[Contact]):
        """At most limit suggestions are returned."""
        lenient = FuzzyMatcher(threshold=0.0)

        assert len(lenient.suggest("1 Juan", sample_roster, limit=2)) <= 2

    def test_sorted_by_score(self, sample_roster: list[Contact]):
        """Best suggestion comes first."""
        lenient = FuzzyMatcher(threshold=0.0)
        suggestions = lenient.suggest("1 Maria Santos", sample_roster)

        scores = [s.score for s in suggestions]
        assert scores == sorted(scores, reverse=True)
        assert suggestions[0].contact.id == "2"

    def test_module_level_helper(self, sample_roster: list[Contact]):
        """suggest_contacts uses the default threshold."""
        suggestions = suggest_contacts("3 Jose Rizal", sample_roster)

        assert suggestions[0].contact.id == "3"
