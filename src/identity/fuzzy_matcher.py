"""Fuzzy contact suggestions using RapidFuzz.

Used only to help an operator review replies that landed in the unknown
bucket. Suggestions never change how a reply is matched.
"""

from rapidfuzz import fuzz, process, utils

from src.classification.status_parser import classify
from src.identity.schemas import ContactSuggestion
from src.models.contact import Contact


class FuzzyMatcher:
    """Suggests likely roster contacts for free text.

    Uses token_sort_ratio for name order independence
    ("Dela Cruz, Juan" vs "Juan Dela Cruz").
    """

    def __init__(self, threshold: float = 0.6):
        """Initialize matcher with a minimum suggestion score.

        Args:
            threshold: Minimum score (0-1) for a contact to be suggested.
        """
        self._threshold = threshold

    def suggest(
        self,
        text: str,
        roster: list[Contact],
        limit: int = 3,
    ) -> list[ContactSuggestion]:
        """Find the roster contacts whose names best resemble a reply.

        The status keyword is removed first so "2 Juan Dela Cruz" is
        compared as "Juan Dela Cruz".

        Args:
            text: Raw reply contents
            roster: Contacts to compare against
            limit: Maximum number of suggestions

        Returns:
            Suggestions sorted by score descending, at most ``limit``.
        """
        query = classify(text).residual
        if not query or not roster:
            return []

        choices = {i: c.name for i, c in enumerate(roster) if c.name}
        if not choices:
            return []

        results = process.extract(
            query,
            choices,
            scorer=fuzz.token_sort_ratio,
            processor=utils.default_process,
            score_cutoff=self._threshold * 100,  # fuzz uses 0-100 scale
            limit=limit,
        )

        return [
            ContactSuggestion(contact=roster[index], score=score / 100)
            for _name, score, index in results
        ]


def suggest_contacts(
    text: str, roster: list[Contact], limit: int = 3
) -> list[ContactSuggestion]:
    """Suggest contacts with the default threshold."""
    return FuzzyMatcher().suggest(text, roster, limit=limit)
