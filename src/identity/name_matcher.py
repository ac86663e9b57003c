"""Prefix-based name matching for replies that arrive from unknown numbers.

A roster contact qualifies when every search token is a prefix of one of
the contact's name tokens: "J. Cruz" qualifies "Juan Cruz" and "Jan Cruz".
More than one qualifying contact rejects the match.
"""

import re

import structlog

from src.identity.schemas import NameMatch, NameMatchOutcome
from src.models.contact import Contact

logger = structlog.get_logger()

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def name_tokens(name: str) -> list[str]:
    """Lower-case, strip non-alphanumerics from each word, drop empty tokens."""
    tokens = (_NON_ALNUM.sub("", part) for part in name.lower().split())
    return [t for t in tokens if t]


class NameMatcher:
    """Matches a candidate sender name against the roster.

    Correctness is preferred over recall: ambiguous lookups return no
    contact rather than guessing.
    """

    def __init__(self, min_query_length: int = 2):
        """Initialize matcher.

        Args:
            min_query_length: Shorter candidate names are never matched.
        """
        self._min_length = min_query_length

    def find_by_name(self, candidate: str | None, roster: list[Contact]) -> NameMatch:
        """Find the single roster contact whose name fits the candidate.

        Args:
            candidate: Residual text from a classified reply
            roster: Contacts to search

        Returns:
            NameMatch with SINGLE_MATCH and the contact, NO_MATCH, or
            AMBIGUOUS_REJECTED with the number of qualifying contacts.
        """
        query = candidate or ""
        if len(query) < self._min_length:
            return NameMatch(query=query, outcome=NameMatchOutcome.NO_MATCH)

        search = name_tokens(query)
        if not search:
            return NameMatch(query=query, outcome=NameMatchOutcome.NO_MATCH)

        matches = [c for c in roster if self._qualifies(search, name_tokens(c.name))]

        if len(matches) > 1:
            logger.warning(
                "ambiguous name match",
                candidate=query,
                matches=len(matches),
            )
            return NameMatch(
                query=query,
                outcome=NameMatchOutcome.AMBIGUOUS_REJECTED,
                candidates=len(matches),
            )
        if not matches:
            return NameMatch(query=query, outcome=NameMatchOutcome.NO_MATCH)

        return NameMatch(
            query=query,
            outcome=NameMatchOutcome.SINGLE_MATCH,
            contact=matches[0],
            candidates=1,
        )

    @staticmethod
    def _qualifies(search: list[str], contact_tokens: list[str]) -> bool:
        """Every search token must prefix some contact token."""
        return all(
            any(token.startswith(s) for token in contact_tokens) for s in search
        )


def find_by_name(candidate: str | None, roster: list[Contact]) -> NameMatch:
    """Module-level convenience wrapper around NameMatcher.find_by_name."""
    return NameMatcher().find_by_name(candidate, roster)
