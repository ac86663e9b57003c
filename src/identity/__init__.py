"""Identity resolution for matching replies to roster contacts.

This module provides:
- normalize: phone number lookup keys
- NameMatcher: prefix name matching with ambiguity rejection
- FuzzyMatcher: RapidFuzz suggestions for unmatched replies
- Schemas for name match results and suggestions
"""

from src.identity.fuzzy_matcher import FuzzyMatcher, suggest_contacts
from src.identity.name_matcher import NameMatcher, find_by_name
from src.identity.normalizer import normalize
from src.identity.schemas import ContactSuggestion, NameMatch, NameMatchOutcome

__all__ = [
    "ContactSuggestion",
    "FuzzyMatcher",
    "NameMatch",
    "NameMatchOutcome",
    "NameMatcher",
    "find_by_name",
    "normalize",
    "suggest_contacts",
]
