"""Reply classification and roster matching.

This module provides:
- classify: status keyword extraction from free-text replies
- ResponseMatcher: phone/name/manual matching with newest-first dedup
- Schemas for classification results and matching outcomes
"""

from src.classification.matcher import ResponseMatcher, is_manual_entry, match
from src.classification.schemas import Classification, MatchOutcome
from src.classification.status_parser import STATUS_CODES, STATUS_KEYWORDS, classify

__all__ = [
    "STATUS_CODES",
    "STATUS_KEYWORDS",
    "Classification",
    "MatchOutcome",
    "ResponseMatcher",
    "classify",
    "is_manual_entry",
    "match",
]
