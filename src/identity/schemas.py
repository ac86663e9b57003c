"""Identity resolution schemas.

Defines results for name-based contact lookups and review suggestions.
"""

from enum import Enum

from pydantic import BaseModel, Field

from src.models.contact import Contact


class NameMatchOutcome(str, Enum):
    """Result category of a name lookup against the roster."""

    NO_MATCH = "no_match"
    SINGLE_MATCH = "single_match"
    AMBIGUOUS_REJECTED = "ambiguous_rejected"


class NameMatch(BaseModel):
    """Result of matching a reply's residual text to a roster name.

    Only SINGLE_MATCH carries a contact. AMBIGUOUS_REJECTED reports how
    many contacts qualified so callers can surface the conflict.
    """

    query: str = Field(description="Candidate name as extracted from the reply")
    outcome: NameMatchOutcome = Field(description="What the lookup concluded")
    contact: Contact | None = Field(
        default=None, description="Matched contact (SINGLE_MATCH only)"
    )
    candidates: int = Field(default=0, ge=0, description="Contacts that qualified")

    @property
    def is_match(self) -> bool:
        """Check if exactly one contact was found."""
        return self.outcome is NameMatchOutcome.SINGLE_MATCH

    @property
    def is_ambiguous(self) -> bool:
        """Check if the lookup was rejected because of multiple candidates."""
        return self.outcome is NameMatchOutcome.AMBIGUOUS_REJECTED


class ContactSuggestion(BaseModel):
    """A possible roster contact for an unmatched reply, for operator review."""

    contact: Contact = Field(description="Suggested roster contact")
    score: float = Field(ge=0.0, le=1.0, description="Similarity score (0-1)")
