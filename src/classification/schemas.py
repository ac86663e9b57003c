"""Classification and matching result schemas."""

from pydantic import BaseModel, Field

from src.models.contact import ProjectedContact
from src.models.response import RawResponse
from src.models.status import ClassifiedStatus


class Classification(BaseModel):
    """Status extracted from a reply plus the leftover text."""

    status: ClassifiedStatus = Field(description="Status of the first keyword found")
    residual: str = Field(
        default="",
        description="Remaining text; a candidate sender name when a status was found",
    )


class MatchOutcome(BaseModel):
    """Result of one matching pass over a roster and a response batch."""

    contacts: list[ProjectedContact] = Field(
        default_factory=list,
        description="Every roster contact, in roster order",
    )
    unknown_responses: list[RawResponse] = Field(
        default_factory=list,
        description="Responses linked to no contact, in input order",
    )

    @property
    def matched_count(self) -> int:
        """Number of contacts with a recorded response."""
        return sum(1 for c in self.contacts if c.match_kind is not None)
