"""Stateless classification and matching endpoints.

Expose the core reply parser and matcher without touching storage, for
integrations that hold their own roster.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from src.classification.matcher import ResponseMatcher
from src.classification.status_parser import classify
from src.models.contact import Contact, ProjectedContact
from src.models.response import RawResponse
from src.models.status import ClassifiedStatus

router = APIRouter(tags=["classification"])


class ClassifyRequest(BaseModel):
    """Request body for classifying a reply."""

    text: str = Field(default="", description="Raw reply contents")


class ClassifyResponse(BaseModel):
    """Status parsed from a reply."""

    status: ClassifiedStatus = Field(description="Parsed status")
    residual: str = Field(description="Remaining text, used as a candidate name")


class MatchRequest(BaseModel):
    """Roster and responses to match."""

    roster: list[Contact] = Field(default_factory=list)
    responses: list[RawResponse] = Field(
        default_factory=list, description="Ordered newest first"
    )


class MatchResponse(BaseModel):
    """Projection of responses onto the roster."""

    contacts: list[ProjectedContact] = Field(default_factory=list)
    unknown_responses: list[RawResponse] = Field(default_factory=list)
    matched_count: int = Field(default=0, description="Contacts with a recorded reply")


@router.post("/classify", response_model=ClassifyResponse)
async def classify_text(body: ClassifyRequest) -> ClassifyResponse:
    """Parse a status keyword out of free text."""
    result = classify(body.text)
    return ClassifyResponse(status=result.status, residual=result.residual)


@router.post("/match", response_model=MatchResponse)
async def match_responses(body: MatchRequest) -> MatchResponse:
    """Match responses to a roster without storing anything."""
    outcome = ResponseMatcher().match(body.roster, body.responses)
    return MatchResponse(
        contacts=outcome.contacts,
        unknown_responses=outcome.unknown_responses,
        matched_count=outcome.matched_count,
    )
