"""Manual response entry endpoint."""

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from src.models.response import RawResponse
from src.models.status import ClassifiedStatus
from src.services.manual_entry import (
    ContactNotFoundError,
    ManualEntryError,
    ManualEntryService,
)

router = APIRouter(prefix="/responses", tags=["responses"])


class ManualEntryRequest(BaseModel):
    """Request body for recording a reply on a contact's behalf."""

    contact_id: str = Field(description="Roster contact id")
    status: ClassifiedStatus = Field(description="Status reported by the contact")
    message: str | None = Field(
        default=None,
        max_length=500,
        description="Optional note; defaults to 'Manual Entry'",
    )


def get_manual_entry_service(request: Request) -> ManualEntryService:
    """Get ManualEntryService from app state."""
    if not hasattr(request.app.state, "manual_entry_service"):
        raise HTTPException(status_code=500, detail="ManualEntryService not initialized")
    return request.app.state.manual_entry_service


@router.post("/manual", response_model=RawResponse, status_code=201)
async def record_manual_response(
    body: ManualEntryRequest,
    service: ManualEntryService = Depends(get_manual_entry_service),
) -> RawResponse:
    """Record a reply that arrived outside the SMS gateway.

    The dashboard refreshes in the background once the entry is stored.
    """
    try:
        return await service.record_for_contact_id(
            body.contact_id, body.status, body.message
        )
    except ContactNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ManualEntryError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
