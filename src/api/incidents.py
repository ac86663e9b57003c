"""Incident API endpoints.

Start and end the live incident, and manage the history of past
incidents used to scope older responses.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from src.api.dashboard import get_incident_service
from src.models.incident import Incident, IncidentType
from src.services.incident_service import (
    IncidentConflictError,
    IncidentError,
    IncidentNotFoundError,
    IncidentService,
)

router = APIRouter(prefix="/incidents", tags=["incidents"])


class StartIncidentRequest(BaseModel):
    """Request body for starting a live incident."""

    name: str = Field(min_length=1, max_length=200, description="Incident name")
    type: IncidentType = Field(default=IncidentType.TEST)


class IncidentRequest(BaseModel):
    """Request body for registering or editing a past incident."""

    name: str = Field(description="Incident name")
    type: IncidentType = Field(default=IncidentType.TEST)
    start_time: datetime = Field(description="Window start")
    end_time: datetime = Field(description="Window end, not before start")


class SuccessResponse(BaseModel):
    """Generic success response."""

    success: bool = Field(description="Whether the operation succeeded")


@router.get("/active", response_model=Incident | None)
async def get_active_incident(
    service: IncidentService = Depends(get_incident_service),
) -> Incident | None:
    """Get the live incident, or null when none is running."""
    return await service.get_active()


@router.get("", response_model=list[Incident])
async def list_incidents(
    service: IncidentService = Depends(get_incident_service),
) -> list[Incident]:
    """List ended incidents, most recently started first."""
    return await service.list_past()


@router.post("/start", response_model=Incident, status_code=201)
async def start_incident(
    body: StartIncidentRequest,
    service: IncidentService = Depends(get_incident_service),
) -> Incident:
    """Start a live incident.

    Returns 409 when another incident is already active.
    """
    try:
        return await service.start(body.name, body.type)
    except IncidentConflictError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except IncidentError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.post("/end", response_model=Incident)
async def end_incident(
    service: IncidentService = Depends(get_incident_service),
) -> Incident:
    """End the live incident."""
    try:
        return await service.end()
    except IncidentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.post("", response_model=Incident, status_code=201)
async def register_incident(
    body: IncidentRequest,
    service: IncidentService = Depends(get_incident_service),
) -> Incident:
    """Register a past incident retroactively."""
    try:
        return await service.register(
            body.name, body.type, body.start_time, body.end_time
        )
    except IncidentError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.put("/{incident_id}", response_model=Incident)
async def update_incident(
    incident_id: int,
    body: IncidentRequest,
    service: IncidentService = Depends(get_incident_service),
) -> Incident:
    """Edit an incident's name, type and window."""
    try:
        return await service.update(
            incident_id, body.name, body.type, body.start_time, body.end_time
        )
    except IncidentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except IncidentError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.delete("/{incident_id}", response_model=SuccessResponse)
async def delete_incident(
    incident_id: int,
    service: IncidentService = Depends(get_incident_service),
) -> SuccessResponse:
    """Delete an incident."""
    try:
        await service.delete(incident_id)
    except IncidentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return SuccessResponse(success=True)
