"""Dashboard API endpoints.

Serves the live snapshot (or an incident's history window) with filters
applied, plus KPI stats, chart series and the three dashboard tables.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel, Field

from src.dashboard import (
    PENDING_SEARCH_FIELDS,
    RESPONSE_SEARCH_FIELDS,
    DashboardFilters,
    DashboardStats,
    DemographicRow,
    StatusCount,
    TimelinePoint,
    apply_filters,
    compute_stats,
    default_filters,
    demographic_breakdown,
    filter_options,
    response_timeline,
    search_contacts,
    sort_contacts,
    status_distribution,
)
from src.identity.fuzzy_matcher import FuzzyMatcher
from src.identity.schemas import ContactSuggestion
from src.models.contact import ProjectedContact
from src.models.incident import Incident
from src.models.response import RawResponse
from src.models.status import ClassifiedStatus
from src.services.dashboard_service import DashboardService, DashboardSnapshot
from src.services.incident_service import IncidentNotFoundError, IncidentService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


class UnknownResponseView(BaseModel):
    """A reply that matched no contact, with review suggestions."""

    response: RawResponse
    suggestions: list[ContactSuggestion] = Field(default_factory=list)


class DashboardResponse(BaseModel):
    """Everything the dashboard page renders."""

    incident: Incident | None = Field(default=None)
    window_start: datetime | None = Field(default=None)
    window_end: datetime | None = Field(default=None)
    last_updated: datetime | None = Field(default=None)
    loading: bool = Field(default=False)
    error: str | None = Field(default=None)
    filters: DashboardFilters = Field(description="Filters that were applied")
    filter_options: dict[str, list[str]] = Field(default_factory=dict)
    stats: DashboardStats
    distribution: list[StatusCount] = Field(default_factory=list)
    departments: list[DemographicRow] = Field(default_factory=list)
    locations: list[DemographicRow] = Field(default_factory=list)
    timeline: list[TimelinePoint] = Field(default_factory=list)
    responders: list[ProjectedContact] = Field(default_factory=list)
    pending: list[ProjectedContact] = Field(default_factory=list)
    unknown: list[UnknownResponseView] = Field(default_factory=list)


# Dependency functions
def get_dashboard_service(request: Request) -> DashboardService:
    """Get DashboardService from app state."""
    if not hasattr(request.app.state, "dashboard_service"):
        raise HTTPException(status_code=500, detail="DashboardService not initialized")
    return request.app.state.dashboard_service


def get_incident_service(request: Request) -> IncidentService:
    """Get IncidentService from app state."""
    if not hasattr(request.app.state, "incident_service"):
        raise HTTPException(status_code=500, detail="IncidentService not initialized")
    return request.app.state.incident_service


async def load_snapshot(
    incident_id: int | None = Query(
        default=None, description="Show an incident's window instead of the live view"
    ),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
    incident_service: IncidentService = Depends(get_incident_service),
) -> DashboardSnapshot:
    """Resolve the snapshot for the live view or a past incident."""
    if incident_id is None:
        return dashboard_service.snapshot
    try:
        incident = await incident_service.get(incident_id)
    except IncidentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return await dashboard_service.snapshot_for_incident(incident)


def build_filters(
    contacts: list[ProjectedContact],
    departments: list[str] | None,
    locations: list[str] | None,
    levels: list[str] | None,
    statuses: list[ClassifiedStatus] | None,
    default_departments: bool,
) -> DashboardFilters:
    """Combine query filters with the responder-department default."""
    if departments is None and default_departments:
        departments = default_filters(contacts).departments
    return DashboardFilters(
        departments=departments or [],
        locations=locations or [],
        levels=levels or [],
        statuses=statuses or [],
    )


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    departments: list[str] | None = Query(default=None),
    locations: list[str] | None = Query(default=None),
    levels: list[str] | None = Query(default=None, description="Level or position"),
    statuses: list[ClassifiedStatus] | None = Query(default=None),
    default_departments: bool = Query(
        default=True,
        description="Without a department filter, narrow to departments with responders",
    ),
    search: str | None = Query(default=None, description="Search the tables"),
    sort_by: str | None = Query(default=None, description="Table column to sort by"),
    descending: bool = Query(default=False),
    snapshot: DashboardSnapshot = Depends(load_snapshot),
) -> DashboardResponse:
    """Get the dashboard for the live view or one incident.

    Stats and charts are computed over the filtered roster. The unknown
    table is not filtered since its replies belong to no contact.
    """
    filters = build_filters(
        snapshot.contacts, departments, locations, levels, statuses, default_departments
    )
    filtered = apply_filters(snapshot.contacts, filters)

    responders = [c for c in filtered if c.has_responded]
    pending = [c for c in filtered if not c.has_responded]
    responders = search_contacts(responders, search, RESPONSE_SEARCH_FIELDS)
    pending = search_contacts(pending, search, PENDING_SEARCH_FIELDS)
    try:
        if sort_by:
            responders = sort_contacts(responders, sort_by, descending)
            pending = sort_contacts(pending, sort_by, descending)
        else:
            responders = sort_contacts(responders, "response_time", descending=True)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    suggester = FuzzyMatcher()
    unknown = [
        UnknownResponseView(
            response=r,
            suggestions=suggester.suggest(r.contents, snapshot.contacts),
        )
        for r in snapshot.unknown_responses
    ]

    return DashboardResponse(
        incident=snapshot.incident,
        window_start=snapshot.window_start,
        window_end=snapshot.window_end,
        last_updated=snapshot.last_updated,
        loading=snapshot.loading,
        error=snapshot.error,
        filters=filters,
        filter_options=filter_options(snapshot.contacts),
        stats=compute_stats(filtered),
        distribution=status_distribution(filtered),
        departments=demographic_breakdown(filtered, "department"),
        locations=demographic_breakdown(filtered, "location"),
        timeline=response_timeline(filtered),
        responders=responders,
        pending=pending,
        unknown=unknown,
    )


@router.post("/refresh", response_model=DashboardSnapshot)
async def refresh_dashboard(
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> DashboardSnapshot:
    """Reload the live snapshot now.

    Storage failures are reported in ``error`` while the previous data
    is kept.
    """
    return await dashboard_service.refresh()
