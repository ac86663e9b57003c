"""CSV export endpoints for the dashboard tables."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from src.api.dashboard import build_filters, load_snapshot
from src.dashboard import apply_filters
from src.output.csv_export import pending_csv, responses_csv, unknown_responses_csv
from src.services.dashboard_service import DashboardSnapshot

router = APIRouter(prefix="/export", tags=["export"])


def _csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _filtered(
    snapshot: DashboardSnapshot,
    departments: list[str] | None,
    locations: list[str] | None,
    levels: list[str] | None,
    default_departments: bool,
):
    filters = build_filters(
        snapshot.contacts, departments, locations, levels, None, default_departments
    )
    return apply_filters(snapshot.contacts, filters)


@router.get("/responses.csv")
async def export_responses(
    departments: list[str] | None = Query(default=None),
    locations: list[str] | None = Query(default=None),
    levels: list[str] | None = Query(default=None),
    default_departments: bool = Query(default=True),
    snapshot: DashboardSnapshot = Depends(load_snapshot),
) -> Response:
    """Download the responders table."""
    contacts = _filtered(snapshot, departments, locations, levels, default_departments)
    responders = [c for c in contacts if c.has_responded]
    return _csv_response(responses_csv(responders), "responses.csv")


@router.get("/unknown_responses.csv")
async def export_unknown_responses(
    snapshot: DashboardSnapshot = Depends(load_snapshot),
) -> Response:
    """Download replies that matched no contact."""
    return _csv_response(
        unknown_responses_csv(snapshot.unknown_responses), "unknown_responses.csv"
    )


@router.get("/pending_responses.csv")
async def export_pending(
    departments: list[str] | None = Query(default=None),
    locations: list[str] | None = Query(default=None),
    levels: list[str] | None = Query(default=None),
    default_departments: bool = Query(default=True),
    snapshot: DashboardSnapshot = Depends(load_snapshot),
) -> Response:
    """Download contacts still awaiting a reply."""
    contacts = _filtered(snapshot, departments, locations, levels, default_departments)
    pending = [c for c in contacts if not c.has_responded]
    return _csv_response(pending_csv(pending), "pending_responses.csv")
