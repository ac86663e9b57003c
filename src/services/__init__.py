"""Service layer: dashboard loading, incidents and manual entries."""

from src.services.dashboard_service import DashboardService, DashboardSnapshot
from src.services.incident_service import (
    IncidentConflictError,
    IncidentError,
    IncidentNotFoundError,
    IncidentService,
)
from src.services.manual_entry import (
    ContactNotFoundError,
    ManualEntryError,
    ManualEntryService,
    format_manual_sender,
)

__all__ = [
    "ContactNotFoundError",
    "DashboardService",
    "DashboardSnapshot",
    "IncidentConflictError",
    "IncidentError",
    "IncidentNotFoundError",
    "IncidentService",
    "ManualEntryError",
    "ManualEntryService",
    "format_manual_sender",
]
