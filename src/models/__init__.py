"""Canonical data models for the call tree dashboard.

This module exports all domain models used throughout the application:
- Contact / ProjectedContact: roster entries, before and after matching
- RawResponse: inbound replies as stored
- Incident: declared response windows
- ClassifiedStatus, MatchKind, ResponseOrigin: enumerations
"""

from src.models.contact import Contact, ProjectedContact
from src.models.incident import Incident, IncidentType
from src.models.response import RawResponse
from src.models.status import (
    AFFECTED_STATUSES,
    STATUS_ORDER,
    ClassifiedStatus,
    MatchKind,
    ResponseOrigin,
)

__all__ = [
    # Roster
    "Contact",
    "ProjectedContact",
    # Responses
    "RawResponse",
    "ResponseOrigin",
    # Status
    "AFFECTED_STATUSES",
    "STATUS_ORDER",
    "ClassifiedStatus",
    "MatchKind",
    # Incidents
    "Incident",
    "IncidentType",
]
