"""Typed event definitions for stored-data changes.

These events represent things that change what the dashboard shows:
- IncidentStarted: A live incident window was opened
- IncidentEnded: The live incident window was closed
- IncidentUpdated: A past incident was registered or edited
- IncidentDeleted: A past incident was removed
- ManualResponseRecorded: An operator entered a reply for a contact
"""

from pydantic import Field

from src.events.base import Event
from src.models.status import ClassifiedStatus


class IncidentStarted(Event):
    """Emitted when an incident is started from the live view."""

    incident_id: int = Field(description="ID of the started incident")
    name: str = Field(description="Incident name")
    incident_type: str = Field(description="test or actual")


class IncidentEnded(Event):
    """Emitted when the active incident is ended."""

    incident_id: int = Field(description="ID of the ended incident")


class IncidentUpdated(Event):
    """Emitted when a past incident is registered or edited."""

    incident_id: int = Field(description="ID of the saved incident")
    created: bool = Field(default=False, description="True for a new registration")


class IncidentDeleted(Event):
    """Emitted when a past incident is deleted."""

    incident_id: int = Field(description="ID of the deleted incident")


class ManualResponseRecorded(Event):
    """Emitted when an operator records a reply on a contact's behalf."""

    uid: str = Field(description="Generated unique id of the stored response")
    contact_id: str | None = Field(default=None, description="Roster contact id")
    status: ClassifiedStatus = Field(description="Status that was entered")
