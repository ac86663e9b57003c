"""Incident lifecycle: start/end the live incident and manage history."""

from collections.abc import Callable
from datetime import datetime

import structlog
from pydantic import ValidationError

from src.events.bus import EventBus
from src.events.types import (
    IncidentDeleted,
    IncidentEnded,
    IncidentStarted,
    IncidentUpdated,
)
from src.models.incident import Incident, IncidentType
from src.models.timestamps import utc_now
from src.repositories.incident_repo import IncidentRepository

logger = structlog.get_logger()


class IncidentError(Exception):
    """Raised when an incident operation is not allowed."""


class IncidentNotFoundError(IncidentError):
    """Raised when the referenced incident does not exist."""


class IncidentConflictError(IncidentError):
    """Raised when starting an incident while another is live."""


class IncidentService:
    """Coordinates incident storage and change notifications.

    Only one incident may be live at a time. Past incidents can be
    registered retroactively so older responses get scoped to them.
    """

    def __init__(
        self,
        incident_repo: IncidentRepository,
        event_bus: EventBus | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize service.

        Args:
            incident_repo: Incident storage
            event_bus: Optional bus notified after every change
            clock: Returns the current time; replaced in tests
        """
        self._repo = incident_repo
        self._bus = event_bus
        self._clock = clock

    async def get(self, incident_id: int) -> Incident:
        """Get an incident or raise IncidentNotFoundError."""
        incident = await self._repo.get(incident_id)
        if incident is None:
            msg = f"Incident {incident_id} not found"
            raise IncidentNotFoundError(msg)
        return incident

    async def get_active(self) -> Incident | None:
        """The live incident, if one is running."""
        return await self._repo.get_active()

    async def list_past(self) -> list[Incident]:
        """Ended incidents, most recently started first."""
        return await self._repo.list_past()

    async def latest_past(self) -> Incident | None:
        """Most recently started ended incident.

        The history view opens on this when nothing is live.
        """
        past = await self._repo.list_past(limit=1)
        return past[0] if past else None

    async def start(self, name: str, incident_type: IncidentType) -> Incident:
        """Open a live incident starting now.

        Raises:
            IncidentError: If the name is blank or too long
            IncidentConflictError: If an incident is already live
        """
        candidate = self._validate(None, name, incident_type, self._clock(), None)

        active = await self._repo.get_active()
        if active is not None:
            msg = f"Incident '{active.name}' is already active"
            raise IncidentConflictError(msg)

        incident = await self._repo.create(
            candidate.name, candidate.type, candidate.start_time
        )
        logger.info(
            "incident started",
            incident_id=incident.id,
            name=incident.name,
            type=incident.type.value,
        )
        await self._publish(
            IncidentStarted(
                incident_id=incident.id,
                name=incident.name,
                incident_type=incident.type.value,
            )
        )
        return incident

    async def end(self) -> Incident:
        """Close the live incident now.

        Raises:
            IncidentNotFoundError: If no incident is live
        """
        active = await self._repo.get_active()
        if active is None:
            msg = "No active incident"
            raise IncidentNotFoundError(msg)

        end_time = max(self._clock(), active.start_time)
        await self._repo.set_end_time(active.id, end_time)
        logger.info("incident ended", incident_id=active.id)
        await self._publish(IncidentEnded(incident_id=active.id))
        return active.model_copy(update={"end_time": end_time})

    async def register(
        self,
        name: str,
        incident_type: IncidentType,
        start_time: datetime,
        end_time: datetime,
    ) -> Incident:
        """Record a past incident retroactively.

        Raises:
            IncidentError: If fields are invalid or end precedes start
        """
        candidate = self._validate(None, name, incident_type, start_time, end_time)
        incident = await self._repo.create(
            candidate.name, candidate.type, candidate.start_time, candidate.end_time
        )
        logger.info("incident registered", incident_id=incident.id)
        await self._publish(IncidentUpdated(incident_id=incident.id, created=True))
        return incident

    async def update(
        self,
        incident_id: int,
        name: str,
        incident_type: IncidentType,
        start_time: datetime,
        end_time: datetime,
    ) -> Incident:
        """Edit an incident's name, type and window.

        Raises:
            IncidentNotFoundError: If the incident does not exist
            IncidentError: If fields are invalid or end precedes start
        """
        await self.get(incident_id)
        incident = self._validate(incident_id, name, incident_type, start_time, end_time)
        if not await self._repo.update(incident):
            msg = f"Incident {incident_id} not found"
            raise IncidentNotFoundError(msg)
        logger.info("incident updated", incident_id=incident_id)
        await self._publish(IncidentUpdated(incident_id=incident_id))
        return incident

    async def delete(self, incident_id: int) -> None:
        """Delete an incident.

        Raises:
            IncidentNotFoundError: If the incident does not exist
        """
        if not await self._repo.delete(incident_id):
            msg = f"Incident {incident_id} not found"
            raise IncidentNotFoundError(msg)
        await self._publish(IncidentDeleted(incident_id=incident_id))

    @staticmethod
    def _validate(
        incident_id: int | None,
        name: str,
        incident_type: IncidentType,
        start_time: datetime,
        end_time: datetime | None,
    ) -> Incident:
        try:
            return Incident(
                id=incident_id,
                name=name,
                type=incident_type,
                start_time=start_time,
                end_time=end_time,
            )
        except ValidationError as e:
            raise IncidentError(_first_error(e)) from e

    async def _publish(self, event) -> None:
        if self._bus is not None:
            await self._bus.publish(event)


def _first_error(error: ValidationError) -> str:
    """Readable message from the first validation error."""
    details = error.errors()
    if not details:
        return str(error)
    first = details[0]
    location = ".".join(str(p) for p in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message
