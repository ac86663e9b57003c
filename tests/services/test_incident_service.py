"""Tests for IncidentService."""

from datetime import UTC, datetime

import pytest

from src.db.turso import TursoClient
from src.events.bus import EventBus
from src.events.types import (
    IncidentDeleted,
    IncidentEnded,
    IncidentStarted,
    IncidentUpdated,
)
from src.models.incident import IncidentType
from src.repositories.incident_repo import IncidentRepository
from src.services.incident_service import (
    IncidentConflictError,
    IncidentError,
    IncidentNotFoundError,
    IncidentService,
)


class FakeClock:
    """Settable clock."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _at(hour: int, day: int = 19) -> datetime:
    return datetime(2026, 10, day, hour, 0, tzinfo=UTC)


@pytest.fixture
def clock() -> FakeClock:
    """Clock starting at 08:00."""
    return FakeClock(_at(8))


@pytest.fixture
def service(
    db_client: TursoClient, event_bus: EventBus, clock: FakeClock
) -> IncidentService:
    """Service over a real incident repository."""
    return IncidentService(
        IncidentRepository(db_client), event_bus=event_bus, clock=clock
    )


class TestStartAndEnd:
    """Live incident lifecycle."""

    @pytest.mark.asyncio
    async def test_start(self, service: IncidentService, published: list):
        """Starting opens an active incident at the current time."""
        incident = await service.start("  Typhoon Kristine  ", IncidentType.ACTUAL)

        assert incident.name == "Typhoon Kristine"
        assert incident.start_time == _at(8)
        assert incident.is_active
        assert (await service.get_active()).id == incident.id
        assert isinstance(published[0], IncidentStarted)
        assert published[0].incident_type == "actual"

    @pytest.mark.asyncio
    async def test_start_rejects_second_active(self, service: IncidentService):
        """Only one incident may be live."""
        await service.start("First", IncidentType.TEST)

        with pytest.raises(IncidentConflictError, match="already active"):
            await service.start("Second", IncidentType.TEST)

    @pytest.mark.asyncio
    async def test_start_requires_name(self, service: IncidentService, published: list):
        """Blank names are rejected before anything is stored."""
        with pytest.raises(IncidentError):
            await service.start("   ", IncidentType.TEST)

        assert await service.get_active() is None
        assert published == []

    @pytest.mark.asyncio
    async def test_end(self, service: IncidentService, clock: FakeClock, published: list):
        """Ending closes the live incident at the current time."""
        started = await service.start("Drill", IncidentType.TEST)
        clock.now = _at(10)

        ended = await service.end()

        assert ended.id == started.id
        assert ended.end_time == _at(10)
        assert await service.get_active() is None
        assert (await service.latest_past()).id == started.id
        assert isinstance(published[-1], IncidentEnded)

    @pytest.mark.asyncio
    async def test_end_without_active(self, service: IncidentService):
        """Nothing to end raises not found."""
        with pytest.raises(IncidentNotFoundError):
            await service.end()


class TestHistory:
    """Past incident management."""

    @pytest.mark.asyncio
    async def test_register_past(self, service: IncidentService, published: list):
        """A past incident is stored closed."""
        incident = await service.register("Earthquake", IncidentType.ACTUAL, _at(1), _at(3))

        assert not incident.is_active
        assert incident.duration is not None
        assert isinstance(published[0], IncidentUpdated)
        assert published[0].created is True

    @pytest.mark.asyncio
    async def test_register_rejects_end_before_start(self, service: IncidentService):
        """End must not precede start."""
        with pytest.raises(IncidentError, match="earlier than start_time"):
            await service.register("Bad", IncidentType.TEST, _at(5), _at(4))

    @pytest.mark.asyncio
    async def test_register_requires_name(self, service: IncidentService):
        """Name is required."""
        with pytest.raises(IncidentError, match="name"):
            await service.register("", IncidentType.TEST, _at(4), _at(5))

    @pytest.mark.asyncio
    async def test_list_past_and_latest(self, service: IncidentService):
        """History is newest start first and excludes the live incident."""
        await service.register("Older", IncidentType.TEST, _at(1, day=1), _at(2, day=1))
        await service.register("Newer", IncidentType.TEST, _at(1, day=5), _at(2, day=5))
        await service.start("Live", IncidentType.ACTUAL)

        past = await service.list_past()

        assert [i.name for i in past] == ["Newer", "Older"]
        assert (await service.latest_past()).name == "Newer"

    @pytest.mark.asyncio
    async def test_latest_past_empty(self, service: IncidentService):
        """No history yields None."""
        assert await service.latest_past() is None

    @pytest.mark.asyncio
    async def test_update(self, service: IncidentService, published: list):
        """Edits are saved and published."""
        incident = await service.register("Drill", IncidentType.TEST, _at(1), _at(2))

        updated = await service.update(
            incident.id, "Drill (Cebu)", IncidentType.ACTUAL, _at(1), _at(4)
        )

        assert updated.name == "Drill (Cebu)"
        fetched = await service.get(incident.id)
        assert fetched.type is IncidentType.ACTUAL
        assert fetched.end_time == _at(4)
        assert isinstance(published[-1], IncidentUpdated)
        assert published[-1].created is False

    @pytest.mark.asyncio
    async def test_update_missing(self, service: IncidentService):
        """Editing an unknown incident raises not found."""
        with pytest.raises(IncidentNotFoundError):
            await service.update(404, "Ghost", IncidentType.TEST, _at(1), _at(2))

    @pytest.mark.asyncio
    async def test_update_invalid_window(self, service: IncidentService):
        """Edits are validated like registrations."""
        incident = await service.register("Drill", IncidentType.TEST, _at(1), _at(2))

        with pytest.raises(IncidentError):
            await service.update(incident.id, "Drill", IncidentType.TEST, _at(3), _at(2))

    @pytest.mark.asyncio
    async def test_delete(self, service: IncidentService, published: list):
        """Deleted incidents are gone."""
        incident = await service.register("Drill", IncidentType.TEST, _at(1), _at(2))

        await service.delete(incident.id)

        with pytest.raises(IncidentNotFoundError):
            await service.get(incident.id)
        assert isinstance(published[-1], IncidentDeleted)

    @pytest.mark.asyncio
    async def test_delete_missing(self, service: IncidentService):
        """Deleting an unknown incident raises not found."""
        with pytest.raises(IncidentNotFoundError):
            await service.delete(404)


@pytest.mark.asyncio
async def test_works_without_event_bus(db_client: TursoClient):
    """The bus is optional."""
    service = IncidentService(IncidentRepository(db_client))

    incident = await service.start("Drill", IncidentType.TEST)

    assert incident.id is not None
