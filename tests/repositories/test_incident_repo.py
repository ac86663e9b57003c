"""Tests for IncidentRepository."""

from datetime import UTC, datetime

import pytest

from src.db.turso import TursoClient
from src.models.incident import IncidentType
from src.repositories.incident_repo import IncidentRepository


@pytest.fixture
def repo(db_client: TursoClient) -> IncidentRepository:
    """Incident repository over the temp database."""
    return IncidentRepository(db_client)


def _at(hour: int, day: int = 19) -> datetime:
    return datetime(2026, 10, day, hour, 0, tzinfo=UTC)


@pytest.mark.asyncio
async def test_create_and_get(repo: IncidentRepository):
    """Created incidents read back with UTC times."""
    created = await repo.create("Drill", IncidentType.TEST, _at(8), _at(9))
    fetched = await repo.get(created.id)

    assert fetched is not None
    assert fetched.name == "Drill"
    assert fetched.start_time == _at(8)
    assert fetched.end_time == _at(9)


@pytest.mark.asyncio
async def test_get_active(repo: IncidentRepository):
    """Only the open incident is active."""
    await repo.create("Old", IncidentType.TEST, _at(8, day=1), _at(9, day=1))
    live = await repo.create("Typhoon", IncidentType.ACTUAL, _at(8))

    active = await repo.get_active()

    assert active is not None
    assert active.id == live.id
    assert active.is_active


@pytest.mark.asyncio
async def test_no_active(repo: IncidentRepository):
    """None when every incident is closed."""
    await repo.create("Old", IncidentType.TEST, _at(8), _at(9))

    assert await repo.get_active() is None


@pytest.mark.asyncio
async def test_list_past_newest_start_first(repo: IncidentRepository):
    """Ended incidents sorted by start descending; active ones excluded."""
    await repo.create("First", IncidentType.TEST, _at(8, day=1), _at(9, day=1))
    await repo.create("Third", IncidentType.TEST, _at(8, day=3), _at(9, day=3))
    await repo.create("Second", IncidentType.ACTUAL, _at(8, day=2), _at(9, day=2))
    await repo.create("Live", IncidentType.ACTUAL, _at(8))

    past = await repo.list_past()

    assert [i.name for i in past] == ["Third", "Second", "First"]
    assert [i.name for i in await repo.list_past(limit=1)] == ["Third"]


@pytest.mark.asyncio
async def test_update(repo: IncidentRepository):
    """update overwrites every field."""
    created = await repo.create("Drill", IncidentType.TEST, _at(8), _at(9))

    changed = created.model_copy(
        update={"name": "Renamed", "type": IncidentType.ACTUAL, "end_time": _at(10)}
    )
    assert await repo.update(changed) is True

    fetched = await repo.get(created.id)
    assert fetched.name == "Renamed"
    assert fetched.type is IncidentType.ACTUAL
    assert fetched.end_time == _at(10)


@pytest.mark.asyncio
async def test_set_end_time(repo: IncidentRepository):
    """Closing an incident removes it from active."""
    live = await repo.create("Live", IncidentType.TEST, _at(8))

    assert await repo.set_end_time(live.id, _at(9)) is True
    assert await repo.get_active() is None


@pytest.mark.asyncio
async def test_delete(repo: IncidentRepository):
    """delete reports whether a row existed."""
    created = await repo.create("Drill", IncidentType.TEST, _at(8), _at(9))

    assert await repo.delete(created.id) is True
    assert await repo.delete(created.id) is False
    assert await repo.get(created.id) is None
