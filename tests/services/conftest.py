"""Shared fixtures for service tests."""

from pathlib import Path

import pytest

from src.db.turso import TursoClient
from src.events.bus import EventBus
from src.events.types import (
    IncidentDeleted,
    IncidentEnded,
    IncidentStarted,
    IncidentUpdated,
    ManualResponseRecorded,
)


@pytest.fixture
async def db_client(tmp_path: Path):
    """Create a temp file database client with the schema applied."""
    db_path = tmp_path / "test_services.db"
    client = TursoClient(url=f"file:{db_path}")
    await client.connect()
    await client.init_schema()
    yield client
    await client.close()


@pytest.fixture
def published() -> list:
    """Events captured from the bus."""
    return []


@pytest.fixture
def event_bus(published: list) -> EventBus:
    """Event bus recording every data-change event."""
    bus = EventBus()

    async def record(event) -> None:
        published.append(event)

    for event_type in (
        IncidentStarted,
        IncidentEnded,
        IncidentUpdated,
        IncidentDeleted,
        ManualResponseRecorded,
    ):
        bus.subscribe(event_type, record)
    return bus
