"""Pytest configuration and fixtures."""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from src.db.turso import TursoClient
from src.events import DATA_CHANGE_EVENTS
from src.events.bus import EventBus
from src.main import app
from src.repositories.contact_repo import ContactRepository
from src.repositories.incident_repo import IncidentRepository
from src.repositories.response_repo import ResponseRepository
from src.services.dashboard_service import DashboardService
from src.services.incident_service import IncidentService
from src.services.manual_entry import ManualEntryService

_STATE_KEYS = (
    "db",
    "contact_repo",
    "response_repo",
    "incident_repo",
    "event_bus",
    "dashboard_service",
    "incident_service",
    "manual_entry_service",
)


@pytest.fixture
async def client(tmp_path: Path) -> AsyncIterator[AsyncClient]:
    """Create async test client for FastAPI app with database."""
    # Set up test database
    db_path = tmp_path / "test_api.db"
    db = TursoClient(url=f"file:{db_path}")
    await db.connect()
    await db.init_schema()

    # Set up app state the way the lifespan does, without the scheduler
    contact_repo = ContactRepository(db)
    response_repo = ResponseRepository(db)
    incident_repo = IncidentRepository(db)
    event_bus = EventBus()
    dashboard_service = DashboardService(contact_repo, response_repo, incident_repo)
    for event_type in DATA_CHANGE_EVENTS:
        event_bus.subscribe(event_type, dashboard_service.handle_event)

    app.state.db = db
    app.state.contact_repo = contact_repo
    app.state.response_repo = response_repo
    app.state.incident_repo = incident_repo
    app.state.event_bus = event_bus
    app.state.dashboard_service = dashboard_service
    app.state.incident_service = IncidentService(incident_repo, event_bus=event_bus)
    app.state.manual_entry_service = ManualEntryService(
        response_repo, contact_repo=contact_repo, event_bus=event_bus
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Cleanup
    await db.close()
    # Clean up app state
    for key in _STATE_KEYS:
        if hasattr(app.state, key):
            delattr(app.state, key)
