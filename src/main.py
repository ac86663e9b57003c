"""FastAPI application entry point."""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import AsyncExitStack, asynccontextmanager

from fastapi import FastAPI

from src.api.router import api_router
from src.config import settings
from src.db.turso import TursoClient
from src.events import DATA_CHANGE_EVENTS
from src.events.bus import EventBus
from src.repositories.contact_repo import ContactRepository
from src.repositories.incident_repo import IncidentRepository
from src.repositories.response_repo import ResponseRepository
from src.services.dashboard_service import DashboardService
from src.services.incident_service import IncidentService
from src.services.manual_entry import ManualEntryService

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _initialize_services(app: FastAPI, db: TursoClient) -> DashboardService:
    """Build repositories and services and register them in app state.

    The dashboard service is subscribed to every data-change event so
    incident and manual-entry writes trigger a background refresh.
    """
    contact_repo = ContactRepository(db, page_size=settings.page_size)
    response_repo = ResponseRepository(db, page_size=settings.page_size)
    incident_repo = IncidentRepository(db)
    app.state.contact_repo = contact_repo
    app.state.response_repo = response_repo
    app.state.incident_repo = incident_repo

    event_bus = EventBus()
    app.state.event_bus = event_bus

    dashboard_service = DashboardService(
        contact_repo,
        response_repo,
        incident_repo,
        lookback_hours=settings.default_lookback_hours,
    )
    app.state.dashboard_service = dashboard_service

    app.state.incident_service = IncidentService(incident_repo, event_bus=event_bus)
    app.state.manual_entry_service = ManualEntryService(
        response_repo,
        contact_repo=contact_repo,
        event_bus=event_bus,
        country_code=settings.manual_entry_country_code,
    )

    for event_type in DATA_CHANGE_EVENTS:
        event_bus.subscribe(event_type, dashboard_service.handle_event)
    logger.info(f"Dashboard subscribed to {len(DATA_CHANGE_EVENTS)} event types")

    return dashboard_service


def _get_refresh_scheduler_context(service: DashboardService):
    """Get refresh scheduler lifespan context manager.

    Returns a no-op context if scheduler is disabled via environment.
    """
    from src.services.refresh_scheduler import dashboard_refresh_lifespan

    # Allow disabling scheduler for tests
    if os.environ.get("DISABLE_REFRESH_SCHEDULER"):

        @asynccontextmanager
        async def noop_context():
            yield

        return noop_context()

    return dashboard_refresh_lifespan(service, settings.refresh_interval_seconds)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan management.

    Startup:
    - Initialize database connection and schema
    - Initialize repositories, event bus and services
    - Start the dashboard refresh scheduler

    Shutdown:
    - Stop the scheduler
    - Close database connection
    """
    logger.info(f"Starting {settings.app_name}...")

    db = TursoClient()
    await db.connect()
    await db.init_schema()
    app.state.db = db
    logger.info(f"Database connected: {db.url}")

    dashboard_service = _initialize_services(app, db)

    async with AsyncExitStack() as stack:
        await stack.enter_async_context(_get_refresh_scheduler_context(dashboard_service))
        yield

    logger.info(f"Shutting down {settings.app_name}...")
    await db.close()


app = FastAPI(
    title=settings.app_name,
    description="Emergency call tree response tracking",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
