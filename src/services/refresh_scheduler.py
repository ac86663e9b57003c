"""APScheduler integration for periodic dashboard refreshes.

Provides scheduler setup, the refresh job, and FastAPI lifespan
integration for the live dashboard.
"""

from contextlib import asynccontextmanager
from datetime import UTC
from typing import TYPE_CHECKING

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from src.services.dashboard_service import DashboardService

logger = structlog.get_logger()

REFRESH_JOB_ID = "dashboard_refresh"

# Module-level scheduler instance
_scheduler: AsyncIOScheduler | None = None


def get_scheduler() -> AsyncIOScheduler:
    """Get or create the scheduler instance.

    Returns:
        AsyncIOScheduler instance
    """
    global _scheduler
    if _scheduler is None:
        _scheduler = AsyncIOScheduler(timezone=UTC)
    return _scheduler


def reset_scheduler() -> None:
    """Reset the scheduler instance (for testing)."""
    global _scheduler
    if _scheduler is not None and _scheduler.running:
        _scheduler.shutdown(wait=False)
    _scheduler = None


@asynccontextmanager
async def dashboard_refresh_lifespan(
    service: "DashboardService",
    interval_seconds: int = 60,
) -> "AsyncGenerator[None, None]":
    """Lifespan context manager for the refresh scheduler.

    Loads the dashboard once, then starts a job that refreshes it in the
    background every ``interval_seconds``. Shuts down cleanly on exit.

    Usage:
        async with dashboard_refresh_lifespan(service, 60):
            # Scheduler is running
            yield
        # Scheduler stopped
    """
    scheduler = get_scheduler()

    await service.refresh()

    scheduler.add_job(
        refresh_dashboard,
        "interval",
        seconds=interval_seconds,
        args=[service],
        id=REFRESH_JOB_ID,
        replace_existing=True,
        max_instances=1,  # A slow load must not stack up behind itself
    )

    logger.info("Starting dashboard refresh scheduler", interval_seconds=interval_seconds)
    scheduler.start()

    try:
        yield
    finally:
        logger.info("Shutting down dashboard refresh scheduler")
        scheduler.shutdown(wait=False)


async def refresh_dashboard(service: "DashboardService") -> None:
    """Scheduled job: reload the live snapshot without a loading state.

    DashboardService.refresh records storage failures on the snapshot;
    anything else is logged here so the job keeps running.
    """
    try:
        snapshot = await service.refresh(background=True)
        logger.debug(
            "Dashboard refreshed",
            contacts=len(snapshot.contacts),
            unknown=len(snapshot.unknown_responses),
        )
    except Exception as e:
        logger.error("Dashboard refresh job failed", error=str(e))
