"""Dashboard service: loads data for a window and runs the matcher.

The live view is cached as a DashboardSnapshot and refreshed on a timer
and after data-change events. A failed refresh keeps the previous data
and records the error so the view never blanks out.
"""

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta

import structlog
from pydantic import BaseModel, Field

from src.classification.matcher import ResponseMatcher
from src.events.base import Event
from src.models.contact import ProjectedContact
from src.models.incident import Incident
from src.models.response import RawResponse
from src.models.timestamps import to_iso_z, utc_now
from src.repositories.contact_repo import ContactRepository
from src.repositories.incident_repo import IncidentRepository
from src.repositories.response_repo import ResponseRepository

logger = structlog.get_logger()


class DashboardSnapshot(BaseModel):
    """Everything the dashboard renders for one window."""

    contacts: list[ProjectedContact] = Field(default_factory=list)
    unknown_responses: list[RawResponse] = Field(default_factory=list)
    last_updated: datetime | None = Field(
        default=None, description="When data was last loaded successfully"
    )
    window_start: datetime | None = Field(default=None)
    window_end: datetime | None = Field(
        default=None, description="None while the window is open-ended"
    )
    incident: Incident | None = Field(
        default=None, description="Incident the window belongs to, if any"
    )
    loading: bool = Field(default=False, description="Foreground load in progress")
    error: str | None = Field(default=None, description="Last refresh failure")


class DashboardService:
    """Builds dashboard snapshots from storage.

    Holds the live snapshot. Incident history snapshots are built on
    demand and not cached.
    """

    def __init__(
        self,
        contact_repo: ContactRepository,
        response_repo: ResponseRepository,
        incident_repo: IncidentRepository,
        matcher: ResponseMatcher | None = None,
        lookback_hours: int = 24,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize service with repository dependencies.

        Args:
            contact_repo: Roster storage
            response_repo: Response storage
            incident_repo: Incident storage
            matcher: Matching engine (default ResponseMatcher())
            lookback_hours: Live window length when no incident is active
            clock: Returns the current time; replaced in tests
        """
        self._contacts = contact_repo
        self._responses = response_repo
        self._incidents = incident_repo
        self._matcher = matcher or ResponseMatcher()
        self._lookback = timedelta(hours=lookback_hours)
        self._clock = clock
        self._snapshot = DashboardSnapshot()
        self._lock = asyncio.Lock()

    @property
    def snapshot(self) -> DashboardSnapshot:
        """The most recent live snapshot."""
        return self._snapshot

    def resolve_window(self, active: Incident | None) -> tuple[datetime, Incident | None]:
        """Start of the live window.

        The active incident's start when one exists, otherwise
        ``lookback_hours`` before now.
        """
        if active is not None:
            return active.start_time, active
        return self._clock() - self._lookback, None

    async def build_snapshot(
        self,
        start: datetime,
        end: datetime | None = None,
        incident: Incident | None = None,
    ) -> DashboardSnapshot:
        """Load roster and responses for a window and match them.

        Storage errors propagate to the caller.

        Args:
            start: Window start
            end: Window end, None for open-ended
            incident: Incident the window belongs to

        Returns:
            A fresh snapshot
        """
        roster = await self._contacts.list_all()
        responses = await self._responses.list_in_window(
            to_iso_z(start), to_iso_z(end) if end else None
        )
        outcome = self._matcher.match(roster, responses)

        logger.info(
            "dashboard data loaded",
            contacts=len(outcome.contacts),
            responses=len(responses),
            matched=outcome.matched_count,
            unknown=len(outcome.unknown_responses),
        )

        return DashboardSnapshot(
            contacts=outcome.contacts,
            unknown_responses=outcome.unknown_responses,
            last_updated=self._clock(),
            window_start=start,
            window_end=end,
            incident=incident,
        )

    async def snapshot_for_incident(self, incident: Incident) -> DashboardSnapshot:
        """Build a snapshot scoped to an incident's window."""
        return await self.build_snapshot(incident.start_time, incident.end_time, incident)

    async def refresh(self, background: bool = False) -> DashboardSnapshot:
        """Reload the live snapshot.

        A foreground refresh marks the snapshot as loading while data is
        fetched; a background refresh never touches the loading flag.
        On failure the previous contacts and unknown responses are kept
        and ``error`` is set.

        Args:
            background: True for timer and event-driven refreshes

        Returns:
            The new live snapshot
        """
        async with self._lock:
            if not background:
                self._snapshot = self._snapshot.model_copy(
                    update={"loading": True, "error": None}
                )
            try:
                active = await self._incidents.get_active()
                start, incident = self.resolve_window(active)
                fresh = await self.build_snapshot(start, None, incident)
            except Exception as e:
                logger.error(
                    "dashboard refresh failed", error=str(e), background=background
                )
                update: dict = {"error": str(e) or type(e).__name__}
                if not background:
                    update["loading"] = False
                self._snapshot = self._snapshot.model_copy(update=update)
                return self._snapshot

            if background:
                fresh.loading = self._snapshot.loading
            self._snapshot = fresh
            return self._snapshot

    async def handle_event(self, event: Event) -> None:
        """Refresh in the background after stored data changed."""
        logger.info("data changed, refreshing dashboard", event_type=event.event_type)
        await self.refresh(background=True)
