"""Change notification infrastructure.

Provides:
- Event: Base class for all change notifications
- EventBus: In-process pub/sub for event routing
"""

from src.events.base import Event
from src.events.bus import EventBus
from src.events.types import (
    IncidentDeleted,
    IncidentEnded,
    IncidentStarted,
    IncidentUpdated,
    ManualResponseRecorded,
)

# Events after which the dashboard must be reloaded
DATA_CHANGE_EVENTS: tuple[type[Event], ...] = (
    IncidentStarted,
    IncidentEnded,
    IncidentUpdated,
    IncidentDeleted,
    ManualResponseRecorded,
)

__all__ = [
    # Base
    "Event",
    # Infrastructure
    "EventBus",
    "DATA_CHANGE_EVENTS",
    # Event types
    "IncidentStarted",
    "IncidentEnded",
    "IncidentUpdated",
    "IncidentDeleted",
    "ManualResponseRecorded",
]
