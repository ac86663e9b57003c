"""Incident (event) model for declared response windows."""

from datetime import datetime, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.models.timestamps import parse_timestamp


class IncidentType(str, Enum):
    """Whether the call tree was activated for a drill or a real event."""

    TEST = "test"
    ACTUAL = "actual"


class Incident(BaseModel):
    """A declared incident window.

    An incident with no end_time is active. Responses received between
    start_time and end_time (or now, while active) are scoped to it.
    """

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)

    id: int | None = Field(default=None, description="Storage row id")
    name: str = Field(min_length=1, max_length=200, description="Event name")
    type: IncidentType = Field(default=IncidentType.TEST)
    start_time: datetime = Field(description="When the window opened (UTC)")
    end_time: datetime | None = Field(
        default=None, description="When the window closed; None while active"
    )

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_stored_time(cls, v):
        """Stored times are ISO strings; normalize to aware UTC."""
        if v is None or v == "":
            return None
        parsed = parse_timestamp(v)
        if parsed is None:
            msg = f"Invalid timestamp: {v!r}"
            raise ValueError(msg)
        return parsed

    @model_validator(mode="after")
    def end_after_start(self) -> "Incident":
        """An ended incident cannot close before it opened."""
        if self.end_time is not None and self.end_time < self.start_time:
            msg = "end_time must not be earlier than start_time"
            raise ValueError(msg)
        return self

    @property
    def is_active(self) -> bool:
        """True while the incident has not been ended."""
        return self.end_time is None

    @property
    def duration(self) -> timedelta | None:
        """Length of a closed incident."""
        if self.end_time is None:
            return None
        return self.end_time - self.start_time
