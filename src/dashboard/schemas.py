"""Dashboard filter and aggregation schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, computed_field

from src.models.status import ClassifiedStatus


class DashboardFilters(BaseModel):
    """Multi-select filters applied to the projected roster.

    An empty list places no constraint on that field.
    """

    departments: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    levels: list[str] = Field(
        default_factory=list,
        description="Matched against level, falling back to position",
    )
    statuses: list[ClassifiedStatus] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when no filter is set."""
        return not (self.departments or self.locations or self.levels or self.statuses)


class DashboardStats(BaseModel):
    """KPI counts for the filtered roster."""

    total: int = Field(default=0, description="Contacts after filtering")
    responded: int = Field(default=0, description="Contacts with any classified reply")
    safe: int = Field(default=0)
    slight: int = Field(default=0)
    moderate: int = Field(default=0)
    severe: int = Field(default=0)
    affected: int = Field(default=0, description="Slight + moderate + severe")
    pending: int = Field(default=0, description="Contacts with no reply yet")

    @staticmethod
    def _percent(part: int, whole: int) -> int:
        if whole <= 0:
            return 0
        return round(part / whole * 100)

    @computed_field
    @property
    def response_rate(self) -> int:
        """Percent of contacts that responded."""
        return self._percent(self.responded, self.total)

    @computed_field
    @property
    def safe_rate(self) -> int:
        """Percent of responders reporting safe."""
        return self._percent(self.safe, self.responded)

    @computed_field
    @property
    def severe_rate(self) -> int:
        """Percent of responders reporting severe."""
        return self._percent(self.severe, self.responded)

    @computed_field
    @property
    def pending_rate(self) -> int:
        """Percent of contacts still awaited."""
        return self._percent(self.pending, self.total)


class StatusCount(BaseModel):
    """One slice of the status distribution."""

    status: ClassifiedStatus
    count: int = Field(ge=0)


class DemographicRow(BaseModel):
    """Status counts for one department or location."""

    name: str = Field(description="Department/location; 'Unknown' when blank")
    counts: dict[ClassifiedStatus, int] = Field(default_factory=dict)
    total: int = Field(default=0, ge=0)


class TimelinePoint(BaseModel):
    """Cumulative response count at a point in time."""

    timestamp: datetime
    total: int = Field(ge=1, description="Responses received up to this point")
