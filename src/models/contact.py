"""Roster contact models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.status import ClassifiedStatus, MatchKind


class Contact(BaseModel):
    """A roster entry.

    Loaded wholesale from storage on each dashboard load. Text fields
    default to empty strings so a sparse roster row still loads.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str | None = Field(default=None, description="Stable identifier")
    name: str = Field(default="", description="Display name")
    number: str = Field(default="", description="Phone number as entered")
    department: str = Field(default="")
    location: str = Field(default="")
    position: str = Field(default="")
    level: str | None = Field(default=None, description="Optional seniority level")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str | None:
        """Accept integer ids from storage."""
        if v is None or v == "":
            return None
        return str(v)

    @field_validator("name", "number", "department", "location", "position", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """Numbers may arrive as ints (spreadsheet imports); None becomes ''."""
        if v is None:
            return ""
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        return str(v)

    @field_validator("level", mode="before")
    @classmethod
    def coerce_level(cls, v: Any) -> str | None:
        """Blank levels are treated as missing."""
        if v is None or str(v).strip() == "":
            return None
        return str(v)

    @property
    def level_or_position(self) -> str:
        """Value used by the level filter."""
        return self.level or self.position


class ProjectedContact(Contact):
    """A contact enriched with the result of one matching pass."""

    clean_number: str = Field(default="", description="Normalized phone key")
    status: ClassifiedStatus = Field(default=ClassifiedStatus.NO_RESPONSE)
    response_content: str | None = Field(
        default=None, description="Raw content of the recorded response"
    )
    response_time: str | None = Field(
        default=None, description="Timestamp of the recorded response"
    )
    match_kind: MatchKind | None = Field(
        default=None, description="How the recorded response was linked"
    )

    @property
    def has_responded(self) -> bool:
        """True once a classifiable reply was recorded."""
        return self.status.is_response
