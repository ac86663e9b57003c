"""Inbound response records."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.status import ResponseOrigin
from src.models.timestamps import to_iso_z

_ORIGIN_VALUES = {origin.value for origin in ResponseOrigin}


class RawResponse(BaseModel):
    """An inbound message as stored.

    Storage names the timestamp column ``datetime``; the model exposes it
    as ``timestamp`` and accepts either name.
    """

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str | None = Field(default=None, description="Storage row id")
    uid: str | None = Field(default=None, description="Externally assigned unique id")
    contact: str = Field(default="", description="Sender number as received")
    contents: str = Field(default="", description="Free-text message body")
    timestamp: str = Field(default="", alias="datetime", description="ISO-8601 time")
    origin: ResponseOrigin = Field(
        default=ResponseOrigin.SMS,
        description="Set to manual by the manual-entry write path",
    )
    contact_id: str | None = Field(
        default=None,
        description="Roster contact id, set only by the manual-entry write path",
    )

    @field_validator("id", "uid", "contact_id", mode="before")
    @classmethod
    def coerce_optional_id(cls, v: Any) -> str | None:
        """Gateway uids are integers; manual uids are strings."""
        if v is None or v == "":
            return None
        return str(v)

    @field_validator("contact", "contents", "timestamp", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """Missing fields degrade to empty strings."""
        if v is None:
            return ""
        if isinstance(v, datetime):
            return to_iso_z(v)
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        return str(v)

    @field_validator("origin", mode="before")
    @classmethod
    def default_origin(cls, v: Any) -> ResponseOrigin:
        """Legacy rows have no origin column; unknown values count as SMS."""
        if isinstance(v, ResponseOrigin):
            return v
        if isinstance(v, str) and v in _ORIGIN_VALUES:
            return ResponseOrigin(v)
        return ResponseOrigin.SMS
