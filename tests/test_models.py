"""Tests for domain models."""

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from src.models.contact import Contact, ProjectedContact
from src.models.incident import Incident, IncidentType
from src.models.response import RawResponse
from src.models.status import STATUS_ORDER, ClassifiedStatus, ResponseOrigin
from src.models.timestamps import parse_timestamp, to_iso_z


class TestClassifiedStatus:
    """Tests for ClassifiedStatus."""

    def test_severity_order(self):
        """Safe < Slight < Moderate < Severe; No Response has no rank."""
        ranks = [s.severity_rank for s in STATUS_ORDER]
        assert ranks == [0, 1, 2, 3, None]

    def test_is_response(self):
        """Only No Response is not a reply."""
        assert ClassifiedStatus.SAFE.is_response
        assert not ClassifiedStatus.NO_RESPONSE.is_response


class TestContact:
    """Tests for Contact."""

    def test_sparse_row_loads(self):
        """Missing text fields become empty strings."""
        contact = Contact.model_validate({"id": 5, "name": None, "number": None})

        assert contact.id == "5"
        assert contact.name == ""
        assert contact.number == ""
        assert contact.level is None

    def test_numeric_number(self):
        """Spreadsheet floats keep their integer digits."""
        assert Contact(number=9171234567.0).number == "9171234567"

    def test_level_or_position(self):
        """Blank levels fall back to position."""
        assert Contact(position="Clerk", level="  ").level_or_position == "Clerk"
        assert Contact(position="Clerk", level="L1").level_or_position == "L1"

    def test_projected_defaults(self):
        """A projected contact starts without a reply."""
        projected = ProjectedContact(name="Juan")

        assert projected.status is ClassifiedStatus.NO_RESPONSE
        assert projected.match_kind is None
        assert not projected.has_responded


class TestRawResponse:
    """Tests for RawResponse."""

    def test_storage_column_alias(self):
        """The datetime column populates timestamp."""
        response = RawResponse.model_validate(
            {"contact": "0917", "contents": "1", "datetime": "2026-10-19T08:00:00Z"}
        )

        assert response.timestamp == "2026-10-19T08:00:00Z"
        assert response.origin is ResponseOrigin.SMS

    def test_field_name_accepted(self):
        """timestamp can be passed by field name."""
        assert RawResponse(timestamp="2026-10-19T08:00:00Z").timestamp.endswith("Z")

    def test_datetime_value_is_formatted(self):
        """Datetime values are stored as ISO Z strings."""
        value = datetime(2026, 10, 19, 8, 0, tzinfo=UTC)

        assert RawResponse(timestamp=value).timestamp == "2026-10-19T08:00:00Z"

    def test_legacy_rows_without_origin(self):
        """Null origin falls back to sms."""
        response = RawResponse.model_validate({"origin": None, "contents": None})

        assert response.origin is ResponseOrigin.SMS
        assert response.contents == ""

    def test_integer_uid(self):
        """Gateway uids are numeric."""
        assert RawResponse(uid=12345).uid == "12345"


class TestIncident:
    """Tests for Incident."""

    def test_active_incident(self):
        """No end time means active."""
        incident = Incident(name="Drill", start_time="2026-10-19T08:00:00Z")

        assert incident.is_active
        assert incident.duration is None
        assert incident.type is IncidentType.TEST
        assert incident.start_time == datetime(2026, 10, 19, 8, 0, tzinfo=UTC)

    def test_duration(self):
        """Closed incidents report their length."""
        incident = Incident(
            name="Earthquake",
            type=IncidentType.ACTUAL,
            start_time="2026-10-19T08:00:00Z",
            end_time="2026-10-19T10:05:00Z",
        )

        assert not incident.is_active
        assert incident.duration == timedelta(hours=2, minutes=5)

    def test_end_before_start_rejected(self):
        """An incident cannot end before it starts."""
        with pytest.raises(ValidationError):
            Incident(
                name="Bad",
                start_time="2026-10-19T10:00:00Z",
                end_time="2026-10-19T08:00:00Z",
            )

    def test_blank_name_rejected(self):
        """Names are stripped and required."""
        with pytest.raises(ValidationError):
            Incident(name="   ", start_time="2026-10-19T10:00:00Z")

    def test_invalid_timestamp_rejected(self):
        """Unparseable times fail validation."""
        with pytest.raises(ValidationError):
            Incident(name="Drill", start_time="not a time")


class TestTimestamps:
    """Tests for timestamp helpers."""

    def test_round_trip(self):
        """to_iso_z output parses back to the same instant."""
        value = datetime(2026, 10, 19, 8, 15, tzinfo=UTC)

        assert parse_timestamp(to_iso_z(value)) == value

    def test_naive_treated_as_utc(self):
        """Naive datetimes are taken as UTC."""
        assert to_iso_z(datetime(2026, 10, 19, 8, 15)) == "2026-10-19T08:15:00Z"
        assert parse_timestamp("2026-10-19T08:15:00").tzinfo is UTC

    def test_offset_converted(self):
        """Offsets are converted to UTC."""
        parsed = parse_timestamp("2026-10-19T16:15:00+08:00")

        assert parsed == datetime(2026, 10, 19, 8, 15, tzinfo=UTC)

    def test_invalid(self):
        """Empty and unparseable values give None."""
        assert parse_timestamp("") is None
        assert parse_timestamp("soon") is None
        assert parse_timestamp(None) is None
