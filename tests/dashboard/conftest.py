"""Shared fixtures for dashboard tests."""

import pytest

from src.models.contact import ProjectedContact
from src.models.status import ClassifiedStatus, MatchKind


def projected(
    contact_id: str,
    status: ClassifiedStatus = ClassifiedStatus.NO_RESPONSE,
    response_time: str | None = None,
    **fields,
) -> ProjectedContact:
    """Build a projected contact with a reply when status is set."""
    responded = status is not ClassifiedStatus.NO_RESPONSE
    return ProjectedContact(
        id=contact_id,
        status=status,
        response_time=response_time,
        match_kind=MatchKind.PHONE if responded else None,
        **fields,
    )


@pytest.fixture
def contacts() -> list[ProjectedContact]:
    """Projected roster with a mix of statuses."""
    return [
        projected(
            "1",
            ClassifiedStatus.SAFE,
            "2026-10-19T08:05:00Z",
            name="Juan Dela Cruz",
            number="09171111111",
            clean_number="09171111111",
            department="IT",
            location="Manila",
            position="Engineer",
            level="L2",
        ),
        projected(
            "2",
            ClassifiedStatus.SEVERE,
            "2026-10-19T08:01:00Z",
            name="Maria Santos",
            number="09172222222",
            clean_number="09172222222",
            department="HR",
            location="Cebu",
            position="Manager",
        ),
        projected(
            "3",
            ClassifiedStatus.SLIGHT,
            "2026-10-19T08:03:00Z",
            name="Mario Santos",
            number="09173333333",
            clean_number="09173333333",
            department="IT",
            location="",
            position="Analyst",
        ),
        projected(
            "4",
            name="Jose Rizal",
            number="09174444444",
            clean_number="09174444444",
            department="Finance",
            location="Manila",
            position="Clerk",
        ),
        projected(
            "5",
            name="Andres Bonifacio",
            number="09175555555",
            clean_number="09175555555",
            department="IT",
            location="Manila",
            position="Engineer",
            level="L3",
        ),
    ]
