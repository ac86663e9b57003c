"""Aggregate statistics over projected contacts.

All functions take the already-filtered contact list so KPI cards,
charts and tables always agree with the active filters.
"""

from collections import Counter
from collections.abc import Sequence
from typing import Literal

from src.dashboard.schemas import (
    DashboardStats,
    DemographicRow,
    StatusCount,
    TimelinePoint,
)
from src.models.contact import ProjectedContact
from src.models.status import AFFECTED_STATUSES, STATUS_ORDER, ClassifiedStatus
from src.models.timestamps import parse_timestamp

UNKNOWN_GROUP = "Unknown"


def compute_stats(contacts: Sequence[ProjectedContact]) -> DashboardStats:
    """Count contacts per KPI."""
    counts = Counter(c.status for c in contacts)
    return DashboardStats(
        total=len(contacts),
        responded=sum(n for s, n in counts.items() if s.is_response),
        safe=counts[ClassifiedStatus.SAFE],
        slight=counts[ClassifiedStatus.SLIGHT],
        moderate=counts[ClassifiedStatus.MODERATE],
        severe=counts[ClassifiedStatus.SEVERE],
        affected=sum(counts[s] for s in AFFECTED_STATUSES),
        pending=counts[ClassifiedStatus.NO_RESPONSE],
    )


def status_distribution(contacts: Sequence[ProjectedContact]) -> list[StatusCount]:
    """Contacts per status in display order, omitting empty statuses."""
    counts = Counter(c.status for c in contacts)
    return [
        StatusCount(status=status, count=counts[status])
        for status in STATUS_ORDER
        if counts[status] > 0
    ]


def demographic_breakdown(
    contacts: Sequence[ProjectedContact],
    category: Literal["department", "location"],
) -> list[DemographicRow]:
    """Status counts per department or location, largest group first."""
    rows: dict[str, DemographicRow] = {}
    for contact in contacts:
        group = getattr(contact, category) or UNKNOWN_GROUP
        row = rows.setdefault(group, DemographicRow(name=group))
        row.counts[contact.status] = row.counts.get(contact.status, 0) + 1
        row.total += 1
    return sorted(rows.values(), key=lambda r: r.total, reverse=True)


def response_timeline(contacts: Sequence[ProjectedContact]) -> list[TimelinePoint]:
    """Cumulative responses over time, oldest first.

    Contacts without a parseable response time are left out.
    """
    times = []
    for contact in contacts:
        if not contact.has_responded:
            continue
        parsed = parse_timestamp(contact.response_time)
        if parsed is not None:
            times.append(parsed)
    times.sort()
    return [TimelinePoint(timestamp=t, total=i + 1) for i, t in enumerate(times)]
