"""Filtering, searching and sorting of projected contacts."""

from collections.abc import Iterable, Sequence

from src.dashboard.schemas import DashboardFilters
from src.models.contact import ProjectedContact
from src.models.status import ClassifiedStatus
from src.models.timestamps import parse_timestamp

# Searchable fields of the responses table
RESPONSE_SEARCH_FIELDS: tuple[str, ...] = (
    "name",
    "status",
    "department",
    "position",
    "clean_number",
)

# Searchable fields of the pending table
PENDING_SEARCH_FIELDS: tuple[str, ...] = ("name", "department", "position", "number")

SORTABLE_FIELDS = frozenset(
    {
        "name",
        "status",
        "position",
        "department",
        "location",
        "level",
        "clean_number",
        "response_time",
    }
)


def matches_filters(contact: ProjectedContact, filters: DashboardFilters) -> bool:
    """Check a single contact against every non-empty filter."""
    if filters.departments and contact.department not in filters.departments:
        return False
    if filters.locations and contact.location not in filters.locations:
        return False
    if filters.levels and contact.level_or_position not in filters.levels:
        return False
    if filters.statuses and contact.status not in filters.statuses:
        return False
    return True


def apply_filters(
    contacts: Iterable[ProjectedContact],
    filters: DashboardFilters | None = None,
) -> list[ProjectedContact]:
    """Return the contacts passing all filters, preserving order."""
    filters = filters or DashboardFilters()
    return [c for c in contacts if matches_filters(c, filters)]


def default_filters(contacts: Iterable[ProjectedContact]) -> DashboardFilters:
    """Initial filters for a fresh view.

    Narrows to departments that already have at least one responder so
    the view opens on the groups the call tree actually reached.
    """
    departments: list[str] = []
    for contact in contacts:
        if contact.has_responded and contact.department:
            if contact.department not in departments:
                departments.append(contact.department)
    return DashboardFilters(departments=departments)


def filter_options(contacts: Iterable[ProjectedContact]) -> dict[str, list[str]]:
    """Distinct non-empty values available for each filter, sorted."""
    departments: set[str] = set()
    locations: set[str] = set()
    levels: set[str] = set()
    for contact in contacts:
        if contact.department:
            departments.add(contact.department)
        if contact.location:
            locations.add(contact.location)
        if contact.level_or_position:
            levels.add(contact.level_or_position)
    return {
        "departments": sorted(departments),
        "locations": sorted(locations),
        "levels": sorted(levels),
        "statuses": [s.value for s in ClassifiedStatus],
    }


def _field_text(contact: ProjectedContact, field: str) -> str:
    value = getattr(contact, field, None)
    if value is None:
        return ""
    if isinstance(value, ClassifiedStatus):
        return value.value
    return str(value)


def _response_epoch(contact: ProjectedContact) -> float:
    parsed = parse_timestamp(contact.response_time)
    return parsed.timestamp() if parsed else 0.0


def search_contacts(
    contacts: Iterable[ProjectedContact],
    query: str | None,
    fields: Sequence[str] = RESPONSE_SEARCH_FIELDS,
) -> list[ProjectedContact]:
    """Case-insensitive substring search over the given fields."""
    if not query:
        return list(contacts)
    q = query.lower()
    return [
        c for c in contacts if any(q in _field_text(c, f).lower() for f in fields)
    ]


def sort_contacts(
    contacts: Iterable[ProjectedContact],
    key: str | None,
    descending: bool = False,
) -> list[ProjectedContact]:
    """Sort contacts by a table column.

    response_time sorts chronologically with missing times first;
    every other column sorts case-insensitively as text.
    """
    items = list(contacts)
    if not key:
        return items
    if key not in SORTABLE_FIELDS:
        msg = f"Cannot sort by {key!r}"
        raise ValueError(msg)

    if key == "response_time":
        return sorted(items, key=_response_epoch, reverse=descending)
    return sorted(items, key=lambda c: _field_text(c, key).lower(), reverse=descending)
