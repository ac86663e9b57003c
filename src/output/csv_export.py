"""CSV export of dashboard tables.

Column sets mirror the on-screen tables: responders, unknown numbers,
and pending contacts.
"""

import csv
import io
from collections.abc import Iterable

from src.models.contact import ProjectedContact
from src.models.response import RawResponse

RESPONSES_COLUMNS = [
    "name",
    "status",
    "position",
    "department",
    "location",
    "datetime",
    "number",
]
UNKNOWN_COLUMNS = ["Phone", "Message", "Time"]
PENDING_COLUMNS = ["Name", "Dept", "Position", "Phone"]


def _write(columns: list[str], rows: Iterable[dict[str, str]]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=columns, lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


def responses_csv(contacts: Iterable[ProjectedContact]) -> str:
    """Export responders with their status and response time."""
    return _write(
        RESPONSES_COLUMNS,
        (
            {
                "name": c.name,
                "status": c.status.value,
                "position": c.position,
                "department": c.department,
                "location": c.location,
                "datetime": c.response_time or "",
                "number": c.clean_number,
            }
            for c in contacts
        ),
    )


def unknown_responses_csv(responses: Iterable[RawResponse]) -> str:
    """Export replies that matched no contact, for manual checking."""
    return _write(
        UNKNOWN_COLUMNS,
        (
            {"Phone": r.contact, "Message": r.contents, "Time": r.timestamp}
            for r in responses
        ),
    )


def pending_csv(contacts: Iterable[ProjectedContact]) -> str:
    """Export contacts that have not replied yet."""
    return _write(
        PENDING_COLUMNS,
        (
            {
                "Name": c.name,
                "Dept": c.department,
                "Position": c.position,
                "Phone": c.number,
            }
            for c in contacts
        ),
    )
