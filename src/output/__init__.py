"""Output formatting and CSV export.

Provides:
- CSV exports for responders, unknown replies and pending contacts
- Display formatting for phone numbers, timestamps and durations
"""

from src.output.csv_export import pending_csv, responses_csv, unknown_responses_csv
from src.output.formatting import format_datetime, format_duration, format_phone_number

__all__ = [
    "format_datetime",
    "format_duration",
    "format_phone_number",
    "pending_csv",
    "responses_csv",
    "unknown_responses_csv",
]
