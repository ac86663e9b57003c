"""Display formatting for phone numbers, timestamps and durations.

Phone display assumes Philippine numbering (+63). Display formatting
is separate from normalize(), which only strips symbols.
"""

import re
from datetime import datetime, timedelta

from src.models.timestamps import parse_timestamp

_NON_DIGIT = re.compile(r"\D")


def format_phone_number(number: str | None) -> str:
    """Format a number for display in +63 form where recognizable.

    Examples:
        >>> format_phone_number("09171234567")
        '+639171234567'
        >>> format_phone_number("9171234567")
        '+639171234567'
        >>> format_phone_number("")
        '-'
    """
    if not number:
        return "-"
    digits = _NON_DIGIT.sub("", number)
    if len(digits) == 10 and digits.startswith("9"):
        return f"+63{digits}"
    if len(digits) == 12 and digits.startswith("63"):
        return f"+{digits}"
    if len(digits) == 11 and digits.startswith("0"):
        return f"+63{digits[1:]}"
    return number if number.startswith("+") else f"+{digits}"


def format_datetime(value: str | datetime | None) -> str:
    """Format a timestamp as "October 19, 3:05 PM" in UTC, "-" when missing."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return "-"
    hour = parsed.hour % 12 or 12
    meridiem = "AM" if parsed.hour < 12 else "PM"
    return f"{parsed:%B} {parsed.day}, {hour}:{parsed:%M} {meridiem}"


def format_duration(duration: timedelta) -> str:
    """Format a duration as "45m" or "2h 5m"."""
    minutes = int(duration.total_seconds() // 60)
    if minutes < 60:
        return f"{minutes}m"
    return f"{minutes // 60}h {minutes % 60}m"
