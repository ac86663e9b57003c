"""Phone number normalization for roster lookups.

The normalized key is a comparison key only; it is never displayed.
Country codes are not canonicalized: "09171234567" and "+639171234567"
produce different keys ("09171234567" vs "639171234567").
"""

import re

# Whitespace, hyphens, parentheses and plus signs
_STRIP_PATTERN = re.compile(r"[\s\-+()]")


def normalize(raw_number: str | int | float | None) -> str:
    """Reduce a phone number to its lookup key.

    Args:
        raw_number: Number as entered or received. May be numeric or empty.

    Returns:
        The number with whitespace, hyphens, parentheses and "+" removed.
        Empty or missing input yields "".

    Examples:
        >>> normalize("+63 917-123-4567")
        '639171234567'
        >>> normalize("(0917) 123 4567")
        '09171234567'
    """
    if raw_number is None or raw_number == "":
        return ""
    if isinstance(raw_number, float) and raw_number.is_integer():
        raw_number = int(raw_number)
    return _STRIP_PATTERN.sub("", str(raw_number))
