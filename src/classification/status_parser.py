"""Status extraction from free-text replies.

Replies look like "2 Juan Dela Cruz", "safe - Juan" or "Juan Dela Cruz 2".
The first token matching the keyword table decides the status; the
remaining text is returned as a candidate sender name.
"""

import re

from src.classification.schemas import Classification
from src.models.status import ClassifiedStatus

STATUS_KEYWORDS: dict[str, ClassifiedStatus] = {
    "1": ClassifiedStatus.SAFE,
    "1.0": ClassifiedStatus.SAFE,
    "safe": ClassifiedStatus.SAFE,
    "unaffected": ClassifiedStatus.SAFE,
    "ok": ClassifiedStatus.SAFE,
    "2": ClassifiedStatus.SLIGHT,
    "2.0": ClassifiedStatus.SLIGHT,
    "slight": ClassifiedStatus.SLIGHT,
    "minor": ClassifiedStatus.SLIGHT,
    "3": ClassifiedStatus.MODERATE,
    "3.0": ClassifiedStatus.MODERATE,
    "moderate": ClassifiedStatus.MODERATE,
    "4": ClassifiedStatus.SEVERE,
    "4.0": ClassifiedStatus.SEVERE,
    "severe": ClassifiedStatus.SEVERE,
    "help": ClassifiedStatus.SEVERE,
    "critical": ClassifiedStatus.SEVERE,
}

# Reply codes used when writing synthetic responses
STATUS_CODES: dict[ClassifiedStatus, str] = {
    ClassifiedStatus.SAFE: "1",
    ClassifiedStatus.SLIGHT: "2",
    ClassifiedStatus.MODERATE: "3",
    ClassifiedStatus.SEVERE: "4",
}

# ASCII only so results never depend on locale or unicode tables
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")
_EDGE_PUNCTUATION = re.compile(r"^[^A-Za-z0-9]+|[^A-Za-z0-9]+$")


def clean_token(token: str) -> str:
    """Strip non-alphanumerics and lower-case ("2," -> "2", "SAFE!" -> "safe")."""
    return _NON_ALNUM.sub("", token).lower()


def classify(text: str | None) -> Classification:
    """Extract a status and residual name text from a reply.

    Args:
        text: Raw message contents.

    Returns:
        Classification with the first keyword's status and the remaining
        tokens (edge punctuation stripped) as residual. Without a keyword
        the status is NO_RESPONSE and the residual is the trimmed text.
    """
    if not text:
        return Classification(status=ClassifiedStatus.NO_RESPONSE, residual="")

    tokens = text.split()
    for index, token in enumerate(tokens):
        status = STATUS_KEYWORDS.get(clean_token(token))
        if status is None:
            continue
        remainder = " ".join(tokens[:index] + tokens[index + 1 :])
        return Classification(
            status=status,
            residual=_EDGE_PUNCTUATION.sub("", remainder),
        )

    return Classification(status=ClassifiedStatus.NO_RESPONSE, residual=text.strip())
