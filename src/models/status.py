"""Response status and match-kind enumerations."""

from enum import Enum


class ClassifiedStatus(str, Enum):
    """Severity status derived from a reply.

    Safe < Slight < Moderate < Severe. NO_RESPONSE is not a severity:
    it means no classifiable reply was seen.
    """

    SAFE = "Safe"
    SLIGHT = "Slight"
    MODERATE = "Moderate"
    SEVERE = "Severe"
    NO_RESPONSE = "No Response"

    @property
    def severity_rank(self) -> int | None:
        """Position in the severity order, or None for NO_RESPONSE."""
        return _SEVERITY_RANK.get(self)

    @property
    def is_response(self) -> bool:
        """True for any classified reply."""
        return self is not ClassifiedStatus.NO_RESPONSE


_SEVERITY_RANK = {
    ClassifiedStatus.SAFE: 0,
    ClassifiedStatus.SLIGHT: 1,
    ClassifiedStatus.MODERATE: 2,
    ClassifiedStatus.SEVERE: 3,
}

# Display order for charts and breakdowns
STATUS_ORDER: tuple[ClassifiedStatus, ...] = (
    ClassifiedStatus.SAFE,
    ClassifiedStatus.SLIGHT,
    ClassifiedStatus.MODERATE,
    ClassifiedStatus.SEVERE,
    ClassifiedStatus.NO_RESPONSE,
)

AFFECTED_STATUSES = frozenset(
    {ClassifiedStatus.SLIGHT, ClassifiedStatus.MODERATE, ClassifiedStatus.SEVERE}
)


class MatchKind(str, Enum):
    """How a response was linked to a roster contact."""

    PHONE = "phone"
    NAME = "name"
    MANUAL = "manual"


class ResponseOrigin(str, Enum):
    """Where a response record came from."""

    SMS = "sms"
    MANUAL = "manual"
