"""Manual-entry write path.

Operators record a reply on a contact's behalf when the answer arrived
outside the SMS gateway (a phone call, a message to a team lead). The
entry is stored as a regular response marked ``origin=manual`` so the
matcher treats it like any other reply.
"""

import random
import re
from collections.abc import Callable
from datetime import datetime

import structlog

from src.classification.status_parser import STATUS_CODES
from src.events.bus import EventBus
from src.events.types import ManualResponseRecorded
from src.identity.normalizer import normalize
from src.models.contact import Contact
from src.models.response import RawResponse
from src.models.status import ClassifiedStatus, ResponseOrigin
from src.models.timestamps import to_iso_z, utc_now
from src.repositories.contact_repo import ContactRepository
from src.repositories.response_repo import ResponseRepository

logger = structlog.get_logger()

_NON_DIGIT = re.compile(r"[^0-9]")

DEFAULT_MESSAGE = "Manual Entry"


class ManualEntryError(Exception):
    """Raised when a manual entry cannot be recorded."""


class ContactNotFoundError(ManualEntryError):
    """Raised when the contact for a manual entry does not exist."""


def format_manual_sender(number: str, country_code: str = "63") -> str:
    """Format a roster number the way the gateway reports senders.

    ``09171234567`` and ``9171234567`` both become ``+639171234567``.
    Numbers in other shapes are reduced to their digits but otherwise left
    alone.
    """
    digits = _NON_DIGIT.sub("", number or "")
    if digits.startswith("09"):
        digits = country_code + digits[1:]
    elif len(digits) == 10 and digits.startswith("9"):
        digits = country_code + digits
    if digits.startswith(country_code):
        return f"+{digits}"
    return digits


def manual_contents(status: ClassifiedStatus, message: str | None = None) -> str:
    """Reply text for a manual entry, e.g. ``"1 - Manual Entry"``."""
    code = STATUS_CODES.get(status)
    if code is None:
        msg = f"Status {status.value} cannot be entered manually"
        raise ManualEntryError(msg)
    note = (message or "").strip() or DEFAULT_MESSAGE
    return f"{code} - {note}"


class ManualEntryService:
    """Builds and stores synthetic responses for roster contacts."""

    def __init__(
        self,
        response_repo: ResponseRepository,
        contact_repo: ContactRepository | None = None,
        event_bus: EventBus | None = None,
        country_code: str = "63",
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize service.

        Args:
            response_repo: Where manual responses are written
            contact_repo: Roster lookup for ``record_for_contact_id``
            event_bus: Optional bus notified after each entry
            country_code: Prefix for sender numbers
            clock: Returns the current time; replaced in tests
        """
        self._responses = response_repo
        self._contacts = contact_repo
        self._bus = event_bus
        self._country_code = country_code
        self._clock = clock

    def build_response(
        self,
        contact: Contact,
        status: ClassifiedStatus,
        message: str | None = None,
        now: datetime | None = None,
    ) -> RawResponse:
        """Build the response record without storing it.

        Raises:
            ManualEntryError: For No Response status or a contact without a number
        """
        if status == ClassifiedStatus.NO_RESPONSE:
            msg = "A manual entry needs a status other than No Response"
            raise ManualEntryError(msg)
        if not normalize(contact.number):
            msg = f"Contact '{contact.name}' has no phone number"
            raise ManualEntryError(msg)

        now = now or self._clock()
        uid = f"m-{int(now.timestamp() * 1000)}-{random.randint(0, 999)}"
        return RawResponse(
            uid=uid,
            contact=format_manual_sender(contact.number, self._country_code),
            contents=manual_contents(status, message),
            timestamp=to_iso_z(now),
            origin=ResponseOrigin.MANUAL,
            contact_id=contact.id,
        )

    async def record(
        self,
        contact: Contact,
        status: ClassifiedStatus,
        message: str | None = None,
    ) -> RawResponse:
        """Store a manual entry and publish ManualResponseRecorded.

        Returns:
            The stored response with its id
        """
        response = self.build_response(contact, status, message)
        stored = await self._responses.add(response)
        logger.info(
            "manual response recorded",
            uid=stored.uid,
            contact_id=contact.id,
            status=status.value,
        )
        if self._bus is not None:
            await self._bus.publish(
                ManualResponseRecorded(
                    uid=stored.uid or "",
                    contact_id=contact.id,
                    status=status,
                )
            )
        return stored

    async def record_for_contact_id(
        self,
        contact_id: str,
        status: ClassifiedStatus,
        message: str | None = None,
    ) -> RawResponse:
        """Look up a roster contact and record a manual entry for it.

        Raises:
            ContactNotFoundError: If the contact does not exist
        """
        if self._contacts is None:
            msg = "Contact lookup is not configured"
            raise RuntimeError(msg)
        contact = await self._contacts.get(contact_id)
        if contact is None:
            msg = f"Contact {contact_id} not found"
            raise ContactNotFoundError(msg)
        return await self.record(contact, status, message)
