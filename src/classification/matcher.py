"""ResponseMatcher links inbound replies to roster contacts.

Matching pass (responses must be ordered newest first):
1. Phone match on the normalized sender number
2. Name match on the text left after the status keyword
3. Manual entries resolve through their recorded contact id, ahead of
   the phone and name lookups when tagged at write time
4. First (newest) reply per contact wins; later ones are superseded
5. Replies linked to no contact go to the unknown bucket
"""

from collections.abc import Iterable
from typing import Any

import structlog
from pydantic import ValidationError

from src.classification.schemas import MatchOutcome
from src.classification.status_parser import classify
from src.identity.name_matcher import NameMatcher
from src.identity.normalizer import normalize
from src.models.contact import Contact, ProjectedContact
from src.models.response import RawResponse
from src.models.status import ClassifiedStatus, MatchKind, ResponseOrigin

logger = structlog.get_logger()

# Legacy manual rows carry no origin; their contents say so instead
MANUAL_ENTRY_MARKER = "manual entry"

_CONTACT_FIELDS = set(Contact.model_fields)


def is_manual_entry(response: RawResponse) -> bool:
    """Check whether a response was entered by an operator."""
    if response.origin is ResponseOrigin.MANUAL:
        return True
    return MANUAL_ENTRY_MARKER in response.contents.lower()


class ResponseMatcher:
    """Pure matching and deduplication over one roster snapshot.

    Holds no state between calls; safe to share across refreshes.
    """

    def __init__(self, name_matcher: NameMatcher | None = None):
        """Initialize matcher.

        Args:
            name_matcher: Name lookup used when the sender number is unknown
        """
        self._names = name_matcher or NameMatcher()

    def match(
        self,
        roster: list[Contact],
        responses: list[RawResponse],
    ) -> MatchOutcome:
        """Project the latest response onto every roster contact.

        Args:
            roster: All roster contacts
            responses: Responses ordered by timestamp descending

        Returns:
            MatchOutcome with one ProjectedContact per roster entry and
            the responses that matched nobody.
        """
        projected = [
            ProjectedContact(
                **contact.model_dump(include=_CONTACT_FIELDS),
                clean_number=normalize(contact.number),
            )
            for contact in roster
        ]

        # Contacts sharing a number share its reply; empty keys never match
        known_keys: set[str] = {c.clean_number for c in projected if c.clean_number}
        keys_by_id: dict[str, str] = {
            c.id: c.clean_number for c in projected if c.id is not None
        }

        recorded: dict[str, tuple[RawResponse, MatchKind]] = {}
        unknown: list[RawResponse] = []
        superseded = 0

        for response in responses:
            key, kind = self._resolve(response, projected, known_keys, keys_by_id)

            if not key:
                unknown.append(response)
                continue

            if key in recorded:
                superseded += 1
                continue
            recorded[key] = (response, kind)

        for contact in projected:
            entry = recorded.get(contact.clean_number)
            if entry is None:
                continue
            response, kind = entry
            # Re-derived rather than cached from the resolve step
            contact.status = classify(response.contents).status
            contact.response_content = response.contents
            contact.response_time = response.timestamp
            contact.match_kind = kind

        logger.debug(
            "responses matched",
            contacts=len(projected),
            responses=len(responses),
            recorded=len(recorded),
            superseded=superseded,
            unknown=len(unknown),
        )

        return MatchOutcome(contacts=projected, unknown_responses=unknown)

    def match_records(
        self,
        roster: Iterable[dict[str, Any]],
        responses: Iterable[dict[str, Any]],
    ) -> MatchOutcome:
        """Match raw storage rows, skipping rows that cannot be read at all.

        Args:
            roster: Contact rows as dicts
            responses: Response rows as dicts, newest first

        Returns:
            MatchOutcome as from match()
        """
        contacts: list[Contact] = []
        for row in roster:
            try:
                contacts.append(Contact.model_validate(row))
            except ValidationError as e:
                logger.warning("skipping malformed contact row", row=row, error=str(e))

        parsed: list[RawResponse] = []
        for row in responses:
            try:
                parsed.append(RawResponse.model_validate(row))
            except ValidationError as e:
                logger.warning("skipping malformed response row", row=row, error=str(e))

        return self.match(contacts, parsed)

    def _resolve(
        self,
        response: RawResponse,
        roster: list[ProjectedContact],
        known_keys: set[str],
        keys_by_id: dict[str, str],
    ) -> tuple[str | None, MatchKind | None]:
        """Find the roster key a response answers and how it was found."""
        key: str | None = None
        kind: MatchKind | None = None

        # Tagged manual entries name their contact explicitly
        if response.origin is ResponseOrigin.MANUAL and response.contact_id is not None:
            tagged = keys_by_id.get(response.contact_id)
            if tagged:
                return tagged, MatchKind.MANUAL

        sender = normalize(response.contact)
        if sender and sender in known_keys:
            key, kind = sender, MatchKind.PHONE
        else:
            parsed = classify(response.contents)
            if parsed.status is not ClassifiedStatus.NO_RESPONSE and parsed.residual:
                result = self._names.find_by_name(parsed.residual, roster)
                if result.contact is not None:
                    key, kind = normalize(result.contact.number), MatchKind.NAME

        manual = is_manual_entry(response)
        if not key and manual and response.contact_id is not None:
            key = keys_by_id.get(response.contact_id)

        if not key:
            return None, None
        if manual:
            kind = MatchKind.MANUAL
        return key, kind


def match(roster: list[Contact], responses: list[RawResponse]) -> MatchOutcome:
    """Module-level convenience wrapper around ResponseMatcher.match."""
    return ResponseMatcher().match(roster, responses)
