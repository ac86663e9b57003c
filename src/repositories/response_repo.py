"""Repository for inbound responses."""

import logging

from src.db.turso import TursoClient, rows_as_dicts
from src.models.response import RawResponse

logger = logging.getLogger(__name__)


class ResponseRepository:
    """Reads responses for a time window and stores manual entries.

    Timestamps are stored as ISO-8601 "Z" strings, so window bounds
    compare lexically.
    """

    def __init__(self, db_client: TursoClient, page_size: int = 1000):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
            page_size: Rows fetched per query
        """
        self._db = db_client
        self._page_size = page_size

    async def list_in_window(
        self,
        start: str | None = None,
        end: str | None = None,
    ) -> list[RawResponse]:
        """Load responses received within [start, end], newest first.

        Args:
            start: Inclusive lower bound (ISO "Z" string), or None
            end: Inclusive upper bound (ISO "Z" string), or None for open-ended

        Returns:
            Responses ordered by timestamp descending
        """
        conditions: list[str] = []
        params: list[str | int] = []
        if start:
            conditions.append("datetime >= ?")
            params.append(start)
        if end:
            conditions.append("datetime <= ?")
            params.append(end)
        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        responses: list[RawResponse] = []
        offset = 0
        while True:
            result = await self._db.execute(
                f"""
                SELECT id, uid, contact, contents, datetime, origin, contact_id
                FROM responses
                {where}
                ORDER BY datetime DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                [*params, self._page_size, offset],
            )
            rows = rows_as_dicts(result)
            responses.extend(RawResponse.model_validate(row) for row in rows)
            if len(rows) < self._page_size:
                break
            offset += self._page_size

        logger.debug(f"Loaded {len(responses)} responses for window {start} - {end}")
        return responses

    async def add(self, response: RawResponse) -> RawResponse:
        """Insert a response.

        Args:
            response: Response to store (id is ignored)

        Returns:
            The response with its assigned id
        """
        result = await self._db.execute(
            """
            INSERT INTO responses (uid, contact, contents, datetime, origin, contact_id)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            [
                response.uid,
                response.contact,
                response.contents,
                response.timestamp,
                response.origin.value,
                response.contact_id,
            ],
        )
        return response.model_copy(update={"id": str(result.last_insert_rowid)})
