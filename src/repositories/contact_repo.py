"""Repository for the contact roster."""

import logging

from src.db.turso import TursoClient, rows_as_dicts
from src.models.contact import Contact

logger = logging.getLogger(__name__)


class ContactRepository:
    """Reads and writes roster contacts.

    The roster is always loaded whole; paging only bounds the size of
    each query.
    """

    def __init__(self, db_client: TursoClient, page_size: int = 1000):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
            page_size: Rows fetched per query
        """
        self._db = db_client
        self._page_size = page_size

    async def list_all(self) -> list[Contact]:
        """Load every contact, page by page.

        Returns:
            All contacts in storage order
        """
        contacts: list[Contact] = []
        offset = 0
        while True:
            result = await self._db.execute(
                """
                SELECT id, name, number, department, location, position, level
                FROM contacts
                ORDER BY id
                LIMIT ? OFFSET ?
                """,
                [self._page_size, offset],
            )
            rows = rows_as_dicts(result)
            contacts.extend(Contact.model_validate(row) for row in rows)
            if len(rows) < self._page_size:
                break
            offset += self._page_size

        logger.debug(f"Loaded {len(contacts)} contacts")
        return contacts

    async def add(self, contact: Contact) -> Contact:
        """Insert a contact.

        Args:
            contact: Contact to store (id is ignored)

        Returns:
            The contact with its assigned id
        """
        result = await self._db.execute(
            """
            INSERT INTO contacts (name, number, department, location, position, level)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            [
                contact.name,
                contact.number,
                contact.department,
                contact.location,
                contact.position,
                contact.level,
            ],
        )
        return contact.model_copy(update={"id": str(result.last_insert_rowid)})

    async def get(self, contact_id: str) -> Contact | None:
        """Get a contact by id.

        Args:
            contact_id: Contact identifier

        Returns:
            Contact or None if not found
        """
        result = await self._db.execute(
            """
            SELECT id, name, number, department, location, position, level
            FROM contacts
            WHERE id = ?
            """,
            [contact_id],
        )
        rows = rows_as_dicts(result)
        return Contact.model_validate(rows[0]) if rows else None
