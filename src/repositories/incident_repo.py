"""Repository for incident windows."""

import logging
from datetime import datetime

from src.db.turso import TursoClient, rows_as_dicts
from src.models.incident import Incident, IncidentType
from src.models.timestamps import to_iso_z

logger = logging.getLogger(__name__)

_COLUMNS = "id, name, type, start_time, end_time"


class IncidentRepository:
    """Persists incidents and answers active/past queries.

    At most one incident is expected to have a NULL end_time; the
    service layer enforces this before inserting.
    """

    def __init__(self, db_client: TursoClient):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
        """
        self._db = db_client

    async def create(
        self,
        name: str,
        incident_type: IncidentType,
        start_time: datetime,
        end_time: datetime | None = None,
    ) -> Incident:
        """Insert an incident.

        Args:
            name: Incident name
            incident_type: test or actual
            start_time: Window start
            end_time: Window end, None for a live incident

        Returns:
            The stored incident with its id
        """
        result = await self._db.execute(
            """
            INSERT INTO incidents (name, type, start_time, end_time)
            VALUES (?, ?, ?, ?)
            """,
            [
                name,
                incident_type.value,
                to_iso_z(start_time),
                to_iso_z(end_time) if end_time else None,
            ],
        )
        incident = await self.get(result.last_insert_rowid)
        if incident is None:
            msg = "Inserted incident could not be read back"
            raise RuntimeError(msg)
        return incident

    async def get(self, incident_id: int) -> Incident | None:
        """Get an incident by id."""
        result = await self._db.execute(
            f"SELECT {_COLUMNS} FROM incidents WHERE id = ?",
            [incident_id],
        )
        rows = rows_as_dicts(result)
        return Incident.model_validate(rows[0]) if rows else None

    async def get_active(self) -> Incident | None:
        """Get the incident without an end time, if any.

        Returns:
            The most recently started open incident, or None
        """
        result = await self._db.execute(
            f"""
            SELECT {_COLUMNS} FROM incidents
            WHERE end_time IS NULL
            ORDER BY start_time DESC
            LIMIT 1
            """
        )
        rows = rows_as_dicts(result)
        return Incident.model_validate(rows[0]) if rows else None

    async def list_past(self, limit: int | None = None) -> list[Incident]:
        """List ended incidents, most recently started first.

        Args:
            limit: Optional maximum number of incidents

        Returns:
            Ended incidents
        """
        sql = f"""
            SELECT {_COLUMNS} FROM incidents
            WHERE end_time IS NOT NULL
            ORDER BY start_time DESC
        """
        params: list[int] = []
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)
        result = await self._db.execute(sql, params)
        return [Incident.model_validate(row) for row in rows_as_dicts(result)]

    async def update(self, incident: Incident) -> bool:
        """Overwrite an incident's fields.

        Returns:
            True if a row was updated, False if the id does not exist
        """
        result = await self._db.execute(
            """
            UPDATE incidents
            SET name = ?, type = ?, start_time = ?, end_time = ?
            WHERE id = ?
            """,
            [
                incident.name,
                incident.type.value,
                to_iso_z(incident.start_time),
                to_iso_z(incident.end_time) if incident.end_time else None,
                incident.id,
            ],
        )
        return result.rows_affected > 0

    async def set_end_time(self, incident_id: int, end_time: datetime) -> bool:
        """Close an incident window.

        Returns:
            True if a row was updated
        """
        result = await self._db.execute(
            "UPDATE incidents SET end_time = ? WHERE id = ?",
            [to_iso_z(end_time), incident_id],
        )
        return result.rows_affected > 0

    async def delete(self, incident_id: int) -> bool:
        """Delete an incident.

        Returns:
            True if deleted, False if not found
        """
        result = await self._db.execute(
            "DELETE FROM incidents WHERE id = ?",
            [incident_id],
        )
        deleted = result.rows_affected > 0
        if deleted:
            logger.info(f"Deleted incident {incident_id}")
        return deleted
