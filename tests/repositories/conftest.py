"""Shared fixtures for repository tests."""

from pathlib import Path

import pytest

from src.db.turso import TursoClient


@pytest.fixture
async def db_client(tmp_path: Path):
    """Create a temp file database client with the schema applied."""
    db_path = tmp_path / "test_calltree.db"
    client = TursoClient(url=f"file:{db_path}")
    await client.connect()
    await client.init_schema()
    yield client
    await client.close()
