"""Shared helpers for integration tests.

These tests talk to a real PostgreSQL database configured through
DATABASE__URL and are skipped when it is not set.
"""

import os

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from discuss.persistence.tables import metadata

requires_database = pytest.mark.skipif(
    not os.environ.get("DATABASE__URL"),
    reason="DATABASE__URL not set; integration tests need PostgreSQL",
)


async def ensure_schema(engine: AsyncEngine) -> None:
    """Create the discussion tables if migrations have not been run."""
    async with engine.begin() as conn:
        await conn.execute(text('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"'))
        await conn.run_sync(metadata.create_all)
