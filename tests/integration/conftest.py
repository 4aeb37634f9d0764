"""Fixtures for repository tests against a real SQL engine.

The schema is built from the table metadata on a throwaway SQLite file,
so these tests run without a PostgreSQL server.
"""

import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from usermgmt.persistence.database import create_session_factory
from usermgmt.persistence.tables import metadata


@pytest_asyncio.fixture
async def db_session(tmp_path):
    """Yield a session on a freshly created schema."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'usermgmt.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    session_factory = create_session_factory(engine)
    async with session_factory() as session:
        yield session

    await engine.dispose()
