"""Async Session Factory: DB sessions for code that runs outside FastAPI.

Invariants:
    - Meant for the maintenance scripts (einfo/scripts/) and test fixtures
    - expire_on_commit=False, same as DatabaseSessionManager
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker


def create_session_factory(
    database_url: str,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given database URL."""
    engine = create_async_engine(database_url, echo=False)
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
