"""Async SQLAlchemy engine, sessions, and the unit-of-work helper."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from bookstore.core.config import settings

# No connection is opened until the first query
engine = create_async_engine(
    settings.database_url,
    echo=settings.environment == "development",
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@asynccontextmanager
async def transaction(db: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
    """Run a unit of work that is committed or rolled back exactly once.

    The session begins its transaction on the first statement inside the
    block. A clean exit commits; any exception (cancellation or a failed
    commit included) rolls back and propagates.

    Usage::

        async with transaction(db):
            order = Order(...)
            db.add(order)
            await db.flush()

    Args:
        db: Async database session.

    Yields:
        The same session.
    """
    try:
        yield db
        await db.commit()
    except BaseException:
        await db.rollback()
        raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request, committed on success."""
    async with async_session_factory() as session, transaction(session):
        yield session
