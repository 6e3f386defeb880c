"""Database configuration and session management.

Provides async SQLAlchemy engine, session factory and the
transactional scope used by multi-step writes.
"""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.infrastructure.config import settings

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

# Session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Base class for catalog models
Base = declarative_base()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session.

    Yields:
        AsyncSession for database operations.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def transaction(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Run a block of writes as one unit.

    Commits when the block exits normally and rolls back on any
    exception, which is then re-raised.

    Args:
        session: Session the writes are issued on.

    Yields:
        The same session.
    """
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise


async def create_tables(bind: AsyncEngine | None = None) -> None:
    """Create catalog and identity tables if they don't exist.

    Args:
        bind: Engine to use, defaults to the application engine.
    """
    import app.catalog.models  # noqa: F401  registers catalog tables
    from app.infrastructure.models import IdentityBase

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.run_sync(IdentityBase.metadata.create_all)


async def ping(session: AsyncSession) -> None:
    """Issue a trivial query to verify connectivity."""
    await session.execute(text("SELECT 1"))
