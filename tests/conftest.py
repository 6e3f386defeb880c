"""Shared fixtures for catalog tests.

Tests run against a throwaway SQLite database and a temporary
content folder.
"""

import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("CONTENT_ROOT", tempfile.mkdtemp(prefix="eshop-content-"))

from collections.abc import AsyncIterator  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool  # noqa: E402

from app.application.category_service import CategoryService  # noqa: E402
from app.application.product_service import ProductService  # noqa: E402
from app.infrastructure.database import create_tables  # noqa: E402
from app.infrastructure.storage import FileStorageService  # noqa: E402


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def engine(tmp_path) -> AsyncIterator[AsyncEngine]:
    """Create a file-backed SQLite engine with all tables."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
        poolclass=NullPool,
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory) -> AsyncIterator[AsyncSession]:
    """Open a session for one test."""
    async with session_factory() as session:
        yield session


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def storage(tmp_path) -> FileStorageService:
    """File storage rooted in a temporary directory."""
    storage = FileStorageService(tmp_path / "content")
    storage.ensure_folder()
    return storage


@pytest.fixture
def product_service(session: AsyncSession, storage: FileStorageService) -> ProductService:
    """Product service on the test session and storage."""
    return ProductService(session, storage=storage)


@pytest.fixture
def category_service(session: AsyncSession) -> CategoryService:
    """Category service on the test session."""
    return CategoryService(session)
