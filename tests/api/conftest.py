"""Shared fixtures for API tests."""

import asyncio
from collections.abc import AsyncGenerator, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.infrastructure.database import create_tables, get_session
from app.infrastructure.storage import FileStorageService, get_storage
from app.main import app


@pytest.fixture
def engine(tmp_path) -> Iterator[AsyncEngine]:
    """Create a SQLite engine usable from the test client's event loops."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        poolclass=NullPool,
    )
    asyncio.run(create_tables(engine))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def client(engine: AsyncEngine, storage: FileStorageService) -> Iterator[TestClient]:
    """Create test client wired to the test database and storage."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_product(client: TestClient):
    """Create a product through the API and return its JSON."""

    def _create(name: str = "Áo thun", with_thumbnail: bool = False, **fields) -> dict:
        data = {
            "price": "100",
            "original_price": "120",
            "stock": "10",
            "name": name,
            "language_id": "vi",
            **fields,
        }
        files = {"thumbnail_image": ("front.jpg", b"jpeg-bytes", "image/jpeg")} if with_thumbnail else None
        response = client.post("/products", data=data, files=files)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_category(client: TestClient):
    """Create a category through the API and return its JSON."""

    def _create(name: str, language_id: str = "vi") -> dict:
        response = client.post("/categories", json={"name": name, "language_id": language_id})
        assert response.status_code == 201, response.text
        return response.json()

    return _create
