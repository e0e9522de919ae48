import os
import uuid

# Set env vars BEFORE any imports from the project happen
os.environ.setdefault("TMDB_API_KEY", "test-tmdb")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("IDENTITY_URL", "https://identity.test")
os.environ.setdefault("IDENTITY_ANON_KEY", "test-anon")
os.environ.setdefault("IDENTITY_SERVICE_KEY", "test-service")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from clients.types import Identity  # noqa: E402
from models import Base  # noqa: E402


@pytest.fixture
async def db():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session

    await engine.dispose()


@pytest.fixture
async def session_factory(tmp_path):
    """Independent sessions over one on-disk database, for concurrent writers."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'concurrency.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def alice():
    return Identity(id=uuid.uuid4(), email="alice@example.com", access_token="alice-token")


@pytest.fixture
def bob():
    return Identity(id=uuid.uuid4(), email="bob@example.com", access_token="bob-token")
