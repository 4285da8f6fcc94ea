import os

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Force test database URL before any swipematch imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENV"] = "development"
os.environ["DEBUG"] = "false"

from swipematch.db import base as db_base  # noqa: E402
from swipematch.db import models  # noqa: E402,F401
from swipematch.db.unit_of_work import UnitOfWork  # noqa: E402
from swipematch.matching.metrics import reset_metrics  # noqa: E402
from swipematch.testing.sample_profiles import generate_profile  # noqa: E402

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_db(monkeypatch):
    """
    Fresh in-memory database per test.

    StaticPool keeps a single connection so every session sees the same
    in-memory database. The session factory is patched into
    ``swipematch.db.base`` so ``UnitOfWork()`` picks it up.
    """
    engine = create_async_engine(
        TEST_DB_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(db_base.Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    monkeypatch.setattr(db_base, "engine", engine)
    monkeypatch.setattr(db_base, "AsyncSessionLocal", session_factory)

    yield session_factory

    await engine.dispose()


@pytest.fixture(autouse=True)
def clean_metrics():
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture
def make_profile(test_db):
    """
    Factory creating a complete, live profile with a photo.

    Keyword arguments override the generated fields.
    """

    async def _make(user_id: str, index: int = 1, **overrides):
        fields = generate_profile(index)
        fields.pop("user_id")
        fields.update(overrides)
        async with UnitOfWork() as uow:
            profile = await uow.profiles.save_profile(user_id, **fields)
            await uow.commit()
        return profile

    return _make


@pytest.fixture
def make_contact(test_db):
    """Factory creating a contact row."""

    async def _make(user_id: str, whatsapp: str | None = "+15550000000", share: bool = True):
        async with UnitOfWork() as uow:
            contact = await uow.contacts.save_contact(
                user_id, whatsapp=whatsapp, share=share, verified=True
            )
            await uow.commit()
        return contact

    return _make
