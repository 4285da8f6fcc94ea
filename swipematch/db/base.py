"""Async engine, session factory and declarative base."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from swipematch.core.config import get_settings


class Base(DeclarativeBase):
    """Declarative base shared by every ORM model."""

    pass


settings = get_settings()

engine = create_async_engine(
    settings.database_url,
    echo=settings.DEBUG and settings.ENV == "development",
    future=True,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

