"""Unit of Work pattern for managing database transactions."""

from typing import AsyncGenerator, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from swipematch.db import base as db_base
from swipematch.db.models import Contact, Log, Match, Profile, Report, Swipe
from swipematch.db.repositories import (
    ContactRepository,
    LogRepository,
    MatchRepository,
    ProfileRepository,
    ReportRepository,
    SwipeRepository,
)


class UnitOfWork:
    """
    Single entry point for repository operations sharing one session.

    Usage:
        async with UnitOfWork() as uow:
            await uow.swipes.upsert_decision("u1", "u2", "like")
            await uow.commit()
            created = await uow.matches.upsert_pair("u1", "u2")
            await uow.commit()

    Commits are explicit inside the block; leaving the block commits any
    remaining work when the session is owned, and rolls back on error.
    """

    def __init__(self, session: Optional[AsyncSession] = None):
        """
        Initialize Unit of Work.

        Args:
            session: Optional existing session (useful for testing)
        """
        self._session = session
        self._owned_session = session is None

        # Repositories (initialized in __aenter__)
        self.profiles: ProfileRepository = None  # type: ignore
        self.swipes: SwipeRepository = None  # type: ignore
        self.matches: MatchRepository = None  # type: ignore
        self.contacts: ContactRepository = None  # type: ignore
        self.reports: ReportRepository = None  # type: ignore
        self.logs: LogRepository = None  # type: ignore

    @property
    def session(self) -> AsyncSession:
        assert self._session is not None, "UnitOfWork used outside its context"
        return self._session

    async def __aenter__(self):
        """Enter async context manager."""
        if self._owned_session:
            self._session = db_base.AsyncSessionLocal()

        session = self.session
        self.profiles = ProfileRepository(Profile, session)
        self.swipes = SwipeRepository(Swipe, session)
        self.matches = MatchRepository(Match, session)
        self.contacts = ContactRepository(Contact, session)
        self.reports = ReportRepository(Report, session)
        self.logs = LogRepository(Log, session)

        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context manager."""
        try:
            if exc_type is not None:
                await self.rollback()
            elif self._owned_session:
                await self.commit()
        finally:
            if self._owned_session and self._session:
                await self._session.close()

    async def commit(self):
        """Commit the current transaction."""
        if self._session:
            await self._session.commit()

    async def rollback(self):
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def flush(self):
        """Flush pending changes to the database without committing."""
        if self._session:
            await self._session.flush()


async def get_uow() -> AsyncGenerator[UnitOfWork, None]:
    """FastAPI dependency yielding a request-scoped UnitOfWork."""
    async with UnitOfWork() as uow:
        yield uow
