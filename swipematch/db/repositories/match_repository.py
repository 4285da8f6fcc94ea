"""Match repository: the single home of canonical-pair logic.

Every path that creates, checks or removes a match (reconciliation,
admin overrides, contact disclosure, moderation) goes through
``canonical_pair`` and the ``*_pair`` methods below.
"""

from typing import List, Optional, Tuple
from sqlalchemy import or_, select

from swipematch.core.errors import InvalidInputError
from swipematch.db.models.match import Match
from swipematch.db.repository import BaseRepository


def canonical_pair(user_a: str, user_b: str) -> Tuple[str, str]:
    """
    Order two user ids into the (low, high) key used by Match rows.

    Raises:
        InvalidInputError: if either id is blank or both ids are equal
    """
    if not user_a or not user_b:
        raise InvalidInputError("Both user ids are required")
    if user_a == user_b:
        raise InvalidInputError("A user cannot be paired with themselves")
    return (user_a, user_b) if user_a < user_b else (user_b, user_a)


class MatchRepository(BaseRepository[Match]):
    """Repository for Match rows addressed by canonical pair."""

    def _pair_clause(self, user_a: str, user_b: str):
        low, high = canonical_pair(user_a, user_b)
        return (self.model.user_low_id == low) & (self.model.user_high_id == high)

    async def get_for_pair(self, user_a: str, user_b: str) -> Optional[Match]:
        """Get the match between two users, in either argument order."""
        result = await self.session.execute(
            select(self.model).where(self._pair_clause(user_a, user_b))
        )
        return result.scalar_one_or_none()

    async def exists_for_pair(self, user_a: str, user_b: str) -> bool:
        """Single-row existence check for a pair."""
        result = await self.session.execute(
            select(self.model.id).where(self._pair_clause(user_a, user_b)).limit(1)
        )
        return result.first() is not None

    async def upsert_pair(self, user_a: str, user_b: str) -> bool:
        """
        Insert the match for a pair unless it already exists.

        Uses ``INSERT ... ON CONFLICT DO NOTHING RETURNING id`` so the
        insert-or-no-op decision is made atomically by the store.

        Returns:
            True if this call created the row, False if it already existed
        """
        low, high = canonical_pair(user_a, user_b)
        stmt = (
            self._insert()
            .values(user_low_id=low, user_high_id=high)
            .on_conflict_do_nothing(index_elements=["user_low_id", "user_high_id"])
            .returning(self.model.id)
        )
        result = await self.session.execute(stmt)
        inserted_id = result.scalar_one_or_none()
        await self.session.flush()
        return inserted_id is not None

    async def delete_pair(self, user_a: str, user_b: str) -> bool:
        """
        Delete the match for a pair.

        Returns:
            True if a row was deleted, False if there was no match
        """
        low, high = canonical_pair(user_a, user_b)
        deleted = await self.delete_all(user_low_id=low, user_high_id=high)
        return deleted > 0

    async def list_for_user(self, user_id: str, limit: Optional[int] = None) -> List[Match]:
        """Get all matches involving a user, newest first."""
        query = (
            select(self.model)
            .where(or_(self.model.user_low_id == user_id, self.model.user_high_id == user_id))
            .order_by(self.model.created_at.desc(), self.model.id.desc())
        )
        if limit:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_recent(self, limit: Optional[int] = None) -> List[Match]:
        """Get the most recently created matches across all users."""
        query = select(self.model).order_by(
            self.model.created_at.desc(), self.model.id.desc()
        )
        if limit:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())
