"""Swipe repository: the ledger of directed decisions."""

from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import exists, select

from swipematch.db.models.swipe import Swipe
from swipematch.db.repository import BaseRepository


class SwipeRepository(BaseRepository[Swipe]):
    """Repository for Swipe rows keyed by (actor_id, target_id)."""

    async def upsert_decision(self, actor_id: str, target_id: str, direction: str) -> None:
        """
        Record a decision, overwriting any previous one for the same pair.

        Uses ``INSERT ... ON CONFLICT DO UPDATE`` on the (actor, target)
        unique constraint, so repeated identical calls are idempotent.
        """
        now = datetime.now(timezone.utc)
        stmt = self._insert().values(
            actor_id=actor_id,
            target_id=target_id,
            direction=direction,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["actor_id", "target_id"],
            set_={"direction": stmt.excluded.direction, "updated_at": now},
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def get_decision(self, actor_id: str, target_id: str) -> Optional[Swipe]:
        """Get the current decision of actor about target."""
        result = await self.session.execute(
            select(self.model)
            .where(self.model.actor_id == actor_id, self.model.target_id == target_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def has_liked(self, actor_id: str, target_id: str) -> bool:
        """True if actor's current decision about target is a like."""
        return await self.exists(actor_id=actor_id, target_id=target_id, direction="like")

    def decided_by(self, viewer_id: str, candidate_id_column):
        """
        Correlated EXISTS clause: has ``viewer_id`` swiped on the row's id?

        Negate it for the feed's anti-join so the exclusion set is never
        materialised as a value list.
        """
        return exists().where(
            self.model.actor_id == viewer_id,
            self.model.target_id == candidate_id_column,
        )

    async def clear_pair(self, user_a: str, user_b: str) -> int:
        """Delete both directions of swipes between two users."""
        deleted = await self.delete_all(actor_id=user_a, target_id=user_b)
        deleted += await self.delete_all(actor_id=user_b, target_id=user_a)
        return deleted
