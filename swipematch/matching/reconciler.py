"""Match reconciler: turns reciprocal likes into symmetric match rows."""

from __future__ import annotations

import structlog

from swipematch.db.repositories.match_repository import canonical_pair
from swipematch.db.unit_of_work import UnitOfWork
from swipematch.matching.config import MatchingConfig
from swipematch.matching.models import CandidateProfile, MatchSummary, SwipeDirection

logger = structlog.get_logger(__name__)


class MatchReconciler:
    """
    Creates and retires Match rows.

    All paths share ``MatchRepository``'s canonical-pair routines, so
    normal reconciliation and admin overrides cannot disagree on the key.
    """

    def __init__(self, uow: UnitOfWork, config: MatchingConfig | None = None):
        self.uow = uow
        self.config = config or MatchingConfig()

    async def reconcile(self, actor_id: str, target_id: str) -> bool | None:
        """
        Create the match if target already likes actor.

        Call only after actor's ``like`` has committed.

        Returns:
            True if this call created the match, False if the match already
            existed, None when there is no reciprocal like
        """
        if not await self.uow.swipes.has_liked(target_id, actor_id):
            logger.debug("match.no_reciprocal_like", actor_id=actor_id, target_id=target_id)
            return None

        created = await self.uow.matches.upsert_pair(actor_id, target_id)
        await self.uow.commit()

        low, high = canonical_pair(actor_id, target_id)
        if created:
            logger.info("match.created", user_low_id=low, user_high_id=high, source="reciprocity")
        else:
            logger.info("match.replayed", user_low_id=low, user_high_id=high)
        return created

    async def force_match(self, user_a: str, user_b: str) -> bool:
        """
        Administrative override: match two users regardless of swipes.

        Writes ``like`` in both directions so the ledger agrees with the
        forced state, then upserts the match. Safe to repeat.

        Returns:
            True if the match row was created by this call
        """
        low, high = canonical_pair(user_a, user_b)

        await self.uow.swipes.upsert_decision(user_a, user_b, SwipeDirection.LIKE.value)
        await self.uow.swipes.upsert_decision(user_b, user_a, SwipeDirection.LIKE.value)
        created = await self.uow.matches.upsert_pair(user_a, user_b)
        await self.uow.commit()

        logger.info(
            "match.forced", user_low_id=low, user_high_id=high, created=created
        )
        return created

    async def unmatch(
        self, user_a: str, user_b: str, clear_swipes: bool | None = None
    ) -> bool:
        """
        Remove the match between two users. Idempotent.

        Args:
            clear_swipes: Also delete the pair's swipes so they can
                rediscover each other (defaults to configuration)

        Returns:
            True if a match was deleted
        """
        low, high = canonical_pair(user_a, user_b)
        deleted = await self.uow.matches.delete_pair(user_a, user_b)
        if self._should_clear(clear_swipes):
            await self.uow.swipes.clear_pair(user_a, user_b)
        await self.uow.commit()

        logger.info("match.unmatched", user_low_id=low, user_high_id=high, deleted=deleted)
        return deleted

    async def unmatch_by_id(self, match_id: int, clear_swipes: bool | None = None) -> bool:
        """Remove a match by id. Returns False if it does not exist."""
        match = await self.uow.matches.get_by_id(match_id)
        if match is None:
            logger.info("match.unmatch_missing", match_id=match_id)
            return False
        return await self.unmatch(match.user_low_id, match.user_high_id, clear_swipes)

    async def list_matches(self, user_id: str) -> list[MatchSummary]:
        """Matches involving a user, newest first, with counterpart profiles."""
        matches = await self.uow.matches.list_for_user(user_id)
        counterpart_ids = [m.counterpart_of(user_id) for m in matches]
        profiles = await self.uow.profiles.get_many(counterpart_ids)

        summaries = []
        for match, counterpart_id in zip(matches, counterpart_ids):
            profile = profiles.get(counterpart_id)
            summaries.append(
                MatchSummary(
                    match_id=match.id,
                    counterpart_id=counterpart_id,
                    matched_at=match.created_at,
                    profile=CandidateProfile.model_validate(profile) if profile else None,
                )
            )
        return summaries

    def _should_clear(self, clear_swipes: bool | None) -> bool:
        if clear_swipes is None:
            return self.config.unmatch_clears_swipes
        return clear_swipes
