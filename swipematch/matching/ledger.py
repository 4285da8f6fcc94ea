"""Swipe ledger: durable record of one-directional decisions."""

from __future__ import annotations

import structlog

from swipematch.core.errors import InvalidInputError
from swipematch.db.unit_of_work import UnitOfWork
from swipematch.matching.models import SwipeDirection

logger = structlog.get_logger(__name__)


class SwipeLedger:
    """Records like/pass decisions with last-write-wins semantics."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def record_decision(
        self, actor_id: str, target_id: str, direction: SwipeDirection | str
    ) -> SwipeDirection:
        """
        Upsert the actor's decision about target and commit it.

        Validation happens before any write. The commit happens before this
        method returns, so callers only ever reconcile on a durable swipe;
        store errors propagate unchanged.

        Raises:
            InvalidInputError: blank ids, self-swipe or unknown direction
        """
        parsed = SwipeDirection.parse(direction)
        if not actor_id or not target_id:
            raise InvalidInputError("actor_id and target_id are required")
        if actor_id == target_id:
            raise InvalidInputError("Cannot swipe on yourself")

        await self.uow.swipes.upsert_decision(actor_id, target_id, parsed.value)
        await self.uow.commit()

        logger.info(
            "swipe.recorded",
            actor_id=actor_id,
            target_id=target_id,
            direction=parsed.value,
        )
        return parsed
