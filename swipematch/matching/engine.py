"""Matching engine that orchestrates ledger, reconciler, feed and disclosure."""

from __future__ import annotations

from typing import Iterable

import structlog

from swipematch.core.errors import FeedUnavailableError
from swipematch.db.unit_of_work import UnitOfWork
from swipematch.matching.candidates import CandidateSelector
from swipematch.matching.config import MatchingConfig
from swipematch.matching.disclosure import DisclosureGate
from swipematch.matching.ledger import SwipeLedger
from swipematch.matching.metrics import MatchingMetrics, get_metrics
from swipematch.matching.models import (
    CandidateProfile,
    DecisionResult,
    MatchSummary,
    SwipeDirection,
)
from swipematch.matching.reconciler import MatchReconciler

logger = structlog.get_logger(__name__)


class MatchingEngine:
    """
    Request-scoped facade over the matching core.

    Orchestrates:
    1. Recording the decision in the swipe ledger (committed)
    2. Reconciling likes into matches
    3. Candidate selection for the discovery feed
    4. Contact disclosure for matched pairs
    """

    def __init__(
        self,
        uow: UnitOfWork,
        config: MatchingConfig | None = None,
        metrics: MatchingMetrics | None = None,
    ):
        """
        Initialize matching engine.

        Args:
            uow: Unit of work for the current request
            config: Matching configuration
            metrics: Metrics sink (defaults to the process-wide instance)
        """
        self.uow = uow
        self.config = config or MatchingConfig()
        self.metrics = metrics or get_metrics()

        self.ledger = SwipeLedger(uow)
        self.reconciler = MatchReconciler(uow, self.config)
        self.selector = CandidateSelector(uow, self.config)
        self.gate = DisclosureGate(uow)

    async def record_decision(
        self, actor_id: str, target_id: str, direction: SwipeDirection | str
    ) -> DecisionResult:
        """
        Record a swipe and reconcile it if it is a like.

        If the swipe write fails the exception propagates before any
        reconciliation, so a failed write is never reported as matched.
        """
        parsed = await self.ledger.record_decision(actor_id, target_id, direction)

        matched: bool | None = None
        if parsed is SwipeDirection.LIKE:
            matched = await self.reconciler.reconcile(actor_id, target_id)

        self.metrics.record_decision(parsed.value, matched)
        return DecisionResult(
            actor_id=actor_id,
            target_id=target_id,
            direction=parsed,
            matched=bool(matched),
        )

    async def select_candidates(
        self, viewer_id: str, limit: int | None = None
    ) -> list[CandidateProfile]:
        """Return the viewer's next window of candidates."""
        try:
            candidates = await self.selector.select_candidates(viewer_id, limit)
        except FeedUnavailableError:
            self.metrics.record_feed(None)
            raise
        self.metrics.record_feed(len(candidates))
        return candidates

    async def resolve_contacts(
        self, viewer_id: str, counterpart_ids: Iterable[str]
    ) -> dict[str, str]:
        """Return the contact values the viewer may see."""
        contacts = await self.gate.resolve_contacts(viewer_id, counterpart_ids)
        self.metrics.record_disclosure(len(contacts))
        return contacts

    async def list_matches(self, user_id: str) -> list[MatchSummary]:
        return await self.reconciler.list_matches(user_id)

    async def force_match(self, user_a: str, user_b: str) -> bool:
        created = await self.reconciler.force_match(user_a, user_b)
        self.metrics.record_forced_match(created)
        return created

    async def unmatch(
        self, user_a: str, user_b: str, clear_swipes: bool | None = None
    ) -> bool:
        deleted = await self.reconciler.unmatch(user_a, user_b, clear_swipes)
        self.metrics.record_unmatch(deleted)
        return deleted

    async def unmatch_by_id(self, match_id: int, clear_swipes: bool | None = None) -> bool:
        deleted = await self.reconciler.unmatch_by_id(match_id, clear_swipes)
        self.metrics.record_unmatch(deleted)
        return deleted
