"""Candidate selection for the discovery feed."""

from __future__ import annotations

import structlog
from sqlalchemy.exc import SQLAlchemyError

from swipematch.core.errors import FeedUnavailableError, InvalidInputError
from swipematch.db.models.profile import Profile
from swipematch.db.unit_of_work import UnitOfWork
from swipematch.matching.config import MatchingConfig
from swipematch.matching.models import CandidateProfile

logger = structlog.get_logger(__name__)


class CandidateSelector:
    """Selects visible profiles the viewer has not decided on yet."""

    def __init__(self, uow: UnitOfWork, config: MatchingConfig | None = None):
        """
        Initialize candidate selector.

        Args:
            uow: Unit of work for the current request
            config: Matching configuration
        """
        self.uow = uow
        self.config = config or MatchingConfig()
        self.feed_config = self.config.feed

    def resolve_limit(self, limit: int | None) -> int:
        """Default a missing limit and clamp large ones to the configured max."""
        if limit is None:
            return self.feed_config.page_size
        if limit < 1:
            raise InvalidInputError("limit must be at least 1")
        return min(limit, self.feed_config.max_page_size)

    async def select_candidates(
        self, viewer_id: str, limit: int | None = None
    ) -> list[CandidateProfile]:
        """
        Return one window of the viewer's discovery feed.

        The exclusion set (the viewer plus everyone they swiped on, in any
        direction) is recomputed on every call as an anti-join against the
        swipe ledger. An empty list means there are no more candidates.

        Raises:
            InvalidInputError: blank viewer or non-positive limit
            FeedUnavailableError: the underlying query failed
        """
        if not viewer_id:
            raise InvalidInputError("viewer_id is required")
        window = self.resolve_limit(limit)

        try:
            profiles = await self.uow.profiles.get_candidates(
                viewer_id=viewer_id,
                decided_clause=self.uow.swipes.decided_by(viewer_id, Profile.user_id),
                limit=window,
                require_photo=self.feed_config.require_photo,
            )
        except SQLAlchemyError as exc:
            logger.error("feed.query_failed", viewer_id=viewer_id, error=str(exc))
            raise FeedUnavailableError("Discovery feed is temporarily unavailable") from exc

        logger.info("feed.selected", viewer_id=viewer_id, limit=window, returned=len(profiles))
        return [CandidateProfile.model_validate(p) for p in profiles]
