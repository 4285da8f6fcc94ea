"""Metrics tracking for the matching engine.

Counters are per-process and observability only; no matching decision
reads them.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class MatchingMetrics(BaseModel):
    """Counters for swipe, match, feed, disclosure and moderation activity."""

    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Swipe ledger
    total_decisions: int = 0
    total_likes: int = 0
    total_passes: int = 0

    # Reconciliation
    total_matches_created: int = 0
    total_match_replays: int = 0
    total_forced_matches: int = 0
    total_unmatches: int = 0

    # Feed
    total_feed_requests: int = 0
    total_candidates_served: int = 0
    total_empty_feeds: int = 0
    total_feed_failures: int = 0

    # Disclosure
    total_disclosure_requests: int = 0
    total_contacts_disclosed: int = 0

    # Moderation
    total_reports: int = 0
    total_moderation_unmatches: int = 0
    total_moderation_unmatch_failures: int = 0

    def _touch(self) -> None:
        self.last_updated = datetime.now(timezone.utc)

    def record_decision(self, direction: str, matched: bool | None) -> None:
        """Record a swipe and, for likes, whether it produced a new match."""
        self.total_decisions += 1
        if direction == "like":
            self.total_likes += 1
            if matched:
                self.total_matches_created += 1
            elif matched is not None:
                self.total_match_replays += 1
        else:
            self.total_passes += 1
        self._touch()

    def record_forced_match(self, created: bool) -> None:
        self.total_forced_matches += 1
        if created:
            self.total_matches_created += 1
        self._touch()

    def record_unmatch(self, deleted: bool) -> None:
        if deleted:
            self.total_unmatches += 1
        self._touch()

    def record_feed(self, served: int | None) -> None:
        """Record a feed request; ``served=None`` means the query failed."""
        self.total_feed_requests += 1
        if served is None:
            self.total_feed_failures += 1
        elif served == 0:
            self.total_empty_feeds += 1
        else:
            self.total_candidates_served += served
        self._touch()

    def record_disclosure(self, disclosed: int) -> None:
        self.total_disclosure_requests += 1
        self.total_contacts_disclosed += disclosed
        self._touch()

    def record_report(self, unmatched: bool, failed: bool = False) -> None:
        self.total_reports += 1
        if unmatched:
            self.total_moderation_unmatches += 1
        if failed:
            self.total_moderation_unmatch_failures += 1
        self._touch()

    @property
    def match_rate(self) -> float:
        """Share of likes that created a new match."""
        if self.total_likes == 0:
            return 0.0
        return self.total_matches_created / self.total_likes

    def get_summary(self) -> dict[str, Any]:
        """Get a JSON-friendly summary of all counters."""
        uptime = (self.last_updated - self.started_at).total_seconds()
        return {
            "started_at": self.started_at.isoformat(),
            "last_updated": self.last_updated.isoformat(),
            "uptime_seconds": uptime,
            "swipes": {
                "total": self.total_decisions,
                "likes": self.total_likes,
                "passes": self.total_passes,
            },
            "matches": {
                "created": self.total_matches_created,
                "replays": self.total_match_replays,
                "forced": self.total_forced_matches,
                "unmatched": self.total_unmatches,
                "match_rate": self.match_rate,
            },
            "feed": {
                "requests": self.total_feed_requests,
                "candidates_served": self.total_candidates_served,
                "empty": self.total_empty_feeds,
                "failures": self.total_feed_failures,
            },
            "disclosure": {
                "requests": self.total_disclosure_requests,
                "contacts_disclosed": self.total_contacts_disclosed,
            },
            "moderation": {
                "reports": self.total_reports,
                "unmatches": self.total_moderation_unmatches,
                "unmatch_failures": self.total_moderation_unmatch_failures,
            },
        }


_global_metrics: MatchingMetrics | None = None


def get_metrics() -> MatchingMetrics:
    """Get the process-wide metrics instance."""
    global _global_metrics
    if _global_metrics is None:
        _global_metrics = MatchingMetrics()
    return _global_metrics


def reset_metrics() -> None:
    """Reset the process-wide metrics."""
    global _global_metrics
    _global_metrics = MatchingMetrics()
    logger.info("Matching metrics reset")
