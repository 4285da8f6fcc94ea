"""Configuration for the matching engine.

Feed paging
-----------
The discovery feed returns one window of candidates per request
(``page_size``, 25 by default). It is not cursor pagination: the caller
re-queries after each decision and the exclusion set only grows, so the
next window is always fresh.

Unmatch and swipes
------------------
Unmatching deletes the Match row only. Because both ``like`` swipes stay
in the ledger, the pair remains excluded from each other's feed for good.
``unmatch_clears_swipes`` switches explicit/admin unmatch to also delete
the pair's swipes so they can rediscover each other. Moderation-triggered
unmatch never clears swipes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, model_validator

if TYPE_CHECKING:
    from swipematch.core.config import Settings


class FeedConfig(BaseModel):
    """Configuration for candidate selection."""

    page_size: int = Field(
        default=25, ge=1, le=500, description="Candidates returned when no limit is given"
    )
    max_page_size: int = Field(
        default=100, ge=1, le=500, description="Cap applied to caller-supplied limits"
    )
    require_photo: bool = Field(
        default=True, description="Only surface profiles with a photo"
    )

    @model_validator(mode="after")
    def _page_size_within_max(self) -> "FeedConfig":
        if self.page_size > self.max_page_size:
            raise ValueError(
                f"page_size ({self.page_size}) exceeds max_page_size ({self.max_page_size})"
            )
        return self


class MatchingConfig(BaseModel):
    """Complete matching engine configuration."""

    feed: FeedConfig = Field(default_factory=FeedConfig)
    unmatch_clears_swipes: bool = Field(
        default=False, description="Delete the pair's swipes on explicit/admin unmatch"
    )
    admin_list_limit: int = Field(
        default=500, ge=1, description="Row cap for admin listings"
    )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "MatchingConfig":
        """Build configuration from application settings."""
        return cls(
            feed=FeedConfig(
                page_size=settings.FEED_PAGE_SIZE,
                max_page_size=settings.FEED_MAX_PAGE_SIZE,
            ),
            unmatch_clears_swipes=settings.UNMATCH_CLEARS_SWIPES,
            admin_list_limit=settings.ADMIN_LIST_LIMIT,
        )


def get_matching_config() -> MatchingConfig:
    """Matching configuration derived from the cached settings."""
    from swipematch.core.config import get_settings

    return MatchingConfig.from_settings(get_settings())
