"""Data models for matching decisions, candidates and matches."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from swipematch.core.errors import InvalidInputError


class SwipeDirection(str, Enum):
    """Direction of a swipe decision."""

    LIKE = "like"
    PASS = "pass"

    @classmethod
    def parse(cls, value: "SwipeDirection | str") -> "SwipeDirection":
        """Parse a direction, raising InvalidInputError for anything else."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidInputError(
                f"Invalid direction {value!r}: must be 'like' or 'pass'"
            ) from None


class DecisionResult(BaseModel):
    """Outcome of recording a swipe decision."""

    actor_id: str
    target_id: str
    direction: SwipeDirection
    matched: bool = Field(
        default=False,
        description="True only when this decision created a new match",
    )


class CandidateProfile(BaseModel):
    """Public view of a profile shown in the discovery feed.

    Contact data is deliberately absent.
    """

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    display_name: str | None = None
    technical_expertise: str | None = None
    domain_expertise: str | None = None
    location_tz: str | None = None
    skills_background: str | None = None
    interests_building: str | None = None
    linkedin_url: str | None = None
    photo_path: str | None = None
    updated_at: datetime


class MatchSummary(BaseModel):
    """A match from one user's point of view."""

    match_id: int
    counterpart_id: str
    matched_at: datetime
    profile: CandidateProfile | None = None
