"""Profile model: the discovery-feed view of a user."""

from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import Boolean, CheckConstraint, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from swipematch.db.base import Base


class Profile(Base):
    """
    One profile per user, written by the profile-management flow.

    The matching core only reads it. ``is_live`` is the owner's visibility
    switch; it can never be true while ``is_complete`` is false.
    """

    __tablename__ = "profiles"

    # Identity (owned by the external identity provider)
    user_id: Mapped[str] = mapped_column(
        String(64), primary_key=True,
        comment="Opaque user id from the identity provider"
    )

    # Display attributes
    display_name: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    technical_expertise: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    domain_expertise: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    location_tz: Mapped[Optional[str]] = mapped_column(
        String(120), nullable=True,
        comment="Location and timezone, combined"
    )
    skills_background: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    interests_building: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    linkedin_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    photo_path: Mapped[Optional[str]] = mapped_column(
        String(512), nullable=True,
        comment="Storage path of the profile photo"
    )

    # Flags
    is_complete: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
        comment="Derived from required-field presence on every write"
    )
    is_live: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
        comment="Visible in other users' discovery feeds"
    )
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc),
        comment="Feed ordering key"
    )

    __table_args__ = (
        CheckConstraint("NOT is_live OR is_complete", name="ck_profile_live_requires_complete"),
        Index("idx_profile_feed", "is_live", "updated_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Profile(user_id={self.user_id}, display_name={self.display_name}, "
            f"is_complete={self.is_complete}, is_live={self.is_live})>"
        )
