"""Swipe model: one directed like/pass decision per (actor, target)."""

from datetime import datetime, timezone
from sqlalchemy import CheckConstraint, DateTime, Integer, String, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from swipematch.db.base import Base


class Swipe(Base):
    """
    Directed decision of ``actor_id`` about ``target_id``.

    Unique per ordered pair; a new decision overwrites the previous one.
    Rows are never deleted by the normal flow, so they double as the
    "already decided" record for the discovery feed.
    """

    __tablename__ = "swipes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    actor_id: Mapped[str] = mapped_column(
        String(64), nullable=False, index=True,
        comment="User who made the decision"
    )
    target_id: Mapped[str] = mapped_column(
        String(64), nullable=False,
        comment="User the decision is about"
    )
    direction: Mapped[str] = mapped_column(
        String(8), nullable=False,
        comment="'like' or 'pass'"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        UniqueConstraint("actor_id", "target_id", name="uq_swipe_actor_target"),
        CheckConstraint("direction IN ('like', 'pass')", name="ck_swipe_direction"),
        Index("idx_swipe_target_direction", "target_id", "direction"),
    )

    def __repr__(self) -> str:
        return f"<Swipe({self.actor_id} -> {self.target_id}, direction={self.direction!r})>"
