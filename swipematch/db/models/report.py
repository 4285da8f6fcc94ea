"""Report model for user-to-user moderation reports."""

from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from swipematch.db.base import Base

REPORT_STATUSES = ("open", "investigating", "resolved")


class Report(Base):
    """A report filed by one user against another."""

    __tablename__ = "reports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    reporter_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    reported_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    reason: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="open",
        comment="'open', 'investigating' or 'resolved'"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('open', 'investigating', 'resolved')", name="ck_report_status"
        ),
        Index("idx_report_status_created", "status", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Report(id={self.id}, reporter_id={self.reporter_id}, "
            f"reported_id={self.reported_id}, status={self.status!r})>"
        )
