"""Audit log model for admin and moderation actions."""

from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import String, Text, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from swipematch.db.base import Base


class Log(Base):
    """
    Audit trail of privileged actions.

    Records who forced or removed a match and who moved a report through
    its lifecycle.
    """

    __tablename__ = "logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    level: Mapped[str] = mapped_column(
        String(20), nullable=False, index=True,
        comment="Log level (e.g., 'INFO', 'WARNING', 'ERROR')"
    )
    event: Mapped[str] = mapped_column(
        String(100), nullable=False, index=True,
        comment="Event type (e.g., 'admin.force_match', 'report.status_changed')"
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)

    component: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    request_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    actor_id: Mapped[Optional[str]] = mapped_column(
        String(64), nullable=True, index=True,
        comment="User who performed the action"
    )

    details: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True,
        comment="JSON blob with additional context"
    )

    match_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    report_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True
    )

    def __repr__(self) -> str:
        return f"<Log(id={self.id}, level={self.level}, event={self.event})>"
