"""Match model keyed by the canonical (low, high) user pair."""

from datetime import datetime, timezone
from sqlalchemy import CheckConstraint, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from swipematch.db.base import Base

# Byte-order collation on Postgres so the CHECK below agrees with
# canonical_pair, which orders ids by code point.
PairId = String(64).with_variant(String(64, collation="C"), "postgresql")


class Match(Base):
    """
    Undirected match between two users.

    The pair is stored canonically ordered (``user_low_id < user_high_id``)
    so a pair of users can only ever own one row, whichever side created it.
    Row existence is the whole state: there is no status column.
    """

    __tablename__ = "matches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_low_id: Mapped[str] = mapped_column(
        PairId, nullable=False, index=True,
        comment="Lower id of the canonical pair"
    )
    user_high_id: Mapped[str] = mapped_column(
        PairId, nullable=False, index=True,
        comment="Higher id of the canonical pair"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        UniqueConstraint("user_low_id", "user_high_id", name="uq_match_pair"),
        CheckConstraint("user_low_id < user_high_id", name="ck_match_pair_ordered"),
    )

    def counterpart_of(self, user_id: str) -> str:
        """Return the other member of the pair."""
        return self.user_high_id if self.user_low_id == user_id else self.user_low_id

    def __repr__(self) -> str:
        return f"<Match(id={self.id}, {self.user_low_id} <-> {self.user_high_id})>"
