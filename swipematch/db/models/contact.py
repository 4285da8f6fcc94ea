"""Contact model: private channel value behind the disclosure gate."""

from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from swipematch.db.base import Base


class Contact(Base):
    """
    Per-user WhatsApp number and sharing preference.

    Written by the phone verification flow. Never returned by profile reads;
    only the disclosure gate reads it.
    """

    __tablename__ = "user_contacts"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)

    whatsapp: Mapped[Optional[str]] = mapped_column(
        String(32), nullable=True,
        comment="E.164 phone number"
    )
    share: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
        comment="Owner opt-in for disclosing (and receiving) contact values"
    )
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    def __repr__(self) -> str:
        return f"<Contact(user_id={self.user_id}, share={self.share}, verified={self.verified})>"
