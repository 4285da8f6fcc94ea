"""Data models for moderation reports."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

from swipematch.core.errors import InvalidInputError


class ReportStatus(str, Enum):
    """Lifecycle of a report."""

    OPEN = "open"
    INVESTIGATING = "investigating"
    RESOLVED = "resolved"

    @classmethod
    def parse(cls, value: "ReportStatus | str") -> "ReportStatus":
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise InvalidInputError(
                f"Invalid status {value!r}: must be one of {allowed}"
            ) from None


class ReportView(BaseModel):
    """Report as returned to callers."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    reporter_id: str
    reported_id: str
    reason: str | None = None
    details: str | None = None
    status: ReportStatus
    created_at: datetime
