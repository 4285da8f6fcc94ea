"""REST API endpoint for filing reports."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError

from swipematch.core.errors import MatchingError, to_http_exception
from swipematch.core.identity import get_current_user_id
from swipematch.db.unit_of_work import UnitOfWork, get_uow
from swipematch.moderation.interlock import ModerationInterlock
from swipematch.moderation.models import ReportView

router = APIRouter(prefix="/reports", tags=["moderation"])


class ReportRequest(BaseModel):
    """Report another user."""

    reported_user_id: str = Field(..., description="User being reported")
    reason: Optional[str] = Field(None, description="Short reason, up to 255 characters")
    details: Optional[str] = None


class ReportResponse(BaseModel):
    ok: bool = True
    report: ReportView


@router.post("", response_model=ReportResponse)
async def file_report(
    request: ReportRequest,
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow),
):
    """
    File a report against another user.

    Any match between the two users is removed; the report is kept even
    if that cleanup fails.
    """
    interlock = ModerationInterlock(uow)
    try:
        report = await interlock.file_report(
            user_id, request.reported_user_id, request.reason, request.details
        )
    except (MatchingError, SQLAlchemyError) as e:
        raise to_http_exception(e) from e

    return ReportResponse(report=report)
