"""Administrative endpoints: match overrides, report triage and metrics."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError

from swipematch.core.errors import MatchingError, to_http_exception
from swipematch.core.identity import require_admin
from swipematch.db.repositories import canonical_pair
from swipematch.db.unit_of_work import UnitOfWork, get_uow
from swipematch.matching.config import get_matching_config
from swipematch.matching.engine import MatchingEngine
from swipematch.matching.metrics import get_metrics
from swipematch.moderation.interlock import ModerationInterlock
from swipematch.moderation.models import ReportView

router = APIRouter(prefix="/admin", tags=["admin"])


# Request/Response models
class ForceMatchRequest(BaseModel):
    """Match the calling admin with a target user."""

    target_user_id: str = Field(..., description="User to match with the caller")


class ForceMatchResponse(BaseModel):
    ok: bool = True
    created: bool


class MatchParticipant(BaseModel):
    user_id: str
    display_name: Optional[str] = None
    photo_path: Optional[str] = None


class AdminMatch(BaseModel):
    id: int
    user_a: MatchParticipant
    user_b: MatchParticipant
    created_at: datetime


class AdminMatchesResponse(BaseModel):
    matches: list[AdminMatch]


class DeleteMatchResponse(BaseModel):
    ok: bool = True


class ReportsResponse(BaseModel):
    reports: list[ReportView]


class ReportStatusRequest(BaseModel):
    status: str = Field(..., description="open, investigating or resolved")


class ReportStatusResponse(BaseModel):
    ok: bool = True
    report: ReportView


def _request_id() -> Optional[str]:
    return structlog.contextvars.get_contextvars().get("request_id")


# Endpoints


@router.post("/force-match", response_model=ForceMatchResponse)
async def force_match(
    request: ForceMatchRequest,
    admin_id: str = Depends(require_admin),
    uow: UnitOfWork = Depends(get_uow),
):
    """
    Match the calling admin with the target, regardless of prior swipes.

    Likes are written in both directions. Repeating the call is a no-op.
    The audit row is flushed first so the engine's commit covers it.
    """
    engine = MatchingEngine(uow, get_matching_config())
    try:
        canonical_pair(admin_id, request.target_user_id)
        await uow.logs.create_log(
            level="INFO",
            event="admin.force_match",
            message=f"Admin {admin_id} force-matched with {request.target_user_id}",
            component="admin",
            request_id=_request_id(),
            actor_id=admin_id,
            details={"target_user_id": request.target_user_id},
        )
        created = await engine.force_match(admin_id, request.target_user_id)
    except (MatchingError, SQLAlchemyError) as e:
        raise to_http_exception(e) from e

    return ForceMatchResponse(created=created)


@router.get("/matches", response_model=AdminMatchesResponse)
async def list_matches(
    search: Optional[str] = Query(None, description="Filter by participant display name"),
    admin_id: str = Depends(require_admin),
    uow: UnitOfWork = Depends(get_uow),
):
    """
    List recent matches with both participants' profiles.

    ``search`` is a case-insensitive substring match on either display name.
    """
    config = get_matching_config()
    try:
        matches = await uow.matches.get_recent(limit=config.admin_list_limit)
        user_ids = {m.user_low_id for m in matches} | {m.user_high_id for m in matches}
        profiles = await uow.profiles.get_many(user_ids)
    except SQLAlchemyError as e:
        raise to_http_exception(e) from e

    def participant(user_id: str) -> MatchParticipant:
        profile = profiles.get(user_id)
        if profile is None:
            return MatchParticipant(user_id=user_id)
        return MatchParticipant(
            user_id=user_id,
            display_name=profile.display_name,
            photo_path=profile.photo_path,
        )

    needle = (search or "").strip().lower()
    results = []
    for match in matches:
        user_a = participant(match.user_low_id)
        user_b = participant(match.user_high_id)
        if needle and not any(
            needle in (p.display_name or "").lower() for p in (user_a, user_b)
        ):
            continue
        results.append(
            AdminMatch(id=match.id, user_a=user_a, user_b=user_b, created_at=match.created_at)
        )

    return AdminMatchesResponse(matches=results)


@router.delete("/matches/{match_id}", response_model=DeleteMatchResponse)
async def delete_match(
    match_id: int,
    admin_id: str = Depends(require_admin),
    uow: UnitOfWork = Depends(get_uow),
):
    """Delete a match by id, committing the audit row with the delete."""
    engine = MatchingEngine(uow, get_matching_config())
    try:
        if await uow.matches.get_by_id(match_id) is None:
            raise HTTPException(status_code=404, detail="Match not found")
        await uow.logs.create_log(
            level="INFO",
            event="admin.unmatch",
            message=f"Admin {admin_id} deleted match {match_id}",
            component="admin",
            request_id=_request_id(),
            actor_id=admin_id,
            match_id=match_id,
        )
        if not await engine.unmatch_by_id(match_id):
            raise HTTPException(status_code=404, detail="Match not found")
    except (MatchingError, SQLAlchemyError) as e:
        raise to_http_exception(e) from e

    return DeleteMatchResponse()


@router.get("/reports", response_model=ReportsResponse)
async def list_reports(
    status: Optional[str] = Query(None, description="Filter by report status"),
    admin_id: str = Depends(require_admin),
    uow: UnitOfWork = Depends(get_uow),
):
    """List recent reports, newest first."""
    interlock = ModerationInterlock(uow)
    try:
        reports = await interlock.list_reports(
            status=status, limit=get_matching_config().admin_list_limit
        )
    except (MatchingError, SQLAlchemyError) as e:
        raise to_http_exception(e) from e

    return ReportsResponse(reports=reports)


@router.patch("/reports/{report_id}", response_model=ReportStatusResponse)
async def update_report_status(
    report_id: int,
    request: ReportStatusRequest,
    admin_id: str = Depends(require_admin),
    uow: UnitOfWork = Depends(get_uow),
):
    """Move a report to open, investigating or resolved."""
    interlock = ModerationInterlock(uow)
    try:
        report = await interlock.update_report_status(
            report_id, request.status, actor_id=admin_id, request_id=_request_id()
        )
    except (MatchingError, SQLAlchemyError) as e:
        raise to_http_exception(e) from e

    return ReportStatusResponse(report=report)


@router.get("/metrics")
async def get_matching_metrics(admin_id: str = Depends(require_admin)) -> dict[str, Any]:
    """Snapshot of the in-process matching counters."""
    return get_metrics().get_summary()
