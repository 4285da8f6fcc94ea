"""REST API endpoints for swipes, the discovery feed and matches."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError

from swipematch.core.errors import MatchingError, to_http_exception
from swipematch.core.identity import get_current_user_id
from swipematch.db.unit_of_work import UnitOfWork, get_uow
from swipematch.matching.config import get_matching_config
from swipematch.matching.engine import MatchingEngine
from swipematch.matching.models import CandidateProfile, MatchSummary

router = APIRouter(tags=["matching"])


# Request/Response models
class SwipeRequest(BaseModel):
    """A swipe decision on another user."""

    target_user_id: str = Field(..., description="User being swiped on")
    direction: str = Field(..., description="'like' or 'pass'")


class SwipeResponse(BaseModel):
    ok: bool = True
    matched: bool


class FeedResponse(BaseModel):
    candidates: list[CandidateProfile]
    count: int


class MatchesResponse(BaseModel):
    matches: list[MatchSummary]


class UnmatchResponse(BaseModel):
    ok: bool = True
    deleted: bool


class ContactsRequest(BaseModel):
    """Counterparts whose contact details the caller wants."""

    user_ids: list[str] = Field(default_factory=list, max_length=500)


class ContactsResponse(BaseModel):
    contacts: dict[str, str]


def get_engine(uow: UnitOfWork = Depends(get_uow)) -> MatchingEngine:
    """Request-scoped matching engine."""
    return MatchingEngine(uow, get_matching_config())


# Endpoints


@router.post("/swipes", response_model=SwipeResponse)
async def record_swipe(
    request: SwipeRequest,
    user_id: str = Depends(get_current_user_id),
    engine: MatchingEngine = Depends(get_engine),
):
    """
    Record a like or pass on another user.

    ``matched`` is true only for the swipe that created a new match.
    """
    try:
        result = await engine.record_decision(
            user_id, request.target_user_id, request.direction
        )
    except (MatchingError, SQLAlchemyError) as e:
        raise to_http_exception(e) from e

    return SwipeResponse(matched=result.matched)


@router.get("/feed", response_model=FeedResponse)
async def get_feed(
    limit: Optional[int] = Query(None, description="Maximum candidates to return"),
    user_id: str = Depends(get_current_user_id),
    engine: MatchingEngine = Depends(get_engine),
):
    """
    Get the caller's next window of discovery candidates.

    An empty list means there is nobody left to show; a 503 means the
    feed could not be loaded and the caller should retry.
    """
    try:
        candidates = await engine.select_candidates(user_id, limit)
    except MatchingError as e:
        raise to_http_exception(e) from e

    return FeedResponse(candidates=candidates, count=len(candidates))


@router.get("/matches", response_model=MatchesResponse)
async def list_matches(
    user_id: str = Depends(get_current_user_id),
    engine: MatchingEngine = Depends(get_engine),
):
    """List the caller's matches, newest first."""
    try:
        matches = await engine.list_matches(user_id)
    except SQLAlchemyError as e:
        raise to_http_exception(e) from e

    return MatchesResponse(matches=matches)


@router.delete("/matches/{counterpart_id}", response_model=UnmatchResponse)
async def unmatch(
    counterpart_id: str,
    user_id: str = Depends(get_current_user_id),
    engine: MatchingEngine = Depends(get_engine),
):
    """Remove the caller's match with a counterpart. Idempotent."""
    try:
        deleted = await engine.unmatch(user_id, counterpart_id)
    except (MatchingError, SQLAlchemyError) as e:
        raise to_http_exception(e) from e

    return UnmatchResponse(deleted=deleted)


@router.post("/matches/contacts", response_model=ContactsResponse)
async def resolve_contacts(
    request: ContactsRequest,
    user_id: str = Depends(get_current_user_id),
    engine: MatchingEngine = Depends(get_engine),
):
    """
    Resolve contact numbers for matched counterparts.

    Counterparts that are not matched, do not share, or have no number
    are silently omitted.
    """
    try:
        contacts = await engine.resolve_contacts(user_id, request.user_ids)
    except (MatchingError, SQLAlchemyError) as e:
        raise to_http_exception(e) from e

    return ContactsResponse(contacts=contacts)
