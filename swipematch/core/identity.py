"""Caller identity dependencies.

Authentication happens upstream; the gateway forwards the authenticated
user id in a trusted header (``USER_ID_HEADER``, ``X-User-Id`` by default).
"""

from __future__ import annotations

import structlog
from fastapi import Depends, HTTPException, Request

from swipematch.core.config import get_settings
from swipematch.db.unit_of_work import UnitOfWork, get_uow

logger = structlog.get_logger(__name__)


def get_current_user_id(request: Request) -> str:
    """Return the caller's user id or fail with 401."""
    header = get_settings().USER_ID_HEADER
    user_id = (request.headers.get(header) or "").strip()
    if not user_id:
        logger.info("auth.missing_identity", header=header)
        raise HTTPException(status_code=401, detail="Unauthorized")
    structlog.contextvars.bind_contextvars(user_id=user_id)
    return user_id


async def require_admin(
    user_id: str = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_uow),
) -> str:
    """Return the caller's id if their profile carries the admin flag, else 403."""
    profile = await uow.profiles.get_by_user_id(user_id)
    if profile is None or not profile.is_admin:
        logger.warning("auth.admin_denied", user_id=user_id)
        raise HTTPException(status_code=403, detail="Forbidden: Admin access required")
    return user_id
