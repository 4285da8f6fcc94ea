"""Error taxonomy shared by the matching core and its HTTP surface."""

import structlog
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

logger = structlog.get_logger(__name__)


class MatchingError(Exception):
    """Base exception for matching core errors."""

    pass


class InvalidInputError(MatchingError, ValueError):
    """Raised before any write when a request is malformed.

    Covers self-swipes, self-reports, blank ids and unknown
    direction/status values.
    """

    pass


class NotFoundError(MatchingError):
    """Raised when the caller needs to know a target does not exist."""

    pass


class StoreUnavailableError(MatchingError):
    """Raised when the store cannot serve a read. Retryable by the caller."""

    retryable = True


class FeedUnavailableError(StoreUnavailableError):
    """Raised when the discovery feed query fails.

    Distinct from an empty feed, which means there are no more candidates.
    """

    pass


def to_http_exception(exc: Exception) -> HTTPException:
    """Map a core or store error onto the HTTPException the API returns."""
    if isinstance(exc, SQLAlchemyError):
        logger.error("store.error", error=str(exc))
        return HTTPException(status_code=503, detail="Store unavailable, retry later")
    if isinstance(exc, InvalidInputError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, StoreUnavailableError):
        return HTTPException(status_code=503, detail=str(exc))
    logger.error("matching.unhandled_error", error=str(exc), error_type=type(exc).__name__)
    return HTTPException(status_code=500, detail="Internal error")
