from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from swipematch import __version__
from swipematch.admin.router import router as admin_router
from swipematch.core.config import get_settings
from swipematch.core.logging import configure_logging, request_id_middleware
from swipematch.db.base import engine
from swipematch.db.init import sanitize_db_url
from swipematch.matching.router import router as matching_router
from swipematch.moderation.router import router as moderation_router

logger = structlog.get_logger(__name__)

settings = get_settings()
configure_logging(settings.ENV, settings.DEBUG)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events."""
    logger.info(
        "app.startup",
        app=settings.APP_NAME,
        env=settings.ENV,
        database=sanitize_db_url(settings.database_url),
        unmatch_clears_swipes=settings.UNMATCH_CLEARS_SWIPES,
    )

    yield

    logger.info("app.shutdown", app=settings.APP_NAME)
    await engine.dispose()


app = FastAPI(title="Swipematch", version=__version__, lifespan=lifespan)
app.middleware("http")(request_id_middleware)
app.include_router(matching_router)
app.include_router(moderation_router)
app.include_router(admin_router)


@app.get("/")
def health_check():
    logger.debug("health_check")
    return {"status": "ok"}


@app.get("/healthz")
def healthz():
    logger.debug("healthz", env=settings.ENV)
    return {"status": "healthy", "env": settings.ENV}
