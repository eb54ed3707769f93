# src/seekers/main.py
"""Main entry point for the Seekers of Dao forum."""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from seekers.api import (
    auth_router,
    feed_router,
    profile_router,
    sects_router,
    system_router,
)
from seekers.api.dependencies import LoginRequired, redirect
from seekers.core.settings import settings
from seekers.db.session import Database, DatabaseUnavailableError
from seekers.services.google_identity import get_identity_provider

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def open_database() -> Database:
    """Open the store handle, creating tables when configured to."""
    database = Database(settings.effective_database_url, echo=settings.sql_debug)
    database.open()
    if settings.create_tables_on_startup:
        database.create_tables()
    return database


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    try:
        app.state.database = open_database()
    except DatabaseUnavailableError:
        logger.critical("Database unavailable at startup", exc_info=True)
        raise
    try:
        yield
    finally:
        await get_identity_provider().close()
        app.state.database.close()


configure_logging(settings.log_level)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Forum of posts, likes and sects",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key,
    session_cookie=settings.session_cookie_name,
    max_age=settings.session_max_age_seconds,
    same_site="lax",
    https_only=settings.session_https_only,
)

app.include_router(feed_router)
app.include_router(auth_router)
app.include_router(sects_router)
app.include_router(profile_router)
app.include_router(system_router)


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired) -> RedirectResponse:
    """Send anonymous callers of protected routes to the login page."""
    logger.debug("Anonymous request to %s redirected to login", request.url.path)
    return redirect(exc.redirect_to)


def serve() -> None:
    """Run the forum with uvicorn; exit with status 1 if the store is unreachable."""
    import uvicorn

    configure_logging(settings.log_level)
    try:
        open_database().close()
    except DatabaseUnavailableError as exc:
        logger.critical("Cannot start: %s", exc)
        sys.exit(1)
    uvicorn.run(
        "seekers.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    serve()
