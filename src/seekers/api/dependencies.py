"""Shared API dependencies for authentication and common functionality."""

from __future__ import annotations

from typing import Annotated, Any
from urllib.parse import urlencode

from fastapi import Depends, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from seekers.core.settings import settings
from seekers.db.session import get_db
from seekers.models import User
from seekers.services.feed import FeedService
from seekers.services.google_identity import GoogleIdentityProvider, get_identity_provider
from seekers.services.identity import IdentityResolver
from seekers.services.sects import SectMembershipService
from seekers.services.session_context import SessionContext

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


class LoginRequired(Exception):
    """Raised by protected routes when the request carries no valid session."""

    def __init__(self, redirect_to: str = "/login") -> None:
        super().__init__("Login required")
        self.redirect_to = redirect_to


def get_session_context(request: Request, db: SessionDep) -> SessionContext:
    """Return the session view for the current request."""
    return SessionContext(request.session, db)


SessionContextDep = Annotated[SessionContext, Depends(get_session_context)]


def get_optional_user(session_ctx: SessionContextDep) -> User | None:
    """Return the logged-in user or None."""
    return session_ctx.current_user()


def get_current_user(session_ctx: SessionContextDep) -> User:
    """Return the logged-in user.

    Raises:
        LoginRequired: If the session has no user or the user no longer exists.
    """
    user = session_ctx.current_user()
    if user is None:
        raise LoginRequired()
    return user


OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_identity_provider_dep() -> GoogleIdentityProvider:
    """Return the shared Google identity provider."""
    return get_identity_provider()


def get_feed_service(db: SessionDep) -> FeedService:
    return FeedService(db, settings)


def get_identity_resolver(db: SessionDep) -> IdentityResolver:
    return IdentityResolver(db, settings)


def get_sect_service(db: SessionDep) -> SectMembershipService:
    return SectMembershipService(db, settings)


IdentityProviderDep = Annotated[GoogleIdentityProvider, Depends(get_identity_provider_dep)]
FeedServiceDep = Annotated[FeedService, Depends(get_feed_service)]
IdentityResolverDep = Annotated[IdentityResolver, Depends(get_identity_resolver)]
SectServiceDep = Annotated[SectMembershipService, Depends(get_sect_service)]


def page_context(user: User | None, error: str | None = None) -> dict[str, Any]:
    """Return the values every page is rendered with."""
    return {
        "app_name": settings.app_name,
        "copyright_year": settings.copyright_year,
        "post_noun": settings.post_noun,
        "logged_in": user is not None,
        "user_id": user.id if user else None,
        "error": error,
    }


def redirect(url: str, error: str | None = None) -> RedirectResponse:
    """Return a 303 redirect, optionally carrying an ``error`` query parameter."""
    if error:
        url = f"{url}?{urlencode({'error': error})}"
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)
