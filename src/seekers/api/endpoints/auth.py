# src/seekers/api/endpoints/auth.py
"""Authentication endpoints: local forms, Google sign-in and logout."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Form, Query
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool

from seekers.api.dependencies import (
    IdentityProviderDep,
    IdentityResolverDep,
    OptionalUserDep,
    SessionContextDep,
    page_context,
    redirect,
)
from seekers.core.settings import settings
from seekers.schemas import AuthFormPage
from seekers.services.errors import ForumError, IdentityProviderError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["authentication"])

ErrorQuery = Annotated[str | None, Query()]
UsernameField = Annotated[str | None, Form()]

LOCAL_LOGIN_DISABLED = "Username sign-in is disabled"


def _auth_page(user, error: str | None) -> AuthFormPage:
    return AuthFormPage(
        **page_context(user, error),
        google_enabled=settings.google_enabled,
        local_login_enabled=settings.local_login_enabled,
    )


@router.get("/register", response_model=AuthFormPage)
def register_form(user: OptionalUserDep, error: ErrorQuery = None) -> AuthFormPage:
    """Registration form context."""
    return _auth_page(user, error)


@router.post("/register")
def register(
    resolver: IdentityResolverDep,
    session_ctx: SessionContextDep,
    username: UsernameField = None,
) -> RedirectResponse:
    """Create an account from a username alone and log it in."""
    if not settings.local_login_enabled:
        return redirect("/register", LOCAL_LOGIN_DISABLED)
    try:
        user = resolver.register_local(username)
    except ForumError as exc:
        logger.warning("Registration of %r failed: %s", username, exc)
        return redirect("/register", str(exc))
    session_ctx.login(user)
    return redirect("/")


@router.get("/login", response_model=AuthFormPage)
def login_form(user: OptionalUserDep, error: ErrorQuery = None) -> AuthFormPage:
    """Login form context."""
    return _auth_page(user, error)


@router.post("/login")
def login(
    resolver: IdentityResolverDep,
    session_ctx: SessionContextDep,
    username: UsernameField = None,
) -> RedirectResponse:
    """Log in by username."""
    if not settings.local_login_enabled:
        return redirect("/login", LOCAL_LOGIN_DISABLED)
    try:
        user = resolver.login_local(username)
    except ForumError as exc:
        logger.info("Login of %r failed: %s", username, exc)
        return redirect("/login", str(exc))
    session_ctx.login(user)
    return redirect("/")


@router.get("/auth/google")
def google_login(
    provider: IdentityProviderDep,
    session_ctx: SessionContextDep,
) -> RedirectResponse:
    """Send the browser to Google's consent screen."""
    if not provider.enabled:
        return redirect("/login", "Google sign-in is not configured")
    state = session_ctx.begin_oauth()
    return RedirectResponse(provider.authorization_url(state), status_code=302)


@router.get("/auth/google/callback")
async def google_callback(
    provider: IdentityProviderDep,
    resolver: IdentityResolverDep,
    session_ctx: SessionContextDep,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> RedirectResponse:
    """Finish Google sign-in.

    Known identities are logged in; unknown ones are parked on the session
    until a username is chosen at ``/registerUsername``.
    """
    state_ok = await run_in_threadpool(session_ctx.consume_oauth_state, state)
    if error or not code or not state_ok:
        logger.warning("Google callback rejected (error=%s, state_ok=%s)", error, state_ok)
        return redirect("/login", "Google sign-in failed")

    try:
        subject = await provider.fetch_subject(code)
    except IdentityProviderError as exc:
        logger.error("Google sign-in failed: %s", exc)
        return redirect("/login", str(exc))

    resolved = await run_in_threadpool(resolver.resolve, provider.name, subject)
    if resolved.user is not None:
        await run_in_threadpool(session_ctx.login, resolved.user)
        return redirect("/")

    await run_in_threadpool(session_ctx.set_pending_identity, resolved.identity_hash)
    return redirect("/registerUsername")


@router.get("/registerUsername", response_model=AuthFormPage)
def register_username_form(
    session_ctx: SessionContextDep,
    user: OptionalUserDep,
    error: ErrorQuery = None,
) -> AuthFormPage | RedirectResponse:
    """Username form shown after a first Google sign-in."""
    if session_ctx.pending_identity is None:
        return redirect("/login")
    return _auth_page(user, error)


@router.post("/registerUsername")
def register_username(
    resolver: IdentityResolverDep,
    session_ctx: SessionContextDep,
    username: UsernameField = None,
) -> RedirectResponse:
    """Bind a username to the identity parked on the session."""
    identity_hash = session_ctx.pending_identity
    if identity_hash is None:
        return redirect("/login", "Sign in with Google first")
    try:
        user = resolver.register_username(username, identity_hash)
    except ForumError as exc:
        logger.warning("Username binding %r failed: %s", username, exc)
        return redirect("/registerUsername", str(exc))
    session_ctx.login(user)
    return redirect("/")


@router.get("/logout")
def logout(session_ctx: SessionContextDep) -> RedirectResponse:
    """Clear the session."""
    session_ctx.logout()
    return redirect("/")
