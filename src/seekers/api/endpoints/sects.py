# src/seekers/api/endpoints/sects.py
"""Sect membership endpoints."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Form, Query
from fastapi.responses import RedirectResponse

from seekers.api.dependencies import CurrentUserDep, SectServiceDep, page_context, redirect
from seekers.api.endpoints.feed import sect_path
from seekers.models import User
from seekers.schemas import SectFormPage, SectResponse
from seekers.services.errors import ForumError
from seekers.services.sects import SectMembershipService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sects"])

ErrorQuery = Annotated[str | None, Query()]
SectField = Annotated[str | None, Form()]


def _sect_page(sects: SectMembershipService, user: User, error: str | None) -> SectFormPage:
    return SectFormPage(
        **page_context(user, error),
        sects=[SectResponse.model_validate(sect) for sect in sects.list_sects()],
        current_sect=user.sect_name,
    )


@router.get("/joinSect", response_model=SectFormPage)
def join_sect_form(
    sects: SectServiceDep,
    current_user: CurrentUserDep,
    error: ErrorQuery = None,
) -> SectFormPage:
    """Join form with the registered sects."""
    return _sect_page(sects, current_user, error)


@router.post("/joinSect")
def join_sect(
    sects: SectServiceDep,
    current_user: CurrentUserDep,
    sect: SectField = None,
) -> RedirectResponse:
    """Join an existing sect."""
    try:
        joined = sects.join(current_user, sect)
    except ForumError as exc:
        logger.warning("%s could not join %r: %s", current_user.username, sect, exc)
        return redirect("/joinSect", str(exc))
    return redirect(sect_path(joined.name))


@router.get("/foundSect", response_model=SectFormPage)
def found_sect_form(
    sects: SectServiceDep,
    current_user: CurrentUserDep,
    error: ErrorQuery = None,
) -> SectFormPage:
    """Found form with the registered sects."""
    return _sect_page(sects, current_user, error)


@router.post("/foundSect")
def found_sect(
    sects: SectServiceDep,
    current_user: CurrentUserDep,
    sect: SectField = None,
) -> RedirectResponse:
    """Found a new sect and join it."""
    try:
        founded = sects.found(current_user, sect)
    except ForumError as exc:
        logger.warning("%s could not found %r: %s", current_user.username, sect, exc)
        return redirect("/foundSect", str(exc))
    return redirect(sect_path(founded.name))
