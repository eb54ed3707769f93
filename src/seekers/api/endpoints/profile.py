"""Profile endpoints."""

from typing import Annotated

from fastapi import APIRouter, Form, Query
from fastapi.responses import RedirectResponse

from seekers.api.dependencies import (
    CurrentUserDep,
    FeedServiceDep,
    SessionDep,
    page_context,
    redirect,
)
from seekers.core.settings import settings
from seekers.schemas import PostResponse, ProfilePage, UserResponse
from seekers.services import profile as profile_service
from seekers.services.errors import ForumError

router = APIRouter(tags=["profile"])


@router.get("/profile", response_model=ProfilePage)
def get_profile(
    feed: FeedServiceDep,
    current_user: CurrentUserDep,
    error: Annotated[str | None, Query()] = None,
) -> ProfilePage:
    """The caller's profile with everything they have posted."""
    posts, sect_posts = feed.list_user_posts(current_user.username)
    return ProfilePage(
        **page_context(current_user, error),
        user=UserResponse.model_validate(current_user),
        posts=[PostResponse.model_validate(post) for post in posts],
        sect_posts=[PostResponse.model_validate(post) for post in sect_posts],
        avatar_choices=settings.avatar_choices,
        frame_choices=settings.frame_choices,
    )


@router.post("/choosePic")
def choose_pic(
    db: SessionDep,
    current_user: CurrentUserDep,
    avatar_img: Annotated[str | None, Form()] = None,
) -> RedirectResponse:
    """Pick an avatar image."""
    try:
        profile_service.choose_avatar(db, current_user, avatar_img, settings)
    except ForumError as exc:
        return redirect("/profile", str(exc))
    return redirect("/profile")


@router.post("/chooseFrame")
def choose_frame(
    db: SessionDep,
    current_user: CurrentUserDep,
    avatar_frame: Annotated[str | None, Form()] = None,
) -> RedirectResponse:
    """Pick an avatar frame."""
    try:
        profile_service.choose_frame(db, current_user, avatar_frame, settings)
    except ForumError as exc:
        return redirect("/profile", str(exc))
    return redirect("/profile")
