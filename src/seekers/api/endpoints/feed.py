# src/seekers/api/endpoints/feed.py
"""Feed endpoints: listing, posting, liking and deleting."""

from __future__ import annotations

import logging
from typing import Annotated
from urllib.parse import quote, urlsplit

from fastapi import APIRouter, Form, HTTPException, Query, Request, status
from fastapi.responses import RedirectResponse

from seekers.api.dependencies import (
    CurrentUserDep,
    FeedServiceDep,
    OptionalUserDep,
    page_context,
    redirect,
)
from seekers.repositories.post_repo import PostOrder
from seekers.schemas import FeedPage, LikeResponse, PostResponse, UserResponse
from seekers.services.errors import ForumError, NotFoundError, SectNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["feed"])

SortQuery = Annotated[
    str | None,
    Query(description="`likes` for most liked, `oldest` for oldest first; newest otherwise"),
]
ErrorQuery = Annotated[str | None, Query(description="Error message from a failed form")]
FormField = Annotated[str | None, Form()]


def sect_path(sect: str) -> str:
    return f"/sects/{quote(sect, safe='')}"


def _back(request: Request, default: str) -> str:
    """Return the path of the referring page on this site, or ``default``."""
    referer = request.headers.get("referer")
    if not referer:
        return default
    parts = urlsplit(referer)
    if parts.netloc and parts.netloc != request.url.netloc:
        return default
    return parts.path or default


def _feed_page(
    posts: list,
    user,
    *,
    sect: str | None,
    order: PostOrder,
    error: str | None,
) -> FeedPage:
    return FeedPage(
        **page_context(user, error),
        posts=[PostResponse.model_validate(post) for post in posts],
        user=UserResponse.model_validate(user) if user else None,
        sect=sect,
        sort=order.value,
    )


@router.get("/", response_model=FeedPage)
def home(
    feed: FeedServiceDep,
    user: OptionalUserDep,
    sort: SortQuery = None,
    error: ErrorQuery = None,
) -> FeedPage:
    """Global feed."""
    order = PostOrder.from_query(sort)
    posts = feed.list_posts(None, order)
    return _feed_page(posts, user, sect=None, order=order, error=error)


@router.get("/sects/{sect}", response_model=FeedPage)
def sect_feed(
    sect: str,
    feed: FeedServiceDep,
    user: OptionalUserDep,
    sort: SortQuery = None,
    error: ErrorQuery = None,
) -> FeedPage:
    """Feed of a single sect."""
    order = PostOrder.from_query(sort)
    try:
        posts = feed.list_posts(sect, order)
    except SectNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _feed_page(posts, user, sect=sect, order=order, error=error)


@router.post("/posts")
def create_post(
    feed: FeedServiceDep,
    current_user: CurrentUserDep,
    title: FormField = None,
    content: FormField = None,
) -> RedirectResponse:
    """Add a post to the global feed."""
    try:
        feed.create_post(title, content, current_user)
    except ForumError as exc:
        logger.warning("Post by %s rejected: %s", current_user.username, exc)
        return redirect("/", str(exc))
    return redirect("/")


@router.post("/sects/{sect}/posts")
def create_sect_post(
    sect: str,
    feed: FeedServiceDep,
    current_user: CurrentUserDep,
    title: FormField = None,
    content: FormField = None,
) -> RedirectResponse:
    """Add a post to a sect feed the author belongs to."""
    try:
        feed.create_post(title, content, current_user, sect=sect)
    except SectNotFoundError as exc:
        logger.warning("Sect post by %s to unknown sect %r", current_user.username, sect)
        return redirect("/", str(exc))
    except ForumError as exc:
        logger.warning("Sect post by %s to %s rejected: %s", current_user.username, sect, exc)
        return redirect(sect_path(sect), str(exc))
    return redirect(sect_path(sect))


def _like(feed, post_id: int, *, sect_scoped: bool) -> LikeResponse:
    try:
        likes = feed.like_post(post_id, sect_scoped=sect_scoped)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return LikeResponse(likes=likes)


@router.post("/like/{post_id}", response_model=LikeResponse)
def like_post(post_id: int, feed: FeedServiceDep, _current_user: CurrentUserDep) -> LikeResponse:
    """Like a global post and return the new count."""
    return _like(feed, post_id, sect_scoped=False)


@router.post("/like/sects/{post_id}", response_model=LikeResponse)
def like_sect_post(
    post_id: int,
    feed: FeedServiceDep,
    _current_user: CurrentUserDep,
) -> LikeResponse:
    """Like a sect post and return the new count."""
    return _like(feed, post_id, sect_scoped=True)


@router.post("/delete/{post_id}")
def delete_post(
    post_id: int,
    request: Request,
    feed: FeedServiceDep,
    current_user: CurrentUserDep,
) -> RedirectResponse:
    """Delete one of the caller's global posts."""
    back = _back(request, "/")
    try:
        feed.delete_post(post_id, current_user)
    except ForumError as exc:
        logger.warning("Delete of post %s by %s refused: %s", post_id, current_user.username, exc)
        return redirect(back, str(exc))
    return redirect(back)


@router.post("/delete/sects/{post_id}")
def delete_sect_post(
    post_id: int,
    request: Request,
    feed: FeedServiceDep,
    current_user: CurrentUserDep,
) -> RedirectResponse:
    """Delete one of the caller's sect posts."""
    default = sect_path(current_user.sect_name) if current_user.sect_name else "/"
    back = _back(request, default)
    try:
        feed.delete_post(post_id, current_user, sect_scoped=True)
    except ForumError as exc:
        logger.warning(
            "Delete of sect post %s by %s refused: %s", post_id, current_user.username, exc
        )
        return redirect(back, str(exc))
    return redirect(back)
