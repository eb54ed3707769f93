"""Feed service: listing, creating, liking and deleting posts."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from seekers.core.settings import Settings, settings as default_settings
from seekers.db.time import utcnow
from seekers.models import Post, Sect, SectPost, User
from seekers.repositories.post_repo import PostOrder, PostRepository
from seekers.services.errors import (
    NotPostOwnerError,
    NotSectMemberError,
    PostNotFoundError,
    SectNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

__all__ = ["FeedService", "PostOrder", "clean_text"]


def clean_text(value: str | None, field: str, max_length: int) -> str:
    """Strip ``value`` and check it is present and within ``max_length``."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{field} is required")
    if len(cleaned) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return cleaned


class FeedService:
    """Operations over the global feed and the per-sect feeds.

    A ``sect`` argument of None addresses the global feed.
    """

    def __init__(self, db: Session, settings: Settings | None = None) -> None:
        self.db = db
        self.settings = settings or default_settings
        self.posts: PostRepository[Post] = PostRepository(db, Post)
        self.sect_posts: PostRepository[SectPost] = PostRepository(db, SectPost)

    def _repo(self, sect_scoped: bool) -> PostRepository:
        return self.sect_posts if sect_scoped else self.posts

    def _ensure_sect(self, sect: str) -> None:
        if self.db.get(Sect, sect) is None:
            raise SectNotFoundError(sect)

    def list_posts(
        self,
        sect: str | None = None,
        order: PostOrder = PostOrder.NEWEST,
    ) -> list[Post] | list[SectPost]:
        """Return the whole feed for ``sect`` (or the global feed) in ``order``."""
        if sect is None:
            return self.posts.list_all(order)
        self._ensure_sect(sect)
        return self.sect_posts.list_all(order, sect=sect)

    def create_post(
        self,
        title: str | None,
        content: str | None,
        author: User,
        sect: str | None = None,
    ) -> Post | SectPost:
        """Validate and store a new post with zero likes.

        Raises:
            ValidationError: If title or content is empty or too long.
            SectNotFoundError: If ``sect`` is not registered.
            NotSectMemberError: If posting to a sect the author has not joined.
        """
        title = clean_text(title, "Title", self.settings.post_title_max_length)
        content = clean_text(content, "Content", self.settings.post_content_max_length)

        fields: dict[str, object] = {
            "title": title,
            "content": content,
            "username": author.username,
            "timestamp": utcnow(),
            "likes": 0,
        }
        if sect is None:
            post = self.posts.create(**fields)
        else:
            self._ensure_sect(sect)
            if author.sect_name != sect:
                raise NotSectMemberError(sect)
            post = self.sect_posts.create(sect=sect, **fields)

        self.db.commit()
        logger.info(
            "Post %s created by %s in %s",
            post.id,
            author.username,
            sect or "global feed",
        )
        return post

    def like_post(self, post_id: int, *, sect_scoped: bool = False) -> int:
        """Add exactly one like and return the new count."""
        likes = self._repo(sect_scoped).increment_likes(post_id)
        if likes is None:
            self.db.rollback()
            raise PostNotFoundError(post_id)
        self.db.commit()
        return likes

    def delete_post(self, post_id: int, requester: User, *, sect_scoped: bool = False) -> None:
        """Delete a post written by ``requester``."""
        repo = self._repo(sect_scoped)
        post = repo.get_by_id(post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        if post.username != requester.username:
            raise NotPostOwnerError(post_id)
        repo.delete(post_id)
        self.db.commit()
        logger.info("Post %s deleted by %s", post_id, requester.username)

    def list_user_posts(self, username: str) -> tuple[list[Post], list[SectPost]]:
        """Return ``(global_posts, sect_posts)`` written by ``username``."""
        return self.posts.list_by_author(username), self.sect_posts.list_by_author(username)
