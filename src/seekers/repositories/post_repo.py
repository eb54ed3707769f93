"""Data access helpers for working with posts."""
from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from seekers.models.post import Post, SectPost

__all__ = ["PostOrder", "PostRepository"]

PostModel = TypeVar("PostModel", Post, SectPost)


class PostOrder(str, Enum):
    """Supported feed orderings."""

    NEWEST = "newest"
    OLDEST = "oldest"
    MOST_LIKED = "most-liked"

    @classmethod
    def from_query(cls, sort: str | None) -> PostOrder:
        """Map the ``sort`` query parameter onto an ordering; unknown values mean newest."""
        if sort == "likes":
            return cls.MOST_LIKED
        if sort == "oldest":
            return cls.OLDEST
        return cls.NEWEST


class PostRepository(Generic[PostModel]):
    """Thin wrapper around database access for one post table."""

    def __init__(self, session: Session, model: type[PostModel]) -> None:
        """Initialize the repository with a SQLAlchemy session and the mapped class."""
        self.session = session
        self.model = model

    def get_by_id(self, post_id: int) -> PostModel | None:
        """Return a post by identifier."""
        return self.session.get(self.model, post_id)

    def list_all(self, order: PostOrder, sect: str | None = None) -> list[PostModel]:
        """Return every post, optionally restricted to one sect, in the given order.

        Ties on the primary sort key fall back to the post id so results are
        stable between calls.
        """
        model = self.model
        stmt = select(model)
        if sect is not None:
            stmt = stmt.where(model.sect == sect)  # type: ignore[union-attr]

        if order is PostOrder.OLDEST:
            stmt = stmt.order_by(model.timestamp.asc(), model.id.asc())
        elif order is PostOrder.MOST_LIKED:
            stmt = stmt.order_by(model.likes.desc(), model.id.desc())
        else:
            stmt = stmt.order_by(model.timestamp.desc(), model.id.desc())
        return list(self.session.scalars(stmt))

    def list_by_author(self, username: str) -> list[PostModel]:
        """Return the posts written by ``username``, newest first."""
        model = self.model
        stmt = (
            select(model)
            .where(model.username == username)
            .order_by(model.timestamp.desc(), model.id.desc())
        )
        return list(self.session.scalars(stmt))

    def create(self, **fields: object) -> PostModel:
        """Insert a new post and return the persisted ORM instance."""
        post = self.model(**fields)
        self.session.add(post)
        self.session.flush()
        return post

    def increment_likes(self, post_id: int, delta: int = 1) -> int | None:
        """Atomically add ``delta`` likes and return the new count.

        Returns None when no row has ``post_id``.
        """
        model = self.model
        result = self.session.execute(
            update(model).where(model.id == post_id).values(likes=model.likes + delta)
        )
        if result.rowcount == 0:
            return None
        return self.session.scalar(select(model.likes).where(model.id == post_id))

    def delete(self, post_id: int) -> bool:
        """Remove a post; return False when it did not exist."""
        model = self.model
        result = self.session.execute(delete(model).where(model.id == post_id))
        return result.rowcount > 0
