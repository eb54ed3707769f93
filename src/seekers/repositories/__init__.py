"""Data access layer."""

from .post_repo import PostOrder, PostRepository

__all__ = ["PostOrder", "PostRepository"]
