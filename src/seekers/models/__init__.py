# src/seekers/models/__init__.py
"""SQLAlchemy models for the Seekers of Dao forum."""

from .post import Post, SectPost
from .sect import Sect
from .user import User
from .web_session import WebSession

__all__ = [
    "Post", "SectPost",
    "Sect",
    "User",
    "WebSession",
]
