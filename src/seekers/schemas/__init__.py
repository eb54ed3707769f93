"""
Pydantic schemas for API request/response models.

These schemas define the structure of page contexts and JSON responses.
"""

from .page import AuthFormPage, FeedPage, PageContext, ProfilePage, SectFormPage
from .post import LikeResponse, PostResponse
from .sect import SectResponse
from .user import UserResponse

__all__ = [
    "AuthFormPage", "FeedPage", "PageContext", "ProfilePage", "SectFormPage",
    "LikeResponse", "PostResponse",
    "SectResponse",
    "UserResponse",
]
