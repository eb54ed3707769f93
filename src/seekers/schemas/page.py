"""Page contexts returned by the GET routes.

Each model carries what a page template would be rendered with.
"""

from pydantic import BaseModel, Field

from .post import PostResponse
from .sect import SectResponse
from .user import UserResponse


class PageContext(BaseModel):
    """Values shared by every page."""

    app_name: str
    copyright_year: int
    post_noun: str
    logged_in: bool = False
    user_id: int | None = None
    error: str | None = Field(None, description="Error message carried by the redirect")


class FeedPage(PageContext):
    """Global or sect feed."""

    posts: list[PostResponse]
    user: UserResponse | None = None
    sect: str | None = None
    sort: str = "newest"


class ProfilePage(PageContext):
    """The logged-in user's profile."""

    user: UserResponse
    posts: list[PostResponse]
    sect_posts: list[PostResponse]
    avatar_choices: list[str]
    frame_choices: list[str]


class SectFormPage(PageContext):
    """Join/found sect form with the existing sects."""

    sects: list[SectResponse]
    current_sect: str | None = None


class AuthFormPage(PageContext):
    """Login, registration and username-binding forms."""

    google_enabled: bool = False
    local_login_enabled: bool = True
