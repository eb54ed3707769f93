"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserResponse(BaseModel):
    """Public profile information. The identity hash is never exposed."""

    id: int
    username: str
    avatar_img: str | None
    avatar_frame: str | None
    member_since: datetime
    sect_name: str | None

    model_config = ConfigDict(from_attributes=True)
