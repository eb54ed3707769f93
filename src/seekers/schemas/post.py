"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostResponse(BaseModel):
    """Schema for a post as shown on a feed."""

    id: int
    title: str
    content: str
    username: str
    timestamp: datetime
    likes: int = Field(..., ge=0)
    sect: str | None = None

    model_config = ConfigDict(from_attributes=True)


class LikeResponse(BaseModel):
    """Like count returned after a like."""

    likes: int = Field(..., ge=0, description="Like count after the increment")
