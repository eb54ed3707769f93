"""Sect-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class SectResponse(BaseModel):
    """Schema for a registered sect."""

    name: str
    founded_at: datetime

    model_config = ConfigDict(from_attributes=True)
