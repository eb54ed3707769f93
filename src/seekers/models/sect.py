"""SQLAlchemy model for the sect registry."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from seekers.db.session import Base
from seekers.db.time import utcnow


class Sect(Base):
    """Named interest group. A sect exists exactly when its row exists."""

    __tablename__ = "sects"

    name: Mapped[str] = mapped_column(String(80), primary_key=True)
    # Plain id copy; founders are never deleted so no cascade is needed.
    founder_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    founded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
