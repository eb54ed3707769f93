# src/seekers/models/user.py
"""SQLAlchemy model for forum members."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from seekers.db.session import Base
from seekers.db.time import utcnow


class User(Base):
    """Forum member keyed by a generated id and re-identified by identity hash."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(80), unique=True, nullable=False)
    # Keyed one-way digest of the external account subject; never the raw value.
    identity_hash: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        index=True,
        nullable=False,
    )
    avatar_img: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_frame: Mapped[str | None] = mapped_column(Text, nullable=True)
    member_since: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    sect_name: Mapped[str | None] = mapped_column(
        String(80),
        ForeignKey("sects.name"),
        nullable=True,
    )
