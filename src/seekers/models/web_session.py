"""Server-side session records referenced by the session cookie."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from seekers.db.session import Base
from seekers.db.time import utcnow


class WebSession(Base):
    """Per-browser session state keyed by an opaque random id."""

    __tablename__ = "web_sessions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=True,
    )
    # Identity returned by the provider that still needs a username.
    pending_identity_hash: Mapped[str | None] = mapped_column(String(64), nullable=True)
    oauth_state: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
