"""SQLAlchemy models for global and sect-scoped posts."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from seekers.db.session import Base
from seekers.db.time import utcnow


class Post(Base):
    """Entry on the global feed.

    The author is stored as a denormalised username copy rather than a
    foreign key so feeds render without a join.
    """

    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint("likes >= 0", name="ck_posts_likes_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    username: Mapped[str] = mapped_column(String(80), nullable=False, index=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class SectPost(Base):
    """Entry on a sect feed; same shape as :class:`Post` plus the sect name."""

    __tablename__ = "sect_posts"
    __table_args__ = (
        CheckConstraint("likes >= 0", name="ck_sect_posts_likes_non_negative"),
        Index("ix_sect_posts_sect", "sect"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    username: Mapped[str] = mapped_column(String(80), nullable=False, index=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sect: Mapped[str] = mapped_column(String(80), ForeignKey("sects.name"), nullable=False)
