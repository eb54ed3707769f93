"""initial forum schema

Revision ID: 0001
Revises:
Create Date: 2024-05-20 10:00:00.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, sects, posts, sect posts and web sessions."""
    op.create_table(
        "sects",
        sa.Column("name", sa.String(length=80), nullable=False),
        sa.Column("founder_id", sa.Integer(), nullable=True),
        sa.Column("founded_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("name"),
    )
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=80), nullable=False),
        sa.Column("identity_hash", sa.String(length=64), nullable=False),
        sa.Column("avatar_img", sa.Text(), nullable=True),
        sa.Column("avatar_frame", sa.Text(), nullable=True),
        sa.Column("member_since", sa.DateTime(timezone=True), nullable=False),
        sa.Column("sect_name", sa.String(length=80), nullable=True),
        sa.ForeignKeyConstraint(["sect_name"], ["sects.name"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_index("ix_users_identity_hash", "users", ["identity_hash"], unique=True)

    op.create_table(
        "posts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("username", sa.String(length=80), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("likes", sa.Integer(), nullable=False),
        sa.CheckConstraint("likes >= 0", name="ck_posts_likes_non_negative"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_posts_username", "posts", ["username"])

    op.create_table(
        "sect_posts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("username", sa.String(length=80), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("likes", sa.Integer(), nullable=False),
        sa.Column("sect", sa.String(length=80), nullable=False),
        sa.CheckConstraint("likes >= 0", name="ck_sect_posts_likes_non_negative"),
        sa.ForeignKeyConstraint(["sect"], ["sects.name"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sect_posts_sect", "sect_posts", ["sect"])
    op.create_index("ix_sect_posts_username", "sect_posts", ["username"])

    op.create_table(
        "web_sessions",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("pending_identity_hash", sa.String(length=64), nullable=True),
        sa.Column("oauth_state", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Drop every forum table."""
    op.drop_table("web_sessions")
    op.drop_index("ix_sect_posts_username", table_name="sect_posts")
    op.drop_index("ix_sect_posts_sect", table_name="sect_posts")
    op.drop_table("sect_posts")
    op.drop_index("ix_posts_username", table_name="posts")
    op.drop_table("posts")
    op.drop_index("ix_users_identity_hash", table_name="users")
    op.drop_table("users")
    op.drop_table("sects")
