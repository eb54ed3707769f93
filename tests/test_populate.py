# tests/test_populate.py
"""Tests for the sample-data script."""

from sqlalchemy import func, select

from seekers.models import Post, Sect, SectPost, User
from seekers.scripts.populate_db import populate


def test_populate_is_idempotent(db_session) -> None:
    first = populate(db_session)
    second = populate(db_session)

    assert first == {"users": 2, "sects": 2, "posts": 2, "sect_posts": 2}
    assert second == {"users": 0, "sects": 0, "posts": 0, "sect_posts": 0}
    assert db_session.scalar(select(func.count()).select_from(User)) == 2
    assert db_session.scalar(select(func.count()).select_from(Sect)) == 2
    assert db_session.scalar(select(func.count()).select_from(Post)) == 2
    assert db_session.scalar(select(func.count()).select_from(SectPost)) == 2


def test_populated_members_belong_to_their_sects(db_session) -> None:
    populate(db_session)

    andy = db_session.scalar(select(User).where(User.username == "Daoist Andy"))
    assert andy.sect_name == "Doan Sect"
    sect = db_session.get(Sect, "Doan Sect")
    assert sect.founder_id == andy.id
