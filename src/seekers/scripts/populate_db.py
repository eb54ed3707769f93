"""Populate the configured database with sample members, sects and posts."""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from seekers.core.security import derive_identity_hash
from seekers.core.settings import settings
from seekers.db.session import Database, DatabaseUnavailableError
from seekers.models import Post, Sect, SectPost, User

logger = logging.getLogger("seekers.populate")

SEED_PROVIDER = "seed"

SAMPLE_USERS = [
    {
        "username": "Daoist Andy",
        "avatar_img": "/images/profilePictures/pic1.jpeg",
        "avatar_frame": "/images/profilePictures/frame2.png",
        "member_since": datetime(2024, 1, 1, 12, 0, tzinfo=UTC),
        "sect_name": "Doan Sect",
    },
    {
        "username": "Young Master Wilson",
        "avatar_img": "/images/profilePictures/pic2.jpeg",
        "avatar_frame": "/images/profilePictures/frame2.png",
        "member_since": datetime(2024, 1, 2, 12, 0, tzinfo=UTC),
        "sect_name": "Truong Sect",
    },
]

SAMPLE_SECTS = [
    {"name": "Doan Sect", "founder": "Daoist Andy"},
    {"name": "Truong Sect", "founder": "Young Master Wilson"},
]

SAMPLE_POSTS = [
    {
        "title": "My Recent Musings",
        "content": (
            "This Daoist launched a technique at himself and became hurt, "
            "does that mean this Daoist is mighty or feeble?"
        ),
        "username": "Daoist Andy",
        "timestamp": datetime(2024, 1, 1, 12, 30, tzinfo=UTC),
        "likes": 0,
    },
    {
        "title": "The Decreasing Quality of Daoists Nowadays...",
        "content": (
            "Upon reading Daoist Andy's post, this Senior didn't know whether to laugh "
            "or cry. Daoists these days are truly horrendous. Daoist Andy has eyes but "
            "cannot see Mount Tai..."
        ),
        "username": "Young Master Wilson",
        "timestamp": datetime(2024, 1, 2, 12, 30, tzinfo=UTC),
        "likes": 40,
    },
]

SAMPLE_SECT_POSTS = [
    {
        "title": "Truong Sect",
        "content": "I hate the Truong Sect",
        "username": "Daoist Andy",
        "timestamp": datetime(2024, 1, 1, 12, 30, tzinfo=UTC),
        "likes": 0,
        "sect": "Doan Sect",
    },
    {
        "title": "Indeed",
        "content": "I agree",
        "username": "Daoist Andy",
        "timestamp": datetime(2024, 1, 2, 12, 30, tzinfo=UTC),
        "likes": 40,
        "sect": "Doan Sect",
    },
]


def populate(db: Session) -> dict[str, int]:
    """Insert the sample rows that are missing and return how many were added."""
    added = {"users": 0, "sects": 0, "posts": 0, "sect_posts": 0}

    # Sects go in first: users reference them by name.
    existing_sects = set(db.scalars(select(Sect.name)))
    new_sects: list[Sect] = []
    for data in SAMPLE_SECTS:
        if data["name"] in existing_sects:
            continue
        new_sects.append(Sect(name=data["name"]))
    db.add_all(new_sects)
    added["sects"] = len(new_sects)
    db.flush()

    existing_users = set(db.scalars(select(User.username)))
    for data in SAMPLE_USERS:
        if data["username"] in existing_users:
            continue
        identity_hash = derive_identity_hash(SEED_PROVIDER, data["username"], settings.identity_key)
        db.add(User(identity_hash=identity_hash, **data))
        added["users"] += 1
    db.flush()

    founders = {data["name"]: data["founder"] for data in SAMPLE_SECTS}
    for sect in new_sects:
        sect.founder_id = db.scalar(select(User.id).where(User.username == founders[sect.name]))

    # Posts are only seeded into an empty table so reruns do not duplicate them.
    if db.scalar(select(Post.id).limit(1)) is None:
        db.add_all(Post(**data) for data in SAMPLE_POSTS)
        added["posts"] = len(SAMPLE_POSTS)
    if db.scalar(select(SectPost.id).limit(1)) is None:
        db.add_all(SectPost(**data) for data in SAMPLE_SECT_POSTS)
        added["sect_posts"] = len(SAMPLE_SECT_POSTS)

    db.commit()
    return added


def main() -> None:
    parser = argparse.ArgumentParser(description="Populate the forum database with sample data")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop all tables before recreating and populating them.",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to effective settings URL)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="[populate] %(message)s")
    database = Database(args.url or settings.effective_database_url)
    try:
        database.open()
    except DatabaseUnavailableError as exc:
        logger.error("ERROR: %s", exc)
        sys.exit(1)

    try:
        if args.drop_tables:
            database.drop_tables()
            logger.info("dropped all tables")
        database.create_tables()
        with database.session() as db:
            added = populate(db)
        logger.info(
            "added %(users)d users, %(sects)d sects, %(posts)d posts, %(sect_posts)d sect posts",
            added,
        )
    finally:
        database.close()


if __name__ == "__main__":
    main()
