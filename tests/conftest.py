# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count
from urllib.parse import parse_qs, urlencode, urlsplit

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["USE_TEST_DATABASE"] = "false"
os.environ["LOCAL_LOGIN_ENABLED"] = "true"

from seekers.api.dependencies import get_identity_provider_dep
from seekers.core.security import GOOGLE_PROVIDER, derive_identity_hash
from seekers.core.settings import Settings, settings as app_settings
from seekers.db.session import Base
from seekers.db.session import get_db as app_get_db
from seekers.main import app as fastapi_app
from seekers.models import Post, Sect, SectPost, User

TEST_DB_URL = "sqlite://"

_TIMESTAMPS = count(1)
_BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)


def next_timestamp() -> datetime:
    """Return strictly increasing timestamps for fixture posts."""
    return _BASE_TIME + timedelta(minutes=next(_TIMESTAMPS))


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return app_settings


@pytest.fixture(autouse=True)
def override_session_dependency(
    app: FastAPI,
    session_factory: sessionmaker[Session],
) -> Iterator[None]:
    def _get_db_override() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[app_get_db] = _get_db_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_db, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test", follow_redirects=False) as test_client:
        yield test_client


@pytest.fixture()
def other_client(app: FastAPI) -> Iterator[TestClient]:
    """A second browser with its own cookie jar."""
    with TestClient(app, base_url="http://test", follow_redirects=False) as test_client:
        yield test_client


class FakeGoogleProvider:
    """Stand-in for Google that maps every code to a fixed subject."""

    name = GOOGLE_PROVIDER
    enabled = True

    def __init__(self) -> None:
        self.subjects: dict[str, str] = {}
        self.codes_seen: list[str] = []

    def authorization_url(self, state: str) -> str:
        return "https://accounts.example/o/oauth2/auth?" + urlencode({"state": state})

    async def fetch_subject(self, code: str) -> str:
        self.codes_seen.append(code)
        return self.subjects.get(code, f"subject-for-{code}")

    async def close(self) -> None:
        return None


@pytest.fixture()
def google(app: FastAPI) -> Iterator[FakeGoogleProvider]:
    provider = FakeGoogleProvider()
    app.dependency_overrides[get_identity_provider_dep] = lambda: provider
    try:
        yield provider
    finally:
        app.dependency_overrides.pop(get_identity_provider_dep, None)


def oauth_state_from(response) -> str:
    """Pull the ``state`` parameter out of a consent-screen redirect."""
    query = parse_qs(urlsplit(response.headers["location"]).query)
    return query["state"][0]


def make_user(
    db: Session,
    username: str,
    *,
    sect_name: str | None = None,
    subject: str | None = None,
) -> User:
    user = User(
        username=username,
        identity_hash=derive_identity_hash(
            GOOGLE_PROVIDER,
            subject or f"sub-{username}",
            app_settings.identity_key,
        ),
        avatar_img=app_settings.avatar_choices[0],
        sect_name=sect_name,
    )
    db.add(user)
    db.commit()
    return user


def make_sect(db: Session, name: str, founder: User | None = None) -> Sect:
    sect = Sect(name=name, founder_id=founder.id if founder else None)
    db.add(sect)
    db.commit()
    return sect


def make_post(db: Session, author: User, title: str = "Title", likes: int = 0, **extra) -> Post:
    model = SectPost if "sect" in extra else Post
    post = model(
        title=title,
        content=f"{title} content",
        username=author.username,
        timestamp=next_timestamp(),
        likes=likes,
        **extra,
    )
    db.add(post)
    db.commit()
    return post


@pytest.fixture()
def andy(db_session: Session) -> User:
    return make_user(db_session, "andy")


@pytest.fixture()
def wilson(db_session: Session) -> User:
    return make_user(db_session, "wilson")


def login(client: TestClient, username: str) -> None:
    response = client.post("/login", data={"username": username})
    assert response.status_code == 303
    assert response.headers["location"] == "/"


@pytest.fixture()
def andy_client(client: TestClient, andy: User) -> TestClient:
    """Client whose session belongs to ``andy``."""
    login(client, andy.username)
    return client
