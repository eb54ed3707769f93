# tests/api/test_auth_routes.py
"""Tests for sign-in, registration and logout."""

from urllib.parse import parse_qs, urlsplit

from fastapi import status

from seekers.models import User, WebSession
from tests.conftest import oauth_state_from


def google_sign_in(client, code: str):
    """Walk the consent redirect and callback; return the callback response."""
    start = client.get("/auth/google")
    assert start.status_code == status.HTTP_302_FOUND
    state = oauth_state_from(start)
    return client.get("/auth/google/callback", params={"code": code, "state": state})


def test_register_then_login(client, other_client) -> None:
    response = client.post("/register", data={"username": "andy"})
    assert response.headers["location"] == "/"

    response = other_client.post("/login", data={"username": "andy"})
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert response.headers["location"] == "/"
    assert other_client.get("/").json()["logged_in"] is True


def test_register_taken_username(client, andy) -> None:
    response = client.post("/register", data={"username": "andy"})
    assert response.status_code == status.HTTP_303_SEE_OTHER
    location = urlsplit(response.headers["location"])
    assert location.path == "/register"
    assert parse_qs(location.query)["error"] == ["Username already exists"]


def test_login_unknown_username(client) -> None:
    response = client.post("/login", data={"username": "ghost"})
    location = urlsplit(response.headers["location"])
    assert location.path == "/login"
    assert parse_qs(location.query)["error"] == ["Username doesn't exist"]


def test_logout_clears_session(andy_client, db_session) -> None:
    assert andy_client.get("/").json()["logged_in"] is True

    response = andy_client.get("/logout")
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert andy_client.get("/").json()["logged_in"] is False
    assert db_session.query(WebSession).count() == 0


def test_login_form_context(client) -> None:
    body = client.get("/login").json()
    assert body["local_login_enabled"] is True
    assert body["logged_in"] is False


def test_google_sign_in_new_then_returning(client, other_client, google, db_session) -> None:
    google.subjects["first"] = "google-123"
    google.subjects["second"] = "google-123"

    response = google_sign_in(client, "first")
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert response.headers["location"] == "/registerUsername"
    assert client.get("/").json()["logged_in"] is False
    assert client.get("/registerUsername").status_code == status.HTTP_200_OK

    response = client.post("/registerUsername", data={"username": "andy"})
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert response.headers["location"] == "/"
    assert client.get("/").json()["user"]["username"] == "andy"

    user = db_session.query(User).filter_by(username="andy").one()
    assert "google-123" not in user.identity_hash

    response = google_sign_in(other_client, "second")
    assert response.headers["location"] == "/"
    body = other_client.get("/").json()
    assert body["user"]["id"] == user.id


def test_google_callback_with_bad_state(client, google) -> None:
    client.get("/auth/google")
    response = client.get(
        "/auth/google/callback",
        params={"code": "first", "state": "forged"},
    )
    assert response.status_code == status.HTTP_303_SEE_OTHER
    location = urlsplit(response.headers["location"])
    assert location.path == "/login"
    assert parse_qs(location.query)["error"] == ["Google sign-in failed"]
    assert google.codes_seen == []


def test_google_callback_without_session(client, google) -> None:
    response = client.get("/auth/google/callback", params={"code": "x", "state": "y"})
    assert urlsplit(response.headers["location"]).path == "/login"


def test_register_username_requires_pending_identity(client) -> None:
    assert client.get("/registerUsername").headers["location"] == "/login"
    response = client.post("/registerUsername", data={"username": "andy"})
    assert urlsplit(response.headers["location"]).path == "/login"


def test_register_username_taken_keeps_pending_identity(client, google, andy) -> None:
    response = google_sign_in(client, "fresh")
    assert response.headers["location"] == "/registerUsername"

    response = client.post("/registerUsername", data={"username": "andy"})
    location = urlsplit(response.headers["location"])
    assert location.path == "/registerUsername"
    assert parse_qs(location.query)["error"] == ["Username already exists"]

    response = client.post("/registerUsername", data={"username": "andy the second"})
    assert response.headers["location"] == "/"
