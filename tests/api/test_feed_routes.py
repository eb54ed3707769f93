# tests/api/test_feed_routes.py
"""Tests for the feed endpoints."""

from urllib.parse import parse_qs, urlsplit

import pytest
from fastapi import status

from seekers.models import Post, SectPost
from tests.conftest import make_post, make_sect


def error_of(response) -> str | None:
    query = parse_qs(urlsplit(response.headers["location"]).query)
    return query.get("error", [None])[0]


def test_home_lists_posts_for_anonymous_visitor(client, db_session, andy) -> None:
    make_post(db_session, andy, "hello")

    response = client.get("/")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["logged_in"] is False
    assert body["app_name"] == "Seekers of Dao"
    assert body["post_noun"] == "Enlightenment"
    assert [post["title"] for post in body["posts"]] == ["hello"]


def test_register_post_and_list(client) -> None:
    response = client.post("/register", data={"username": "andy"})
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert response.headers["location"] == "/"

    response = client.post("/posts", data={"title": "T", "content": "C"})
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert response.headers["location"] == "/"

    body = client.get("/").json()
    assert body["logged_in"] is True
    assert body["user"]["username"] == "andy"
    assert len(body["posts"]) == 1
    assert body["posts"][0]["username"] == "andy"
    assert body["posts"][0]["likes"] == 0


@pytest.mark.parametrize(
    "method,path",
    [
        ("post", "/posts"),
        ("post", "/like/1"),
        ("post", "/like/sects/1"),
        ("post", "/delete/1"),
        ("get", "/profile"),
        ("get", "/joinSect"),
        ("post", "/foundSect"),
    ],
)
def test_protected_routes_redirect_to_login(client, method, path) -> None:
    response = getattr(client, method)(path)
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert response.headers["location"] == "/login"


def test_like_returns_new_count(andy_client, db_session, andy) -> None:
    post = make_post(db_session, andy)

    first = andy_client.post(f"/like/{post.id}")
    second = andy_client.post(f"/like/{post.id}")
    assert first.status_code == status.HTTP_200_OK
    assert first.json() == {"likes": 1}
    assert second.json() == {"likes": 2}


def test_like_missing_post_is_404(andy_client) -> None:
    response = andy_client.post("/like/424242")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_like_sect_post(andy_client, db_session, andy) -> None:
    make_sect(db_session, "Doan Sect", andy)
    post = make_post(db_session, andy, sect="Doan Sect")

    response = andy_client.post(f"/like/sects/{post.id}")
    assert response.json() == {"likes": 1}


def test_empty_post_redirects_with_error(andy_client) -> None:
    response = andy_client.post("/posts", data={"title": "", "content": "C"})
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert error_of(response) == "Title is required"
    assert andy_client.get("/").json()["posts"] == []


def test_sort_by_likes(client, db_session, andy) -> None:
    low = make_post(db_session, andy, "low", likes=1)
    high = make_post(db_session, andy, "high", likes=9)

    body = client.get("/", params={"sort": "likes"}).json()
    assert body["sort"] == "most-liked"
    assert [post["id"] for post in body["posts"]] == [high.id, low.id]


def test_sect_feed(client, db_session, andy) -> None:
    make_sect(db_session, "Doan Sect", andy)
    make_post(db_session, andy, "inside", sect="Doan Sect")

    response = client.get("/sects/Doan Sect")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["sect"] == "Doan Sect"
    assert [post["title"] for post in body["posts"]] == ["inside"]
    assert body["posts"][0]["sect"] == "Doan Sect"


def test_unknown_sect_feed_is_404(client) -> None:
    assert client.get("/sects/Nowhere").status_code == status.HTTP_404_NOT_FOUND


def test_sect_post_by_member(andy_client, db_session, andy) -> None:
    make_sect(db_session, "Doan Sect", andy)
    andy.sect_name = "Doan Sect"
    db_session.commit()

    response = andy_client.post(
        "/sects/Doan Sect/posts",
        data={"title": "T", "content": "C"},
    )
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert response.headers["location"] == "/sects/Doan%20Sect"
    assert error_of(response) is None
    assert len(andy_client.get("/sects/Doan Sect").json()["posts"]) == 1


def test_sect_post_by_non_member_is_refused(andy_client, db_session) -> None:
    make_sect(db_session, "Truong Sect")

    response = andy_client.post(
        "/sects/Truong Sect/posts",
        data={"title": "T", "content": "C"},
    )
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert error_of(response) == "You are not a member of this sect"
    assert andy_client.get("/sects/Truong Sect").json()["posts"] == []


def test_delete_own_post(andy_client, db_session, andy) -> None:
    post = make_post(db_session, andy)
    post_id = post.id

    response = andy_client.post(f"/delete/{post.id}", headers={"referer": "http://test/profile"})
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert response.headers["location"] == "/profile"
    db_session.expire_all()
    assert db_session.get(Post, post_id) is None


def test_delete_ignores_foreign_referer(andy_client, db_session, andy) -> None:
    post = make_post(db_session, andy)

    response = andy_client.post(f"/delete/{post.id}", headers={"referer": "http://evil.example/x"})
    assert response.headers["location"] == "/"


def test_delete_someone_elses_post_is_refused(andy_client, db_session, wilson) -> None:
    post = make_post(db_session, wilson)
    post_id = post.id

    response = andy_client.post(f"/delete/{post.id}")
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert error_of(response) == "You can only delete your own posts"
    db_session.expire_all()
    assert db_session.get(Post, post_id) is not None


def test_delete_own_sect_post(andy_client, db_session, andy) -> None:
    make_sect(db_session, "Doan Sect", andy)
    post = make_post(db_session, andy, sect="Doan Sect")
    post_id = post.id

    response = andy_client.post(f"/delete/sects/{post.id}")
    assert response.status_code == status.HTTP_303_SEE_OTHER
    db_session.expire_all()
    assert db_session.get(SectPost, post_id) is None


def test_post_to_unknown_sect_redirects_home(andy_client) -> None:
    response = andy_client.post("/sects/Nowhere/posts", data={"title": "T", "content": "C"})
    assert response.status_code == status.HTTP_303_SEE_OTHER
    location = urlsplit(response.headers["location"])
    assert location.path == "/"
    assert error_of(response) == "Sect doesn't exist"
