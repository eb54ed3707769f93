# tests/api/test_profile_routes.py
"""Tests for the profile endpoints."""

from urllib.parse import parse_qs, urlsplit

from fastapi import status

from tests.conftest import make_post, make_sect


def test_profile_lists_own_posts(andy_client, db_session, andy, wilson) -> None:
    make_sect(db_session, "Doan Sect", andy)
    make_post(db_session, andy, "mine")
    make_post(db_session, andy, "sect mine", sect="Doan Sect")
    make_post(db_session, wilson, "not mine")

    response = andy_client.get("/profile")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["user"]["username"] == "andy"
    assert [post["title"] for post in body["posts"]] == ["mine"]
    assert [post["title"] for post in body["sect_posts"]] == ["sect mine"]
    assert body["avatar_choices"]


def test_choose_pic(andy_client, test_settings) -> None:
    choice = test_settings.avatar_choices[1]

    response = andy_client.post("/choosePic", data={"avatar_img": choice})
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert response.headers["location"] == "/profile"
    assert andy_client.get("/profile").json()["user"]["avatar_img"] == choice


def test_choose_invalid_pic(andy_client) -> None:
    response = andy_client.post("/choosePic", data={"avatar_img": "http://elsewhere/x.png"})
    location = urlsplit(response.headers["location"])
    assert location.path == "/profile"
    assert parse_qs(location.query)["error"] == ["Unknown avatar"]


def test_choose_frame(andy_client, test_settings) -> None:
    choice = test_settings.frame_choices[0]

    andy_client.post("/chooseFrame", data={"avatar_frame": choice})
    assert andy_client.get("/profile").json()["user"]["avatar_frame"] == choice
