"""
HTTP behaviour of the /posts endpoints.
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from postboard.app import create_app


@pytest.fixture()
def client(settings, store):
    store.create_user("a@x.com", "pw", "Ann", 30)
    return TestClient(create_app(settings, store))


def _post(client, text, email="a@x.com"):
    return client.post("/posts", json={"userEmail": email, "text": text})


def test_create_post(client):
    resp = _post(client, "hello")
    assert resp.status_code == 201
    body = resp.json()
    assert body["userEmail"] == "a@x.com"
    assert body["text"] == "hello"
    assert body["id"]
    assert body["createdAt"].endswith("Z")


def test_create_post_for_unknown_user_is_404(client):
    resp = _post(client, "hello", email="ghost@x.com")
    assert resp.status_code == 404
    assert "ghost@x.com" in resp.json()["error"]


def test_get_and_delete_post(client):
    post_id = _post(client, "hello").json()["id"]
    other_id = _post(client, "world").json()["id"]

    assert client.get(f"/posts/{post_id}").json()["text"] == "hello"
    assert client.delete(f"/posts/{post_id}").status_code == 200
    assert client.get(f"/posts/{post_id}").status_code == 404
    assert client.delete(f"/posts/{post_id}").status_code == 404
    assert client.get(f"/posts/{other_id}").status_code == 200


def test_list_posts_by_user(client):
    ids = {_post(client, "same").json()["id"] for _ in range(2)}
    resp = client.get("/posts", params={"userEmail": "a@x.com"})
    assert resp.status_code == 200
    assert {p["id"] for p in resp.json()} == ids
    assert len(ids) == 2


def test_list_posts_for_unknown_user_is_empty(client):
    resp = client.get("/posts", params={"userEmail": "ghost@x.com"})
    assert resp.status_code == 200
    assert resp.json() == []


def test_list_posts_requires_user_email(client):
    resp = client.get("/posts")
    assert resp.status_code == 400


def test_posts_survive_user_deletion(client):
    post = _post(client, "hello").json()
    assert client.delete("/users/a@x.com").status_code == 200
    listed = client.get("/posts", params={"userEmail": "a@x.com"}).json()
    assert listed == [post]
    assert client.get("/users/a@x.com").status_code == 404
