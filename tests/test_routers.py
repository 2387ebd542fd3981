from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from portfolio.app import create_app


@pytest.fixture()
def client(temp_db):
    return TestClient(create_app())


def test_slug_derive(client):
    resp = client.get("/slug/derive", params={"text": "Projeto Incrível!"})
    assert resp.status_code == 200
    assert resp.json() == {
        "slug": "projeto-incrivel",
        "url": "https://portfolio.test/projeto/projeto-incrivel",
    }


def test_slug_check(client):
    resp = client.get("/slug/check", params={"value": "Meu App"})
    assert resp.json() == {"slug": "meu-app", "available": True}
    assert client.get("/slug/check", params={"value": "@@@"}).json()["available"] is False


def test_create_and_check_project(client):
    resp = client.post(
        "/admin/projects",
        data={"title": "Meu App", "slug": "meu-app", "technologies": "python, fastapi"},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    location = resp.headers["location"]
    project_id = location.rsplit("/", 1)[-1]

    detail = client.get(location).json()
    assert detail["slug"] == "meu-app"
    assert detail["technologies"] == ["python", "fastapi"]

    assert client.get("/slug/check", params={"value": "meu-app"}).json()["available"] is False
    resp = client.get("/slug/check", params={"value": "meu-app", "exclude_id": project_id})
    assert resp.json()["available"] is True

    assert client.get("/projeto/meu-app").json()["id"] == project_id


def test_duplicate_slug_conflict(client):
    client.post("/admin/projects", data={"title": "A", "slug": "a"}, follow_redirects=False)
    resp = client.post("/admin/projects", data={"title": "B", "slug": "a"}, follow_redirects=False)
    assert resp.status_code == 409


def test_validation_errors(client):
    resp = client.post("/admin/projects", data={"title": "", "slug": "x"}, follow_redirects=False)
    assert resp.status_code == 400
    resp = client.post("/admin/projects", data={"title": "X", "slug": "Not A Slug"}, follow_redirects=False)
    assert resp.status_code == 400


def test_update_project(client):
    resp = client.post("/admin/projects", data={"title": "A", "slug": "a"}, follow_redirects=False)
    project_id = resp.headers["location"].rsplit("/", 1)[-1]

    resp = client.post(
        f"/admin/projects/{project_id}",
        data={"title": "A2", "slug": "a-2"},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    assert client.get(f"/admin/projects/{project_id}").json()["slug"] == "a-2"
    assert client.post("/admin/projects/missing", data={"title": "X", "slug": "x"}).status_code == 404


def test_inactive_project_is_hidden(client):
    client.post(
        "/admin/projects",
        data={"title": "Hidden", "slug": "hidden", "is_active": "false"},
        follow_redirects=False,
    )
    assert client.get("/projeto/hidden").status_code == 404
    assert client.get("/projeto/nope").status_code == 404
