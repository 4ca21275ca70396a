from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from user_store_api.app.api.v1.endpoints.users import get_user_service
from user_store_api.app.main import app

from .conftest import TEST_USERS


@pytest.fixture()
def client(user_service):
    app.dependency_overrides[get_user_service] = lambda: user_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_list_users(client):
    response = client.get("/users")
    assert response.status_code == 200
    assert response.json() == TEST_USERS


def test_list_users_paginated(client):
    response = client.get("/users", params={"page": 2, "limit": 2})
    assert response.status_code == 200
    assert response.json() == {
        "data": [TEST_USERS[2]],
        "pagination": {"page": 2, "limit": 2, "total": 3, "totalPages": 2},
    }


def test_list_users_limit_only_defaults_page(client):
    body = client.get("/users", params={"limit": 1}).json()
    assert body["data"] == [TEST_USERS[0]]
    assert body["pagination"]["page"] == 1
    assert body["pagination"]["totalPages"] == 3


def test_list_users_page_only_defaults_limit(client):
    body = client.get("/users", params={"page": 1}).json()
    assert body["pagination"]["limit"] == 10
    assert body["data"] == TEST_USERS


def test_list_users_page_past_end(client):
    body = client.get("/users", params={"page": 9, "limit": 2}).json()
    assert body["data"] == []


def test_list_users_rejects_zero_limit(client):
    assert client.get("/users", params={"limit": 0}).status_code == 422


def test_get_user(client):
    response = client.get("/users/3")
    assert response.status_code == 200
    assert response.json() == TEST_USERS[2]


def test_get_user_not_found(client):
    response = client.get("/users/999")
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_create_user(client):
    response = client.post("/users", json={"name": "X", "email": "x@example.com"})
    assert response.status_code == 201
    assert response.json() == {"name": "X", "email": "x@example.com", "id": 4}
    assert client.get("/users/4").status_code == 200


def test_update_user(client):
    response = client.patch("/users/1", json={"name": "Ivan Updated", "id": 50})
    assert response.status_code == 200
    assert response.json() == {**TEST_USERS[0], "name": "Ivan Updated"}


def test_update_user_not_found(client):
    response = client.patch("/users/999", json={"name": "Test"})
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_delete_user(client):
    assert client.delete("/users/2").status_code == 204
    assert client.get("/users/2").status_code == 404
    assert [u["id"] for u in client.get("/users").json()] == [1, 3]


def test_delete_user_not_found(client):
    response = client.delete("/users/999")
    assert response.status_code == 404


def test_storage_error_becomes_500(client, data_dir):
    (data_dir / "test-users.json").write_text("{broken", encoding="utf-8")
    response = client.get("/users")
    assert response.status_code == 500
    assert response.json()["error"].startswith("Failed to read users")

    response = client.get("/users/1")
    assert response.status_code == 500
    assert response.json()["error"].startswith("Failed to find user")


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_collection_routes_answer_without_redirect(client):
    response = client.get("/users", follow_redirects=False)
    assert response.status_code == 200
    assert response.json() == TEST_USERS

    response = client.post("/users", json={"name": "Y"}, follow_redirects=False)
    assert response.status_code == 201
    assert response.json()["id"] == 4


def test_create_user_with_taken_id_conflicts(client):
    response = client.post("/users", json={"id": 1, "name": "Copy"})
    assert response.status_code == 409
    assert "already exists" in response.json()["error"]
    assert [u["id"] for u in client.get("/users").json()] == [1, 2, 3]


def test_non_object_records_become_500_with_error_body(client, data_dir):
    (data_dir / "test-users.json").write_text("[1, 2]", encoding="utf-8")
    response = client.get("/users/1")
    assert response.status_code == 500
    assert response.json()["error"].startswith("Failed to find user")
