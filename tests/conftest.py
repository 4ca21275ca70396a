"""Shared fixtures: a record store on a temporary directory seeded with three users."""
from __future__ import annotations

import json

import pytest

from user_store_api.app.core.db import Db
from user_store_api.app.services.user_service import UserService

TEST_USERS = [
    {"id": 1, "name": "Ivan Test", "email": "ivan.test@example.com"},
    {"id": 2, "name": "Maria Test", "email": "maria.test@example.com"},
    {"id": 3, "name": "Petr Test", "email": "petr.test@example.com"},
]


@pytest.fixture()
def data_dir(tmp_path):
    (tmp_path / "test-users.json").write_text(
        json.dumps(TEST_USERS, ensure_ascii=False, indent=2), encoding="utf-8"
    )
    return tmp_path


@pytest.fixture()
def db(data_dir):
    return Db(data_dir)


@pytest.fixture()
def user_service(db):
    return UserService(db=db, collection="test-users")
