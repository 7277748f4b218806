"""Root conftest — in-memory Cosmos containers and an authenticated test client."""

from __future__ import annotations

import copy
import itertools
import os
from typing import Any

# Must be set before the app modules read their environment
os.environ.setdefault("COSMOS_ENDPOINT", "https://localhost:8081/")
os.environ.setdefault("COSMOS_KEY", "test-key")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from azure.cosmos import exceptions
from fastapi.testclient import TestClient
from passlib.hash import sha256_crypt

import db
from routers.auth.tokens import make_jwt
from routers.logs import store


class FakeContainer:
    """Just enough of ContainerProxy for the queries this app issues."""

    def __init__(self):
        self.items: dict[str, dict[str, Any]] = {}
        self._ts = itertools.count(1)

    def _stored(self, body: dict[str, Any]) -> dict[str, Any]:
        doc = copy.deepcopy(body)
        doc.update({"_rid": "rid", "_self": "self", "_etag": "etag", "_attachments": "att/", "_ts": next(self._ts)})
        return doc

    def _not_found(self):
        return exceptions.CosmosResourceNotFoundError(status_code=404, message="Entity with the specified id does not exist")

    def read_item(self, item, partition_key):
        if item not in self.items:
            raise self._not_found()
        return copy.deepcopy(self.items[item])

    def create_item(self, body):
        if body["id"] in self.items:
            raise exceptions.CosmosResourceExistsError(status_code=409, message="Conflict")
        self.items[body["id"]] = self._stored(body)
        return copy.deepcopy(self.items[body["id"]])

    def upsert_item(self, body):
        self.items[body["id"]] = self._stored(body)
        return copy.deepcopy(self.items[body["id"]])

    def replace_item(self, item, body):
        if item not in self.items:
            raise self._not_found()
        self.items[item] = self._stored(body)
        return copy.deepcopy(self.items[item])

    def delete_item(self, item, partition_key):
        if item not in self.items:
            raise self._not_found()
        del self.items[item]

    def query_items(self, query, parameters=None, enable_cross_partition_query=False):
        params = {p["name"]: p["value"] for p in (parameters or [])}
        rows = list(self.items.values())
        if "c.owner = @owner" in query:
            rows = [r for r in rows if r.get("owner") == params["@owner"]]
        if "c.email = @e" in query:
            rows = [r for r in rows if r.get("email") == params["@e"]]
        if "ORDER BY c.createdAt DESC" in query:
            rows.sort(key=lambda r: r["createdAt"], reverse=True)
        return iter(copy.deepcopy(rows))


@pytest.fixture
def logs_container():
    container = FakeContainer()
    db.set_container(db.LOGS_CONTAINER, container)
    yield container
    db.reset_clients()


@pytest.fixture
def users_container():
    container = FakeContainer()
    db.set_container(db.USERS_CONTAINER, container)
    yield container
    db.reset_clients()


@pytest.fixture(autouse=True)
def _monotonic_clock(monkeypatch):
    # createdAt must strictly increase between creates for the sort order to be observable
    ticks = itertools.count(1)
    monkeypatch.setattr(store, "_now_iso", lambda: f"2026-01-01T00:00:00.{next(ticks):06d}+00:00")


@pytest.fixture
def client(logs_container, users_container):
    from main import app

    return TestClient(app)


@pytest.fixture
def make_user(users_container):
    """Create a user document and return Authorization headers for it."""

    def _make(username: str, password: str = "password123") -> dict[str, str]:
        users_container.create_item({
            "id": username,
            "username": username,
            "email": f"{username}@example.com",
            "password": sha256_crypt.hash(password),
            "created": "2026-01-01T00:00:00+00:00",
        })
        return {"Authorization": f"Bearer {make_jwt(username)}"}

    return _make
