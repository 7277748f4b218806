from __future__ import annotations

import pytest
from azure.cosmos import exceptions
from fastapi import FastAPI
from fastapi.testclient import TestClient

from errors import (
    DocumentNotFoundError,
    DocumentValidationError,
    OwnershipError,
    handle_404,
    register_error_handlers,
    require_ownership,
)


def test_handle_404_passes_documents_through():
    doc = {"id": "1"}
    assert handle_404(doc) is doc


@pytest.mark.parametrize("missing", [None, {}])
def test_handle_404_raises_for_missing(missing):
    with pytest.raises(DocumentNotFoundError):
        handle_404(missing)


def test_require_ownership_accepts_owner():
    require_ownership({"id": "alice"}, {"owner": "alice"})
    require_ownership({"id": "alice"}, {"owner": {"id": "alice", "username": "alice"}})


@pytest.mark.parametrize("doc", [{"owner": "bob"}, {"owner": None}, {}, {"owner": {"id": "bob"}}])
def test_require_ownership_rejects_others(doc):
    with pytest.raises(OwnershipError):
        require_ownership({"id": "alice"}, doc)


@pytest.fixture
def translated_client():
    app = FastAPI()
    register_error_handlers(app)

    raises = {
        "not-found": DocumentNotFoundError(),
        "not-owner": OwnershipError(),
        "invalid": DocumentValidationError("title is required"),
        "store-404": exceptions.CosmosResourceNotFoundError(status_code=404, message="gone"),
        "store-409": exceptions.CosmosResourceExistsError(status_code=409, message="dup"),
        "store-400": exceptions.CosmosHttpResponseError(status_code=400, message="bad id"),
        "store-503": exceptions.CosmosHttpResponseError(status_code=503, message="busy"),
        "boom": RuntimeError("secret internals"),
    }

    @app.get("/raise/{kind}")
    def _raise(kind: str):
        raise raises[kind]

    return TestClient(app, raise_server_exceptions=False)


@pytest.mark.parametrize(
    "kind,status_code",
    [
        ("not-found", 404),
        ("not-owner", 401),
        ("invalid", 422),
        ("store-404", 404),
        ("store-409", 409),
        ("store-400", 422),
        ("store-503", 500),
        ("boom", 500),
    ],
)
def test_translator_status_codes(translated_client, kind, status_code):
    resp = translated_client.get(f"/raise/{kind}")
    assert resp.status_code == status_code
    assert "detail" in resp.json()


def test_translator_keeps_custom_detail(translated_client):
    assert translated_client.get("/raise/invalid").json() == {"detail": "title is required"}


def test_translator_never_leaks_internals(translated_client):
    assert translated_client.get("/raise/boom").json() == {"detail": "Internal server error"}
