"""
Shared fixtures: an in-memory MongoDB behind the real ``DocumentStore``
and a ``TestClient`` wired to it.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-jwt-secret")

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from database.session import DocumentStore
from main import create_app


@pytest.fixture
def store():
    return DocumentStore(AsyncMongoMockClient()["product_feedback_test"])


@pytest.fixture
def client(store):
    return TestClient(create_app(store=store))


def _product_body(**overrides):
    body = {
        "companyName": "Acme",
        "category": ["tools"],
        "imageURL": "https://img.example/acme.png",
        "productLink": "https://acme.example",
        "description": "Anvils and rockets",
    }
    body.update(overrides)
    return body


@pytest.fixture
def product_body():
    return _product_body


@pytest.fixture
def auth_headers(client):
    resp = client.post(
        "/register",
        data={"name": "Tester", "email": "tester@example.com", "mobile": "555", "password": "pw"},
    )
    assert resp.status_code == 201
    return {"Authorization": f"Bearer {resp.json()['token']}"}
