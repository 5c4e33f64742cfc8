"""
Tests for application wiring: startup connection, static files, access log.
"""

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from auth.jwt import create_token
from database.session import DocumentStore, open_store
from main import create_app


class TestStartup:
    def test_connection_failure_aborts_startup(self):
        with patch("main.open_store", new=AsyncMock(side_effect=ConnectionError("no mongo"))):
            app = create_app()
            with pytest.raises(ConnectionError):
                with TestClient(app):
                    pass

    def test_owned_store_opened_and_closed(self):
        mongo_client = MagicMock()
        owned = DocumentStore(AsyncMongoMockClient()["startup_test"], client=mongo_client)
        with patch("main.open_store", new=AsyncMock(return_value=owned)) as opener:
            with TestClient(create_app()) as client:
                assert client.get("/getAllProducts").json() == []
        opener.assert_awaited_once()
        mongo_client.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_open_store_ping_failure_closes_client(self):
        mongo_client = MagicMock()
        mongo_client.admin.command = AsyncMock(side_effect=ConnectionError("refused"))
        with patch("database.session.AsyncIOMotorClient", return_value=mongo_client):
            with pytest.raises(ConnectionError):
                await open_store("mongodb://unreachable:27017", "db")
        mongo_client.admin.command.assert_awaited_once_with("ping")
        mongo_client.close.assert_called_once()


class TestStaticFiles:
    def test_public_dir_served_beside_api(self, store, tmp_path):
        (tmp_path / "hello.txt").write_text("static hello")
        with patch("main.config.static_dir", str(tmp_path)):
            client = TestClient(create_app(store=store))

        resp = client.get("/hello.txt")
        assert resp.status_code == 200
        assert resp.text == "static hello"
        assert client.get("/").json() == {"message": "All good!"}

    def test_no_public_dir_no_mount(self, store, tmp_path):
        with patch("main.config.static_dir", str(tmp_path / "missing")):
            client = TestClient(create_app(store=store))
        assert client.get("/hello.txt").status_code == 404


class TestAccessLog:
    def test_logs_authenticated_user(self, client, product_body, caplog):
        caplog.set_level(logging.DEBUG, logger="api.middleware")
        token = create_token("user-42")
        client.post("/addProduct", json=product_body(), headers={"Authorization": f"Bearer {token}"})
        client.get("/")

        lines = [r.getMessage() for r in caplog.records if r.name == "api.middleware"]
        assert any("POST /addProduct -> 200 user=user-42" in line for line in lines)
        assert any("GET / -> 200 user=-" in line for line in lines)
