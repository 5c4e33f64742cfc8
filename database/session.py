"""
Async MongoDB connection pool and collection handles.

One ``DocumentStore`` is opened at startup, kept on ``app.state.store``
and handed to route handlers through the ``get_store`` dependency.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient

from config.settings import config

logger = logging.getLogger(__name__)


class DocumentStore:
    """The ``users``, ``products`` and ``comments`` collections of one database."""

    def __init__(self, database: Any, client: Optional[Any] = None):
        self.database = database
        self.client = client
        self.users = database["users"]
        self.products = database["products"]
        self.comments = database["comments"]

    async def ensure_indexes(self) -> None:
        await self.users.create_index("email", unique=True)
        await self.comments.create_index("productId")

    def close(self) -> None:
        if self.client is not None:
            self.client.close()


async def open_store(url: str | None = None, db_name: str | None = None) -> DocumentStore:
    """Connect, ping once and return a ready store.  No retry on failure."""
    client = AsyncIOMotorClient(url or config.mongodb_url)
    database = client.get_default_database(default=db_name or config.mongodb_db)
    try:
        await client.admin.command("ping")
        store = DocumentStore(database, client=client)
        await store.ensure_indexes()
    except Exception:
        client.close()
        raise
    logger.info("Connected to MongoDB database '%s'", database.name)
    return store


async def get_store(request: Request) -> DocumentStore:
    """Dependency function — use in FastAPI `Depends(get_store)`."""
    return request.app.state.store
