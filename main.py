"""
Product Feedback API — application entry point.
"""

from __future__ import annotations

import logging
import pathlib
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.routes import router as api_router
from auth.routes import router as auth_router
from config.settings import config
from database.session import DocumentStore, open_store

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("pymongo", "motor", "multipart"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(store: Optional[DocumentStore] = None) -> FastAPI:
    """
    Build the application.

    With ``store=None`` the MongoDB connection is opened at startup from
    ``MONGODB_URL``; a failed connection is logged and aborts startup.
    A ready store (e.g. an in-memory one in tests) is used as given.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        owned = store is None
        if owned:
            try:
                app.state.store = await open_store()
            except Exception:
                logger.exception("Could not connect to MongoDB at startup")
                raise
        else:
            app.state.store = store
        logger.info("Server running on port: %s", config.port)
        try:
            yield
        finally:
            if owned:
                app.state.store.close()

    app = FastAPI(
        title="Product Feedback API",
        version="1.0.0",
        description="Users, products, likes and comments.",
        lifespan=lifespan,
    )
    if store is not None:
        app.state.store = store

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router)
    app.include_router(api_router)

    static_dir = pathlib.Path(config.static_dir)
    if not static_dir.is_absolute():
        static_dir = pathlib.Path(__file__).resolve().parent / static_dir
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="public")

    return app


if __name__ == "__main__":
    uvicorn.run(
        "main:create_app",
        factory=True,
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
