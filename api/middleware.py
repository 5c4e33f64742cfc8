"""
Global middleware.

``access_log`` times every request and records who made it: the
authenticated ``userId`` when the bearer gate ran, ``-`` otherwise.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)


def _caller(request: Request) -> str:
    return getattr(request.state, "user_id", None) or "-"


def register_middleware(app: FastAPI) -> None:
    """Attach the access-log middleware."""

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        if response.status_code >= 500:
            level = logging.WARNING
        else:
            level = logging.DEBUG
        logger.log(
            level,
            "%s %s -> %d user=%s (%.3fs)",
            request.method, request.url.path, response.status_code, _caller(request), elapsed,
        )
        return response
