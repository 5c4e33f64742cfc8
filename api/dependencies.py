"""
FastAPI dependencies (shared across routes).
"""

from __future__ import annotations

import json
from typing import Any, Dict

from fastapi import HTTPException, Request, status

from database.session import DocumentStore, get_store  # noqa: F401


async def request_payload(request: Request) -> Dict[str, Any]:
    """
    Read the request body as a flat dict.

    JSON bodies must be objects.  URL-encoded and multipart forms are
    accepted too; a key sent more than once becomes a list.  An empty
    body yields ``{}``.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        payload: Dict[str, Any] = {}
        for key in form.keys():
            values = form.getlist(key)
            payload[key] = values if len(values) > 1 else values[0]
        return payload

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Malformed request body",
        )
    if not isinstance(payload, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Malformed request body",
        )
    return payload
