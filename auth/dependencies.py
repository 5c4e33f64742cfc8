"""
FastAPI dependencies for authentication.

``get_current_user_id`` is the only request gate: it accepts any
well-formed, unexpired token and does not look the user up.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Header, HTTPException, Request, status

from auth.jwt import InvalidTokenError, verify_token

logger = logging.getLogger(__name__)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
    )


async def get_current_user_id(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> str:
    """
    Extract and verify the Bearer token, returning the authenticated
    ``userId`` and recording it on ``request.state.user_id``.
    """
    scheme, _, token = (authorization or "").partition(" ")
    token = token.strip()
    if scheme != "Bearer" or not token:
        raise _unauthorized()

    try:
        user_id = verify_token(token)
    except InvalidTokenError as exc:
        logger.debug("Rejected token on %s: %s", request.url.path, exc)
        raise _unauthorized()

    request.state.user_id = user_id
    return user_id
