"""
JWT-style token creation and verification.

Tokens are URL-safe base64-encoded JSON payloads signed with HMAC-SHA256.
Secret key is loaded from ``config.jwt_secret`` (env var: ``JWT_SECRET``)
and tokens expire ``config.jwt_expiry_seconds`` after issue (default 600).
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode

from config.settings import config


class InvalidTokenError(Exception):
    """Raised for malformed, tampered or expired tokens."""


def _sign(raw: bytes) -> str:
    return hmac.new(config.jwt_secret.encode(), raw, hashlib.sha256).hexdigest()


def create_token(user_id: str) -> str:
    """Create a signed token containing ``userId`` and expiry."""
    now = int(time.time())
    payload = {
        "userId": user_id,
        "iat": now,
        "exp": now + config.jwt_expiry_seconds,
    }
    raw = json.dumps(payload).encode()
    return urlsafe_b64encode(raw).decode() + "." + _sign(raw)


def verify_token(token: str) -> str:
    """
    Verify token and return ``userId``.

    Raises ``InvalidTokenError`` on bad format, bad signature or expiry.
    """
    parts = token.split(".", 1)
    if len(parts) != 2:
        raise InvalidTokenError("bad format")
    try:
        raw = urlsafe_b64decode(parts[0].encode())
    except (binascii.Error, ValueError) as exc:
        raise InvalidTokenError("bad encoding") from exc
    if not hmac.compare_digest(parts[1].encode(), _sign(raw).encode()):
        raise InvalidTokenError("bad signature")
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise InvalidTokenError("bad payload") from exc
    if not isinstance(payload, dict) or not isinstance(payload.get("userId"), str):
        raise InvalidTokenError("bad payload")
    exp = payload.get("exp")
    if not isinstance(exp, (int, float)) or exp <= time.time():
        raise InvalidTokenError("token expired")
    return payload["userId"]
