"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and a fixed work factor.
"""

from __future__ import annotations

import bcrypt

_WORK_FACTOR = 10
_MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes; newer releases raise instead of truncating.
    return password.encode("utf-8")[:_MAX_PASSWORD_BYTES]


def hash_password(password: str) -> str:
    """Hash a password with bcrypt (auto-salted, work factor 10)."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=_WORK_FACTOR)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode())
    except (ValueError, TypeError, AttributeError):
        return False
