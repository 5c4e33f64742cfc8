"""
Auth API routes — register, login.

Both accept URL-encoded forms as well as JSON bodies.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from api.dependencies import DocumentStore, get_store, request_payload
from auth.jwt import create_token
from auth.password import hash_password, verify_password
from database.exceptions import DuplicateInsertError
from database.helpers import create_user, find_user_by_email
from database.models import User

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

_REGISTER_FIELDS = ("name", "email", "mobile", "password")


def _present(payload: Dict[str, Any], *fields: str) -> bool:
    return all(payload.get(f) not in (None, "") for f in fields)


def _user_exists() -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    payload: Dict[str, Any] = Depends(request_payload),
    store: DocumentStore = Depends(get_store),
) -> Dict[str, Any]:
    """Register a new user and sign them in."""
    if not _present(payload, *_REGISTER_FIELDS):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide all required fields",
        )
    name, email, mobile, password = (str(payload[f]) for f in _REGISTER_FIELDS)

    try:
        if await find_user_by_email(store, email) is not None:
            raise _user_exists()

        user = User(
            name=name,
            email=email,
            mobile=mobile,
            password=hash_password(password),
        )
        try:
            await create_user(store, user)
        except DuplicateInsertError:
            raise _user_exists()

        saved = await find_user_by_email(store, user.email)
        user_id = str(saved["_id"])
        token = create_token(user_id)
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("Registration failed for %s", email)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    logger.info("Registered user %s (%s)", saved["name"], user_id)
    return {
        "message": "User registered successfully",
        "name": saved["name"],
        "token": token,
    }


@router.post("/login")
async def login(
    payload: Dict[str, Any] = Depends(request_payload),
    store: DocumentStore = Depends(get_store),
) -> Dict[str, Any]:
    """Login with email + password."""
    if not _present(payload, "email", "password"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide email and password",
        )

    email, password = str(payload["email"]), str(payload["password"])
    try:
        user = await find_user_by_email(store, email)
        if user is None or not verify_password(password, user.get("password", "")):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password",
            )
        token = create_token(str(user["_id"]))
    except HTTPException:
        raise
    except Exception:
        logger.exception("Login failed for %s", email)
        return JSONResponse(status_code=500, content={"error": "Failed to login"})

    logger.info("Login: %s (%s)", user["name"], user["_id"])
    return {"message": "Login successful", "name": user["name"], "token": token}
