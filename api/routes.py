"""
REST API routes — liveness, products and comments.

Store and record-validation failures on these routes are reported as
400 ``{"error": "Error: <reason>"}``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from api.dependencies import DocumentStore, get_store, request_payload
from auth.dependencies import get_current_user_id
from database.exceptions import StoreError
from database.helpers import (
    create_comment,
    create_product,
    get_product,
    increment_likes,
    list_comments,
    list_products,
    update_product,
)
from database.models import PRODUCT_EDITABLE_FIELDS, Comment, Product

logger = logging.getLogger(__name__)

router = APIRouter()

_STORE_FAILURES = (StoreError, ValidationError, PyMongoError)


def _store_failure(exc: Exception) -> HTTPException:
    logger.warning("Store operation failed: %s", exc)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Error: {exc}")


def _split_categories(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return raw.split(",")


@router.get("/")
async def health() -> Dict[str, str]:
    return {"message": "All good!"}


# ── Products ───────────────────────────────────────────────────────────


@router.get("/getAllProducts")
async def get_all_products(
    category: Optional[str] = Query(None),
    sortBy: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    """List products, filtered by any of a comma-separated ``category`` list."""
    try:
        return await list_products(store, _split_categories(category), sortBy)
    except _STORE_FAILURES as exc:
        raise _store_failure(exc)


@router.post("/addProduct")
async def add_product(
    payload: Dict[str, Any] = Depends(request_payload),
    store: DocumentStore = Depends(get_store),
    user_id: str = Depends(get_current_user_id),
) -> str:
    try:
        await create_product(store, Product.model_validate(payload))
    except _STORE_FAILURES as exc:
        raise _store_failure(exc)
    logger.debug("Product added by user %s", user_id)
    return "Product added!"


@router.put("/updateProductById")
async def update_product_by_id(
    payload: Dict[str, Any] = Depends(request_payload),
    store: DocumentStore = Depends(get_store),
    user_id: str = Depends(get_current_user_id),
) -> Dict[str, str]:
    """Overwrite a product's descriptive fields; fields left out are cleared and fail validation."""
    product_id = payload.get("id")
    if not product_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Product id is required"},
        )

    fields = {name: payload.get(name) for name in PRODUCT_EDITABLE_FIELDS}
    try:
        await update_product(store, product_id, fields)
    except _STORE_FAILURES as exc:
        raise _store_failure(exc)
    logger.debug("Product %s updated by user %s", product_id, user_id)
    return {"message": "Product updated successfully"}


@router.get("/getProductById/{product_id}")
async def get_product_by_id(
    product_id: str,
    store: DocumentStore = Depends(get_store),
) -> Optional[Dict[str, Any]]:
    try:
        return await get_product(store, product_id)
    except _STORE_FAILURES as exc:
        raise _store_failure(exc)


@router.put("/increaseLikeById/{product_id}/like")
async def increase_like_by_id(
    product_id: str,
    store: DocumentStore = Depends(get_store),
) -> Dict[str, Any]:
    try:
        return await increment_likes(store, product_id)
    except _STORE_FAILURES as exc:
        raise _store_failure(exc)


# ── Comments ───────────────────────────────────────────────────────────


@router.get("/getComments")
async def get_comments(
    productId: Optional[str] = Query(None),
    store: DocumentStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    try:
        return await list_comments(store, productId)
    except _STORE_FAILURES as exc:
        raise _store_failure(exc)


@router.post("/addComment")
async def add_comment(
    payload: Dict[str, Any] = Depends(request_payload),
    store: DocumentStore = Depends(get_store),
) -> Dict[str, Any]:
    try:
        comment = Comment.model_validate(
            {"commentText": payload.get("commentText"), "productId": payload.get("productId")}
        )
        saved = await create_comment(store, comment)
    except _STORE_FAILURES as exc:
        raise _store_failure(exc)
    logger.info("Comment %s added to product %s", saved["_id"], comment.productId)
    return saved
