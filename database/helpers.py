"""
Database helper functions — one call per collection operation.

Every helper takes the injected ``DocumentStore`` and returns plain
dicts ready for JSON (``_id`` and references rendered as hex strings).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from database.exceptions import DocumentNotFoundError, DuplicateInsertError, InvalidIdError, StoreError
from database.models import Comment, Product, User
from database.session import DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_SORT_FIELD = "likes"


def to_object_id(value: Any) -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str):
        raise InvalidIdError(f"Cast to ObjectId failed for value {value!r}")
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as exc:
        raise InvalidIdError(f'Cast to ObjectId failed for value "{value}"') from exc


def serialize_document(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Render ObjectIds as strings, ``_id`` first."""
    if doc is None:
        return None
    out: Dict[str, Any] = {}
    if "_id" in doc:
        out["_id"] = str(doc["_id"])
    for key, value in doc.items():
        if key == "_id":
            continue
        out[key] = str(value) if isinstance(value, ObjectId) else value
    return out


# ── Users ──────────────────────────────────────────────────────────────


async def find_user_by_email(store: DocumentStore, email: str) -> Optional[Dict[str, Any]]:
    return await store.users.find_one({"email": email})


async def create_user(store: DocumentStore, user: User) -> str:
    """Insert a user and return its new id."""
    try:
        result = await store.users.insert_one(user.model_dump())
    except DuplicateKeyError as exc:
        raise DuplicateInsertError(f"Duplicate key error: {exc}") from exc
    return str(result.inserted_id)


# ── Products ───────────────────────────────────────────────────────────


def _sort_field(sort_by: Optional[str]) -> str:
    field = sort_by or DEFAULT_SORT_FIELD
    if field.startswith("$") or "\x00" in field or field.strip() != field:
        raise StoreError(f"Invalid sort field: {field!r}")
    return field


async def list_products(
    store: DocumentStore,
    categories: Optional[List[str]] = None,
    sort_by: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """All products (optionally sharing a category with ``categories``), sorted descending."""
    query: Dict[str, Any] = {}
    if categories:
        query["category"] = {"$in": categories}
    cursor = store.products.find(query, sort=[(_sort_field(sort_by), DESCENDING), ("_id", DESCENDING)])
    return [serialize_document(doc) for doc in await cursor.to_list(length=None)]


async def create_product(store: DocumentStore, product: Product) -> Dict[str, Any]:
    doc = product.model_dump()
    result = await store.products.insert_one(doc)
    doc["_id"] = result.inserted_id
    logger.info("Added product %s (%s)", product.companyName, result.inserted_id)
    return serialize_document(doc)


async def get_product(store: DocumentStore, product_id: Any) -> Optional[Dict[str, Any]]:
    doc = await store.products.find_one({"_id": to_object_id(product_id)})
    return serialize_document(doc)


async def update_product(store: DocumentStore, product_id: Any, fields: Dict[str, Any]) -> Dict[str, Any]:
    """Overwrite the editable fields of a product, re-validating the whole record."""
    oid = to_object_id(product_id)
    existing = await store.products.find_one({"_id": oid})
    if existing is None:
        raise DocumentNotFoundError(f"Product with id {product_id} not found")

    merged = {key: value for key, value in existing.items() if key != "_id"}
    merged.update(fields)
    product = Product.model_validate(merged)

    await store.products.replace_one({"_id": oid}, product.model_dump())
    logger.info("Updated product %s", oid)
    return serialize_document({"_id": oid, **product.model_dump()})


async def increment_likes(store: DocumentStore, product_id: Any) -> Dict[str, Any]:
    doc = await store.products.find_one_and_update(
        {"_id": to_object_id(product_id)},
        {"$inc": {"likes": 1}},
        return_document=ReturnDocument.AFTER,
    )
    if doc is None:
        raise DocumentNotFoundError(f"Product with id {product_id} not found")
    return serialize_document(doc)


async def increment_comment_count(store: DocumentStore, product_id: Any) -> bool:
    """Bump ``commentCount`` by one; returns False when the product is gone."""
    result = await store.products.update_one(
        {"_id": to_object_id(product_id)},
        {"$inc": {"commentCount": 1}},
    )
    return result.matched_count == 1


# ── Comments ───────────────────────────────────────────────────────────


async def list_comments(store: DocumentStore, product_id: Optional[Any] = None) -> List[Dict[str, Any]]:
    query: Dict[str, Any] = {}
    if product_id:
        query["productId"] = to_object_id(product_id)
    cursor = store.comments.find(query)
    return [serialize_document(doc) for doc in await cursor.to_list(length=None)]


async def create_comment(store: DocumentStore, comment: Comment) -> Dict[str, Any]:
    """
    Insert a comment, then increment the referenced product's
    ``commentCount``.

    The two writes are independent.  A comment whose product does not
    exist is still saved; the missed increment is only logged.
    """
    doc = comment.to_document()
    result = await store.comments.insert_one(doc)
    doc["_id"] = result.inserted_id

    product_oid = doc["productId"]
    if not await increment_comment_count(store, product_oid):
        logger.warning(
            "Comment %s saved but product %s not found for commentCount update",
            result.inserted_id, product_oid,
        )
    return serialize_document(doc)
