"""
Typed records for the three document collections.

Each record validates on construction (``model_validate``) and applies
field defaults, so nothing reaches the store that the collection schema
would reject.  ``_id`` is assigned by MongoDB on insert and is not part
of the records.
"""

from __future__ import annotations

from typing import Any, List

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


# BSON stores integers as at most 8 bytes.
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class User(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    mobile: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)  # bcrypt digest, never the plaintext


class Product(BaseModel):
    model_config = ConfigDict(extra="ignore")

    companyName: str = Field(..., min_length=1)
    category: List[str]
    imageURL: str = Field(..., min_length=1)
    productLink: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    likes: int = Field(0, ge=_INT64_MIN, le=_INT64_MAX)
    commentCount: int = Field(0, ge=_INT64_MIN, le=_INT64_MAX)

    @field_validator("category", mode="before")
    @classmethod
    def _category_as_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("likes", "commentCount", mode="before")
    @classmethod
    def _counter(cls, value: Any) -> Any:
        if value is None or value == "":
            return 0
        if isinstance(value, bool):
            raise ValueError("counter must be an integer")
        return value


class Comment(BaseModel):
    model_config = ConfigDict(extra="ignore")

    productId: str
    commentText: str = Field(..., min_length=1)

    @field_validator("productId", mode="before")
    @classmethod
    def _object_id(cls, value: Any) -> Any:
        if isinstance(value, ObjectId):
            return str(value)
        if not isinstance(value, str) or not ObjectId.is_valid(value):
            raise ValueError(f"Cast to ObjectId failed for value {value!r}")
        return value

    def to_document(self) -> dict:
        doc = self.model_dump()
        doc["productId"] = ObjectId(self.productId)
        return doc


# Fields a product update overwrites; counters are only changed by $inc.
PRODUCT_EDITABLE_FIELDS = ("companyName", "category", "imageURL", "productLink", "description")
