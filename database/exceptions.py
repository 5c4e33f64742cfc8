"""
Errors raised by the document-store layer.
"""


class StoreError(Exception):
    """Base class for document-store failures surfaced to route handlers."""


class InvalidIdError(StoreError):
    """The supplied identifier is not a valid ObjectId."""


class DocumentNotFoundError(StoreError):
    """No document matched the supplied identifier."""


class DuplicateInsertError(StoreError):
    """An insert violated a unique index."""
