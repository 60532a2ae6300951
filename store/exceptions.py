"""
Error types raised by the book store.

Every failure the store can produce derives from BookStoreError so the
API layer can translate them with a single exception handler.
"""

from typing import Optional


class BookStoreError(Exception):
    """Base class for all book store failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class StoreConnectionError(BookStoreError):
    """Store is misconfigured or unreachable at startup."""


class InvalidIdError(BookStoreError):
    """Identifier is not a 24 character hex ObjectId."""

    def __init__(self, book_id: str, detail: Optional[str] = None) -> None:
        self.book_id = book_id
        self.detail = detail
        message = f"invalid record id: {book_id}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class NotFoundError(InvalidIdError):
    """Update or delete matched no document."""


class InvalidNumberPagesError(BookStoreError):
    """Page count is not a non-negative integer."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"invalid number of pages: {value!r}")


class QueryError(BookStoreError):
    """MongoDB rejected or failed a query or mutation."""


class DataError(BookStoreError):
    """A stored document is missing a field or has the wrong type."""


class IdentityExtractionError(BookStoreError):
    """Insert succeeded but no usable ObjectId came back."""
