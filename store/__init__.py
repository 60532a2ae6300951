"""
MongoDB-backed storage for book records.

Exposes the BookStore adapter, the record models it maps documents to,
and the error types it raises.
"""

from store.database import BookStore
from store.exceptions import (
    BookStoreError,
    DataError,
    IdentityExtractionError,
    InvalidIdError,
    InvalidNumberPagesError,
    NotFoundError,
    QueryError,
    StoreConnectionError,
)
from store.models import Book, BookRequest

__all__ = [
    "Book",
    "BookRequest",
    "BookStore",
    "BookStoreError",
    "DataError",
    "IdentityExtractionError",
    "InvalidIdError",
    "InvalidNumberPagesError",
    "NotFoundError",
    "QueryError",
    "StoreConnectionError",
]
