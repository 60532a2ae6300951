"""
Book routes.

Each handler parses its input, delegates to the BookStore and wraps the
result in a Payload. Store errors are left to the exception handlers.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, status

from api.models import Payload
from store.database import BookStore
from store.exceptions import StoreConnectionError
from store.models import Book, BookRequest

router = APIRouter(tags=["Books"])


def get_store(request: Request) -> BookStore:
    """Return the BookStore created at application startup."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreConnectionError("book store not initialized")
    return store


@router.post("/book", response_model=Payload[Book], status_code=status.HTTP_201_CREATED)
async def create_book(body: BookRequest, store: BookStore = Depends(get_store)):
    """Create a book. The store assigns its id."""
    book = await store.create(body)
    return Payload[Book](data=book)


@router.get("/books", response_model=Payload[List[Book]])
async def list_books(store: BookStore = Depends(get_store)):
    """List every book."""
    books = await store.list()
    return Payload[List[Book]](data=books)


@router.put("/book/{book_id}", response_model=Payload[Book])
async def update_book(book_id: str, body: BookRequest, store: BookStore = Depends(get_store)):
    """
    Replace all fields of a book.

    - **book_id**: 24 character hex ObjectId
    """
    book = await store.update(book_id, body)
    return Payload[Book](data=book)


@router.delete("/book/{book_id}", response_model=Payload[str])
async def delete_book(book_id: str, store: BookStore = Depends(get_store)):
    """
    Delete a book and return its id.

    - **book_id**: 24 character hex ObjectId
    """
    deleted_id = await store.delete(book_id)
    return Payload[str](data=deleted_id)
