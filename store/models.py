"""
Pydantic models for book records.

BookRequest is the client-supplied input shape used by create and
update. Book is the stored record as returned to clients.
"""

from typing import Any, Dict, List

from bson import ObjectId
from pydantic import BaseModel, Field, ValidationError

from store.exceptions import DataError

# Mutable fields of a stored book, in document order
BOOK_FIELDS = ("name", "author", "number_pages", "tags")


class BookRequest(BaseModel):
    """Create/update payload. Any ``id`` sent by the client is ignored."""

    name: str = Field(..., min_length=1, description="Title of the book")
    author: str = Field(..., min_length=1, description="Author of the book")
    number_pages: str = Field(..., description="Page count as text, e.g. \"412\"")
    tags: List[str] = Field(..., description="Tags in the order supplied")

    def to_document(self, number_pages: int) -> Dict[str, Any]:
        """Build the MongoDB document for this request."""
        return {
            "name": self.name,
            "author": self.author,
            "number_pages": number_pages,
            "tags": list(self.tags),
        }


class Book(BaseModel):
    """A persisted book."""

    id: str = Field(..., description="24 character hex ObjectId")
    name: str = Field(..., description="Title of the book")
    author: str = Field(..., description="Author of the book")
    number_pages: int = Field(..., ge=0, description="Page count")
    tags: List[str] = Field(..., description="Tags in stored order")

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Book":
        """
        Map a MongoDB document to a Book.

        Types are checked strictly: a string page count or a non-string
        tag is a malformed document, not something to coerce.

        Raises:
            DataError: if a field is missing or has the wrong type
        """
        object_id = document.get("_id")
        if not isinstance(object_id, ObjectId):
            raise DataError(f"document has no ObjectId _id: {object_id!r}")

        fields = {key: document[key] for key in BOOK_FIELDS if key in document}
        try:
            return cls.model_validate({"id": str(object_id), **fields}, strict=True)
        except ValidationError as e:
            raise DataError(f"malformed book document {object_id}: {e}") from e
