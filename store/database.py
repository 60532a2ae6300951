"""
MongoDB adapter for book records.
Owns the motor client and translates book operations into collection
queries, mapping stored documents back to Book records.
"""

import re
from typing import Any, List, Optional

import structlog
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.errors import ConfigurationError, PyMongoError

from store.exceptions import (
    IdentityExtractionError,
    InvalidIdError,
    InvalidNumberPagesError,
    NotFoundError,
    QueryError,
    StoreConnectionError,
)
from store.models import Book, BookRequest

logger = structlog.get_logger(__name__)

APP_NAME = "booky"

# Page counts are stored as 32-bit integers
MAX_NUMBER_PAGES = 2**31 - 1

_OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")
_NUMBER_PAGES_RE = re.compile(r"\+?[0-9]+")


def parse_object_id(book_id: str) -> ObjectId:
    """
    Parse a client-supplied identifier.

    Raises:
        InvalidIdError: unless book_id is exactly 24 hex characters
    """
    if not isinstance(book_id, str) or not _OBJECT_ID_RE.fullmatch(book_id):
        raise InvalidIdError(book_id)
    return ObjectId(book_id)


def parse_number_pages(value: str) -> int:
    """
    Parse the wire page count into a stored integer.

    Raises:
        InvalidNumberPagesError: unless value is a base-10 integer in
            the 0..MAX_NUMBER_PAGES range
    """
    if not _NUMBER_PAGES_RE.fullmatch(value):
        raise InvalidNumberPagesError(value)
    number_pages = int(value)
    if number_pages > MAX_NUMBER_PAGES:
        raise InvalidNumberPagesError(value)
    return number_pages


class BookStore:
    """
    Async MongoDB store for books.

    One instance is created at startup and shared by every request;
    motor clients are safe for concurrent use.
    """

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        client: Optional[AsyncIOMotorClient] = None,
    ):
        self.collection = collection
        self.client = client

    @classmethod
    async def connect(
        cls,
        connection_url: str,
        database_name: str,
        collection_name: str,
        **client_options: Any,
    ) -> "BookStore":
        """
        Create a client and check the server answers a ping.

        Args:
            connection_url: MongoDB connection string
            database_name: Name of the database
            collection_name: Name of the books collection
            **client_options: Extra keyword arguments for AsyncIOMotorClient

        Raises:
            StoreConnectionError: if a setting is missing, the URL is
                malformed or the server is unreachable
        """
        for setting, value in (
            ("connection url", connection_url),
            ("database name", database_name),
            ("collection name", collection_name),
        ):
            if not value:
                raise StoreConnectionError(f"mongodb {setting} not configured")

        client_options.setdefault("appname", APP_NAME)
        try:
            client = AsyncIOMotorClient(connection_url, **client_options)
        except (ConfigurationError, ValueError, TypeError) as e:
            raise StoreConnectionError(f"failed to create mongo client: {e}") from e

        try:
            await client.admin.command("ping")
        except PyMongoError as e:
            client.close()
            logger.error("Failed to connect to MongoDB", database=database_name, error=str(e))
            raise StoreConnectionError(f"mongodb unreachable: {e}") from e

        logger.info(
            "Successfully connected to MongoDB",
            database=database_name,
            collection=collection_name,
        )
        return cls(client[database_name][collection_name], client=client)

    def close(self) -> None:
        """Close the underlying client, if this store owns one."""
        if self.client is not None:
            self.client.close()
            logger.info("Disconnected from MongoDB")

    async def create(self, request: BookRequest) -> Book:
        """
        Insert a new book.

        Returns:
            The stored book including its generated id

        Raises:
            InvalidNumberPagesError: page count does not parse
            QueryError: the insert failed
            IdentityExtractionError: no ObjectId came back from the insert
        """
        number_pages = parse_number_pages(request.number_pages)
        document = request.to_document(number_pages)

        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            logger.error("Failed to insert book", name=request.name, error=str(e))
            raise QueryError(f"mongodb query error: {e}") from e

        inserted_id = getattr(result, "inserted_id", None)
        if not isinstance(inserted_id, ObjectId):
            raise IdentityExtractionError(f"insert returned no ObjectId: {inserted_id!r}")

        logger.info("Inserted book", book_id=str(inserted_id), name=request.name)
        return Book(
            id=str(inserted_id),
            name=request.name,
            author=request.author,
            number_pages=number_pages,
            tags=list(request.tags),
        )

    async def list(self) -> List[Book]:
        """
        Fetch every book in the collection.

        A single malformed document fails the whole call with DataError.

        Raises:
            QueryError: the find failed
            DataError: a document could not be mapped to a Book
        """
        try:
            documents = await self.collection.find({}).to_list(length=None)
        except PyMongoError as e:
            logger.error("Failed to fetch books", error=str(e))
            raise QueryError(f"mongodb query error: {e}") from e

        books = [Book.from_document(document) for document in documents]
        logger.debug("Fetched books", count=len(books))
        return books

    async def update(self, book_id: str, request: BookRequest) -> Book:
        """
        Replace all fields of an existing book.

        MongoDB reports a replace that changes nothing as zero modified
        documents, so writing a book's current values back raises
        NotFoundError just like a missing id.

        Raises:
            InvalidIdError: book_id is not a valid ObjectId
            InvalidNumberPagesError: page count does not parse
            QueryError: the replace failed
            NotFoundError: no document was modified
        """
        object_id = parse_object_id(book_id)
        number_pages = parse_number_pages(request.number_pages)
        document = request.to_document(number_pages)

        try:
            result = await self.collection.replace_one({"_id": object_id}, document)
        except PyMongoError as e:
            logger.error("Failed to update book", book_id=book_id, error=str(e))
            raise QueryError(f"mongodb query error: {e}") from e

        if result.modified_count == 0:
            raise NotFoundError(book_id, "no document modified")

        logger.info("Updated book", book_id=book_id)
        return Book(id=str(object_id), **document)

    async def delete(self, book_id: str) -> str:
        """
        Delete a book.

        Returns:
            The id of the deleted book

        Raises:
            InvalidIdError: book_id is not a valid ObjectId
            QueryError: the delete failed
            NotFoundError: no document was deleted
        """
        object_id = parse_object_id(book_id)

        try:
            result = await self.collection.delete_one({"_id": object_id})
        except PyMongoError as e:
            logger.error("Failed to delete book", book_id=book_id, error=str(e))
            raise QueryError(f"mongodb query error: {e}") from e

        if result.deleted_count == 0:
            raise NotFoundError(book_id, "no document deleted")

        logger.info("Deleted book", book_id=book_id)
        return str(object_id)
