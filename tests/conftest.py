"""
Pytest configuration and shared fixtures.
"""

from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from api.main import app
from api.routes import get_store
from store.database import BookStore
from store.models import BookRequest


class FakeCursor:
    """Stand-in for a motor cursor over a snapshot of documents."""

    def __init__(self, documents):
        self.documents = documents

    async def to_list(self, length=None):
        return [dict(document) for document in self.documents]


class FakeCollection:
    """
    In-memory stand-in for the motor collection methods BookStore uses.
    Mirrors MongoDB's counts: a replace that changes nothing modifies 0.
    """

    def __init__(self):
        self.documents = {}

    async def insert_one(self, document):
        object_id = ObjectId()
        document["_id"] = object_id
        self.documents[object_id] = dict(document)
        return SimpleNamespace(inserted_id=object_id, acknowledged=True)

    def find(self, filter=None):
        return FakeCursor(list(self.documents.values()))

    async def replace_one(self, filter, replacement):
        object_id = filter["_id"]
        current = self.documents.get(object_id)
        if current is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        updated = {"_id": object_id, **replacement}
        self.documents[object_id] = updated
        return SimpleNamespace(matched_count=1, modified_count=int(updated != current))

    async def delete_one(self, filter):
        removed = self.documents.pop(filter["_id"], None)
        return SimpleNamespace(deleted_count=0 if removed is None else 1)


@pytest.fixture
def fake_collection():
    """Create an empty in-memory collection."""
    return FakeCollection()


@pytest.fixture
def book_store(fake_collection):
    """Create a BookStore backed by the in-memory collection."""
    return BookStore(fake_collection)


@pytest.fixture
def client(book_store):
    """Create a test client whose routes use the in-memory store."""
    app.dependency_overrides[get_store] = lambda: book_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_book_request():
    """Create a sample create/update payload."""
    return BookRequest(
        name="Sample Book",
        author="John Doe",
        number_pages="200",
        tags=["fiction", "adventure"]
    )
