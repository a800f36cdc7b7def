"""Shared pytest fixtures."""

from collections.abc import AsyncGenerator
from datetime import timedelta
from types import SimpleNamespace
from typing import Any
from uuid import UUID

import httpx
import pytest
import pytest_asyncio
from pymongo.errors import PyMongoError

from zenith.app import App
from zenith.config import Config
from zenith.core.modules.session.models import SessionPayload
from zenith.core.modules.session.tokens import create_session_token
from zenith.utils import now
from zenith.web.server import create_fastapi_app

TEST_SECRET_KEY = "test-session-secret-0123456789abcdef"
TEST_USER_ID = UUID("87654321-4321-8765-4321-876543218765")


def _matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    for field, expected in query.items():
        if isinstance(expected, dict) and "$in" in expected:
            if doc.get(field) not in expected["$in"]:
                return False
        elif doc.get(field) != expected:
            return False
    return True


class FakeCursor:
    """Async cursor over a snapshot of documents."""

    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    def sort(self, field: str, direction: int = 1) -> "FakeCursor":
        self._docs.sort(key=lambda doc: doc[field], reverse=direction < 0)
        return self

    def __aiter__(self) -> "FakeCursor":
        self._iter = iter(self._docs)
        return self

    async def __anext__(self) -> dict[str, Any]:
        try:
            return dict(next(self._iter))
        except StopIteration:
            raise StopAsyncIteration from None


class FakeCollection:
    """In-memory stand-in for an AsyncCollection.

    Set `error` to make every operation raise it.
    """

    def __init__(self) -> None:
        self.docs: list[dict[str, Any]] = []
        self.indexes: list[Any] = []
        self.error: PyMongoError | None = None

    def _check(self) -> None:
        if self.error is not None:
            raise self.error

    async def create_index(self, keys: Any, **kwargs: Any) -> str:
        self.indexes.append((keys, kwargs))
        return "index"

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        self._check()
        return next((dict(doc) for doc in self.docs if _matches(doc, query)), None)

    def find(self, query: dict[str, Any]) -> FakeCursor:
        self._check()
        return FakeCursor([doc for doc in self.docs if _matches(doc, query)])

    async def insert_one(self, doc: dict[str, Any]) -> SimpleNamespace:
        self._check()
        self.docs.append(dict(doc))
        return SimpleNamespace(inserted_id=doc.get("_id"))

    async def update_one(self, query: dict[str, Any], update: dict[str, Any], upsert: bool = False) -> SimpleNamespace:
        self._check()
        for doc in self.docs:
            if _matches(doc, query):
                doc.update(update.get("$set", {}))
                for field, value in update.get("$max", {}).items():
                    doc[field] = max(doc.get(field, value), value)
                return SimpleNamespace(matched_count=1, upserted_id=None)
        if upsert:
            doc = {**query, **update.get("$setOnInsert", {}), **update.get("$set", {}), **update.get("$max", {})}
            self.docs.append(doc)
            return SimpleNamespace(matched_count=0, upserted_id=doc.get("_id"))
        return SimpleNamespace(matched_count=0, upserted_id=None)

    async def delete_one(self, query: dict[str, Any]) -> SimpleNamespace:
        self._check()
        for i, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture
def config():
    """Config pointing at a database that is never contacted."""
    return Config(
        database_url="mongodb://localhost:27017/zenith_test",
        session_secret_key=TEST_SECRET_KEY,
        progress_sync_delay=0.05,
        llm_api_key="test-llm-key",
    )


@pytest.fixture
def database():
    return FakeDatabase()


@pytest_asyncio.fixture
async def app_instance(config, database) -> AsyncGenerator[App]:
    """A started App backed by the in-memory database."""
    app = App(config, database)
    async with app.lifespan():
        yield app


@pytest_asyncio.fixture
async def client(app_instance, config) -> AsyncGenerator[httpx.AsyncClient]:
    fastapi_app = create_fastapi_app(app_instance, config)
    transport = httpx.ASGITransport(app=fastapi_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_session():
    """A session payload valid for a week."""
    issued_at = now()
    return SessionPayload(
        uid=TEST_USER_ID,
        email="ana@example.com",
        display_name="Ana",
        issued_at=issued_at,
        expires_at=issued_at + timedelta(days=7),
    )


@pytest.fixture
def session_token(mock_session):
    return create_session_token(mock_session, TEST_SECRET_KEY)
