"""Shared pytest fixtures.

Services talk to MongoDB through the asyncio collection API; the in-memory
``FakeDatabase`` below implements the subset of that API they use, including
unique indexes, so the core can be exercised without a server.
"""

import copy
from dataclasses import dataclass
from typing import Any

import pytest
import pytest_asyncio
from pymongo.errors import DuplicateKeyError

from authgate.config import Config
from authgate.core.core import Core
from authgate.core.modules.auth.models import SignUpForm
from authgate.core.modules.session.models import ClientInfo
from authgate.core.modules.user.models import User

ACCESS_SECRET = "access-secret-used-only-in-tests-0123456789"
REFRESH_SECRET = "refresh-secret-used-only-in-tests-0123456789"
PASSWORD = "correct-horse-battery"


@dataclass
class InsertOneResult:
    inserted_id: Any


@dataclass
class UpdateResult:
    matched_count: int
    modified_count: int
    upserted_id: Any = None


@dataclass
class DeleteResult:
    deleted_count: int


class FakeCursor:
    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self._documents = documents

    def __aiter__(self) -> "FakeCursor":
        return self

    async def __anext__(self) -> dict[str, Any]:
        if not self._documents:
            raise StopAsyncIteration
        return self._documents.pop(0)


class FakeCollection:
    """In-memory stand-in for an AsyncCollection, equality filters only."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.documents: list[dict[str, Any]] = []
        self.indexes: list[tuple[tuple[str, ...], dict[str, Any]]] = []

    async def create_index(self, keys: list[tuple[str, int]], **kwargs: Any) -> str:
        fields = tuple(field for field, _ in keys)
        self.indexes.append((fields, kwargs))
        return "_".join(fields)

    async def find_one(self, filter: dict[str, Any] | None = None) -> dict[str, Any] | None:
        doc = self._find(filter or {})
        return copy.deepcopy(doc) if doc is not None else None

    def find(self, filter: dict[str, Any] | None = None) -> FakeCursor:
        return FakeCursor([copy.deepcopy(d) for d in self.documents if _matches(d, filter or {})])

    async def count_documents(self, filter: dict[str, Any], limit: int = 0) -> int:
        count = sum(1 for d in self.documents if _matches(d, filter))
        return min(count, limit) if limit else count

    async def insert_one(self, document: dict[str, Any]) -> InsertOneResult:
        doc = copy.deepcopy(document)
        self._check_unique(doc)
        self.documents.append(doc)
        return InsertOneResult(inserted_id=doc["_id"])

    async def update_one(self, filter: dict[str, Any], update: dict[str, Any], upsert: bool = False) -> UpdateResult:
        doc = self._find(filter)
        if doc is not None:
            self._replace(doc, _apply(doc, update, inserting=False))
            return UpdateResult(matched_count=1, modified_count=1)
        if upsert:
            new_doc = self._upsert(filter, update)
            return UpdateResult(matched_count=0, modified_count=0, upserted_id=new_doc["_id"])
        return UpdateResult(matched_count=0, modified_count=0)

    async def find_one_and_update(
        self, filter: dict[str, Any], update: dict[str, Any], upsert: bool = False, return_document: bool = False
    ) -> dict[str, Any] | None:
        doc = self._find(filter)
        if doc is not None:
            before = copy.deepcopy(doc)
            updated = _apply(doc, update, inserting=False)
            self._replace(doc, updated)
            return copy.deepcopy(updated) if return_document else before
        if upsert:
            new_doc = self._upsert(filter, update)
            return copy.deepcopy(new_doc) if return_document else None
        return None

    async def delete_one(self, filter: dict[str, Any]) -> DeleteResult:
        doc = self._find(filter)
        if doc is None:
            return DeleteResult(deleted_count=0)
        self.documents.remove(doc)
        return DeleteResult(deleted_count=1)

    async def delete_many(self, filter: dict[str, Any]) -> DeleteResult:
        kept = [d for d in self.documents if not _matches(d, filter)]
        deleted = len(self.documents) - len(kept)
        self.documents = kept
        return DeleteResult(deleted_count=deleted)

    def _find(self, filter: dict[str, Any]) -> dict[str, Any] | None:
        return next((d for d in self.documents if _matches(d, filter)), None)

    def _upsert(self, filter: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
        base = {key: value for key, value in filter.items() if not key.startswith("$")}
        new_doc = _apply(base, update, inserting=True)
        self._check_unique(new_doc)
        self.documents.append(new_doc)
        return new_doc

    def _replace(self, doc: dict[str, Any], updated: dict[str, Any]) -> None:
        self._check_unique(updated, ignore=doc)
        doc.clear()
        doc.update(updated)

    def _check_unique(self, new_doc: dict[str, Any], ignore: dict[str, Any] | None = None) -> None:
        for fields, options in self.indexes:
            if not options.get("unique"):
                continue
            key = tuple(new_doc.get(f) for f in fields)
            for existing in self.documents:
                if existing is ignore:
                    continue
                if tuple(existing.get(f) for f in fields) == key:
                    raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name} index: {fields}")


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


def _matches(doc: dict[str, Any], filter: dict[str, Any]) -> bool:
    return all(doc.get(key) == value for key, value in filter.items())


def _apply(doc: dict[str, Any], update: dict[str, Any], inserting: bool) -> dict[str, Any]:
    result = copy.deepcopy(doc)
    result.update(copy.deepcopy(update.get("$set", {})))
    if inserting:
        result.update(copy.deepcopy(update.get("$setOnInsert", {})))
    return result


@pytest.fixture
def config(tmp_path):
    """Configuration pointing file provisioning at a temporary directory."""
    return Config(
        _env_file=None,
        database_url="mongodb://localhost/authgate_test",
        access_token_secret=ACCESS_SECRET,
        refresh_token_secret=REFRESH_SECRET,
        uploads_path=str(tmp_path / "uploads"),
    )


@pytest.fixture
def database():
    return FakeDatabase()


@pytest_asyncio.fixture
async def core(config, database):
    """Started core backed by the in-memory database."""
    core = Core(config, database)
    async with core.lifespan():
        yield core


@pytest.fixture
def laptop():
    return ClientInfo(ip_address="::ffff:192.168.1.20", device="Chrome 120", platform="Windows")


@pytest.fixture
def phone():
    return ClientInfo(ip_address="10.0.0.7", device="Safari 17", platform="iOS")


@pytest_asyncio.fixture
async def pending_user(core) -> User:
    """Registered but not yet verified account."""
    await core.services.auth.sign_up(SignUpForm(email="alice@example.com", password=PASSWORD, full_name="Alice"))
    user = await core.services.user.find_user_by_email("alice@example.com")
    assert user is not None
    return user


@pytest_asyncio.fixture
async def active_user(core, pending_user) -> User:
    """Registered account with a verified email."""
    assert pending_user.verification_token is not None
    return await core.services.auth.verify_email(pending_user.email, pending_user.verification_token)
