"""
Shared pytest fixtures.

The Mongo collection is replaced by a small in-memory async double exposing
the subset of the Motor API the repository uses (find/sort/to_list,
insert_one, find_one, find_one_and_update, find_one_and_delete). Ids are real
`bson.ObjectId` values.
"""
import copy
import os
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo import ReturnDocument

os.environ.setdefault("LOG_LEVEL", "WARNING")

from notes_api.api.deps import get_note_service  # noqa: E402
from notes_api.core.config import Settings  # noqa: E402
from notes_api.main import create_app  # noqa: E402
from notes_api.repositories.note_repo import NoteRepository  # noqa: E402
from notes_api.services.note_service import NoteService  # noqa: E402


def _matches(doc: Dict[str, Any], filtro: Dict[str, Any]) -> bool:
    for key, expected in filtro.items():
        value = doc.get(key)
        if isinstance(value, list):
            if expected not in value:
                return False
        elif value != expected:
            return False
    return True


class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]) -> None:
        self.docs = docs

    def sort(self, key: str, direction: int) -> "FakeCursor":
        self.docs = sorted(self.docs, key=lambda d: d[key], reverse=direction < 0)
        return self

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return [copy.deepcopy(d) for d in self.docs[:length]]


class FakeCollection:
    def __init__(self) -> None:
        self.docs: List[Dict[str, Any]] = []
        # Si se asigna una excepción, todas las operaciones la lanzan
        self.fail_with: Optional[Exception] = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def find(self, filtro: Dict[str, Any]) -> FakeCursor:
        self._check()
        return FakeCursor([d for d in self.docs if _matches(d, filtro)])

    async def find_one(self, filtro: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._check()
        for d in self.docs:
            if _matches(d, filtro):
                return copy.deepcopy(d)
        return None

    async def insert_one(self, doc: Dict[str, Any]):
        self._check()
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one_and_update(self, filtro, update, return_document=ReturnDocument.BEFORE):
        self._check()
        for d in self.docs:
            if _matches(d, filtro):
                before = copy.deepcopy(d)
                d.update(copy.deepcopy(update["$set"]))
                return copy.deepcopy(d) if return_document == ReturnDocument.AFTER else before
        return None

    async def find_one_and_delete(self, filtro):
        self._check()
        for i, d in enumerate(self.docs):
            if _matches(d, filtro):
                return self.docs.pop(i)
        return None


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = {}
        self.ping_ok = True

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    async def command(self, cmd):
        from pymongo.errors import ServerSelectionTimeoutError

        if not self.ping_ok:
            raise ServerSelectionTimeoutError("no servers")
        return {"ok": 1.0}


class StepClock:
    """Reloj determinista: cada llamada avanza un segundo."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


@pytest.fixture
def settings():
    return Settings(mongo_uri="mongodb://localhost:27017", log_level="WARNING", _env_file=None)


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def notes_collection(fake_db, settings):
    return fake_db[settings.mongo_collection]


@pytest.fixture
def clock():
    return StepClock(datetime(2024, 5, 1, 12, 0, 0, 123000, tzinfo=timezone.utc))


@pytest.fixture
def repo(notes_collection, clock):
    return NoteRepository(notes_collection, clock=clock)


@pytest.fixture
def service(repo):
    return NoteService(repo)


@pytest.fixture
def app(settings, fake_db, service):
    application = create_app(settings)
    # Sin startup: el handle de Mongo se inyecta directamente
    application.state.db = fake_db
    application.dependency_overrides[get_note_service] = lambda: service
    return application


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
