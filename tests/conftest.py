"""
Configuración de pytest para tests
"""
import copy
import os
from types import SimpleNamespace

# Antes de importar la app: sin rate limiting y con el prefijo conocido
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["API_PREFIX"] = "/api"
os.environ["WRITE_RATE_LIMIT"] = "2/minute"

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

_MISSING = object()


def _get(doc, path, default=_MISSING):
    cur = doc
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def _set(doc, path, value):
    parts = path.split(".")
    cur = doc
    for part in parts[:-1]:
        if not isinstance(cur.get(part), dict):
            cur[part] = {}
        cur = cur[part]
    cur[parts[-1]] = value


def _unset(doc, path):
    parts = path.split(".")
    cur = doc
    for part in parts[:-1]:
        cur = cur.get(part)
        if not isinstance(cur, dict):
            return
    cur.pop(parts[-1], None)


def _sort_key(value):
    # como MongoDB: los campos ausentes van primero en orden ascendente
    return (0, "") if value is _MISSING or value is None else (1, value)


class FakeCursor:
    """Cursor en memoria con la misma interfaz encadenable que Motor."""

    def __init__(self, docs):
        self._docs = docs

    def sort(self, spec):
        for field, direction in reversed(list(spec)):
            self._docs.sort(key=lambda d: _sort_key(_get(d, field)), reverse=direction < 0)
        return self

    def skip(self, n):
        self._docs = self._docs[n:]
        return self

    def limit(self, n):
        if n:
            self._docs = self._docs[:n]
        return self

    async def to_list(self, length=None):
        docs = [copy.deepcopy(d) for d in self._docs]
        return docs[:length] if length else docs


class FakeCollection:
    """
    Implementa sólo las primitivas que usa la API: insert_one, find_one,
    find, update_one, delete_one y aggregate ($lookup/$unwind/$sort/$skip/$limit).
    """

    def __init__(self, db, name):
        self.db = db
        self.name = name
        self.docs = []

    @staticmethod
    def _match(doc, query):
        return all(_get(doc, k) == v for k, v in (query or {}).items())

    async def insert_one(self, doc):
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one(self, query, projection=None):
        for d in self.docs:
            if self._match(d, query):
                return copy.deepcopy(d)
        return None

    def find(self, query=None):
        return FakeCursor([copy.deepcopy(d) for d in self.docs if self._match(d, query)])

    async def update_one(self, query, update):
        for d in self.docs:
            if self._match(d, query):
                before = copy.deepcopy(d)
                for k, v in update["$set"].items():
                    _set(d, k, v)
                return SimpleNamespace(matched_count=1, modified_count=int(d != before), upserted_id=None)
        return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=None)

    async def delete_one(self, query):
        for i, d in enumerate(self.docs):
            if self._match(d, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    def aggregate(self, pipeline):
        self.db.pipelines.append(pipeline)
        rows = [copy.deepcopy(d) for d in self.docs]
        for stage in pipeline:
            (op, arg), = stage.items()
            if op == "$lookup":
                foreign = self.db[arg["from"]].docs
                for row in rows:
                    local = _get(row, arg["localField"], None)
                    matches = [
                        copy.deepcopy(f) for f in foreign
                        if local is not None and f.get(arg["foreignField"]) == local
                    ]
                    _set(row, arg["as"], matches)
            elif op == "$unwind":
                path = arg["path"].lstrip("$")
                out = []
                for row in rows:
                    value = _get(row, path)
                    if isinstance(value, list):
                        if not value:
                            _unset(row, path)
                            out.append(row)
                        for item in value:
                            new_row = copy.deepcopy(row)
                            _set(new_row, path, item)
                            out.append(new_row)
                    else:
                        out.append(row)
                rows = out
            elif op == "$sort":
                rows = FakeCursor(rows).sort(list(arg.items()))._docs
            elif op == "$skip":
                rows = rows[arg:]
            elif op == "$limit":
                rows = rows[:arg]
            else:
                raise NotImplementedError(op)
        return FakeCursor(rows)


class BrokenCollection(FakeCollection):
    """Simula un MongoDB caído."""

    def _fail(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("connection refused")

    insert_one = find_one = update_one = delete_one = _fail
    find = aggregate = _fail


class FakeDatabase:
    collection_class = FakeCollection

    def __init__(self):
        self.collections = {}
        self.pipelines = []

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = self.collection_class(self, name)
        return self.collections[name]


class BrokenDatabase(FakeDatabase):
    collection_class = BrokenCollection


def _client_for(db):
    from app.main import app
    from app.db import get_db

    app.dependency_overrides[get_db] = lambda: db
    return TestClient(app)


@pytest.fixture
def fake_db():
    """Base de datos en memoria, vacía en cada test"""
    return FakeDatabase()

@pytest.fixture
def client(fake_db):
    """Fixture para cliente de test de FastAPI"""
    from app.main import app
    yield _client_for(fake_db)
    app.dependency_overrides.clear()

@pytest.fixture
def broken_client():
    """Cliente cuya base de datos falla en todas las operaciones"""
    from app.main import app
    yield _client_for(BrokenDatabase())
    app.dependency_overrides.clear()

@pytest.fixture
def location_data():
    return {
        "type": "Point",
        "latitude": 60.1699,
        "longitude": 24.9384,
        "coordinates": [60.1699, 24.9384],
    }

@pytest.fixture
def limited_client(client):
    """Cliente con el rate limiting activo (WRITE_RATE_LIMIT=2/minute)"""
    from app.middleware.rate_limit import limiter
    limiter.reset()
    limiter.enabled = True
    yield client
    limiter.enabled = False
    limiter.reset()
