import copy
import re
from collections import defaultdict
from types import SimpleNamespace

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

from moviehub.core.security import create_access_token
from moviehub.dependencies import get_db
from moviehub.limiter import limiter
from moviehub.main import app


# ---------------------------------------------------------------------------
# In-memory stand-in for the subset of the Motor collection API the
# repositories use. Filters support $and/$or, $in/$nin/$ne, range operators,
# $regex and $elemMatch over dotted paths (arrays are traversed).
# ---------------------------------------------------------------------------
def _values(doc, path):
    current = [doc]
    for part in path.split("."):
        found = []
        for item in current:
            if isinstance(item, dict) and part in item:
                found.append(item[part])
            elif isinstance(item, list):
                found.extend(e[part] for e in item if isinstance(e, dict) and part in e)
        current = found
    return current


def _candidates(doc, path):
    values = _values(doc, path)
    if not values:
        # a missing field compares as null
        return [None]
    out = []
    for value in values:
        if isinstance(value, list):
            out.extend(value)
        out.append(value)
    return out


def _compare(op, candidate, expected):
    try:
        if op == "$gt":
            return candidate > expected
        if op == "$gte":
            return candidate >= expected
        if op == "$lt":
            return candidate < expected
        return candidate <= expected
    except TypeError:
        return False


def _match_condition(doc, path, condition):
    candidates = _candidates(doc, path)
    if not (isinstance(condition, dict) and condition and all(k.startswith("$") for k in condition)):
        return any(c == condition for c in candidates)

    for op, expected in condition.items():
        if op == "$options":
            continue
        if op == "$in":
            ok = any(c in expected for c in candidates if not isinstance(c, list))
        elif op == "$nin":
            ok = not any(c in expected for c in candidates if not isinstance(c, list))
        elif op == "$ne":
            ok = not any(c == expected for c in candidates)
        elif op == "$regex":
            flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
            ok = any(isinstance(c, str) and re.search(expected, c, flags) for c in candidates)
        elif op == "$elemMatch":
            ok = any(isinstance(c, dict) and _matches(c, expected) for c in candidates)
        elif op in ("$gt", "$gte", "$lt", "$lte"):
            ok = any(_compare(op, c, expected) for c in candidates if not isinstance(c, list))
        else:
            raise NotImplementedError(op)
        if not ok:
            return False
    return True


def _matches(doc, query):
    for key, condition in (query or {}).items():
        if key == "$and":
            if not all(_matches(doc, q) for q in condition):
                return False
        elif key == "$or":
            if not any(_matches(doc, q) for q in condition):
                return False
        elif not _match_condition(doc, key, condition):
            return False
    return True


def _sort_key(doc, path):
    values = _values(doc, path)
    value = values[0] if values else None
    return (value is not None, value)


def _project(doc, projection):
    doc = copy.deepcopy(doc)
    if not projection:
        return doc
    included = [k for k, v in projection.items() if v]
    if included:
        out = {"_id": doc["_id"]} if projection.get("_id", 1) else {}
        out.update({k: doc[k] for k in included if k in doc})
        return out
    for key in projection:
        doc.pop(key, None)
    return doc


class FakeCursor:
    def __init__(self, docs, projection=None):
        self._docs = list(docs)
        self._projection = projection
        self._limit = 0

    def sort(self, keys, direction=None):
        if isinstance(keys, str):
            keys = [(keys, direction or 1)]
        for path, order in reversed(list(keys)):
            self._docs = sorted(self._docs, key=lambda d: _sort_key(d, path), reverse=order == -1)
        return self

    def limit(self, count):
        self._limit = count
        return self

    async def to_list(self, length=None):
        docs = self._docs[: self._limit] if self._limit else self._docs
        if length:
            docs = docs[:length]
        return [_project(d, self._projection) for d in docs]


class FakeCollection:
    def __init__(self):
        self.docs = []

    def _matching(self, query):
        return [d for d in self.docs if _matches(d, query)]

    def find(self, query=None, projection=None):
        return FakeCursor(self._matching(query), projection)

    async def find_one(self, query=None, projection=None):
        docs = self._matching(query)
        return _project(docs[0], projection) if docs else None

    async def count_documents(self, query):
        return len(self._matching(query))

    async def distinct(self, field, query=None):
        out = []
        for doc in self._matching(query):
            for value in _values(doc, field):
                for item in value if isinstance(value, list) else [value]:
                    if item not in out:
                        out.append(item)
        return out

    async def insert_one(self, document):
        document.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def find_one_and_update(self, query, update, return_document=None):
        for doc in self.docs:
            if not _matches(doc, query):
                continue
            for key, value in update.get("$set", {}).items():
                doc[key] = copy.deepcopy(value)
            for key, value in update.get("$addToSet", {}).items():
                bucket = doc.setdefault(key, [])
                if value not in bucket:
                    bucket.append(value)
            for key, value in update.get("$pull", {}).items():
                doc[key] = [v for v in doc.get(key, []) if v != value]
            return copy.deepcopy(doc)
        return None

    async def delete_one(self, query):
        for doc in self.docs:
            if _matches(doc, query):
                self.docs.remove(doc)
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def delete_many(self, query):
        matching = self._matching(query)
        self.docs = [d for d in self.docs if d not in matching]
        return SimpleNamespace(deleted_count=len(matching))


class FakeDatabase:
    def __init__(self):
        self._collections = defaultdict(FakeCollection)

    def __getitem__(self, name):
        return self._collections[name]


@pytest.fixture
def fake_db():
    return FakeDatabase()


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------
def bearer(user_id=None, is_admin=False):
    token = create_access_token({"sub": str(user_id or ObjectId()), "is_admin": is_admin})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers():
    return bearer()


@pytest.fixture
def admin_headers():
    return bearer(is_admin=True)


@pytest_asyncio.fixture
async def client(fake_db):
    app.dependency_overrides[get_db] = lambda: fake_db

    transport = ASGITransport(app=app)
    limiter.enabled = False
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    limiter.enabled = True

    app.dependency_overrides = {}


@pytest.fixture
def auth_headers():
    """Factory: ``auth_headers(user_id, is_admin=False)`` -> Authorization header."""
    return bearer
