"""
Pytest configuration and fixtures.

Router tests run against an in-memory stand-in for the motor database so no
MongoDB server is needed.
"""

import io
from types import SimpleNamespace

import pytest
from bson import ObjectId
from docx import Document


SAMPLE_RESUME = """Dr. Jane Smith
jane.smith@gmail.com | +1-234-567-8900
Location: Austin, TX

Summary:
Backend engineer building data platforms.

Skills:
Python, Django, PostgreSQL
- Docker; Kubernetes | AWS

Work History:
Senior Engineer, Acme Corp 2019 - Present
Led the platform team.
Engineer, Beta LLC 2015 - 2019
Built internal tooling.

Education:
Bachelor of Science in Computer Science, MIT, 2015.
"""


def _matches(doc: dict, query: dict) -> bool:
    return all(doc.get(key) == value for key, value in query.items())


class FakeCursor:
    def __init__(self, docs: list[dict]):
        self._docs = docs

    def sort(self, key: str, direction: int) -> "FakeCursor":
        self._docs = sorted(self._docs, key=lambda d: d[key], reverse=direction < 0)
        return self

    def __aiter__(self):
        self._iter = iter(self._docs)
        return self

    async def __anext__(self) -> dict:
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration


class FakeCollection:
    def __init__(self):
        self.docs: list[dict] = []

    async def insert_one(self, doc: dict):
        doc = {**doc, "_id": ObjectId()}
        self.docs.append(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    async def update_one(self, query: dict, update: dict):
        for doc in self.docs:
            if _matches(doc, query):
                doc.update(update.get("$set", {}))
                return SimpleNamespace(modified_count=1)
        return SimpleNamespace(modified_count=0)

    def find(self, query: dict) -> FakeCursor:
        return FakeCursor([doc for doc in self.docs if _matches(doc, query)])

    async def find_one(self, query: dict):
        return next((doc for doc in self.docs if _matches(doc, query)), None)

    async def delete_one(self, query: dict):
        doc = await self.find_one(query)
        if doc is None:
            return SimpleNamespace(deleted_count=0)
        self.docs.remove(doc)
        return SimpleNamespace(deleted_count=1)

    async def delete_many(self, query: dict):
        keep = [doc for doc in self.docs if not _matches(doc, query)]
        deleted = len(self.docs) - len(keep)
        self.docs = keep
        return SimpleNamespace(deleted_count=deleted)


class FakeDatabase(dict):
    def __missing__(self, name: str) -> FakeCollection:
        collection = self[name] = FakeCollection()
        return collection


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def make_docx():
    """Build DOCX bytes with one paragraph per line of the given text."""

    def _make(text: str) -> bytes:
        document = Document()
        for line in text.splitlines():
            document.add_paragraph(line)
        buffer = io.BytesIO()
        document.save(buffer)
        return buffer.getvalue()

    return _make


@pytest.fixture
def fake_db(monkeypatch, tmp_path) -> FakeDatabase:
    from app.config import settings
    import app.routers.resumes as resumes_module

    db = FakeDatabase()
    monkeypatch.setattr(resumes_module, "get_db", lambda: db)
    monkeypatch.setattr(settings, "uploads_dir", str(tmp_path / "uploads"))
    return db
