from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from talent_match.database import create_db_engine, get_db, init_db
from talent_match.deps import get_matcher, get_object_store, get_text_extractor
from talent_match.errors import ExtractionFailed, ObjectStoreUnavailable
from talent_match.main import app
from talent_match.services.matcher import JobMatcher
from talent_match.services.object_store import CVObjectStore


class StubAIClient:
    """Returns canned completions; ``reply`` may be a string or a function of the prompt."""

    def __init__(self, reply: str | Callable[[str], str] = '{"matches": []}') -> None:
        self.reply = reply
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if callable(self.reply):
            return self.reply(prompt)
        return self.reply


class FakeObjectStore:
    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.fail = False

    def ensure_bucket(self) -> bool:
        return True

    def upload(self, filename: str, data: bytes, content_type: str = "application/pdf") -> str:
        if self.fail:
            raise ObjectStoreUnavailable("connect ECONNREFUSED minio:9000")
        key = CVObjectStore.make_key(filename)
        self.objects[key] = data
        return key

    def download(self, key: str) -> bytes:
        if self.fail or key not in self.objects:
            raise ObjectStoreUnavailable(f"Could not read {key!r}")
        return self.objects[key]


class FakeExtractor:
    def __init__(self, text: str = "Jane Doe\nPython, FastAPI, PostgreSQL") -> None:
        self.text = text
        self.fail = False
        self.calls = 0

    def extract(self, data: bytes) -> str:
        self.calls += 1
        if self.fail:
            raise ExtractionFailed("Could not extract text from PDF: EOF marker not found")
        return self.text


@pytest.fixture
def engine():
    db_engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def ai_client() -> StubAIClient:
    return StubAIClient()


@pytest.fixture
def object_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def extractor() -> FakeExtractor:
    return FakeExtractor()


@pytest.fixture
def client(session_factory, ai_client, object_store, extractor) -> Iterator[TestClient]:
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_object_store] = lambda: object_store
    app.dependency_overrides[get_text_extractor] = lambda: extractor
    app.dependency_overrides[get_matcher] = lambda: JobMatcher(ai_client)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def pdf_bytes() -> Callable[[str], bytes]:
    """Builds a one-page PDF whose only content is ``text`` in Helvetica."""

    def _build(text: str) -> bytes:
        stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
        objects = [
            b"<< /Type /Catalog /Pages 2 0 R >>",
            b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
            b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
            b"/Resources << /Font << /F1 5 0 R >> >> >>",
            b"<< /Length " + str(len(stream)).encode("ascii") + b" >>\nstream\n" + stream + b"\nendstream",
            b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
        ]
        out = bytearray(b"%PDF-1.4\n")
        offsets = []
        for number, body in enumerate(objects, start=1):
            offsets.append(len(out))
            out += f"{number} 0 obj\n".encode("ascii") + body + b"\nendobj\n"
        xref_at = len(out)
        out += f"xref\n0 {len(objects) + 1}\n".encode("ascii")
        out += b"0000000000 65535 f \n"
        for offset in offsets:
            out += f"{offset:010d} 00000 n \n".encode("ascii")
        out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode("ascii")
        return bytes(out)

    return _build
