# tests/conftest.py
import os
import sys

import pytest
from fastapi.testclient import TestClient

# Add app directory to Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app.api import dependencies
from app.errors import UpstreamError
from app.main import app
from app.memory.store import InMemoryDocumentStore
from app.observability.metrics import metrics_tracker


DEFAULT_VECTOR = [1.0, 0.0]


class FakeEmbedder:
    """
    Deterministic stand-in for the embedding API.

    Texts found in ``vectors`` get that vector, anything else gets
    ``default``. Every batch is recorded in ``calls``.
    """

    def __init__(self, vectors=None, default=None, error=None):
        self.vectors = dict(vectors or {})
        self.default = list(default or DEFAULT_VECTOR)
        self.error = error
        self.calls = []

    async def embed(self, texts):
        self.calls.append(list(texts))
        if self.error is not None:
            raise self.error
        return [list(self.vectors.get(t, self.default)) for t in texts]

    async def embed_one(self, text):
        vectors = await self.embed([text])
        return vectors[0]


class FakeLLM:
    """
    Chat client double returning a fixed answer.
    """

    def __init__(self, answer="This is a mocked answer.", error=None):
        self.answer = answer
        self.error = error
        self.calls = []

    async def complete(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.answer


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def fake_embedder():
    return FakeEmbedder()


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def client(store, fake_embedder, fake_llm, tmp_path, monkeypatch):
    """
    FastAPI test client wired to an isolated store and fake remote clients.
    """
    from app.api import routes

    monkeypatch.setattr(routes, "UPLOAD_DIR", str(tmp_path / "uploads"))

    app.dependency_overrides[dependencies.get_document_store] = lambda: store
    app.dependency_overrides[dependencies.get_embedder] = lambda: fake_embedder
    app.dependency_overrides[dependencies.get_llm_client] = lambda: fake_llm

    metrics_tracker.reset()

    with TestClient(app) as c:
        yield c

    app.dependency_overrides = {}


@pytest.fixture
def failing_embedder():
    return FakeEmbedder(error=UpstreamError("Rate limit reached for text-embedding-3-small"))


@pytest.fixture
def index_document_via_api(client):
    """
    Index pages through the API and return the response body.
    """
    def _index(doc_id="d1", pages=None):
        if pages is None:
            pages = [{"pageNumber": 1, "text": "hello world"}]
        response = client.post("/api/index", json={"docId": doc_id, "pages": pages})
        assert response.status_code == 200, f"Indexing failed: {response.json()}"
        return response.json()

    return _index


@pytest.fixture
def sample_pdf_path(tmp_path):
    """
    A two-page PDF with blank pages.
    """
    from pypdf import PdfWriter

    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    writer.add_blank_page(width=612, height=792)

    path = tmp_path / "sample.pdf"
    with path.open("wb") as f:
        writer.write(f)

    return str(path)
