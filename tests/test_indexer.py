# tests/test_indexer.py
import asyncio

import pytest

from app.errors import UpstreamError, ValidationError
from app.memory.indexer import embed_page, index_document
from app.models import PageInput

from conftest import FakeEmbedder


def _run(coro):
    return asyncio.run(coro)


class TestEmbedPage:
    """Chunk, embed in one batch, average."""

    def test_single_chunk_vector_used_as_is(self):
        embedder = FakeEmbedder(vectors={"short": [0.1, 0.2]})

        vector = _run(embed_page(embedder, "short", max_len=100))

        assert vector == [0.1, 0.2]
        assert embedder.calls == [["short"]]

    def test_multiple_chunks_embedded_in_one_call_and_averaged(self):
        embedder = FakeEmbedder(vectors={"abc": [1.0, 0.0], "de": [0.0, 1.0]})

        vector = _run(embed_page(embedder, "abcde", max_len=3))

        assert embedder.calls == [["abc", "de"]]
        assert vector == pytest.approx([0.5, 0.5])

    def test_empty_page_embeds_one_empty_chunk(self):
        embedder = FakeEmbedder()

        _run(embed_page(embedder, ""))

        assert embedder.calls == [[""]]


class TestIndexDocument:
    """Write path into the document store."""

    def test_returns_page_count_and_stores_pages(self, store):
        embedder = FakeEmbedder()
        pages = [PageInput(pageNumber=1, text="one"), PageInput(pageNumber=2, text="two")]

        count = _run(index_document("d1", pages, embedder, store))

        assert count == 2
        stored = store.get("d1")
        assert [p.page_number for p in stored] == [1, 2]
        assert [p.text for p in stored] == ["one", "two"]
        assert all(p.embedding == [1.0, 0.0] for p in stored)

    def test_one_embedding_call_per_page(self, store):
        embedder = FakeEmbedder()
        pages = [PageInput(pageNumber=n, text="x" * 3100) for n in (1, 2, 3)]

        _run(index_document("d1", pages, embedder, store))

        assert len(embedder.calls) == 3
        assert all(len(batch) == 3 for batch in embedder.calls)

    def test_reindex_replaces_not_appends(self, store):
        embedder = FakeEmbedder()

        _run(index_document("d1", [PageInput(pageNumber=n, text="a") for n in (1, 2, 3)], embedder, store))
        count = _run(index_document("d1", [PageInput(pageNumber=9, text="b")], embedder, store))

        assert count == 1
        assert [p.page_number for p in store.get("d1")] == [9]

    @pytest.mark.parametrize("doc_id", ["", "   "])
    def test_missing_doc_id_rejected(self, store, doc_id):
        with pytest.raises(ValidationError):
            _run(index_document(doc_id, [PageInput(pageNumber=1, text="a")], FakeEmbedder(), store))

    def test_empty_pages_rejected(self, store):
        embedder = FakeEmbedder()

        with pytest.raises(ValidationError):
            _run(index_document("d1", [], embedder, store))

        assert embedder.calls == []

    def test_failure_keeps_previous_entry(self, store):
        _run(index_document("d1", [PageInput(pageNumber=1, text="old")], FakeEmbedder(), store))

        broken = FakeEmbedder(error=UpstreamError("boom"))

        with pytest.raises(UpstreamError):
            _run(index_document("d1", [PageInput(pageNumber=2, text="new")], broken, store))

        assert [p.text for p in store.get("d1")] == ["old"]
