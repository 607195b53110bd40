import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, List

from app.models import Page


logger = logging.getLogger(__name__)


class DocumentStore(ABC):
    """
    Key-value store mapping a document id to its indexed pages.

    Retrieval only talks to this interface, so a persistent backend
    can replace the in-memory one without touching the pipeline.
    """

    @abstractmethod
    def put(self, doc_id: str, pages: List[Page]) -> None:
        """Store the pages of a document, replacing any previous entry."""

    @abstractmethod
    def get(self, doc_id: str) -> List[Page]:
        """Return the pages of a document, or an empty list."""

    def has(self, doc_id: str) -> bool:
        return len(self.get(doc_id)) > 0

    @abstractmethod
    def list_documents(self) -> Dict[str, int]:
        """Return ``{doc_id: page_count}`` for every stored document."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every document."""

    def get_stats(self) -> dict:

        documents = self.list_documents()

        return {
            "total_documents": len(documents),
            "total_pages": sum(documents.values()),
            "documents": documents,
        }


class InMemoryDocumentStore(DocumentStore):
    """
    Process-local store. Contents are lost on restart.

    Each document entry is an immutable tuple swapped in with a single
    assignment under the lock, so concurrent readers see either the old
    or the new page list, never a mix.
    """

    def __init__(self):

        self._pages_by_doc: Dict[str, tuple] = {}
        self._lock = threading.Lock()

        logger.info("Document store initialized", extra={"backend": "memory"})

    def put(self, doc_id: str, pages: List[Page]) -> None:

        entry = tuple(pages)

        with self._lock:
            replaced = doc_id in self._pages_by_doc
            self._pages_by_doc[doc_id] = entry

        logger.info(
            "Document stored",
            extra={
                "doc_id": doc_id,
                "pages": len(entry),
                "replaced": replaced,
            },
        )

    def get(self, doc_id: str) -> List[Page]:

        with self._lock:
            entry = self._pages_by_doc.get(doc_id, ())

        return list(entry)

    def list_documents(self) -> Dict[str, int]:

        with self._lock:
            return {doc_id: len(pages) for doc_id, pages in self._pages_by_doc.items()}

    def clear(self) -> None:

        with self._lock:
            count = len(self._pages_by_doc)
            self._pages_by_doc.clear()

        logger.info("Document store cleared", extra={"documents": count})
