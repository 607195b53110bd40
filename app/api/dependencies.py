from fastapi import Request

from app.llm.client import LLMClient
from app.memory.embedder import Embedder
from app.memory.store import DocumentStore


# Components are owned by the application (created on startup in app.main)
# and overridable in tests through app.dependency_overrides.

def get_document_store(request: Request) -> DocumentStore:
    return request.app.state.document_store


def get_embedder(request: Request) -> Embedder:
    return request.app.state.embedder


def get_llm_client(request: Request) -> LLMClient:
    return request.app.state.llm_client
