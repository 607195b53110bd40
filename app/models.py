# app/models.py
from dataclasses import dataclass
from typing import List

from pydantic import BaseModel, Field, validator


# ========== DOMAIN RECORDS ==========

@dataclass(frozen=True)
class Page:
    """An indexed page: full text plus its averaged embedding."""
    page_number: int
    text: str
    embedding: List[float]


@dataclass(frozen=True)
class RankedPage:
    """A page with its similarity score for one query."""
    page: Page
    score: float


# ========== API SCHEMAS ==========

class PageInput(BaseModel):
    """One extracted page as sent by the client."""
    pageNumber: int = Field(..., ge=1)
    text: str = ""

    @validator("text", pre=True)
    def default_text(cls, v):
        """Treat a null page text as empty."""
        return v if v is not None else ""


class IndexRequest(BaseModel):
    """Request to index the extracted pages of a document."""
    docId: str
    pages: List[PageInput]

    @validator("docId")
    def validate_doc_id(cls, v):
        """Ensure docId is not just whitespace."""
        if not v.strip():
            raise ValueError("docId cannot be empty")
        return v

    @validator("pages")
    def validate_pages(cls, v):
        """At least one page is required."""
        if not v:
            raise ValueError("pages must be a non-empty array")
        return v


class IndexResponse(BaseModel):
    """Response after indexing a document."""
    ok: bool = True
    pages: int


class ChatRequest(BaseModel):
    """Request to ask a question about an indexed document."""
    docId: str
    question: str

    @validator("docId")
    def validate_doc_id(cls, v):
        """Ensure docId is not just whitespace."""
        if not v.strip():
            raise ValueError("docId cannot be empty")
        return v

    @validator("question")
    def validate_question(cls, v):
        """Ensure question is not just whitespace."""
        if not v.strip():
            raise ValueError("question cannot be empty or only whitespace")
        return v


class Citation(BaseModel):
    """A page used to answer the question."""
    pageNumber: int


class ChatResponse(BaseModel):
    """Answer text plus the pages used for retrieval."""
    answer: str
    citations: List[Citation]


class UploadResponse(BaseModel):
    """Response after storing an uploaded file."""
    docId: str
    filename: str
    path: str


class DocumentInfo(BaseModel):
    """An indexed document and its page count."""
    docId: str
    pages: int


class ListDocumentsResponse(BaseModel):
    """Response listing all indexed documents."""
    documents: List[DocumentInfo]
    total_documents: int
    total_pages: int


class HealthResponse(BaseModel):
    ok: bool = True
