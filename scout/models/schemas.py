from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

from scout.config import settings


# Documents
class StoreRequest(BaseModel):
    """Request to embed and store interview content."""

    content: str = Field(..., min_length=1, description="Text to store")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Free-form tags")
    split_into_chunks: bool = Field(default=False, description="Split long content before embedding")


class DocumentOut(BaseModel):
    id: str
    content: str
    metadata: Dict[str, Any]
    created_at: str


class StoreResponse(BaseModel):
    success: bool = True
    documents: List[DocumentOut]
    message: str


class DocumentListResponse(BaseModel):
    success: bool = True
    documents: List[DocumentOut]
    total: int = Field(..., ge=0)
    limit: int
    offset: int


class DeleteResponse(BaseModel):
    success: bool = True
    message: str


# Search
class SearchRequest(BaseModel):
    query: str = Field(..., min_length=1)
    match_threshold: float = Field(default=settings.match_threshold, ge=-1.0, le=1.0)
    match_count: int = Field(default=settings.match_count, gt=0)
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Exact-match post-filter")


class SearchResult(BaseModel):
    id: str
    content: str
    metadata: Dict[str, Any]
    similarity: float


class SearchResponse(BaseModel):
    success: bool = True
    results: List[SearchResult]
    query: str
    match_count: int


# Chat
class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    message: str = Field(..., description="Current user message")
    history: List[ChatMessage] = Field(default_factory=list)
    system_prompt: str | None = None
    use_rag: bool = False
    rag_match_count: int = Field(default=settings.match_count, gt=0)
    rag_match_threshold: float = Field(default=settings.match_threshold, ge=-1.0, le=1.0)


class ChatResponse(BaseModel):
    message: str
    success: bool = True
    rag_used: bool
    rag_context_found: bool


# Admin
class IngestResponse(BaseModel):
    status: Literal["completed"] = Field(default="completed")
    files: int = Field(..., ge=0)
    documents: int = Field(..., ge=0)
    elapsed_sec: float | None = Field(None, ge=0)


__all__ = [
    "StoreRequest",
    "DocumentOut",
    "StoreResponse",
    "DocumentListResponse",
    "DeleteResponse",
    "SearchRequest",
    "SearchResult",
    "SearchResponse",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "IngestResponse",
]
