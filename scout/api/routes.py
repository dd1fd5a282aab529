from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status

from scout.api.dependencies import (
    get_chat_service,
    get_document_store,
    get_ingestion_service,
    get_retriever,
)
from scout.config import settings
from scout.errors import ValidationError
from scout.indexing.pipeline import IngestionService
from scout.models.schemas import (
    ChatRequest,
    ChatResponse,
    DeleteResponse,
    DocumentListResponse,
    DocumentOut,
    IngestResponse,
    SearchRequest,
    SearchResponse,
    SearchResult,
    StoreRequest,
    StoreResponse,
)
from scout.rag.chat import ChatService
from scout.rag.retriever import Retriever
from scout.vector_store.base import Document, DocumentStore, SimilarityMatch

router = APIRouter()
logger = logging.getLogger(__name__)


def _check_admin_token(x_admin_token: str | None) -> None:
    if not settings.admin_token:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Admin token is not configured",
        )
    if x_admin_token != settings.admin_token.get_secret_value():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


def _document_out(document: Document) -> DocumentOut:
    return DocumentOut(
        id=document.id,
        content=document.content,
        metadata=document.metadata,
        created_at=document.created_at,
    )


def _search_results(matches: List[SimilarityMatch]) -> List[SearchResult]:
    return [
        SearchResult(id=m.id, content=m.content, metadata=m.metadata, similarity=m.similarity)
        for m in matches
    ]


@router.post("/api/embeddings/store", response_model=StoreResponse, summary="Embed and store content")
def store_document(
    request: StoreRequest,
    service: IngestionService = Depends(get_ingestion_service),
) -> StoreResponse:
    documents = service.store_text(
        request.content,
        metadata=request.metadata,
        split_into_chunks=request.split_into_chunks,
    )
    if request.split_into_chunks:
        message = f"Successfully stored {len(documents)} document chunks"
    else:
        message = "Document stored successfully"
    logger.info("Store request", extra={"documents": len(documents), "chunked": request.split_into_chunks})
    return StoreResponse(documents=[_document_out(d) for d in documents], message=message)


@router.get("/api/embeddings/store", response_model=DocumentListResponse, summary="List stored documents")
def list_documents(
    limit: int = Query(default=10, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    vector_store: DocumentStore = Depends(get_document_store),
) -> DocumentListResponse:
    documents, total = vector_store.list_documents(limit=limit, offset=offset)
    return DocumentListResponse(
        documents=[_document_out(d) for d in documents],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.delete("/api/embeddings/store", response_model=DeleteResponse, summary="Delete a stored document")
def delete_document(
    document_id: str | None = Query(default=None, alias="id"),
    vector_store: DocumentStore = Depends(get_document_store),
) -> DeleteResponse:
    if not document_id:
        raise ValidationError("Document ID is required")
    if not vector_store.delete(document_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
    return DeleteResponse(message="Document deleted successfully")


@router.post("/api/embeddings/search", response_model=SearchResponse, summary="Similarity search")
def search_documents(
    request: SearchRequest,
    retriever: Retriever = Depends(get_retriever),
) -> SearchResponse:
    matches = retriever.search(
        request.query,
        threshold=request.match_threshold,
        count=request.match_count,
        metadata_filter=request.metadata,
    )
    return SearchResponse(results=_search_results(matches), query=request.query, match_count=len(matches))


@router.get("/api/embeddings/search", response_model=SearchResponse, summary="Similarity search")
def search_documents_get(
    query: str | None = Query(default=None),
    match_threshold: float = Query(default=settings.match_threshold),
    match_count: int = Query(default=settings.match_count, gt=0),
    retriever: Retriever = Depends(get_retriever),
) -> SearchResponse:
    if not query:
        raise ValidationError("Query parameter is required")
    matches = retriever.search(query, threshold=match_threshold, count=match_count)
    return SearchResponse(results=_search_results(matches), query=query, match_count=len(matches))


@router.post("/api/chat", response_model=ChatResponse, summary="Run one interview turn")
def chat(
    request: ChatRequest,
    service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    reply = service.reply(
        request.message,
        history=[m.model_dump() for m in request.history],
        system_prompt=request.system_prompt,
        use_rag=request.use_rag,
        rag_match_count=request.rag_match_count,
        rag_match_threshold=request.rag_match_threshold,
    )
    return ChatResponse(
        message=reply.message,
        rag_used=reply.rag_used,
        rag_context_found=reply.rag_context_found,
    )


@router.post("/admin/ingest", response_model=IngestResponse, summary="Ingest transcript corpus")
def admin_ingest(
    x_admin_token: str | None = Header(default=None, alias="X-Admin-Token"),
    service: IngestionService = Depends(get_ingestion_service),
) -> IngestResponse:
    _check_admin_token(x_admin_token)

    logger.info("Admin ingest requested", extra={"corpus_dir": settings.corpus_dir})
    summary = service.ingest_corpus(settings.corpus_dir)
    return IngestResponse(
        files=summary.files,
        documents=summary.documents,
        elapsed_sec=round(summary.elapsed_sec, 2),
    )


__all__ = ["router"]
