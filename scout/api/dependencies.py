"""Dependency wiring for FastAPI routes.

Provider clients are built once per process and shared by every request;
services are cheap wrappers assembled per request from those clients.
"""

from functools import lru_cache

from fastapi import Depends

from scout.embeddings.client import EmbeddingsClient
from scout.indexing.pipeline import IngestionService
from scout.llm.client import LLMClient
from scout.rag.chat import ChatService
from scout.rag.retriever import Retriever
from scout.vector_store import get_vector_store
from scout.vector_store.base import DocumentStore


@lru_cache(maxsize=1)
def get_document_store() -> DocumentStore:
    """Return the configured document store singleton."""
    return get_vector_store()


@lru_cache(maxsize=1)
def get_embeddings_client() -> EmbeddingsClient:
    """Return a cached `EmbeddingsClient` singleton instance."""
    return EmbeddingsClient()


@lru_cache(maxsize=1)
def get_llm_client() -> LLMClient:
    """Return a cached `LLMClient` singleton instance."""
    return LLMClient()


def get_retriever(
    vector_store: DocumentStore = Depends(get_document_store),
    embeddings_client: EmbeddingsClient = Depends(get_embeddings_client),
) -> Retriever:
    return Retriever(vector_store=vector_store, embeddings_client=embeddings_client)


def get_ingestion_service(
    vector_store: DocumentStore = Depends(get_document_store),
    embeddings_client: EmbeddingsClient = Depends(get_embeddings_client),
) -> IngestionService:
    return IngestionService(vector_store=vector_store, embeddings_client=embeddings_client)


def get_chat_service(
    llm_client: LLMClient = Depends(get_llm_client),
    retriever: Retriever = Depends(get_retriever),
) -> ChatService:
    return ChatService(llm_client=llm_client, retriever=retriever)
