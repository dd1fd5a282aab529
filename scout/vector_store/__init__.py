"""
Document store abstractions and factories.
"""

from scout.config import settings
from scout.vector_store.chroma_store import ChromaDocumentStore

DEFAULT_VECTOR_STORE_BACKEND = settings.vector_store_backend


def get_vector_store():
    """
    Factory to obtain configured DocumentStore instance.
    Currently supports only Chroma backend.
    """
    backend = DEFAULT_VECTOR_STORE_BACKEND.lower()
    if backend == "chroma":
        return ChromaDocumentStore()
    raise ValueError(f"Unsupported vector store backend: {backend}")


__all__ = ["DEFAULT_VECTOR_STORE_BACKEND", "get_vector_store", "ChromaDocumentStore"]
