"""
Chroma-based DocumentStore implementation.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Sequence, Tuple

import chromadb

from scout.config import settings
from scout.errors import DimensionMismatchError, RetrievalError
from scout.vector_store.base import Document, DocumentStore, SimilarityMatch

CHROMA_COLLECTION = settings.vector_store_collection
CHROMA_PERSIST_DIR = settings.vector_store_path

# Chroma metadata values must be scalars; caller metadata is stored as JSON under this key
METADATA_KEY = "metadata_json"
CREATED_AT_KEY = "created_at"

logger = logging.getLogger(__name__)


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


def _encode_metadata(metadata: Dict[str, Any], created_at: str) -> Dict[str, Any]:
    return {
        METADATA_KEY: json.dumps(metadata, ensure_ascii=False, default=str),
        CREATED_AT_KEY: created_at,
    }


def _decode_metadata(raw: Dict[str, Any] | None) -> Tuple[Dict[str, Any], str]:
    raw = raw or {}
    payload = raw.get(METADATA_KEY)
    metadata = json.loads(payload) if payload else {}
    return metadata, str(raw.get(CREATED_AT_KEY, ""))


class ChromaDocumentStore(DocumentStore):
    def __init__(
        self,
        persist_directory: str | None = None,
        collection_name: str = CHROMA_COLLECTION,
        client: Any | None = None,
    ) -> None:
        self.persist_directory = persist_directory or CHROMA_PERSIST_DIR
        self.collection_name = collection_name
        self.client = client or chromadb.PersistentClient(path=self.persist_directory)
        self.collection = self._open_collection()
        self._dimension: int | None = None
        logger.info(
            "ChromaDocumentStore initialised",
            extra={"persist_directory": self.persist_directory, "collection": self.collection_name},
        )

    def _open_collection(self):
        # Embeddings are always supplied by the caller, so no embedding function is attached
        return self.client.get_or_create_collection(
            name=self.collection_name,
            metadata={"hnsw:space": "cosine"},
            embedding_function=None,
        )

    def clear(self) -> None:
        self.client.delete_collection(self.collection_name)
        self.collection = self._open_collection()
        self._dimension = None
        logger.info("Chroma collection cleared and recreated", extra={"collection": self.collection_name})

    def _stored_dimension(self) -> int | None:
        if self._dimension is not None:
            return self._dimension
        try:
            sample = self.collection.get(limit=1, include=["embeddings"])
        except Exception as exc:
            raise RetrievalError("Failed to read collection") from exc
        embeddings = sample.get("embeddings")
        if embeddings is not None and len(embeddings) > 0:
            self._dimension = len(embeddings[0])
        return self._dimension

    def insert(self, content: str, embedding: Sequence[float], metadata: Dict[str, Any] | None = None) -> Document:
        metadata = dict(metadata or {})
        vector = [float(x) for x in embedding]

        expected = self._stored_dimension()
        if expected is not None and expected != len(vector):
            raise DimensionMismatchError(expected=expected, actual=len(vector))

        document = Document(
            id=uuid.uuid4().hex,
            content=content,
            embedding=vector,
            metadata=metadata,
            created_at=_utcnow(),
        )
        try:
            self.collection.add(
                ids=[document.id],
                embeddings=[vector],
                metadatas=[_encode_metadata(metadata, document.created_at)],
                documents=[content],
            )
        except Exception as exc:
            logger.error("Chroma insert failed", extra={"collection": self.collection_name, "cause": repr(exc)})
            raise RetrievalError("Failed to store document") from exc

        self._dimension = len(vector)
        logger.info(
            "Stored document",
            extra={"id": document.id, "collection": self.collection_name, "chars": len(content)},
        )
        return document

    def search(
        self,
        query_embedding: Sequence[float],
        match_threshold: float,
        match_count: int,
    ) -> List[SimilarityMatch]:
        if match_count <= 0:
            return []

        expected = self._stored_dimension()
        if expected is None:
            return []
        if expected != len(query_embedding):
            raise DimensionMismatchError(expected=expected, actual=len(query_embedding))

        try:
            total = self.collection.count()
            result = self.collection.query(
                query_embeddings=[list(query_embedding)],
                n_results=min(match_count, total),
                include=["documents", "metadatas", "distances"],
            )
        except Exception as exc:
            logger.error("Chroma search failed", extra={"collection": self.collection_name, "cause": repr(exc)})
            raise RetrievalError("Failed to search documents") from exc

        ids = result.get("ids", [[]])[0] or []
        texts = result.get("documents", [[]])[0] or []
        metadatas = result.get("metadatas", [[]])[0] or []
        distances = result.get("distances", [[]])[0] or []

        matches: List[SimilarityMatch] = []
        for doc_id, text, raw_metadata, distance in zip(ids, texts, metadatas, distances):
            # Cosine space: distance = 1 - similarity
            similarity = 1.0 - float(distance)
            if similarity < match_threshold:
                continue
            metadata, _ = _decode_metadata(raw_metadata)
            matches.append(SimilarityMatch(id=doc_id, content=text, metadata=metadata, similarity=similarity))

        matches.sort(key=lambda m: m.similarity, reverse=True)
        return matches[:match_count]

    def delete(self, document_id: str) -> bool:
        try:
            existing = self.collection.get(ids=[document_id], include=["metadatas"])
            if not existing.get("ids"):
                return False
            self.collection.delete(ids=[document_id])
        except Exception as exc:
            logger.error("Chroma delete failed", extra={"id": document_id, "cause": repr(exc)})
            raise RetrievalError("Failed to delete document") from exc

        logger.info("Deleted document", extra={"id": document_id, "collection": self.collection_name})
        return True

    def list_documents(self, limit: int, offset: int) -> Tuple[List[Document], int]:
        """
        Newest-first page. Documents are only loaded for the requested page;
        ordering still needs every record's metadata since Chroma cannot sort.
        """
        try:
            index = self.collection.get(include=["metadatas"])
        except Exception as exc:
            logger.error("Chroma listing failed", extra={"collection": self.collection_name, "cause": repr(exc)})
            raise RetrievalError("Failed to fetch documents") from exc

        ids = index.get("ids") or []
        metadatas = index.get("metadatas") or []
        created = {doc_id: str((raw or {}).get(CREATED_AT_KEY, "")) for doc_id, raw in zip(ids, metadatas)}
        ordered = sorted(created, key=lambda doc_id: created[doc_id], reverse=True)

        offset = max(offset, 0)
        page_ids = ordered[offset : offset + max(limit, 0)]
        if not page_ids:
            return [], len(ordered)

        try:
            page = self.collection.get(ids=page_ids, include=["documents", "metadatas"])
        except Exception as exc:
            logger.error("Chroma listing failed", extra={"collection": self.collection_name, "cause": repr(exc)})
            raise RetrievalError("Failed to fetch documents") from exc

        by_id: Dict[str, Document] = {}
        for doc_id, text, raw_metadata in zip(page.get("ids") or [], page.get("documents") or [], page.get("metadatas") or []):
            metadata, created_at = _decode_metadata(raw_metadata)
            by_id[doc_id] = Document(id=doc_id, content=text, embedding=[], metadata=metadata, created_at=created_at)

        return [by_id[doc_id] for doc_id in page_ids if doc_id in by_id], len(ordered)


__all__ = ["ChromaDocumentStore", "CHROMA_COLLECTION", "CHROMA_PERSIST_DIR"]
