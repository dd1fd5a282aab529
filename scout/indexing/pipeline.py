"""
Ingestion pipeline: chunk, embed, and insert interview text into the document store.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from tqdm import tqdm

from scout.config import settings
from scout.embeddings.client import EmbeddingsClient
from scout.errors import ValidationError
from scout.indexing.chunker import chunk_metadata, split_text
from scout.vector_store.base import Document, DocumentStore

logger = logging.getLogger(__name__)


@dataclass
class IngestSummary:
    files: int
    documents: int
    elapsed_sec: float


class IngestionService:
    """Writes text into the document store, splitting long content first."""

    def __init__(
        self,
        vector_store: DocumentStore,
        embeddings_client: EmbeddingsClient,
        max_tokens: int = settings.chunk_max_tokens,
        logger_: logging.Logger | None = None,
    ) -> None:
        self.vector_store = vector_store
        self.embeddings_client = embeddings_client
        self.max_tokens = max_tokens
        self.logger = logger_ or logging.getLogger(__name__)

    def store_text(
        self,
        content: str,
        metadata: Dict[str, Any] | None = None,
        split_into_chunks: bool = False,
    ) -> List[Document]:
        if not content or not content.strip():
            raise ValidationError("Content is required")

        if not split_into_chunks:
            embedding = self.embeddings_client.embed_text(content)
            document = self.vector_store.insert(content, embedding, dict(metadata or {}))
            return [document]

        chunks = split_text(content, max_tokens=self.max_tokens)
        embeddings = self.embeddings_client.embed_texts(chunks)
        total = len(chunks)

        documents: List[Document] = []
        for index, (chunk, embedding) in enumerate(zip(chunks, embeddings)):
            documents.append(self.vector_store.insert(chunk, embedding, chunk_metadata(metadata, index, total)))

        self.logger.info(
            "Stored chunked document",
            extra={"chunks": total, "chars": len(content)},
        )
        return documents

    def ingest_corpus(self, corpus_dir: str | Path = settings.corpus_dir) -> IngestSummary:
        """Store every ``*.txt`` transcript under ``corpus_dir`` as chunked documents."""
        started = time.time()
        base = Path(corpus_dir)
        paths = sorted(base.glob("*.txt")) if base.exists() else []

        stored = 0
        for path in tqdm(paths, desc="Ingesting", unit="files"):
            text = path.read_text(encoding="utf-8")
            if not text.strip():
                self.logger.warning("Skipping empty transcript", extra={"source_file": path.name})
                continue
            documents = self.store_text(
                text,
                metadata={"source_file": path.name, "type": "transcript"},
                split_into_chunks=True,
            )
            stored += len(documents)

        elapsed = time.time() - started
        self.logger.info(
            "Corpus ingestion completed",
            extra={"files": len(paths), "documents": stored, "elapsed_sec": round(elapsed, 2)},
        )
        return IngestSummary(files=len(paths), documents=stored, elapsed_sec=elapsed)


__all__ = ["IngestionService", "IngestSummary"]
