"""
Retrieval step of the RAG flow: embed the query, search the store, format context.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Sequence

from scout.config import settings
from scout.embeddings.client import EmbeddingsClient
from scout.errors import RetrievalError, ValidationError
from scout.vector_store.base import DocumentStore, SimilarityMatch

logger = logging.getLogger(__name__)

CONTEXT_HEADER = "\n\nRelevant context from previous interviews:\n"


@dataclass
class RetrievalResult:
    context_text: str
    matches_found: bool
    matches: List[SimilarityMatch] = field(default_factory=list)


def matches_metadata(metadata: Mapping[str, Any], metadata_filter: Mapping[str, Any] | None) -> bool:
    """Every filter key must be present with an equal value."""
    if not metadata_filter:
        return True
    return all(key in metadata and metadata[key] == value for key, value in metadata_filter.items())


def format_context(matches: Sequence[SimilarityMatch]) -> str:
    if not matches:
        return ""
    lines = [f"- {m.content} (relevance: {m.similarity * 100:.1f}%)" for m in matches]
    return CONTEXT_HEADER + "\n".join(lines)


def build_system_prompt(base_prompt: str, context_text: str) -> str:
    return f"{base_prompt}{context_text}" if context_text else base_prompt


class Retriever:
    """Fetches interview snippets relevant to a query."""

    def __init__(
        self,
        vector_store: DocumentStore,
        embeddings_client: EmbeddingsClient,
        logger_: logging.Logger | None = None,
    ) -> None:
        self.vector_store = vector_store
        self.embeddings_client = embeddings_client
        self.logger = logger_ or logging.getLogger(__name__)

    def search(
        self,
        query: str,
        threshold: float = settings.match_threshold,
        count: int = settings.match_count,
        metadata_filter: Mapping[str, Any] | None = None,
    ) -> List[SimilarityMatch]:
        """
        Embed ``query`` and return store matches passing ``metadata_filter``.

        The filter runs on the returned matches, so fewer than ``count``
        results may survive it. Store failures raise ``RetrievalError``.
        """
        normalized = (query or "").strip()
        if not normalized:
            raise ValidationError("Query must not be empty")

        embedding = self.embeddings_client.embed_text(normalized)
        try:
            raw_matches = self.vector_store.search(embedding, match_threshold=threshold, match_count=count)
        except RetrievalError:
            raise
        except Exception as exc:
            # Includes a stored-dimension mismatch after an embedding model change
            raise RetrievalError("Document search failed") from exc

        matches = [m for m in raw_matches if matches_metadata(m.metadata, metadata_filter)]
        self.logger.info(
            "Retrieved matches",
            extra={
                "threshold": threshold,
                "requested": count,
                "returned": len(raw_matches),
                "kept": len(matches),
                "top_score": round(matches[0].similarity, 3) if matches else None,
            },
        )
        return matches

    def retrieve(
        self,
        query: str,
        threshold: float = settings.match_threshold,
        count: int = settings.match_count,
        metadata_filter: Mapping[str, Any] | None = None,
    ) -> RetrievalResult:
        """
        Build the context block for a conversational turn.

        Store failures degrade to an empty result; validation and embedding
        errors propagate.
        """
        try:
            matches = self.search(query, threshold=threshold, count=count, metadata_filter=metadata_filter)
        except RetrievalError:
            self.logger.exception("Retrieval failed, continuing without context")
            return RetrievalResult(context_text="", matches_found=False)

        if not matches:
            return RetrievalResult(context_text="", matches_found=False)
        return RetrievalResult(context_text=format_context(matches), matches_found=True, matches=matches)


__all__ = [
    "Retriever",
    "RetrievalResult",
    "CONTEXT_HEADER",
    "format_context",
    "matches_metadata",
    "build_system_prompt",
]
