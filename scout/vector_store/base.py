"""
Document store interface and shared types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol, Sequence, Tuple


@dataclass
class Document:
    id: str
    content: str
    embedding: List[float]
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: str = ""


@dataclass
class SimilarityMatch:
    id: str
    content: str
    metadata: Dict[str, Any]
    similarity: float


class DocumentStore(Protocol):
    def clear(self) -> None:
        ...

    def insert(self, content: str, embedding: Sequence[float], metadata: Dict[str, Any] | None = None) -> Document:
        ...

    def search(
        self,
        query_embedding: Sequence[float],
        match_threshold: float,
        match_count: int,
    ) -> List[SimilarityMatch]:
        """Matches with similarity >= match_threshold, best first, at most match_count."""
        ...

    def delete(self, document_id: str) -> bool:
        """Return False when no document has this id."""
        ...

    def list_documents(self, limit: int, offset: int) -> Tuple[List[Document], int]:
        """Newest first page plus total document count."""
        ...


__all__ = ["Document", "SimilarityMatch", "DocumentStore"]
