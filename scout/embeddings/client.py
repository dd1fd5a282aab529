"""
OpenAI embeddings client.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import openai
from openai import OpenAI

from scout.config import settings
from scout.errors import (
    EmbeddingAuthError,
    EmbeddingError,
    EmbeddingRateLimitError,
    ValidationError,
    classify_openai_error,
)

DEFAULT_EMBEDDING_MODEL = settings.embedding_model_name
# OpenAI accepts up to 2048 inputs per request
MAX_EMBED_BATCH_SIZE = 2048
DEFAULT_EMBED_BATCH_SIZE = min(settings.embedding_batch_size, MAX_EMBED_BATCH_SIZE)

logger = logging.getLogger(__name__)


class EmbeddingsClient:
    def __init__(
        self,
        model: str = DEFAULT_EMBEDDING_MODEL,
        batch_size: int = DEFAULT_EMBED_BATCH_SIZE,
        client: OpenAI | None = None,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.model = model
        self.batch_size = min(batch_size, MAX_EMBED_BATCH_SIZE)
        api_key = settings.openai_api_key.get_secret_value() if settings.openai_api_key else None
        self.client = client or OpenAI(api_key=api_key)

    def embed_texts(self, texts: Sequence[str]) -> List[List[float]]:
        if not texts:
            return []

        cleaned = [text.strip() for text in texts]
        for position, text in enumerate(cleaned):
            if not text:
                raise ValidationError(f"Text at position {position} is empty")

        embeddings: List[List[float]] = []
        for i in range(0, len(cleaned), self.batch_size):
            batch = cleaned[i : i + self.batch_size]
            embeddings.extend(self._request(batch, offset=i))
        return embeddings

    def embed_text(self, text: str) -> List[float]:
        cleaned = (text or "").strip()
        if not cleaned:
            raise ValidationError("Text to embed must not be empty")
        return self._request([cleaned], offset=0)[0]

    def _request(self, batch: List[str], offset: int) -> List[List[float]]:
        try:
            response = self.client.embeddings.create(model=self.model, input=batch)
        except openai.OpenAIError as exc:
            logger.error(
                "Embedding request failed",
                extra={"model": self.model, "batch": len(batch), "offset": offset, "cause": repr(exc)},
            )
            raise classify_openai_error(
                exc,
                base=EmbeddingError,
                auth=EmbeddingAuthError,
                rate_limit=EmbeddingRateLimitError,
                action="Embedding generation",
            ) from exc

        data = list(response.data)
        if len(data) != len(batch):
            logger.error(
                "Embedding response size mismatch",
                extra={"expected": len(batch), "returned": len(data), "offset": offset},
            )
            raise EmbeddingError("Embedding generation failed: incomplete provider response")

        # Provider tags each vector with the position of its input
        data.sort(key=lambda item: item.index)
        return [list(item.embedding) for item in data]


__all__ = ["EmbeddingsClient", "DEFAULT_EMBEDDING_MODEL", "MAX_EMBED_BATCH_SIZE"]
