"""
Error taxonomy shared by the ingestion, retrieval and chat layers.

Provider SDK exceptions are translated into these types at the adapter
boundary (embeddings and LLM clients) so nothing above the adapters has to
inspect provider-specific error shapes.
"""

from __future__ import annotations

from typing import Type

import openai


class ScoutError(Exception):
    """Base exception for the service."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(ScoutError):
    """Empty or missing required input."""


class EmbeddingError(ScoutError):
    """Embedding provider failure."""


class EmbeddingAuthError(EmbeddingError):
    """Embedding provider rejected the credentials."""


class EmbeddingRateLimitError(EmbeddingError):
    """Embedding provider rate limit or quota exceeded."""


class RetrievalError(ScoutError):
    """Document store failure."""


class DimensionMismatchError(ScoutError, ValueError):
    """Vectors of different lengths were compared or stored together."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Embedding dimension mismatch: expected {expected}, got {actual}")


class LLMError(ScoutError):
    """Conversational model failure."""


class LLMAuthError(LLMError):
    """Conversational model rejected the credentials."""


class LLMRateLimitError(LLMError):
    """Conversational model rate limit exceeded."""


RATE_LIMIT_ERRORS = (EmbeddingRateLimitError, LLMRateLimitError)


def classify_openai_error(
    exc: Exception,
    base: Type[ScoutError],
    auth: Type[ScoutError],
    rate_limit: Type[ScoutError],
    action: str,
) -> ScoutError:
    """
    Map an OpenAI SDK exception onto the service taxonomy.

    The returned error carries a provider-agnostic message; callers chain the
    original exception with ``raise ... from exc``.
    """
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return auth(f"{action} failed: provider rejected credentials")
    if isinstance(exc, openai.RateLimitError):
        return rate_limit(f"{action} failed: rate limit exceeded, retry later")
    if isinstance(exc, openai.APIStatusError) and exc.status_code == 429:
        return rate_limit(f"{action} failed: rate limit exceeded, retry later")
    return base(f"{action} failed")


__all__ = [
    "ScoutError",
    "ValidationError",
    "EmbeddingError",
    "EmbeddingAuthError",
    "EmbeddingRateLimitError",
    "RetrievalError",
    "DimensionMismatchError",
    "LLMError",
    "LLMAuthError",
    "LLMRateLimitError",
    "RATE_LIMIT_ERRORS",
    "classify_openai_error",
]
