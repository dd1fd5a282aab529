"""
Shared stubs for the test suite.

Provider SDK objects are replaced by small fakes with the same call shape, so
the real EmbeddingsClient / LLMClient adapters are exercised without network.
"""

import string
import uuid
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

import httpx
import openai
import pytest

from scout.embeddings.client import EmbeddingsClient
from scout.embeddings.similarity import rank_by_similarity
from scout.llm.client import LLMClient
from scout.vector_store.base import Document, SimilarityMatch


def letter_histogram(text: str) -> List[float]:
    """26-dim letter frequency vector; similar wording gives similar vectors."""
    lowered = text.lower()
    return [float(lowered.count(ch)) for ch in string.ascii_lowercase]


def openai_status_error(cls, status_code: int, body: Optional[dict] = None):
    request = httpx.Request("POST", "https://api.openai.com/v1/embeddings")
    response = httpx.Response(status_code, request=request)
    return cls(f"Error code: {status_code} - secret-payload", response=response, body=body)


def openai_connection_error():
    request = httpx.Request("POST", "https://api.openai.com/v1/embeddings")
    return openai.APIConnectionError(request=request)


class FakeEmbeddings:
    def __init__(self, owner: "FakeOpenAI") -> None:
        self.owner = owner

    def create(self, model: str, input):
        self.owner.embedding_calls.append({"model": model, "input": input})
        if self.owner.embedding_error is not None:
            raise self.owner.embedding_error
        texts = input if isinstance(input, list) else [input]
        items = [
            SimpleNamespace(index=i, embedding=self.owner.embed_fn(text))
            for i, text in enumerate(texts)
        ]
        if self.owner.shuffle_response:
            items.reverse()
        if self.owner.drop_last_vector:
            items = items[:-1]
        return SimpleNamespace(data=items)


class FakeCompletions:
    def __init__(self, owner: "FakeOpenAI") -> None:
        self.owner = owner

    def create(self, **kwargs):
        self.owner.chat_calls.append(kwargs)
        if self.owner.chat_error is not None:
            raise self.owner.chat_error
        message = SimpleNamespace(content=self.owner.chat_reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    """Mimics ``client.embeddings.create`` and ``client.chat.completions.create``."""

    def __init__(self, embed_fn: Callable[[str], List[float]] = letter_histogram) -> None:
        self.embed_fn = embed_fn
        self.embedding_calls: List[Dict[str, Any]] = []
        self.chat_calls: List[Dict[str, Any]] = []
        self.embedding_error: Optional[Exception] = None
        self.chat_error: Optional[Exception] = None
        self.chat_reply = "Tell me more about that."
        self.shuffle_response = False
        self.drop_last_vector = False
        self.embeddings = FakeEmbeddings(self)
        self.chat = SimpleNamespace(completions=FakeCompletions(self))


class InMemoryDocumentStore:
    """Brute-force cosine search over documents kept in a dict."""

    def __init__(self) -> None:
        self.documents: Dict[str, Document] = {}
        self.search_calls: List[Dict[str, Any]] = []
        self._counter = 0

    def clear(self) -> None:
        self.documents.clear()

    def insert(self, content, embedding, metadata=None) -> Document:
        self._counter += 1
        document = Document(
            id=uuid.uuid4().hex,
            content=content,
            embedding=list(embedding),
            metadata=dict(metadata or {}),
            created_at=f"2026-01-01T00:00:{self._counter:02d}+00:00",
        )
        self.documents[document.id] = document
        return document

    def search(self, query_embedding, match_threshold, match_count) -> List[SimilarityMatch]:
        self.search_calls.append(
            {"query_embedding": query_embedding, "match_threshold": match_threshold, "match_count": match_count}
        )
        ranked = rank_by_similarity(
            query_embedding,
            ((doc, doc.embedding) for doc in self.documents.values()),
            threshold=match_threshold,
        )
        return [
            SimilarityMatch(id=doc.id, content=doc.content, metadata=dict(doc.metadata), similarity=score)
            for doc, score in ranked[:match_count]
        ]

    def delete(self, document_id: str) -> bool:
        return self.documents.pop(document_id, None) is not None

    def list_documents(self, limit: int, offset: int):
        ordered = sorted(self.documents.values(), key=lambda d: d.created_at, reverse=True)
        return ordered[offset : offset + limit], len(ordered)


class StubDocumentStore:
    """Returns canned matches, or raises, and records the search arguments."""

    def __init__(self, matches: Optional[List[SimilarityMatch]] = None, error: Optional[Exception] = None) -> None:
        self.matches = matches or []
        self.error = error
        self.calls: List[tuple] = []

    def search(self, query_embedding, match_threshold, match_count):
        self.calls.append((query_embedding, match_threshold, match_count))
        if self.error is not None:
            raise self.error
        return list(self.matches)


@pytest.fixture
def fake_openai() -> FakeOpenAI:
    return FakeOpenAI()


@pytest.fixture
def embeddings_client(fake_openai) -> EmbeddingsClient:
    return EmbeddingsClient(model="test-embedding", client=fake_openai)


@pytest.fixture
def llm_client(fake_openai) -> LLMClient:
    return LLMClient(model="test-chat", temperature=0.7, client=fake_openai)


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def interview_matches() -> List[SimilarityMatch]:
    return [
        SimilarityMatch(id="m1", content="We ship with a Makefile target", metadata={"type": "a"}, similarity=0.823),
        SimilarityMatch(id="m2", content="Tests run in docker compose", metadata={"type": "b"}, similarity=0.81),
        SimilarityMatch(id="m3", content="Secrets live in a shared vault", metadata={"type": "a"}, similarity=0.79),
    ]
