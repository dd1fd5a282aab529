"""
HTTP-level tests. Provider clients and the store are swapped through
FastAPI dependency overrides.
"""

import openai
import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from conftest import openai_status_error
from scout.api.dependencies import get_document_store, get_embeddings_client, get_llm_client
from scout.config import settings
from scout.main import app


@pytest.fixture
def client(memory_store, embeddings_client, llm_client):
    app.dependency_overrides[get_document_store] = lambda: memory_store
    app.dependency_overrides[get_embeddings_client] = lambda: embeddings_client
    app.dependency_overrides[get_llm_client] = lambda: llm_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def store(client, content, **extra):
    response = client.post("/api/embeddings/store", json={"content": content, **extra})
    assert response.status_code == 200, response.text
    return response.json()


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestStoreEndpoints:
    def test_store_single(self, client, memory_store):
        body = store(client, "We deploy with make release", metadata={"type": "transcript"})

        assert body["success"] is True
        assert body["message"] == "Document stored successfully"
        assert body["documents"][0]["metadata"] == {"type": "transcript"}
        assert len(memory_store.documents) == 1

    def test_store_chunked(self, client):
        content = "\n\n".join(["Paragraph number one. " * 300, "Paragraph number two. " * 300])

        body = store(client, content, split_into_chunks=True)

        assert len(body["documents"]) >= 1
        assert body["message"] == f"Successfully stored {len(body['documents'])} document chunks"
        assert body["documents"][0]["metadata"]["is_chunked"] is True

    def test_store_blank_content(self, client):
        response = client.post("/api/embeddings/store", json={"content": "   "})
        assert response.status_code == 400

    def test_list_newest_first(self, client):
        store(client, "first answer")
        store(client, "second answer")

        body = client.get("/api/embeddings/store", params={"limit": 1, "offset": 0}).json()

        assert body["total"] == 2
        assert body["limit"] == 1
        assert [d["content"] for d in body["documents"]] == ["second answer"]

    def test_delete(self, client, memory_store):
        doc_id = store(client, "delete me")["documents"][0]["id"]

        response = client.delete("/api/embeddings/store", params={"id": doc_id})

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert memory_store.documents == {}

    def test_delete_unknown(self, client):
        assert client.delete("/api/embeddings/store", params={"id": "missing"}).status_code == 404

    def test_delete_without_id(self, client):
        assert client.delete("/api/embeddings/store").status_code == 400


class TestSearchEndpoints:
    def test_post_search_with_metadata_filter(self, client):
        store(client, "docker compose up", metadata={"type": "a"})
        store(client, "docker compose up", metadata={"type": "b"})

        response = client.post(
            "/api/embeddings/search",
            json={"query": "docker compose up", "match_threshold": 0.9, "metadata": {"type": "a"}},
        )

        body = response.json()
        assert response.status_code == 200
        assert body["match_count"] == 1
        assert body["results"][0]["metadata"] == {"type": "a"}
        assert body["results"][0]["similarity"] == pytest.approx(1.0)

    def test_get_search(self, client, memory_store):
        store(client, "vim and tmux forever")

        response = client.get(
            "/api/embeddings/search",
            params={"query": "vim and tmux forever", "match_threshold": 0.5, "match_count": 3},
        )

        assert response.status_code == 200
        assert response.json()["match_count"] == 1
        assert memory_store.search_calls[-1]["match_count"] == 3

    def test_get_search_requires_query(self, client):
        assert client.get("/api/embeddings/search").status_code == 400

    def test_rate_limited_embedding(self, client, fake_openai):
        fake_openai.embedding_error = openai_status_error(openai.RateLimitError, 429)

        response = client.post("/api/embeddings/search", json={"query": "anything"})

        assert response.status_code == 429


class TestChatEndpoint:
    def test_chat_with_rag(self, client, fake_openai):
        store(client, "We rehearse demos twice before the deadline")

        response = client.post(
            "/api/chat",
            json={
                "message": "We rehearse demos twice before the deadline",
                "history": [{"role": "assistant", "content": "How do you demo?"}],
                "use_rag": True,
                "rag_match_threshold": 0.9,
            },
        )

        body = response.json()
        assert response.status_code == 200
        assert body == {
            "message": "Tell me more about that.",
            "success": True,
            "rag_used": True,
            "rag_context_found": True,
        }
        system = fake_openai.chat_calls[0]["messages"][0]["content"]
        assert "Relevant context from previous interviews" in system

    def test_chat_blank_message(self, client):
        assert client.post("/api/chat", json={"message": " "}).status_code == 400

    def test_chat_rate_limited(self, client, fake_openai):
        fake_openai.chat_error = openai_status_error(openai.RateLimitError, 429)
        assert client.post("/api/chat", json={"message": "hi"}).status_code == 429


class TestAdminIngest:
    def test_requires_token(self, client, monkeypatch):
        monkeypatch.setattr(settings, "admin_token", SecretStr("s3cret"))
        response = client.post("/admin/ingest", headers={"X-Admin-Token": "wrong"})
        assert response.status_code == 403

    def test_ingests_corpus(self, client, monkeypatch, tmp_path, memory_store):
        (tmp_path / "carol.txt").write_text("Carol keeps notes in Obsidian.", encoding="utf-8")
        monkeypatch.setattr(settings, "admin_token", SecretStr("s3cret"))
        monkeypatch.setattr(settings, "corpus_dir", str(tmp_path))

        response = client.post("/admin/ingest", headers={"X-Admin-Token": "s3cret"})

        assert response.status_code == 200
        assert response.json()["documents"] == 1
        assert len(memory_store.documents) == 1
