"""
Application configuration loaded from environment variables.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralised application settings."""

    model_config = SettingsConfigDict(
        env_file=(".env",),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    openai_api_key: SecretStr | None = Field(default=None, alias="OPENAI_API_KEY")
    embedding_model_name: str = Field(default="text-embedding-ada-002", alias="EMBEDDING_MODEL_NAME")
    # Provider ceiling on inputs per embeddings request
    embedding_batch_size: int = Field(default=2048, gt=0, alias="EMBEDDING_BATCH_SIZE")

    llm_model_name: str = Field(default="gpt-4o-mini", alias="LLM_MODEL_NAME")
    llm_temperature: float = Field(default=0.7, ge=0.0, le=2.0, alias="LLM_TEMPERATURE")

    vector_store_backend: str = Field(default="chroma", alias="VECTOR_STORE_BACKEND")
    vector_store_path: str = Field(default="./data/vector_store", alias="VECTOR_STORE_PATH")
    vector_store_collection: str = Field(default="interview_documents", alias="VECTOR_STORE_COLLECTION")

    # Tuned for ada-002 similarity distribution; revisit when the embedding model changes
    match_threshold: float = Field(default=0.78, alias="MATCH_THRESHOLD")
    match_count: int = Field(default=5, gt=0, alias="MATCH_COUNT")

    chunk_max_tokens: int = Field(default=8000, gt=0, alias="CHUNK_MAX_TOKENS")
    corpus_dir: str = Field(default="./data/transcripts", alias="CORPUS_DIR")

    admin_token: SecretStr | None = Field(default=None, alias="ADMIN_TOKEN")

    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8000, alias="APP_PORT")


settings = Settings()


def setup_logging() -> logging.Logger:
    """
    Configure base logging for the app.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    )
    return logging.getLogger("scout")


def public_settings() -> Dict[str, Any]:
    """
    Return settings without secrets for safe logging/inspection.
    """
    return settings.model_dump(
        exclude={"openai_api_key", "admin_token"},
        exclude_none=True,
    )


__all__ = ["Settings", "settings", "setup_logging", "public_settings"]
