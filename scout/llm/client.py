"""
OpenAI chat LLM client.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import openai
from openai import OpenAI

from scout.config import settings
from scout.errors import LLMAuthError, LLMError, LLMRateLimitError, classify_openai_error

DEFAULT_LLM_MODEL = settings.llm_model_name
DEFAULT_TEMPERATURE = settings.llm_temperature

logger = logging.getLogger(__name__)


class LLMClient:
    def __init__(
        self,
        model: str = DEFAULT_LLM_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        client: OpenAI | None = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        api_key = settings.openai_api_key.get_secret_value() if settings.openai_api_key else None
        self.client = client or OpenAI(api_key=api_key)

    def chat(self, messages: List[Dict[str, Any]]) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                messages=messages,
            )
        except openai.OpenAIError as exc:
            logger.error(
                "Chat completion failed",
                extra={"model": self.model, "messages": len(messages), "cause": repr(exc)},
            )
            raise classify_openai_error(
                exc,
                base=LLMError,
                auth=LLMAuthError,
                rate_limit=LLMRateLimitError,
                action="Chat completion",
            ) from exc

        choice = response.choices[0].message
        return choice.content or ""


__all__ = ["LLMClient", "DEFAULT_LLM_MODEL", "DEFAULT_TEMPERATURE"]
