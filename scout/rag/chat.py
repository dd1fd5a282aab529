"""
Conversational turn: optional retrieval, system prompt assembly, LLM call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

from scout.config import settings
from scout.errors import EmbeddingError, ValidationError
from scout.llm.client import LLMClient
from scout.rag.retriever import Retriever, build_system_prompt

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = (
    "You are a friendly interviewer collecting practical team knowledge. "
    "Ask one question at a time and wait for the answer. "
    "Use earlier answers to ask specific follow-up questions and ask for concrete examples. "
    "After four to six exchanges, summarise what you learned as short bullet points."
)

HISTORY_ROLES = ("user", "assistant")


@dataclass
class ChatReply:
    message: str
    rag_used: bool
    rag_context_found: bool


class ChatService:
    """Runs one interview turn against the chat model."""

    def __init__(
        self,
        llm_client: LLMClient,
        retriever: Retriever | None = None,
        default_system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        logger_: logging.Logger | None = None,
    ) -> None:
        self.llm_client = llm_client
        self.retriever = retriever
        self.default_system_prompt = default_system_prompt
        self.logger = logger_ or logging.getLogger(__name__)

    def reply(
        self,
        message: str,
        history: Sequence[Dict[str, str]] = (),
        system_prompt: str | None = None,
        use_rag: bool = False,
        rag_match_count: int = settings.match_count,
        rag_match_threshold: float = settings.match_threshold,
    ) -> ChatReply:
        if not message or not message.strip():
            raise ValidationError("Message is required")

        context_text = ""
        if use_rag and self.retriever is not None:
            context_text = self._retrieve_context(message, rag_match_threshold, rag_match_count)

        messages = self.build_messages(
            message=message,
            history=history,
            system_prompt=build_system_prompt(system_prompt or self.default_system_prompt, context_text),
        )
        answer = self.llm_client.chat(messages)
        self.logger.info(
            "Chat turn completed",
            extra={"history": len(history), "rag_used": use_rag, "rag_context_found": bool(context_text)},
        )
        return ChatReply(message=answer, rag_used=use_rag, rag_context_found=bool(context_text))

    def _retrieve_context(self, message: str, threshold: float, count: int) -> str:
        try:
            result = self.retriever.retrieve(message, threshold=threshold, count=count)
        except EmbeddingError:
            # The turn still goes ahead without context
            self.logger.exception("Query embedding failed, continuing without context")
            return ""
        return result.context_text

    @staticmethod
    def build_messages(message: str, history: Sequence[Dict[str, str]], system_prompt: str) -> List[dict]:
        messages: List[dict] = [{"role": "system", "content": system_prompt}]
        for item in history:
            if item.get("role") in HISTORY_ROLES:
                messages.append({"role": item["role"], "content": item.get("content", "")})
        messages.append({"role": "user", "content": message})
        return messages


__all__ = ["ChatService", "ChatReply", "DEFAULT_SYSTEM_PROMPT"]
