"""
Simple smoke test of one interview turn.

Example:
    python -m scripts.chat_smoke --message "We deploy with a Makefile target" --rag
"""

from __future__ import annotations

import argparse
import logging
import sys

from scout.config import setup_logging
from scout.embeddings.client import EmbeddingsClient
from scout.llm.client import LLMClient
from scout.rag.chat import ChatService
from scout.rag.retriever import Retriever
from scout.vector_store import get_vector_store


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Smoke test of a chat turn.")
    parser.add_argument("--message", "-m", required=True, help="User message")
    parser.add_argument("--rag", action="store_true", help="Inject context from stored interviews")
    parser.add_argument("--match-count", type=int, default=5)
    parser.add_argument("--match-threshold", type=float, default=0.78)
    return parser.parse_args()


def main() -> None:
    setup_logging()
    logger = logging.getLogger(__name__)
    args = parse_args()

    retriever = Retriever(vector_store=get_vector_store(), embeddings_client=EmbeddingsClient())
    service = ChatService(llm_client=LLMClient(), retriever=retriever, logger_=logger)

    try:
        reply = service.reply(
            args.message,
            use_rag=args.rag,
            rag_match_count=args.match_count,
            rag_match_threshold=args.match_threshold,
        )
    except Exception:
        logger.exception("Chat smoke failed")
        sys.exit(1)

    print("\n=== Chat Smoke Result ===")
    print(f"rag_used: {reply.rag_used}")
    print(f"rag_context_found: {reply.rag_context_found}")
    print(f"reply:\n{reply.message}")


if __name__ == "__main__":
    main()
