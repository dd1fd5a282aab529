"""
CLI to ingest a directory of interview transcripts.

Example:
    python -m scripts.ingest_transcripts --corpus-dir ./data/transcripts --clear
"""

from __future__ import annotations

import argparse
import logging
import sys

from scout.config import settings, setup_logging
from scout.embeddings.client import EmbeddingsClient
from scout.indexing.pipeline import IngestionService
from scout.vector_store import get_vector_store


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ingest interview transcripts (*.txt).")
    parser.add_argument("--corpus-dir", default=settings.corpus_dir, help="Directory with transcripts")
    parser.add_argument(
        "--max-tokens",
        type=int,
        default=settings.chunk_max_tokens,
        help="Approximate token limit per chunk.",
    )
    parser.add_argument("--clear", action="store_true", help="Drop all stored documents first")
    return parser.parse_args()


def main() -> None:
    setup_logging()
    logger = logging.getLogger(__name__)
    args = parse_args()

    store = get_vector_store()
    service = IngestionService(
        store,
        EmbeddingsClient(),
        max_tokens=args.max_tokens,
        logger_=logger,
    )

    try:
        if args.clear:
            store.clear()
        summary = service.ingest_corpus(args.corpus_dir)
    except Exception:
        logger.exception("Ingestion failed")
        sys.exit(1)

    print(f"Stored {summary.documents} documents from {summary.files} files (elapsed {summary.elapsed_sec:.2f}s)")


if __name__ == "__main__":
    main()
