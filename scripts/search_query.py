"""
CLI to search stored interview content by a text query.

Example:
    python -m scripts.search_query --query "How do you debug a failing deploy?" --count 5
"""

from __future__ import annotations

import argparse
import json

from scout.config import settings
from scout.embeddings.client import EmbeddingsClient
from scout.rag.retriever import Retriever
from scout.vector_store import get_vector_store


def main() -> None:
    parser = argparse.ArgumentParser(description="Search stored documents by text query.")
    parser.add_argument("--query", "-q", required=True, help="Query text")
    parser.add_argument("--count", type=int, default=settings.match_count, help="How many results to return")
    parser.add_argument("--threshold", type=float, default=settings.match_threshold, help="Minimum similarity")
    parser.add_argument(
        "--filter",
        type=json.loads,
        default=None,
        help='Exact-match metadata filter as JSON, e.g. \'{"type": "transcript"}\'',
    )
    parser.add_argument("--snippet", type=int, default=300, help="Snippet length")
    args = parser.parse_args()

    retriever = Retriever(vector_store=get_vector_store(), embeddings_client=EmbeddingsClient())
    matches = retriever.search(
        args.query,
        threshold=args.threshold,
        count=args.count,
        metadata_filter=args.filter,
    )

    if not matches:
        print("No results")
        return

    for idx, match in enumerate(matches, start=1):
        snippet = match.content[: args.snippet].replace("\n", " ")
        print(f"\n#{idx} similarity={match.similarity:.4f} id={match.id}")
        print("metadata:", match.metadata)
        print("text:", snippet + ("..." if len(match.content) > args.snippet else ""))


if __name__ == "__main__":
    main()
