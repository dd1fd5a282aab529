"""
Utility script to inspect stored interview documents without embeddings.

Usage:
    python -m scripts.inspect_index --limit 5 --offset 0
"""

from __future__ import annotations

import argparse
import json

from scout.vector_store import get_vector_store

# Shown first, in this order, when present
METADATA_ORDER = [
    "type",
    "source_file",
    "interview_id",
    "speaker",
    "chunk_index",
    "total_chunks",
    "is_chunked",
]


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect stored documents.")
    parser.add_argument("--limit", type=int, default=5, help="Number of documents to show")
    parser.add_argument("--offset", type=int, default=0, help="Offset for pagination")
    args = parser.parse_args()

    store = get_vector_store()
    documents, total = store.list_documents(limit=args.limit, offset=args.offset)

    print(f"Total documents in collection: {total}")
    print(f"Showing {len(documents)} documents (offset={args.offset}, limit={args.limit})")
    for idx, doc in enumerate(documents, start=1):
        print(f"\n#{idx}: {doc.id} created_at={doc.created_at}")
        meta = doc.metadata
        ordered_meta = {k: meta[k] for k in METADATA_ORDER if k in meta} | {
            k: v for k, v in meta.items() if k not in METADATA_ORDER
        }
        print("Metadata:", json.dumps(ordered_meta, ensure_ascii=False))
        snippet = doc.content[:400].replace("\n", " ")
        print("Text:", snippet + ("..." if len(doc.content) > 400 else ""))


if __name__ == "__main__":
    main()
