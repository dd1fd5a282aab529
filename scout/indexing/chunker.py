"""
Text chunking utilities.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping

# Rough estimate used instead of a real tokenizer: 1 token ~ 4 characters
CHARS_PER_TOKEN = 4
DEFAULT_MAX_TOKENS = 8000  # ada-002 accepts 8191

PARAGRAPH_SEPARATOR = "\n\n"
SENTENCE_SEPARATOR = " "

PARAGRAPH_PATTERN = re.compile(r"\n{2,}")
# Split after ., ! or ? followed by whitespace, keeping the terminator with its sentence
SENTENCE_PATTERN = re.compile(r"(?<=[.!?])\s+")


def _split_paragraphs(text: str) -> List[str]:
    return [p.strip() for p in PARAGRAPH_PATTERN.split(text) if p.strip()]


def _split_sentences(paragraph: str) -> List[str]:
    return [s.strip() for s in SENTENCE_PATTERN.split(paragraph) if s.strip()]


def split_text(text: str, max_tokens: int = DEFAULT_MAX_TOKENS) -> List[str]:
    """
    Split long text into pieces of at most ``max_tokens * 4`` characters.

    Paragraph boundaries are preferred; a paragraph that alone exceeds the
    limit is broken on sentence boundaries. A single sentence longer than the
    limit is kept whole.
    """
    stripped = text.strip()
    if not stripped:
        return []

    max_chars = max_tokens * CHARS_PER_TOKEN
    if len(stripped) <= max_chars:
        return [stripped]

    chunks: List[str] = []
    current = ""

    def flush() -> None:
        nonlocal current
        if current.strip():
            chunks.append(current.strip())
        current = ""

    def append(piece: str, separator: str) -> None:
        nonlocal current
        if current and len(current) + len(separator) + len(piece) > max_chars:
            flush()
        current = f"{current}{separator}{piece}" if current else piece

    for paragraph in _split_paragraphs(stripped):
        if len(paragraph) > max_chars:
            flush()
            for sentence in _split_sentences(paragraph):
                append(sentence, SENTENCE_SEPARATOR)
        else:
            append(paragraph, PARAGRAPH_SEPARATOR)

    flush()
    return chunks


def chunk_metadata(base: Mapping[str, Any] | None, chunk_index: int, total_chunks: int) -> Dict[str, Any]:
    metadata = dict(base or {})
    metadata.update(
        {
            "chunk_index": chunk_index,
            "total_chunks": total_chunks,
            "is_chunked": True,
        }
    )
    return metadata


__all__ = ["split_text", "chunk_metadata", "CHARS_PER_TOKEN", "DEFAULT_MAX_TOKENS"]
