"""Chunking strategies for text that exceeds the token budget."""

from __future__ import annotations

import math
import re

from src.optimization.models import Chunk
from src.optimization.tokens import TokenCounter, get_token_counter

# Leave 10% of the budget as headroom in every chunk
CHUNK_BUDGET_SHARE = 0.9

_SENTENCE_BOUNDARY_RE = re.compile(r"(?<=[.!?])\s+")
# A titled section starts at a "## " line, optionally after a "[timestamp] " prefix
_SECTION_START_RE = re.compile(r"(?=^(?:\[[^\]\n]*\] )?##\s)", re.MULTILINE)
_HEADING_RE = re.compile(r"^(?:\[[^\]\n]*\] )?##\s+(.+)$", re.MULTILINE)


def chunk_budget(max_tokens: int) -> int:
    return math.floor(max_tokens * CHUNK_BUDGET_SHARE)


def extract_headings(text: str) -> list[str]:
    """Return the ``## `` heading titles found in *text*, in order."""
    return [m.group(1).strip() for m in _HEADING_RE.finditer(text)]


def _make_chunk(
    index: int,
    content: str,
    strategy: str,
    counter: TokenCounter,
    topics: list[str] | None = None,
) -> Chunk:
    content = content.strip()
    return Chunk(
        index=index,
        content=content,
        token_count=counter.count_tokens(content),
        strategy=strategy,
        topics=topics or [],
    )


def fixed_chunk(
    text: str,
    max_tokens: int,
    counter: TokenCounter | None = None,
    start_index: int = 0,
) -> list[Chunk]:
    """Greedily pack sentences into chunks of at most 90% of *max_tokens*.

    A sentence that alone exceeds the budget still becomes its own chunk.

    Args:
        text: Text to split.
        max_tokens: Token budget of the consumer.
        counter: Token counter; defaults to the process-wide one.
        start_index: Index assigned to the first chunk.

    Returns:
        List of :class:`Chunk` instances with ``strategy="fixed"``.
    """
    counter = counter or get_token_counter()
    budget = chunk_budget(max_tokens)

    chunks: list[Chunk] = []
    chunk_idx = start_index
    current = ""

    for sentence in _SENTENCE_BOUNDARY_RE.split(text):
        if not sentence:
            continue
        candidate = f"{current} {sentence}" if current else sentence

        if counter.count_tokens(candidate) <= budget:
            current = candidate
            continue

        if current.strip():
            chunks.append(_make_chunk(chunk_idx, current, "fixed", counter))
            chunk_idx += 1
        current = sentence

    if current.strip():
        chunks.append(_make_chunk(chunk_idx, current, "fixed", counter))

    return chunks


def split_sections(text: str) -> list[str]:
    """Split *text* at the start of each titled section."""
    return [s.strip() for s in _SECTION_START_RE.split(text) if s.strip()]


def semantic_chunk(
    text: str,
    max_tokens: int,
    counter: TokenCounter | None = None,
) -> list[Chunk]:
    """Pack whole titled sections into chunks, splitting oversized sections.

    Sections are joined with a blank line while the chunk stays within 90% of
    *max_tokens*.  A section that alone exceeds that budget is split with
    :func:`fixed_chunk` and its pieces are tagged ``"semantic-split"``.
    Every chunk lists the headings it contains as ``topics``.

    Returns:
        List of :class:`Chunk` instances with indices contiguous from 0.
    """
    counter = counter or get_token_counter()
    budget = chunk_budget(max_tokens)

    chunks: list[Chunk] = []
    chunk_idx = 0
    current = ""

    def flush(content: str) -> None:
        nonlocal chunk_idx
        chunks.append(
            _make_chunk(chunk_idx, content, "semantic", counter, extract_headings(content))
        )
        chunk_idx += 1

    for section in split_sections(text):
        candidate = f"{current}\n\n{section}" if current else section

        if counter.count_tokens(candidate) <= budget:
            current = candidate
            continue

        if current:
            flush(current)
            current = ""

        if counter.count_tokens(section) > budget:
            for piece in fixed_chunk(section, max_tokens, counter, start_index=chunk_idx):
                piece.strategy = "semantic-split"
                piece.topics = extract_headings(piece.content)
                chunks.append(piece)
                chunk_idx += 1
        else:
            current = section

    if current:
        flush(current)

    return chunks


def temporal_chunk(
    text: str,
    max_tokens: int,
    counter: TokenCounter | None = None,
) -> list[Chunk]:
    """Time-of-day grouping is not implemented; this is semantic chunking."""
    return semantic_chunk(text, max_tokens, counter)
