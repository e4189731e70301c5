"""Fit a day's lifelog entries into a consumer's token budget."""

from __future__ import annotations

import logging
from collections.abc import Callable

from src.optimization.chunking import fixed_chunk, semantic_chunk, temporal_chunk
from src.optimization.extractor import extract_content
from src.optimization.models import Chunk, LogEntry, OptimizationResult
from src.optimization.tokens import TokenCounter, get_token_counter
from src.pipeline_config import ChunkStrategy, OptimizationConfig

logger = logging.getLogger(__name__)

ChunkFn = Callable[[str, int, TokenCounter], list[Chunk]]

CHUNKERS: dict[ChunkStrategy, ChunkFn] = {
    ChunkStrategy.FIXED: fixed_chunk,
    ChunkStrategy.SEMANTIC: semantic_chunk,
    ChunkStrategy.TEMPORAL: temporal_chunk,
}


def optimize_entries(
    entries: list[LogEntry],
    config: OptimizationConfig | None = None,
    counter: TokenCounter | None = None,
) -> OptimizationResult:
    """Extract the entries' text and chunk it only if it exceeds the budget.

    Args:
        entries: Lifelog entries for one day (or range), in display order.
        config: Budget, formatting and strategy options.
        counter: Token counter; defaults to the process-wide one.

    Returns:
        An :class:`OptimizationResult` with ``strategy="complete"`` when the
        text fits, otherwise the chunks produced by the configured strategy.
    """
    config = config or OptimizationConfig()
    counter = counter or get_token_counter()

    extracted = extract_content(
        entries,
        include_timestamps=config.include_timestamps,
        include_speakers=config.include_speakers,
        summarize_level=config.summarize_level,
    )
    total_tokens = counter.count_tokens(extracted.full_text)

    if total_tokens <= config.max_tokens:
        return OptimizationResult(
            strategy="complete",
            metadata=extracted.metadata,
            token_count=total_tokens,
            original_tokens=total_tokens,
            optimized_tokens=total_tokens,
            compression_ratio=0.0,
            content=extracted.full_text,
            chunks=None,
        )

    chunker = CHUNKERS[config.chunk_strategy]
    chunks = chunker(extracted.full_text, config.max_tokens, counter)
    optimized_tokens = sum(c.token_count for c in chunks)

    logger.info(
        "Split %d tokens into %d %s chunks (budget %d)",
        total_tokens,
        len(chunks),
        config.chunk_strategy.value,
        config.max_tokens,
    )

    return OptimizationResult(
        strategy=config.chunk_strategy.value,
        metadata=extracted.metadata,
        token_count=optimized_tokens,
        original_tokens=total_tokens,
        optimized_tokens=optimized_tokens,
        compression_ratio=(total_tokens - optimized_tokens) / total_tokens,
        content=None,
        chunks=chunks,
    )
