"""Optimization configuration: strategy enums and OptimizationConfig dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ChunkStrategy(str, Enum):
    """Available chunking strategies for over-budget content."""

    FIXED = "fixed"
    SEMANTIC = "semantic"
    TEMPORAL = "temporal"


class SummarizeLevel(str, Enum):
    """Summarization tiers applied to entry bodies during extraction."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class OutputFormat(str, Enum):
    """Rendering formats for optimized results."""

    MARKDOWN = "markdown"
    JSON = "json"
    TEXT = "text"


@dataclass(frozen=True)
class OptimizationConfig:
    """Immutable options for a single optimization or export call.

    Defaults mirror the per-day export behaviour: an 8000 token budget,
    timestamps and speakers included, light summarization and semantic
    chunking.
    """

    max_tokens: int = 8000
    include_timestamps: bool = True
    include_speakers: bool = True
    summarize_level: SummarizeLevel = SummarizeLevel.LOW
    chunk_strategy: ChunkStrategy = ChunkStrategy.SEMANTIC
    prioritize_topics: bool = True

    def __post_init__(self) -> None:
        if self.max_tokens <= 0:
            msg = f"max_tokens must be a positive integer, got {self.max_tokens!r}"
            raise ValueError(msg)
        # Accept plain strings from API payloads and CLI arguments
        if not isinstance(self.summarize_level, SummarizeLevel):
            object.__setattr__(self, "summarize_level", SummarizeLevel(self.summarize_level))
        if not isinstance(self.chunk_strategy, ChunkStrategy):
            object.__setattr__(self, "chunk_strategy", ChunkStrategy(self.chunk_strategy))
