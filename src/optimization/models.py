"""Data models for the content-optimization engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


@dataclass(frozen=True)
class ContentNode:
    """One node of a lifelog's structured content tree."""

    content: str | None = None
    speaker_name: str | None = None
    node_type: str | None = None
    children: tuple[ContentNode, ...] = ()


@dataclass(frozen=True)
class LogEntry:
    """A single lifelog entry as fetched from the upstream API."""

    id: str
    title: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    is_starred: bool = False
    markdown: str | None = None
    contents: tuple[ContentNode, ...] = ()


@dataclass
class ExtractionMetadata:
    """Aggregate facts about a list of entries."""

    total_entries: int
    date_range: str
    speakers: list[str] = field(default_factory=list)
    topics: list[str] = field(default_factory=list)
    starred_count: int = 0
    total_duration: float = 0.0  # minutes


@dataclass
class ExtractedContent:
    """Flattened text of a list of entries plus its metadata."""

    full_text: str
    metadata: ExtractionMetadata


@dataclass
class Chunk:
    """A token-bounded, ordered segment of the extracted text."""

    index: int
    content: str
    token_count: int
    strategy: str = "fixed"  # "fixed", "semantic" or "semantic-split"
    topics: list[str] = field(default_factory=list)


class PriorityBand(StrEnum):
    """Importance tiers used by the consolidated export."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class PrioritizedEntry:
    """A log entry enriched with its detected topics and importance band."""

    entry: LogEntry
    band: PriorityBand
    word_count: int
    topics: list[str] = field(default_factory=list)


@dataclass
class PriorityGroups:
    """Entries split into bands, each ordered ascending by start time."""

    high: list[PrioritizedEntry] = field(default_factory=list)
    medium: list[PrioritizedEntry] = field(default_factory=list)
    low: list[PrioritizedEntry] = field(default_factory=list)

    def band(self, band: PriorityBand) -> list[PrioritizedEntry]:
        return {
            PriorityBand.HIGH: self.high,
            PriorityBand.MEDIUM: self.medium,
            PriorityBand.LOW: self.low,
        }[band]


@dataclass
class OptimizationResult:
    """Outcome of fitting a day's entries into a token budget.

    ``strategy == "complete"`` means the text fit as-is: ``content`` holds it
    and ``chunks`` is ``None``.  Otherwise ``chunks`` holds the split text.
    """

    strategy: str
    metadata: ExtractionMetadata
    token_count: int
    original_tokens: int
    optimized_tokens: int
    compression_ratio: float = 0.0
    content: str | None = None
    chunks: list[Chunk] | None = None


@dataclass
class ConsolidatedExport:
    """A single prioritized, token-bounded document."""

    content: str
    token_count: int
    strategy: str  # "consolidated" or "prioritized"
    topics: list[str]
    original_entries: int
    omitted_estimate: int = 0
