"""Single-document export assembled from prioritized bands."""

from __future__ import annotations

import logging
import math

from src.optimization.extractor import format_entry
from src.optimization.models import ConsolidatedExport, LogEntry, PriorityBand
from src.optimization.prioritizer import group_by_priority
from src.optimization.tokens import TokenCounter, get_token_counter
from src.pipeline_config import OptimizationConfig

logger = logging.getLogger(__name__)

# (band, section heading, cumulative share of max_tokens, light-summarize body)
# Shares bound the entry bodies only; headings and the footer are not charged
BAND_LAYOUT: list[tuple[PriorityBand, str, float, bool]] = [
    (PriorityBand.HIGH, "Key Activities & Important Conversations", 0.85, False),
    (PriorityBand.MEDIUM, "Regular Activities & Conversations", 0.95, False),
    (PriorityBand.LOW, "Background Activities", 0.98, True),
]

# Share of the left-out entries of each band reported in the footer
OMITTED_WEIGHTS: dict[PriorityBand, float] = {
    PriorityBand.HIGH: 1.0,
    PriorityBand.MEDIUM: 0.8,
    PriorityBand.LOW: 0.3,
}


def estimate_omitted(unprocessed: dict[PriorityBand, int]) -> int:
    """Approximate number of omitted entries; an estimate, not an exact count."""
    return sum(math.floor(OMITTED_WEIGHTS[band] * count) for band, count in unprocessed.items())


def create_consolidated_export(
    entries: list[LogEntry],
    config: OptimizationConfig | None = None,
    counter: TokenCounter | None = None,
) -> ConsolidatedExport:
    """Build one token-bounded document, highest-priority entries first.

    Each band is filled greedily while the running token total stays within
    its cumulative ceiling (85%, 95% and 98% of ``max_tokens``).  Only entry
    bodies are charged against the ceilings.  Headings and the footer are not,
    so the reported ``token_count`` of the whole document can pass a ceiling,
    and with a very small budget can pass ``max_tokens`` itself.
    Low-band entries go through the light summarizer.  When entries are left
    out, a footer reports an approximate count of them.

    Args:
        entries: Lifelog entries for the export.
        config: Budget and formatting options.
        counter: Token counter; defaults to the process-wide one.

    Returns:
        A :class:`ConsolidatedExport`.
    """
    config = config or OptimizationConfig()
    counter = counter or get_token_counter()
    groups = group_by_priority(entries, detect_topic_tags=config.prioritize_topics)

    parts: list[str] = []
    topics: list[str] = []
    body_tokens = 0
    unprocessed: dict[PriorityBand, int] = {}

    for band, heading, share, summarize_body in BAND_LAYOUT:
        items = groups.band(band)
        ceiling = config.max_tokens * share
        unprocessed[band] = len(items)

        if not items:
            continue
        if band is not PriorityBand.HIGH and body_tokens >= ceiling:
            continue

        parts.append(f"## {heading}\n\n")
        for item in items:
            text = format_entry(
                item.entry,
                include_timestamps=config.include_timestamps,
                include_speakers=config.include_speakers,
                summarize_body=summarize_body,
            )
            item_tokens = counter.count_tokens(text)
            if body_tokens + item_tokens > ceiling:
                continue

            parts.append(text + "\n\n")
            body_tokens += item_tokens
            unprocessed[band] -= 1
            topics.extend(t for t in item.topics if t not in topics)

    omitted = estimate_omitted(unprocessed)
    truncated = any(unprocessed.values())
    if truncated:
        logger.info(
            "Consolidated export left out entries (high=%d, medium=%d, low=%d)",
            unprocessed[PriorityBand.HIGH],
            unprocessed[PriorityBand.MEDIUM],
            unprocessed[PriorityBand.LOW],
        )
    if omitted > 0:
        parts.append(
            "\n## Summary\n\n"
            f"Note: approximately {omitted} additional entries were omitted due to "
            "token limits. These included routine activities and brief interactions.\n\n"
        )

    content = "".join(parts)
    return ConsolidatedExport(
        content=content,
        token_count=counter.count_tokens(content),
        strategy="prioritized" if truncated else "consolidated",
        topics=topics,
        original_entries=len(entries),
        omitted_estimate=omitted,
    )
