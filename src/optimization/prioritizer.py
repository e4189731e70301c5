"""Classify entries into importance bands and tag them with topics."""

from __future__ import annotations

import math

from src.optimization.extractor import entry_body
from src.optimization.keywords import (
    BAND_KEYWORDS,
    BAND_WORD_THRESHOLDS,
    TOPIC_KEYWORDS,
    contains_keywords,
)
from src.optimization.models import LogEntry, PrioritizedEntry, PriorityBand, PriorityGroups


def entry_text(entry: LogEntry) -> str:
    """Title and body of an entry as one string."""
    parts = [entry.title or "", entry_body(entry)]
    return " ".join(p.strip() for p in parts if p and p.strip())


def detect_topics(text: str) -> list[str]:
    """Return every topic whose keyword set matches *text* (lower-cased)."""
    return [topic for topic, keywords in TOPIC_KEYWORDS.items() if contains_keywords(text, keywords)]


def classify(text: str, word_count: int) -> PriorityBand:
    """High beats medium beats low; either word count or keywords qualify."""
    for band in (PriorityBand.HIGH, PriorityBand.MEDIUM):
        if word_count > BAND_WORD_THRESHOLDS[band] or contains_keywords(text, BAND_KEYWORDS[band]):
            return band
    return PriorityBand.LOW


def _start_key(item: PrioritizedEntry) -> float:
    # Entries without a start time sort after timed ones
    start = item.entry.start_time
    return start.timestamp() if start is not None else math.inf


def group_by_priority(entries: list[LogEntry], detect_topic_tags: bool = True) -> PriorityGroups:
    """Split *entries* into high/medium/low bands, each sorted by start time.

    Args:
        entries: Lifelog entries in any order.
        detect_topic_tags: Attach topic tags from the topic keyword table.

    Returns:
        A :class:`PriorityGroups` with one list per band.
    """
    groups = PriorityGroups()

    for entry in entries:
        text = entry_text(entry).lower()
        word_count = len(text.split())
        band = classify(text, word_count)
        topics = detect_topics(text) if detect_topic_tags else []
        groups.band(band).append(
            PrioritizedEntry(entry=entry, band=band, word_count=word_count, topics=topics)
        )

    for band in PriorityBand:
        groups.band(band).sort(key=_start_key)

    return groups
