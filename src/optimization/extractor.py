"""Flatten lifelog entries and their content trees into plain text plus metadata."""

from __future__ import annotations

import operator
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from functools import reduce

from src.optimization.models import (
    ContentNode,
    ExtractedContent,
    ExtractionMetadata,
    LogEntry,
)
from src.optimization.summarizer import light_summarize, summarize
from src.pipeline_config import SummarizeLevel

TIMESTAMP_FORMAT = "%b %d, %Y %I:%M %p"
DAY_FORMAT = "%a %b %d %Y"


@dataclass(frozen=True)
class NodeText:
    """Text, speakers and headings contributed by one subtree.

    Values are combined with ``+`` so a traversal folds its children's
    results instead of writing into a shared accumulator.
    """

    text: str = ""
    speakers: tuple[str, ...] = ()
    headings: tuple[str, ...] = ()

    def __add__(self, other: NodeText) -> NodeText:
        return NodeText(
            text=self.text + other.text,
            speakers=_merge_unique(self.speakers, other.speakers),
            headings=self.headings + other.headings,
        )


def _merge_unique(first: tuple[str, ...], second: tuple[str, ...]) -> tuple[str, ...]:
    return first + tuple(s for s in second if s not in first)


def walk_node(node: ContentNode) -> NodeText:
    """Depth-first rendering of *node* and its children, in child order."""
    # A speaker counts even when the text sits in the node's children
    speakers = (node.speaker_name,) if node.speaker_name else ()
    text = ""
    headings: tuple[str, ...] = ()
    if node.content:
        if node.speaker_name:
            text = f"[{node.speaker_name}]: {node.content}\n"
        else:
            text = f"{node.content}\n"
        if node.node_type and "heading" in node.node_type:
            headings = (node.content,)
    own = NodeText(text, speakers, headings)

    return reduce(operator.add, (walk_node(child) for child in node.children), own)


def walk_nodes(nodes: Iterable[ContentNode]) -> NodeText:
    return reduce(operator.add, (walk_node(node) for node in nodes), NodeText())


def format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


def get_date_range(entries: list[LogEntry]) -> str:
    """Human-readable span of the entries' start days.

    ``"No data"`` for an empty list, ``"No dates"`` when no entry has a start time.
    """
    if not entries:
        return "No data"

    starts = sorted(e.start_time for e in entries if e.start_time is not None)
    if not starts:
        return "No dates"

    first = starts[0].strftime(DAY_FORMAT)
    last = starts[-1].strftime(DAY_FORMAT)
    if first == last:
        return first
    return f"{first} - {last}"


def entry_body(entry: LogEntry) -> str:
    """Raw body of an entry: its markdown, or its rendered content tree."""
    if entry.markdown:
        return entry.markdown
    return walk_nodes(entry.contents).text


def format_entry(
    entry: LogEntry,
    include_timestamps: bool = False,
    include_speakers: bool = False,
    summarize_body: bool = False,
) -> str:
    """Render one entry as ``[timestamp] ## title`` followed by its body.

    With *summarize_body* the body goes through the light summarizer.
    """
    parts: list[str] = []
    if include_timestamps and entry.start_time:
        parts.append(f"[{format_timestamp(entry.start_time)}] ")
    if entry.title:
        parts.append(f"## {entry.title}\n\n")

    body = entry_body(entry)
    if body:
        if summarize_body:
            body = light_summarize(body, include_speakers)
        parts.append(body + "\n\n")

    return "".join(parts).strip()


def extract_content(
    entries: list[LogEntry],
    include_timestamps: bool = True,
    include_speakers: bool = True,
    summarize_level: str | SummarizeLevel = SummarizeLevel.LOW,
) -> ExtractedContent:
    """Concatenate per-entry text in input order and collect metadata.

    Args:
        entries: Lifelog entries, in the order they should appear.
        include_timestamps: Prefix each entry with its start time.
        include_speakers: Keep ``[speaker]: `` labels in body text.
        summarize_level: Summarizer tier applied to every entry body.

    Returns:
        An :class:`ExtractedContent` with the full text and aggregate metadata.
    """
    metadata = ExtractionMetadata(
        total_entries=len(entries),
        date_range=get_date_range(entries),
    )
    speakers: tuple[str, ...] = ()
    pieces: list[str] = []

    for entry in entries:
        entry_text = ""

        if include_timestamps and entry.start_time:
            entry_text += f"[{format_timestamp(entry.start_time)}] "

        if entry.title:
            entry_text += f"## {entry.title}\n\n"
            if entry.title not in metadata.topics:
                metadata.topics.append(entry.title)

        tree = walk_nodes(entry.contents)
        raw_body = entry.markdown or tree.text
        if raw_body:
            body = summarize(raw_body, summarize_level, include_speakers)
            entry_text += body + "\n\n"

        speakers = _merge_unique(speakers, tree.speakers)
        for heading in tree.headings:
            if heading not in metadata.topics:
                metadata.topics.append(heading)

        if entry.is_starred:
            metadata.starred_count += 1
        if entry.start_time and entry.end_time:
            metadata.total_duration += (entry.end_time - entry.start_time).total_seconds() / 60

        pieces.append(entry_text)

    metadata.speakers = list(speakers)
    return ExtractedContent(full_text="".join(pieces).strip(), metadata=metadata)
