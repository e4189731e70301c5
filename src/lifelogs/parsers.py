"""Parse upstream lifelog JSON into LogEntry models."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from src.optimization.models import ContentNode, LogEntry


def _parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp; unparseable or missing values become None.

    Values without an offset are taken as UTC so that all parsed times compare.
    """
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def parse_content_node(data: dict[str, Any]) -> ContentNode:
    """Parse one content node and, recursively, its children.

    Upstream shape::

        {"type": "heading1", "content": "...", "speakerName": "...", "children": [...]}
    """
    children = data.get("children") or []
    return ContentNode(
        content=data.get("content"),
        speaker_name=data.get("speakerName"),
        node_type=data.get("type"),
        children=tuple(parse_content_node(c) for c in children if isinstance(c, dict)),
    )


def parse_lifelog(data: dict[str, Any]) -> LogEntry:
    """Parse a single lifelog object from the upstream API.

    Upstream shape::

        {
          "id": "...", "title": "...", "markdown": "...",
          "startTime": "2024-01-01T09:00:00Z", "endTime": "...",
          "isStarred": false,
          "contents": [{"type": "...", "content": "...", "speakerName": "...", "children": []}]
        }

    Missing optional fields produce an entry with less content, never an error.
    """
    contents = data.get("contents") or []
    return LogEntry(
        id=str(data.get("id", "")),
        title=data.get("title") or None,
        start_time=_parse_timestamp(data.get("startTime")),
        end_time=_parse_timestamp(data.get("endTime")),
        is_starred=bool(data.get("isStarred", False)),
        markdown=data.get("markdown") or None,
        contents=tuple(parse_content_node(c) for c in contents if isinstance(c, dict)),
    )


def parse_lifelogs(items: list[dict[str, Any]]) -> list[LogEntry]:
    return [parse_lifelog(item) for item in items]
