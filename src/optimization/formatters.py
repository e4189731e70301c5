"""Render optimization results as Markdown or plain text."""

from __future__ import annotations

from src.optimization.models import OptimizationResult

SUMMARY_TITLE = "# Daily Lifelog Summary"


def format_as_markdown(result: OptimizationResult) -> str:
    """Markdown document with a metadata header and one section per chunk."""
    if result.strategy == "complete":
        return f"{SUMMARY_TITLE}\n\n{result.content or ''}"

    lines = [
        f"{SUMMARY_TITLE}\n",
        f"**Processing Strategy:** {result.strategy}",
        f"**Token Optimization:** {result.original_tokens} → {result.optimized_tokens} tokens",
        f"**Compression Ratio:** {result.compression_ratio * 100:.1f}%\n",
    ]

    meta = result.metadata
    lines.extend(
        [
            "## Metadata",
            f"- **Total Entries:** {meta.total_entries}",
            f"- **Date Range:** {meta.date_range}",
            f"- **Speakers:** {', '.join(meta.speakers)}",
            f"- **Starred Entries:** {meta.starred_count}",
            f"- **Total Duration:** {round(meta.total_duration)} minutes\n",
        ]
    )

    if result.chunks:
        lines.append(f"## Content Chunks ({len(result.chunks)})\n")
        for chunk in result.chunks:
            lines.append(f"### Chunk {chunk.index + 1} ({chunk.token_count} tokens)\n")
            lines.append(f"{chunk.content}\n\n---\n")

    return "\n".join(lines) + "\n"


def format_as_plain_text(result: OptimizationResult) -> str:
    """The bare text: full content when complete, else chunks separated by blank lines."""
    if result.strategy == "complete":
        return result.content or ""
    if not result.chunks:
        return ""
    return "\n\n".join(chunk.content for chunk in result.chunks)
