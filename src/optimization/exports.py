"""File-oriented export artifacts built on top of optimization results."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.optimization.formatters import format_as_markdown
from src.optimization.models import Chunk, ConsolidatedExport, OptimizationResult


@dataclass
class ExportFile:
    """One downloadable Markdown file."""

    filename: str
    content: str
    token_count: int = 0
    part_number: int = 0
    topics: list[str] = field(default_factory=list)


@dataclass
class MultiFileExport:
    """Per-part files for a day plus an index file describing them."""

    files: list[ExportFile]
    index_file: ExportFile
    strategy: str
    total_tokens: int


def _part_content(date: str, part: int, total: int, chunk: Chunk) -> str:
    lines = [
        f"# Lifelog {date} - Part {part}\n",
        f"**Token Count:** {chunk.token_count}",
        f"**Chunk Type:** {chunk.strategy}",
    ]
    if chunk.topics:
        lines.append(f"**Topics:** {', '.join(chunk.topics)}")
    lines.append(f"**Part {part} of {total}**\n")
    lines.append(f"---\n\n{chunk.content}")
    return "\n".join(lines)


def build_multi_file_export(date: str, timezone: str, result: OptimizationResult) -> MultiFileExport:
    """Split an optimization result into numbered Markdown files plus an index.

    A result that fit the budget becomes a single ``_complete.md`` file;
    otherwise each chunk becomes ``lifelog_{date}_partNN.md``.
    """
    base = f"lifelog_{date}"
    files: list[ExportFile] = []

    if result.strategy == "complete" or not result.chunks:
        files.append(
            ExportFile(
                filename=f"{base}_complete.md",
                content=format_as_markdown(result),
                token_count=result.token_count,
                part_number=1,
            )
        )
    else:
        total = len(result.chunks)
        for part, chunk in enumerate(result.chunks, 1):
            files.append(
                ExportFile(
                    filename=f"{base}_part{part:02d}.md",
                    content=_part_content(date, part, total, chunk),
                    token_count=chunk.token_count,
                    part_number=part,
                    topics=list(chunk.topics),
                )
            )

    overview = []
    for f in files:
        line = f"- **{f.filename}** ({f.token_count} tokens)"
        if f.topics:
            line += f" - Topics: {', '.join(f.topics)}"
        overview.append(line)

    index_content = "\n".join(
        [
            f"# Lifelog Index - {date}\n",
            f"**Date:** {date}",
            f"**Timezone:** {timezone}",
            f"**Total Files:** {len(files)}",
            f"**Processing Strategy:** {result.strategy}",
            f"**Total Token Count:** {result.optimized_tokens}\n",
            "## File Overview\n",
            *overview,
            "",
            "## Usage Instructions\n",
            "1. Upload files to your assistant in order (part01, part02, etc.)",
            "2. Each file is optimized to fit within token limits",
            f"3. Files contain your complete lifelog data for {date}",
            "4. Use these for building consistent memory across conversations\n",
            "---",
            "*Generated by Lifelog Optimizer*",
        ]
    )

    return MultiFileExport(
        files=files,
        index_file=ExportFile(filename=f"{base}_INDEX.md", content=index_content),
        strategy=result.strategy,
        total_tokens=result.optimized_tokens,
    )


def consolidated_filename(date: str) -> str:
    return f"lifelog_{date}_consolidated.md"


def build_consolidated_document(date: str, timezone: str, export: ConsolidatedExport) -> str:
    """Wrap a consolidated export with memory-integration instructions."""
    topics = ", ".join(export.topics) if export.topics else "Various"
    header = "\n".join(
        [
            f"# Lifelog Memory Integration - {date}\n",
            "**Instructions for Memory Building:**",
            f"- This is a consolidated lifelog from {date}",
            f"- Contains {export.original_entries} lifelog entries optimized for memory integration",
            "- Key topics and conversations are prioritized and organized",
            "- Use this to build consistent memory about the user's activities and context\n",
            "**Processing Details:**",
            f"- Date: {date}",
            f"- Timezone: {timezone}",
            f"- Token Count: {export.token_count}",
            f"- Optimization Strategy: {export.strategy}",
            f"- Topics Covered: {topics}\n",
            "---\n",
        ]
    )
    return f"{header}\n{export.content}"
