"""Tests for multi-file and consolidated export artifacts."""

from __future__ import annotations

from src.optimization.exports import (
    build_consolidated_document,
    build_multi_file_export,
    consolidated_filename,
)
from src.optimization.models import (
    Chunk,
    ConsolidatedExport,
    ExtractionMetadata,
    OptimizationResult,
)

DAY = "2024-01-15"


def _metadata() -> ExtractionMetadata:
    return ExtractionMetadata(total_entries=2, date_range="Mon Jan 15 2024")


def _complete() -> OptimizationResult:
    return OptimizationResult(
        strategy="complete",
        metadata=_metadata(),
        token_count=12,
        original_tokens=12,
        optimized_tokens=12,
        content="## Walk\n\nA long walk by the river.",
    )


def _chunked() -> OptimizationResult:
    chunks = [
        Chunk(index=0, content="## Walk\n\nFirst part.", token_count=30, strategy="semantic", topics=["Walk"]),
        Chunk(index=1, content="Second part.", token_count=20, strategy="semantic-split"),
    ]
    return OptimizationResult(
        strategy="semantic",
        metadata=_metadata(),
        token_count=50,
        original_tokens=55,
        optimized_tokens=50,
        compression_ratio=5 / 55,
        chunks=chunks,
    )


class TestMultiFileExport:
    def test_complete_result_is_single_file(self) -> None:
        export = build_multi_file_export(DAY, "UTC", _complete())

        assert [f.filename for f in export.files] == ["lifelog_2024-01-15_complete.md"]
        assert export.files[0].content.startswith("# Daily Lifelog Summary")
        assert export.index_file.filename == "lifelog_2024-01-15_INDEX.md"
        assert "**Total Files:** 1" in export.index_file.content
        assert export.strategy == "complete"
        assert export.total_tokens == 12

    def test_one_file_per_chunk(self) -> None:
        export = build_multi_file_export(DAY, "America/New_York", _chunked())

        assert [f.filename for f in export.files] == [
            "lifelog_2024-01-15_part01.md",
            "lifelog_2024-01-15_part02.md",
        ]
        first, second = export.files
        assert first.part_number == 1
        assert first.topics == ["Walk"]
        assert "**Topics:** Walk" in first.content
        assert "**Part 1 of 2**" in first.content
        assert first.content.endswith("## Walk\n\nFirst part.")
        assert "**Chunk Type:** semantic-split" in second.content
        assert "**Topics:**" not in second.content

    def test_index_lists_files(self) -> None:
        index = build_multi_file_export(DAY, "America/New_York", _chunked()).index_file.content

        assert index.startswith("# Lifelog Index - 2024-01-15")
        assert "**Timezone:** America/New_York" in index
        assert "- **lifelog_2024-01-15_part01.md** (30 tokens) - Topics: Walk" in index
        assert "- **lifelog_2024-01-15_part02.md** (20 tokens)\n" in index
        assert "**Total Token Count:** 50" in index


class TestConsolidatedDocument:
    def test_filename(self) -> None:
        assert consolidated_filename(DAY) == "lifelog_2024-01-15_consolidated.md"

    def test_wraps_content_with_details(self) -> None:
        export = ConsolidatedExport(
            content="## Key Activities & Important Conversations\n\n## Walk\n\n",
            token_count=40,
            strategy="consolidated",
            topics=["health", "travel"],
            original_entries=3,
        )
        document = build_consolidated_document(DAY, "UTC", export)

        assert document.startswith("# Lifelog Memory Integration - 2024-01-15\n")
        assert "- Contains 3 lifelog entries" in document
        assert "- Token Count: 40" in document
        assert "- Optimization Strategy: consolidated" in document
        assert "- Topics Covered: health, travel" in document
        assert document.endswith(export.content)

    def test_no_topics(self) -> None:
        export = ConsolidatedExport(
            content="", token_count=0, strategy="consolidated", topics=[], original_entries=0
        )
        assert "- Topics Covered: Various" in build_consolidated_document(DAY, "UTC", export)
