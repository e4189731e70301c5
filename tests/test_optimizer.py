"""Tests for budget fitting, strategy dispatch and result formatting."""

from __future__ import annotations

import pytest

from src.optimization.extractor import extract_content
from src.optimization.formatters import format_as_markdown, format_as_plain_text
from src.optimization.models import LogEntry
from src.optimization.optimizer import optimize_entries
from src.optimization.tokens import TokenCounter
from src.pipeline_config import ChunkStrategy, OptimizationConfig


def _long_day(entries: int = 20) -> list[LogEntry]:
    return [
        LogEntry(
            id=str(i),
            title=f"Entry {i}",
            markdown=" ".join(
                f"Sentence {j} of entry {i} describes the garden path in detail."
                for j in range(10)
            ),
        )
        for i in range(entries)
    ]


STANDUP = LogEntry(
    id="standup",
    title="Standup",
    markdown="## Standup\nDiscussed the quarterly deadline and urgent action items.",
)


class TestCompleteResult:
    def test_fits_budget(self, counter: TokenCounter) -> None:
        result = optimize_entries([STANDUP], OptimizationConfig(max_tokens=8000), counter)
        full_text = extract_content([STANDUP]).full_text

        assert result.strategy == "complete"
        assert result.chunks is None
        assert result.content == full_text
        assert result.token_count == counter.count_tokens(full_text)
        assert result.original_tokens == result.optimized_tokens == result.token_count
        assert result.compression_ratio == 0.0

    def test_standup_topics(self, counter: TokenCounter) -> None:
        result = optimize_entries([STANDUP], OptimizationConfig(max_tokens=8000), counter)
        assert "Standup" in result.metadata.topics

    def test_exact_budget_is_complete(self, counter: TokenCounter) -> None:
        tokens = counter.count_tokens(extract_content([STANDUP]).full_text)
        result = optimize_entries([STANDUP], OptimizationConfig(max_tokens=tokens), counter)
        assert result.strategy == "complete"

    def test_no_entries(self, counter: TokenCounter) -> None:
        result = optimize_entries([], OptimizationConfig(), counter)
        assert result.strategy == "complete"
        assert result.content == ""
        assert result.token_count == 0


class TestChunkedResult:
    @pytest.mark.parametrize("strategy", list(ChunkStrategy))
    def test_chunk_invariants(self, counter: TokenCounter, strategy: ChunkStrategy) -> None:
        config = OptimizationConfig(max_tokens=500, chunk_strategy=strategy)
        result = optimize_entries(_long_day(), config, counter)

        assert result.strategy == strategy.value
        assert result.content is None
        assert result.chunks
        assert [c.index for c in result.chunks] == list(range(len(result.chunks)))
        assert sum(c.token_count for c in result.chunks) == result.optimized_tokens
        assert result.token_count == result.optimized_tokens

    def test_compression_ratio(self, counter: TokenCounter) -> None:
        result = optimize_entries(_long_day(), OptimizationConfig(max_tokens=500), counter)
        expected = (result.original_tokens - result.optimized_tokens) / result.original_tokens
        assert result.compression_ratio == pytest.approx(expected)

    def test_chunks_keep_source_order(self, counter: TokenCounter) -> None:
        result = optimize_entries(_long_day(), OptimizationConfig(max_tokens=500), counter)
        joined = "\n\n".join(c.content for c in result.chunks or [])
        positions = [joined.index(f"## Entry {i}\n") for i in range(20)]
        assert positions == sorted(positions)

    def test_semantic_chunks_tag_topics(self, counter: TokenCounter) -> None:
        result = optimize_entries(_long_day(), OptimizationConfig(max_tokens=500), counter)
        first = (result.chunks or [])[0]
        assert first.topics[0] == "Entry 0"

    def test_metadata_survives_chunking(self, counter: TokenCounter) -> None:
        result = optimize_entries(_long_day(), OptimizationConfig(max_tokens=500), counter)
        assert result.metadata.total_entries == 20
        assert result.metadata.topics[:2] == ["Entry 0", "Entry 1"]


class TestFormatters:
    def test_markdown_complete(self, counter: TokenCounter) -> None:
        result = optimize_entries([STANDUP], OptimizationConfig(), counter)
        assert format_as_markdown(result) == f"# Daily Lifelog Summary\n\n{result.content}"

    def test_markdown_chunked(self, counter: TokenCounter) -> None:
        result = optimize_entries(_long_day(), OptimizationConfig(max_tokens=500), counter)
        text = format_as_markdown(result)
        n = len(result.chunks or [])

        assert text.startswith("# Daily Lifelog Summary\n")
        assert "**Processing Strategy:** semantic" in text
        assert "- **Total Entries:** 20" in text
        assert f"## Content Chunks ({n})" in text
        assert f"### Chunk 1 ({result.chunks[0].token_count} tokens)" in text  # type: ignore[index]
        assert f"### Chunk {n} (" in text

    def test_plain_text(self, counter: TokenCounter) -> None:
        complete = optimize_entries([STANDUP], OptimizationConfig(), counter)
        assert format_as_plain_text(complete) == complete.content

        chunked = optimize_entries(_long_day(), OptimizationConfig(max_tokens=500), counter)
        assert format_as_plain_text(chunked) == "\n\n".join(c.content for c in chunked.chunks or [])
