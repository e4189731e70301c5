"""Sequential multi-date processing with per-date error isolation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from src.lifelogs.dates import get_date_range
from src.optimization.formatters import format_as_markdown
from src.optimization.models import LogEntry, OptimizationResult
from src.optimization.optimizer import optimize_entries
from src.optimization.tokens import TokenCounter
from src.pipeline_config import OptimizationConfig, OutputFormat

logger = logging.getLogger(__name__)

FetchFn = Callable[[str], list[LogEntry]]


@dataclass
class DateResult:
    """Outcome for a single date of a batch run."""

    date: str
    success: bool
    count: int = 0
    token_count: int | None = None
    output: str | OptimizationResult | None = None
    error: str | None = None


@dataclass
class BatchSummary:
    total_dates: int
    successful: int
    failed: int
    results: list[DateResult]


def batch_process(
    fetch: FetchFn,
    start_date: str,
    end_date: str,
    config: OptimizationConfig | None = None,
    output_format: str | OutputFormat = OutputFormat.MARKDOWN,
    counter: TokenCounter | None = None,
) -> BatchSummary:
    """Optimize each date in ``[start_date, end_date]``, one after another.

    A failure while fetching or optimizing one date is recorded as a failed
    :class:`DateResult` and the remaining dates still run.  Dates without any
    entries are skipped.

    Args:
        fetch: Returns the entries for a ``YYYY-MM-DD`` date.
        start_date: First date, inclusive.
        end_date: Last date, inclusive.
        config: Optimization options applied to every date.
        output_format: ``markdown`` renders each result; otherwise the
            :class:`OptimizationResult` itself is returned.
        counter: Token counter; defaults to the process-wide one.

    Raises:
        ValueError: If the date range is malformed or reversed.
    """
    if isinstance(output_format, str):
        output_format = OutputFormat(output_format)
    dates = get_date_range(start_date, end_date)
    results: list[DateResult] = []

    for day in dates:
        try:
            entries = fetch(day)
            if not entries:
                continue
            optimized = optimize_entries(entries, config, counter)
            output: Any = (
                format_as_markdown(optimized)
                if output_format is OutputFormat.MARKDOWN
                else optimized
            )
            results.append(
                DateResult(
                    date=day,
                    success=True,
                    count=len(entries),
                    token_count=optimized.token_count,
                    output=output,
                )
            )
        except Exception as exc:
            logger.exception("Batch processing failed for %s", day)
            results.append(DateResult(date=day, success=False, error=str(exc)))

    successful = sum(1 for r in results if r.success)
    return BatchSummary(
        total_dates=len(dates),
        successful=successful,
        failed=len(results) - successful,
        results=results,
    )
