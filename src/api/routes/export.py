"""Export endpoints: per-day processing, multi-file, consolidated and batch exports."""

from __future__ import annotations

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import fetch_entries, get_lifelog_client
from src.api.models import (
    BatchProcessRequest,
    BatchProcessResponse,
    ConsolidatedExportRequest,
    ConsolidatedExportResponse,
    DateResultModel,
    ExportFileModel,
    MultiFileExportRequest,
    MultiFileExportResponse,
    OptimizationResultModel,
    ProcessRequest,
    ProcessResponse,
)
from src.lifelogs.batch import batch_process
from src.lifelogs.client import LifelogClient
from src.optimization.consolidation import create_consolidated_export
from src.optimization.exports import (
    build_consolidated_document,
    build_multi_file_export,
    consolidated_filename,
)
from src.optimization.formatters import format_as_markdown, format_as_plain_text
from src.optimization.models import OptimizationResult
from src.optimization.optimizer import optimize_entries
from src.pipeline_config import ChunkStrategy, OptimizationConfig, OutputFormat

router = APIRouter()

ClientDep = Annotated[LifelogClient, Depends(get_lifelog_client)]


def _result_model(result: OptimizationResult) -> OptimizationResultModel:
    return OptimizationResultModel.model_validate(asdict(result))


@router.post("/api/process", response_model=ProcessResponse)
def process(request: ProcessRequest, client: ClientDep) -> ProcessResponse:
    """Fetch a date's lifelogs, fit them to the budget and render the result."""
    entries = fetch_entries(client, request.date, request.timezone)

    config = OptimizationConfig(
        max_tokens=request.max_tokens,
        include_timestamps=request.include_timestamps,
        include_speakers=request.include_speakers,
        summarize_level=request.summarize_level,
        chunk_strategy=request.chunk_strategy,
    )
    result = optimize_entries(entries, config)

    output: str | OptimizationResultModel
    if request.output_format is OutputFormat.MARKDOWN:
        output = format_as_markdown(result)
    elif request.output_format is OutputFormat.JSON:
        output = _result_model(result)
    else:
        output = format_as_plain_text(result)

    return ProcessResponse(
        date=request.date,
        timezone=request.timezone,
        original_count=len(entries),
        processed_count=len(result.chunks) if result.chunks else 1,
        token_count=result.token_count,
        output=output,
        settings=request.model_dump(exclude={"date", "timezone"}, mode="json"),
    )


@router.post("/api/multi-file-export", response_model=MultiFileExportResponse)
def multi_file_export(request: MultiFileExportRequest, client: ClientDep) -> MultiFileExportResponse:
    """Split a date's lifelogs into numbered, budget-sized Markdown files plus an index."""
    entries = fetch_entries(client, request.date, request.timezone)
    if not entries:
        raise HTTPException(status_code=404, detail="No lifelogs found for this date")

    config = OptimizationConfig(
        max_tokens=request.max_tokens,
        include_timestamps=request.include_timestamps,
        include_speakers=request.include_speakers,
        summarize_level=request.summarize_level,
        chunk_strategy=ChunkStrategy.SEMANTIC,
    )
    export = build_multi_file_export(request.date, request.timezone, optimize_entries(entries, config))

    return MultiFileExportResponse(
        date=request.date,
        timezone=request.timezone,
        total_files=len(export.files) + 1,
        strategy=export.strategy,
        total_tokens=export.total_tokens,
        index_file=ExportFileModel(**asdict(export.index_file)),
        files=[ExportFileModel(**asdict(f)) for f in export.files],
        original_entries=len(entries),
    )


@router.post("/api/consolidated-export", response_model=ConsolidatedExportResponse)
def consolidated_export(
    request: ConsolidatedExportRequest, client: ClientDep
) -> ConsolidatedExportResponse:
    """Build one prioritized, token-bounded Markdown document for a date."""
    entries = fetch_entries(client, request.date, request.timezone)
    if not entries:
        raise HTTPException(status_code=404, detail="No lifelogs found for this date")

    config = OptimizationConfig(
        max_tokens=request.max_tokens,
        include_timestamps=request.include_timestamps,
        include_speakers=request.include_speakers,
        summarize_level=request.summarize_level,
        prioritize_topics=request.prioritize_topics,
    )
    export = create_consolidated_export(entries, config)

    return ConsolidatedExportResponse(
        date=request.date,
        timezone=request.timezone,
        filename=consolidated_filename(request.date),
        content=build_consolidated_document(request.date, request.timezone, export),
        token_count=export.token_count,
        strategy=export.strategy,
        topics=export.topics,
        original_entries=export.original_entries,
        omitted_estimate=export.omitted_estimate,
    )


@router.post("/api/batch-process", response_model=BatchProcessResponse)
def batch(request: BatchProcessRequest, client: ClientDep) -> BatchProcessResponse:
    """Optimize every date in a range; one failing date does not stop the rest."""
    config = OptimizationConfig(max_tokens=request.max_tokens_per_day)

    try:
        summary = batch_process(
            lambda day: client.get_lifelogs_for_date(day, request.timezone),
            request.start_date,
            request.end_date,
            config,
            request.output_format,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    results: list[DateResultModel] = []
    for r in summary.results:
        output = r.output
        if isinstance(output, OptimizationResult):
            output = _result_model(output)
        results.append(
            DateResultModel(
                date=r.date,
                success=r.success,
                count=r.count,
                token_count=r.token_count,
                output=output,
                error=r.error,
            )
        )

    return BatchProcessResponse(
        total_dates=summary.total_dates,
        successful=summary.successful,
        failed=summary.failed,
        results=results,
    )
