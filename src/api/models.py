"""Pydantic request/response schemas for the Lifelog Optimizer API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from src.config import settings
from src.pipeline_config import ChunkStrategy, OutputFormat, SummarizeLevel


class ExportRequest(BaseModel):
    """Shared options for the single-date export endpoints."""

    date: str
    timezone: str = settings.default_timezone
    max_tokens: int = Field(default=settings.default_max_tokens, gt=0)
    include_timestamps: bool = True
    include_speakers: bool = True
    summarize_level: SummarizeLevel = SummarizeLevel.MEDIUM


class ProcessRequest(ExportRequest):
    """Request body for the /api/process endpoint."""

    chunk_strategy: ChunkStrategy = ChunkStrategy.SEMANTIC
    output_format: OutputFormat = OutputFormat.MARKDOWN


class MultiFileExportRequest(ExportRequest):
    """Request body for the /api/multi-file-export endpoint."""

    summarize_level: SummarizeLevel = SummarizeLevel.LOW


class ConsolidatedExportRequest(ExportRequest):
    """Request body for the /api/consolidated-export endpoint."""

    max_tokens: int = Field(default=settings.consolidated_max_tokens, gt=0)
    summarize_level: SummarizeLevel = SummarizeLevel.LOW
    prioritize_topics: bool = True


class BatchProcessRequest(BaseModel):
    """Request body for the /api/batch-process endpoint."""

    start_date: str
    end_date: str
    timezone: str = settings.default_timezone
    max_tokens_per_day: int = Field(default=settings.default_max_tokens, gt=0)
    output_format: OutputFormat = OutputFormat.MARKDOWN


class MetadataModel(BaseModel):
    total_entries: int
    date_range: str
    speakers: list[str] = []
    topics: list[str] = []
    starred_count: int = 0
    total_duration: float = 0.0


class ChunkModel(BaseModel):
    index: int
    content: str
    token_count: int
    strategy: str
    topics: list[str] = []


class OptimizationResultModel(BaseModel):
    """Serialized :class:`OptimizationResult`."""

    strategy: str
    token_count: int
    original_tokens: int
    optimized_tokens: int
    compression_ratio: float
    content: str | None = None
    chunks: list[ChunkModel] | None = None
    metadata: MetadataModel


class ProcessResponse(BaseModel):
    """Response body for the /api/process endpoint."""

    success: bool = True
    date: str
    timezone: str
    original_count: int
    processed_count: int
    token_count: int
    output: str | OptimizationResultModel
    settings: dict[str, Any] = {}


class ExportFileModel(BaseModel):
    filename: str
    content: str
    token_count: int = 0
    part_number: int = 0
    topics: list[str] = []


class MultiFileExportResponse(BaseModel):
    """Response body for the /api/multi-file-export endpoint."""

    success: bool = True
    date: str
    timezone: str
    total_files: int
    strategy: str
    total_tokens: int
    index_file: ExportFileModel
    files: list[ExportFileModel]
    original_entries: int


class ConsolidatedExportResponse(BaseModel):
    """Response body for the /api/consolidated-export endpoint."""

    success: bool = True
    date: str
    timezone: str
    filename: str
    content: str
    token_count: int
    strategy: str
    topics: list[str] = []
    original_entries: int
    omitted_estimate: int = 0


class DateResultModel(BaseModel):
    date: str
    success: bool
    count: int = 0
    token_count: int | None = None
    output: str | OptimizationResultModel | None = None
    error: str | None = None


class BatchProcessResponse(BaseModel):
    """Response body for the /api/batch-process endpoint."""

    success: bool = True
    total_dates: int
    successful: int
    failed: int
    results: list[DateResultModel]


class AvailableDateModel(BaseModel):
    date: str
    count: int
    has_starred: bool


class DatesResponse(BaseModel):
    dates: list[AvailableDateModel]
