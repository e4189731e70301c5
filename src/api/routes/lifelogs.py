"""Lifelog endpoints: available dates and raw or optimized entries for a date."""

from __future__ import annotations

from dataclasses import asdict
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query

from src.api.deps import fetch_entries, get_lifelog_client
from src.api.models import AvailableDateModel, DatesResponse, OptimizationResultModel
from src.config import settings
from src.lifelogs.client import LifelogAPIError, LifelogClient
from src.optimization.optimizer import optimize_entries
from src.pipeline_config import OptimizationConfig, SummarizeLevel

router = APIRouter()

ClientDep = Annotated[LifelogClient, Depends(get_lifelog_client)]


@router.get("/api/dates", response_model=DatesResponse)
def list_dates(client: ClientDep, days: int = Query(default=30, gt=0, le=365)) -> DatesResponse:
    """List recent dates that have lifelog data, newest first."""
    try:
        dates = client.get_available_dates(days)
    except LifelogAPIError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return DatesResponse(dates=[AvailableDateModel(**asdict(d)) for d in dates])


@router.get("/api/lifelogs/{date}")
def get_lifelogs(
    date: str,
    client: ClientDep,
    timezone: str = settings.default_timezone,
    format: str = Query(default="raw", pattern="^(raw|optimized)$"),
    max_tokens: int = Query(default=settings.default_max_tokens, gt=0),
    include_timestamps: bool = True,
    include_speakers: bool = True,
    summarize_level: SummarizeLevel = SummarizeLevel.MEDIUM,
) -> dict[str, Any]:
    """Return a date's lifelogs as fetched, or optimized for the token budget."""
    entries = fetch_entries(client, date, timezone)

    if format == "optimized":
        config = OptimizationConfig(
            max_tokens=max_tokens,
            include_timestamps=include_timestamps,
            include_speakers=include_speakers,
            summarize_level=summarize_level,
        )
        result = optimize_entries(entries, config)
        return OptimizationResultModel.model_validate(asdict(result)).model_dump()

    return {"lifelogs": [asdict(e) for e in entries], "count": len(entries)}
