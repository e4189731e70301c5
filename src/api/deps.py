"""Shared FastAPI dependencies and upstream-fetch helpers."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated

from fastapi import Header, HTTPException

from src.lifelogs.client import LifelogAPIError, LifelogClient
from src.lifelogs.dates import parse_date
from src.optimization.models import LogEntry


def get_lifelog_client(
    x_api_key: Annotated[str | None, Header()] = None,
) -> Iterator[LifelogClient]:
    """Yield a client authenticated with the caller's ``X-API-Key`` header."""
    if not x_api_key:
        raise HTTPException(status_code=401, detail="API key required")
    client = LifelogClient(x_api_key)
    try:
        yield client
    finally:
        client.close()


def fetch_entries(client: LifelogClient, day: str, timezone: str) -> list[LogEntry]:
    """Fetch one day's entries, mapping failures to HTTP errors.

    Raises:
        HTTPException(400): Malformed date.
        HTTPException(502): The upstream API failed.
    """
    try:
        parse_date(day)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    try:
        return client.get_lifelogs_for_date(day, timezone)
    except LifelogAPIError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
