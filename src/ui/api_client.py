"""HTTP client wrapper for the Lifelog Optimizer FastAPI backend."""

from __future__ import annotations

import os
from typing import Any

import httpx
import streamlit as st

API_URL = os.getenv("API_URL", "http://localhost:3002")


def _headers(api_key: str) -> dict[str, str]:
    return {"X-API-Key": api_key}


def _post(path: str, api_key: str, payload: dict[str, Any], action: str) -> dict:  # type: ignore[type-arg]
    try:
        r = httpx.post(
            f"{API_URL}{path}",
            json=payload,
            headers=_headers(api_key),
            timeout=120.0,
        )
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPStatusError as e:
        try:
            detail = e.response.json().get("detail", str(e))
        except ValueError:
            detail = str(e)
        st.error(f"{action} failed: {detail}")
        return {}
    except httpx.HTTPError as e:
        st.error(f"{action} failed: {e}")
        return {}


def check_health() -> bool:
    """Return True if the API server responds to /health."""
    try:
        r = httpx.get(f"{API_URL}/health", timeout=5.0)
        return r.status_code == 200
    except httpx.ConnectError:
        return False


def get_dates(api_key: str, days: int = 30) -> list[dict]:  # type: ignore[type-arg]
    """Fetch recent dates that have lifelog data."""
    try:
        r = httpx.get(
            f"{API_URL}/api/dates",
            params={"days": days},
            headers=_headers(api_key),
            timeout=120.0,
        )
        r.raise_for_status()
        return r.json().get("dates", [])  # type: ignore[no-any-return]
    except httpx.HTTPError:
        return []


def process_day(api_key: str, **options: Any) -> dict:  # type: ignore[type-arg]
    """Optimize one date's lifelogs; ``options`` mirror the /api/process body."""
    return _post("/api/process", api_key, options, "Processing")


def multi_file_export(api_key: str, **options: Any) -> dict:  # type: ignore[type-arg]
    """Request a multi-file export for one date."""
    return _post("/api/multi-file-export", api_key, options, "Export")


def consolidated_export(api_key: str, **options: Any) -> dict:  # type: ignore[type-arg]
    """Request a single consolidated export for one date."""
    return _post("/api/consolidated-export", api_key, options, "Export")


def batch_process(api_key: str, **options: Any) -> dict:  # type: ignore[type-arg]
    """Optimize every date in a range."""
    return _post("/api/batch-process", api_key, options, "Batch processing")
