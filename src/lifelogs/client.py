"""HTTP client for the upstream lifelog API (cursor pagination, page delay)."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

import httpx

from src.config import settings
from src.lifelogs.parsers import parse_lifelog, parse_lifelogs
from src.optimization.models import LogEntry

logger = logging.getLogger(__name__)


class LifelogAPIError(Exception):
    """The upstream lifelog API could not be reached or rejected the request."""


@dataclass
class AvailableDate:
    """A recent day that has at least one lifelog."""

    date: str
    count: int
    has_starred: bool


def _error_detail(exc: httpx.HTTPError) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return f"HTTP {exc.response.status_code}"
    return str(exc) or exc.__class__.__name__


class LifelogClient:
    """Thin wrapper around ``httpx.Client`` for the ``/lifelogs`` endpoints.

    Args:
        api_key: Key sent in the ``X-API-Key`` header.
        base_url: API root; defaults to ``settings.limitless_base_url``.
        page_delay: Seconds to wait between paginated requests.
        http_client: Pre-built client (tests pass one with a mock transport).
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        page_delay: float | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.api_key = api_key
        self.page_delay = settings.page_delay_seconds if page_delay is None else page_delay
        self._http = http_client or httpx.Client(
            base_url=base_url or settings.limitless_base_url,
            timeout=settings.request_timeout_seconds,
        )
        self._http.headers.update({"X-API-Key": api_key, "Content-Type": "application/json"})

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> LifelogClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        try:
            response = self._http.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            detail = _error_detail(exc)
            logger.error("Lifelog API request %s failed: %s", path, detail)
            raise LifelogAPIError(f"Failed to fetch lifelogs: {detail}") from exc
        return response.json()  # type: ignore[no-any-return]

    def _paginate(self, params: dict[str, Any], max_entries: int) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        cursor: str | None = None

        while True:
            if cursor:
                params["cursor"] = cursor
            body = self._get("/lifelogs", params)
            page = (body.get("data") or {}).get("lifelogs")
            if not page:
                break

            items.extend(page)
            cursor = ((body.get("meta") or {}).get("lifelogs") or {}).get("nextCursor")
            logger.info("Fetched %d lifelogs in this batch (total: %d)", len(page), len(items))

            if not cursor or len(items) >= max_entries:
                break
            if self.page_delay:
                time.sleep(self.page_delay)

        return items[:max_entries]

    def _list_params(
        self,
        timezone: str,
        limit: int | None,
        direction: str,
        is_starred: bool | None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {
            "timezone": timezone,
            "includeMarkdown": "true",
            "includeHeadings": "true",
            "limit": limit or settings.page_limit,
            "direction": direction,
        }
        if is_starred is not None:
            params["isStarred"] = "true" if is_starred else "false"
        return params

    def get_lifelogs_for_date(
        self,
        day: str,
        timezone: str = "UTC",
        limit: int | None = None,
        direction: str = "desc",
        is_starred: bool | None = None,
        max_entries: int | None = None,
    ) -> list[LogEntry]:
        """Fetch every lifelog for *day* (``YYYY-MM-DD``), following cursors."""
        params = self._list_params(timezone, limit, direction, is_starred)
        params["date"] = day
        logger.info("Fetching lifelogs for %s", day)
        items = self._paginate(params, max_entries or settings.max_entries)
        logger.info("Total lifelogs found for %s: %d", day, len(items))
        return parse_lifelogs(items)

    def get_lifelogs_in_range(
        self,
        start: str,
        end: str,
        timezone: str = "UTC",
        limit: int | None = None,
        direction: str = "desc",
        is_starred: bool | None = None,
        max_entries: int | None = None,
    ) -> list[LogEntry]:
        """Fetch every lifelog between *start* and *end*, following cursors."""
        params = self._list_params(timezone, limit, direction, is_starred)
        params.update({"start": start, "end": end})
        return parse_lifelogs(self._paginate(params, max_entries or settings.max_entries))

    def get_lifelog_by_id(self, lifelog_id: str) -> LogEntry:
        body = self._get(
            f"/lifelogs/{lifelog_id}",
            {"includeMarkdown": "true", "includeHeadings": "true"},
        )
        data = (body.get("data") or {}).get("lifelog")
        if not data:
            raise LifelogAPIError(f"Lifelog {lifelog_id} not found")
        return parse_lifelog(data)

    def get_available_dates(self, days: int = 30, today: date | None = None) -> list[AvailableDate]:
        """Probe the last *days* days and return those with data, newest first.

        A day whose request fails is skipped rather than failing the scan.
        """
        today = today or date.today()
        found: list[AvailableDate] = []

        for offset in range(days):
            day = (today - timedelta(days=offset)).isoformat()
            try:
                entries = self.get_lifelogs_for_date(day, limit=1, max_entries=1)
            except LifelogAPIError:
                logger.warning("Skipping %s: lifelog lookup failed", day)
                continue
            if entries:
                found.append(
                    AvailableDate(
                        date=day,
                        count=len(entries),
                        has_starred=any(e.is_starred for e in entries),
                    )
                )

        return sorted(found, key=lambda d: d.date, reverse=True)

    def validate_api_key(self) -> bool:
        """Return True if a minimal request with this key succeeds."""
        try:
            self._get("/lifelogs", {"limit": 1})
        except LifelogAPIError:
            return False
        return True
