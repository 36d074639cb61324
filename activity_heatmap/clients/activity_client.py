from collections.abc import Mapping
from datetime import date
from typing import Any
from typing import Protocol
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from activity_heatmap.models import DailyActivity
from activity_heatmap.models import EVENT_KINDS


# Item keys used by the aggregation API for each event kind.
BREAKDOWN_KEYS = {"push": "pushes", "pull": "pulls", "build": "builds"}


class UpstreamDataError(Exception):
    """Raised when daily activity cannot be fetched from the aggregation API."""


class ActivitySource(Protocol):
    def fetch_daily_activity(
        self, account: str, window_days: int
    ) -> dict[date, DailyActivity]: ...


def parse_activity_item(item: Any) -> DailyActivity | None:
    """Convert one API item into a record, or None when it is malformed."""

    if not isinstance(item, Mapping):
        return None

    raw_date = item.get("date")
    raw_count = item.get("count")
    if not isinstance(raw_date, str) or not isinstance(raw_count, int):
        return None

    breakdown: dict[str, int] = {}
    for kind in EVENT_KINDS:
        raw_kind_count = item.get(BREAKDOWN_KEYS[kind])
        if isinstance(raw_kind_count, int) and raw_kind_count > 0:
            breakdown[kind] = raw_kind_count

    raw_level = item.get("level")
    try:
        return DailyActivity(
            day=date.fromisoformat(raw_date),
            total_count=raw_count,
            breakdown=breakdown,
            level=raw_level if isinstance(raw_level, int) else None,
        )
    except (ValueError, ValidationError):
        return None


def fetch_daily_activity(
    account: str,
    window_days: int,
    base_url: str,
    token: str | None = None,
    timeout: float = 15.0,
    client: httpx.Client | None = None,
) -> dict[date, DailyActivity]:
    """Fetch per-day activity aggregates for an account from the aggregation API.

    Raises:
        UpstreamDataError: On transport errors, error statuses or an invalid
            response body.
    """

    headers = {
        "Accept": "application/json",
        "User-Agent": "activity-heatmap",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"

    url = f"{base_url.rstrip('/')}/accounts/{quote(account, safe='')}/activity"
    try:
        if client is None:
            response = httpx.get(
                url, params={"days": window_days}, headers=headers, timeout=timeout
            )
        else:
            response = client.get(
                url, params={"days": window_days}, headers=headers, timeout=timeout
            )
        response.raise_for_status()
        payload: Any = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise UpstreamDataError(f"activity request for {account!r} failed") from exc

    if isinstance(payload, Mapping):
        payload = payload.get("activity")
    if not isinstance(payload, list):
        raise UpstreamDataError("activity response is invalid")

    activities: dict[date, DailyActivity] = {}
    for item in payload:
        activity = parse_activity_item(item)
        if activity is not None:
            activities[activity.day] = activity

    return activities


class HTTPActivitySource:
    """Activity source backed by the aggregation HTTP API."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 15.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url
        self.token = token
        self.timeout = timeout
        self._client = client

    def fetch_daily_activity(
        self, account: str, window_days: int
    ) -> dict[date, DailyActivity]:
        return fetch_daily_activity(
            account=account,
            window_days=window_days,
            base_url=self.base_url,
            token=self.token,
            timeout=self.timeout,
            client=self._client,
        )
