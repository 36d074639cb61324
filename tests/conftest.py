from collections.abc import Callable
from collections.abc import Iterable
from datetime import date

import pytest

from activity_heatmap.clients.activity_client import UpstreamDataError
from activity_heatmap.models import DailyActivity


class StaticActivitySource:
    """Activity source returning a fixed set of records."""

    def __init__(self, activities: Iterable[DailyActivity] = (), fail: bool = False):
        self.activities = {activity.day: activity for activity in activities}
        self.fail = fail
        self.calls: list[tuple[str, int]] = []

    def fetch_daily_activity(
        self, account: str, window_days: int
    ) -> dict[date, DailyActivity]:
        self.calls.append((account, window_days))
        if self.fail:
            raise UpstreamDataError("aggregation API is down")
        return dict(self.activities)


@pytest.fixture
def make_source() -> Callable[..., StaticActivitySource]:
    return StaticActivitySource
