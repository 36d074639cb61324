from collections.abc import Mapping
from datetime import date
from datetime import timedelta

from activity_heatmap.models import CalendarDay
from activity_heatmap.models import CalendarGrid
from activity_heatmap.models import DailyActivity
from activity_heatmap.models import MAX_WINDOW_DAYS
from activity_heatmap.models import MonthBoundary
from activity_heatmap.services.levels import activity_level


DAYS_PER_WEEK = 7


def weekday_index(day: date) -> int:
    """Return the Sunday-first weekday index (Sunday=0 .. Saturday=6)."""

    return (day.weekday() + 1) % DAYS_PER_WEEK


def week_start(day: date) -> date:
    return day - timedelta(days=weekday_index(day))


def window_first_day(window_days: int, today: date) -> date:
    """First date inside the trailing window ending at today."""

    if window_days <= 0 or window_days > MAX_WINDOW_DAYS:
        window_days = MAX_WINDOW_DAYS
    return today - timedelta(days=window_days - 1)


def window_start(window_days: int, today: date) -> date:
    """First date drawn for a window, aligned back to the start of its week."""

    return week_start(window_first_day(window_days, today))


def build_grid(
    activities: Mapping[date, DailyActivity],
    window_days: int,
    today: date,
) -> CalendarGrid:
    """Place every day from the aligned window start through today on the grid.

    Rows are weekdays and columns are whole weeks. Days missing from
    `activities`, and the padding days before the window that complete the
    first week, are drawn as zero activity.
    """

    first_day = window_first_day(window_days, today)
    start_date = week_start(first_day)

    days: list[CalendarDay] = []
    current_day = start_date
    column = 0
    while current_day <= today:
        row = weekday_index(current_day)
        activity = activities.get(current_day) if current_day >= first_day else None
        count = activity.total_count if activity is not None else 0
        days.append(
            CalendarDay(
                day=current_day,
                column=column,
                row=row,
                count=count,
                level=activity_level(count),
            )
        )
        if row == DAYS_PER_WEEK - 1:
            column += 1
        current_day += timedelta(days=1)

    return CalendarGrid(start_date=start_date, end_date=today, days=tuple(days))


def month_boundaries(grid: CalendarGrid) -> list[MonthBoundary]:
    """Columns whose week starts in a different month than the previous label."""

    boundaries: list[MonthBoundary] = []
    current_month: tuple[int, int] | None = None
    for column in range(grid.columns):
        first_day = grid.start_date + timedelta(days=column * DAYS_PER_WEEK)
        month = (first_day.year, first_day.month)
        if month != current_month:
            current_month = month
            boundaries.append(MonthBoundary(column=column, first_day=first_day))
    return boundaries
