import logging
from datetime import date

from activity_heatmap.clients.activity_client import ActivitySource
from activity_heatmap.clients.activity_client import UpstreamDataError
from activity_heatmap.models import DailyActivity
from activity_heatmap.models import MAX_WINDOW_DAYS
from activity_heatmap.models import RenderOptions
from activity_heatmap.services.calendar_grid import build_grid
from activity_heatmap.services.calendar_grid import month_boundaries
from activity_heatmap.services.calendar_grid import window_first_day
from activity_heatmap.services.layout import compute_layout
from activity_heatmap.services.render import render_activity_json
from activity_heatmap.services.render import render_svg_document
from activity_heatmap.services.themes import ThemeRegistry
from activity_heatmap.services.themes import default_registry


logger = logging.getLogger(__name__)


def _fetch(
    source: ActivitySource, account: str, window_days: int
) -> dict[date, DailyActivity]:
    try:
        return source.fetch_daily_activity(account, window_days)
    except UpstreamDataError:
        logger.warning("Activity fetch failed for %r", account)
        raise
    except Exception as exc:
        logger.warning("Activity fetch failed for %r", account)
        raise UpstreamDataError(f"activity source failed for {account!r}") from exc


def render_svg(
    account: str,
    options: RenderOptions,
    source: ActivitySource,
    today: date | None = None,
    registry: ThemeRegistry = default_registry,
) -> bytes:
    """Render the activity heatmap of `account` as an SVG document.

    Raises:
        UpstreamDataError: If the activity source fails; nothing is rendered.
        RenderError: If serialization fails.
    """

    today = today or date.today()
    activities = _fetch(source, account, options.window_days)

    theme = registry.resolve(
        options.theme,
        options.custom_colors,
        options.background_color,
        options.text_color,
    )
    grid = build_grid(activities, options.window_days, today)
    layout = compute_layout(grid, month_boundaries(grid), options, theme, account)
    return render_svg_document(layout)


def render_json(
    account: str,
    window_days: int,
    source: ActivitySource,
    today: date | None = None,
) -> bytes:
    """Render the per-day activity summary of `account` as JSON.

    Records outside the trailing window ending at `today` are dropped.
    """

    if window_days <= 0 or window_days > MAX_WINDOW_DAYS:
        window_days = MAX_WINDOW_DAYS
    today = today or date.today()
    activities = _fetch(source, account, window_days)

    first_day = window_first_day(window_days, today)
    in_window = {
        day: activity
        for day, activity in activities.items()
        if first_day <= day <= today
    }
    return render_activity_json(account, window_days, in_window)


def list_themes(registry: ThemeRegistry = default_registry) -> list[str]:
    return registry.ids()
