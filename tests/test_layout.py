from datetime import date

from activity_heatmap.models import DailyActivity
from activity_heatmap.models import RenderOptions
from activity_heatmap.services.calendar_grid import build_grid
from activity_heatmap.services.calendar_grid import month_boundaries
from activity_heatmap.services.layout import compute_layout
from activity_heatmap.services.layout import format_day_label
from activity_heatmap.services.themes import resolve_theme


TODAY = date(2026, 10, 19)


def layout_for(options: RenderOptions, activities: dict | None = None):
    grid = build_grid(activities or {}, options.window_days, TODAY)
    theme = resolve_theme(options.theme)
    return compute_layout(grid, month_boundaries(grid), options, theme, "octocat")


def test_default_layout_geometry() -> None:
    layout = layout_for(RenderOptions())

    assert layout.width == 40 + 53 * 14 + 20
    assert layout.height == 25 + 7 * 14 + 30
    assert layout.cells_offset_x == 40
    assert layout.cells_offset_y == 25
    assert layout.footer_y == 25 + 98 + 18
    assert layout.legend_y == 25 + 98 + 5
    assert layout.legend_x == layout.width - 120
    assert len(layout.cells) == 366


def test_cells_are_positioned_by_week_and_weekday() -> None:
    layout = layout_for(RenderOptions(cell_size=20, cell_radius=4))

    last = layout.cells[-1]
    assert (last.column, last.row) == (52, 1)
    assert (last.x, last.y) == (52 * 23, 23)
    assert (last.width, last.height, last.radius) == (20, 20, 4)
    assert last.date == "2026-10-19"
    assert last.label == "Oct 19, 2026"


def test_cell_colors_follow_levels() -> None:
    activities = {TODAY: DailyActivity(day=TODAY, total_count=7)}

    layout = layout_for(RenderOptions(theme="dracula"), activities)

    theme = resolve_theme("dracula")
    assert layout.cells[-1].color == theme.colors[3]
    assert layout.cells[0].color == theme.colors[0]
    assert layout.total_count == 7
    assert [swatch.color for swatch in layout.legend_swatches] == list(theme.colors)


def test_labels_are_placed_when_visible() -> None:
    layout = layout_for(RenderOptions())

    assert [label.text for label in layout.day_labels] == ["Mon", "Wed", "Fri"]
    assert [label.y for label in layout.day_labels] == [47, 75, 103]
    assert all(label.x == 5 for label in layout.day_labels)
    assert layout.month_labels[0].text == "Oct"
    assert layout.month_labels[0].x == 40
    assert layout.month_labels[1].text == "Nov"
    assert layout.month_labels[1].x == 40 + 2 * 14
    assert all(label.y == 15 for label in layout.month_labels)


def test_hidden_labels_shrink_left_margin() -> None:
    layout = layout_for(RenderOptions(hide_labels=True))

    assert layout.cells_offset_x == 10
    assert layout.width == 10 + 53 * 14 + 20
    assert layout.month_labels == ()
    assert layout.day_labels == ()


def test_footer_band_collapses_when_legend_and_total_hidden() -> None:
    layout = layout_for(RenderOptions(hide_legend=True, hide_total=True))

    assert layout.height == 25 + 98 + 10


def test_footer_band_kept_when_only_legend_hidden() -> None:
    layout = layout_for(RenderOptions(hide_legend=True))

    assert layout.height == 25 + 98 + 30


def test_narrow_window_leaves_room_for_legend() -> None:
    layout = layout_for(RenderOptions(window_days=1))

    assert len(layout.cells) == 2
    assert layout.width == 40 + 145
    assert layout.legend_x - 25 >= layout.cells_offset_x


def test_narrow_window_without_legend_keeps_grid_width() -> None:
    layout = layout_for(RenderOptions(window_days=1, hide_legend=True))

    assert layout.width == 40 + 14 + 20


def test_layout_keeps_raw_title() -> None:
    layout = layout_for(RenderOptions(title="<b>mine</b>"))

    assert layout.title == "<b>mine</b>"
    assert layout.account == "octocat"


def test_format_day_label() -> None:
    assert format_day_label(date(2006, 1, 2)) == "Jan 2, 2006"
