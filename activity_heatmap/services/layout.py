from collections.abc import Sequence
from datetime import date

from activity_heatmap.models import CalendarGrid
from activity_heatmap.models import GridCell
from activity_heatmap.models import Layout
from activity_heatmap.models import LegendSwatch
from activity_heatmap.models import MonthBoundary
from activity_heatmap.models import RenderOptions
from activity_heatmap.models import TextLabel
from activity_heatmap.models import Theme
from activity_heatmap.services.calendar_grid import DAYS_PER_WEEK


# Geometry below is shared with existing embed snippets; changing it shifts
# every published image.
CELL_MARGIN = 3
LABELS_LEFT_MARGIN = 40
COMPACT_LEFT_MARGIN = 10
RIGHT_PADDING = 20
TOP_MARGIN = 25
FOOTER_BAND_HEIGHT = 30
COMPACT_BOTTOM_MARGIN = 10
FONT_SIZE = 10

MONTH_LABEL_Y = 15
DAY_LABEL_X = 5
DAY_LABEL_BASELINE = 8
DAY_LABEL_ROWS = ((1, "Mon"), (3, "Wed"), (5, "Fri"))

FOOTER_OFFSET = 18
LEGEND_OFFSET = 5
LEGEND_INSET = 120
LEGEND_SWATCH_SIZE = 11
LEGEND_SWATCH_STEP = 14
# From the "Less" caption to the right edge of the canvas.
LEGEND_FOOTPRINT = LEGEND_INSET + 25

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_day_label(day: date) -> str:
    """Human readable date such as "Jan 2, 2006", independent of locale."""

    return f"{MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"


def compute_layout(
    grid: CalendarGrid,
    boundaries: Sequence[MonthBoundary],
    options: RenderOptions,
    theme: Theme,
    account: str,
) -> Layout:
    """Compute pixel geometry for a grid rendered with the given options."""

    cell_step = options.cell_size + CELL_MARGIN
    left_margin = COMPACT_LEFT_MARGIN if options.hide_labels else LABELS_LEFT_MARGIN

    cells_width = grid.columns * cell_step
    cells_height = DAYS_PER_WEEK * cell_step

    width = left_margin + cells_width + RIGHT_PADDING
    if not options.hide_legend:
        width = max(width, left_margin + LEGEND_FOOTPRINT)

    bottom_margin = COMPACT_BOTTOM_MARGIN
    if not options.hide_total or not options.hide_legend:
        bottom_margin = FOOTER_BAND_HEIGHT
    height = TOP_MARGIN + cells_height + bottom_margin

    cells = tuple(
        GridCell(
            column=day.column,
            row=day.row,
            x=day.column * cell_step,
            y=day.row * cell_step,
            width=options.cell_size,
            height=options.cell_size,
            radius=options.cell_radius,
            color=theme.colors[day.level],
            date=day.day.isoformat(),
            label=format_day_label(day.day),
            count=day.count,
        )
        for day in grid.days
    )

    month_labels: tuple[TextLabel, ...] = ()
    day_labels: tuple[TextLabel, ...] = ()
    if not options.hide_labels:
        month_labels = tuple(
            TextLabel(
                x=left_margin + boundary.column * cell_step,
                y=MONTH_LABEL_Y,
                text=MONTH_NAMES[boundary.first_day.month - 1],
            )
            for boundary in boundaries
        )
        day_labels = tuple(
            TextLabel(
                x=DAY_LABEL_X,
                y=TOP_MARGIN + row * cell_step + DAY_LABEL_BASELINE,
                text=text,
            )
            for row, text in DAY_LABEL_ROWS
        )

    legend_swatches = tuple(
        LegendSwatch(x=index * LEGEND_SWATCH_STEP, size=LEGEND_SWATCH_SIZE, color=color)
        for index, color in enumerate(theme.colors)
    )

    return Layout(
        width=width,
        height=height,
        cells_offset_x=left_margin,
        cells_offset_y=TOP_MARGIN,
        cells=cells,
        month_labels=month_labels,
        day_labels=day_labels,
        legend_x=width - LEGEND_INSET,
        legend_y=TOP_MARGIN + cells_height + LEGEND_OFFSET,
        legend_swatches=legend_swatches,
        footer_y=TOP_MARGIN + cells_height + FOOTER_OFFSET,
        font_size=FONT_SIZE,
        font_family=options.font_family,
        background_color=theme.background_color,
        text_color=theme.text_color,
        account=account,
        total_count=sum(day.count for day in grid.days),
        title=options.title,
        hide_legend=options.hide_legend,
        hide_total=options.hide_total,
        hide_labels=options.hide_labels,
    )
