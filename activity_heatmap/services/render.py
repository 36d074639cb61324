import logging
import re
from collections.abc import Mapping
from datetime import date
from html import escape

from activity_heatmap.api.schemas.heatmap import ActivityDay
from activity_heatmap.api.schemas.heatmap import ActivityResponse
from activity_heatmap.api.schemas.heatmap import ActivityTotals
from activity_heatmap.models import DailyActivity
from activity_heatmap.models import Layout
from activity_heatmap.services.layout import LEGEND_SWATCH_STEP


logger = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
LEGEND_LESS_X = -25
LEGEND_CAPTION_Y = 10
LEGEND_SWATCH_RADIUS = 2


class RenderError(Exception):
    """Raised when a layout cannot be serialized."""


# Code points XML 1.0 does not allow in documents.
_XML_INVALID_CHARS = re.compile(
    r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]"
)


def strip_xml_invalid(value: str) -> str:
    return _XML_INVALID_CHARS.sub("", value)


def _text(value: object) -> str:
    return escape(strip_xml_invalid(str(value)), quote=True)


def footer_text(layout: Layout) -> str:
    """Raw footer text; callers embedding it must escape it."""

    if layout.title:
        return layout.title
    return f"@{layout.account} Docker Activity • {layout.total_count} total"


def _style_block(layout: Layout) -> list[str]:
    text_color = _text(layout.text_color)
    font_family = _text(layout.font_family)
    text_rule = f"fill: {text_color}; font-family: {font_family};"
    return [
        "  <style>",
        "    .day { shape-rendering: geometricPrecision; "
        "outline: 1px solid rgba(27, 31, 35, 0.06); outline-offset: -1px; }",
        f"    .month-label {{ font-size: {layout.font_size}px; {text_rule} }}",
        f"    .day-label {{ font-size: 9px; {text_rule} }}",
        f"    .title {{ font-size: 11px; {text_rule} font-weight: 600; }}",
        f"    .legend-label {{ font-size: 9px; {text_rule} }}",
        "  </style>",
    ]


def _label_elements(layout: Layout) -> list[str]:
    lines = ["  <!-- Month labels -->"]
    lines.extend(
        f'  <text x="{label.x}" y="{label.y}" class="month-label">'
        f"{_text(label.text)}</text>"
        for label in layout.month_labels
    )
    lines.append("  <!-- Day labels -->")
    lines.extend(
        f'  <text x="{label.x}" y="{label.y}" class="day-label">'
        f"{_text(label.text)}</text>"
        for label in layout.day_labels
    )
    return lines


def _cell_elements(layout: Layout) -> list[str]:
    lines = [
        "  <!-- Activity cells -->",
        f'  <g transform="translate({layout.cells_offset_x}, {layout.cells_offset_y})">',
    ]
    for cell in layout.cells:
        lines.append(
            f'    <rect class="day" x="{cell.x}" y="{cell.y}" width="{cell.width}" '
            f'height="{cell.height}" fill="{_text(cell.color)}" rx="{cell.radius}" '
            f'data-date="{cell.date}" data-count="{cell.count}">'
        )
        lines.append(f"      <title>{_text(cell.label)}: {cell.count} activities</title>")
        lines.append("    </rect>")
    lines.append("  </g>")
    return lines


def _legend_elements(layout: Layout) -> list[str]:
    more_x = len(layout.legend_swatches) * LEGEND_SWATCH_STEP + 5
    lines = [
        "  <!-- Legend -->",
        f'  <g transform="translate({layout.legend_x}, {layout.legend_y})">',
        f'    <text x="{LEGEND_LESS_X}" y="{LEGEND_CAPTION_Y}" class="legend-label">Less</text>',
    ]
    lines.extend(
        f'    <rect x="{swatch.x}" y="0" width="{swatch.size}" height="{swatch.size}" '
        f'fill="{_text(swatch.color)}" rx="{LEGEND_SWATCH_RADIUS}"/>'
        for swatch in layout.legend_swatches
    )
    lines.append(
        f'    <text x="{more_x}" y="{LEGEND_CAPTION_Y}" class="legend-label">More</text>'
    )
    lines.append("  </g>")
    return lines


def render_svg_document(layout: Layout) -> bytes:
    """Serialize a layout into an SVG document.

    Every user-controlled value is escaped here, since the image is embedded
    by third-party pages.

    Raises:
        RenderError: If the document cannot be built or encoded.
    """

    try:
        lines = [
            f'<svg width="100%" height="auto" viewBox="0 0 {layout.width} {layout.height}" '
            f'preserveAspectRatio="xMidYMid meet" xmlns="{SVG_NAMESPACE}">',
            *_style_block(layout),
            f'  <rect width="{layout.width}" height="{layout.height}" '
            f'fill="{_text(layout.background_color)}" rx="6"/>',
        ]
        if not layout.hide_labels:
            lines.extend(_label_elements(layout))
        lines.extend(_cell_elements(layout))
        if not layout.hide_total:
            lines.append("  <!-- Footer -->")
            lines.append(
                f'  <text x="{layout.cells_offset_x}" y="{layout.footer_y}" class="title">'
                f"{_text(footer_text(layout))}</text>"
            )
        if not layout.hide_legend:
            lines.extend(_legend_elements(layout))
        lines.append("</svg>")
        return ("\n".join(lines) + "\n").encode("utf-8")
    except (TypeError, ValueError) as exc:
        # UnicodeEncodeError is a ValueError.
        logger.exception("Failed to serialize heatmap for %r", layout.account)
        raise RenderError("failed to render heatmap SVG") from exc


def summarize_activity(
    account: str,
    window_days: int,
    activities: Mapping[date, DailyActivity],
) -> ActivityResponse:
    """Build the activity summary payload, ordered by date."""

    records = [activities[day] for day in sorted(activities)]
    return ActivityResponse(
        username=account,
        days=window_days,
        totals=ActivityTotals(
            activities=sum(record.total_count for record in records),
            pushes=sum(record.count_for("push") for record in records),
            pulls=sum(record.count_for("pull") for record in records),
            builds=sum(record.count_for("build") for record in records),
        ),
        activity=[
            ActivityDay(
                date=record.day,
                count=record.total_count,
                pushes=record.count_for("push"),
                pulls=record.count_for("pull"),
                builds=record.count_for("build"),
                level=record.level,
            )
            for record in records
        ],
    )


def render_activity_json(
    account: str,
    window_days: int,
    activities: Mapping[date, DailyActivity],
) -> bytes:
    """Serialize the activity summary as JSON bytes.

    Raises:
        RenderError: If the payload cannot be encoded.
    """

    try:
        payload = summarize_activity(account, window_days, activities)
        return payload.model_dump_json().encode("utf-8")
    except (TypeError, ValueError) as exc:
        logger.exception("Failed to serialize activity for %r", account)
        raise RenderError("failed to render activity JSON") from exc
