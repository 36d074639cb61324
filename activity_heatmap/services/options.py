import re
from collections.abc import Mapping

from activity_heatmap.models import CUSTOM_THEME_ID
from activity_heatmap.models import DEFAULT_CELL_RADIUS
from activity_heatmap.models import DEFAULT_CELL_SIZE
from activity_heatmap.models import DEFAULT_THEME_ID
from activity_heatmap.models import MAX_WINDOW_DAYS
from activity_heatmap.models import RenderOptions
from activity_heatmap.services.render import strip_xml_invalid


TRUE_TOKENS = frozenset({"true", "1"})
CUSTOM_COLOR_KEYS = tuple(f"color{level}" for level in range(5))

_COLOR_PATTERN = re.compile(
    r"""
    \#(?:[0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})
    | [a-z]{3,20}
    | (?:rgb|rgba|hsl|hsla)\(\s*[0-9.%]+(?:\s*[,\s]\s*[0-9.%]+){2,3}\s*\)
    """,
    re.IGNORECASE | re.VERBOSE,
)


def parse_int(raw_value: str | None, default: int) -> int:
    if raw_value is None:
        return default
    try:
        return int(raw_value.strip())
    except ValueError:
        return default


def parse_flag(raw_value: str | None) -> bool:
    return raw_value in TRUE_TOKENS


def parse_color(raw_value: str | None) -> str:
    """Return a normalized CSS color, or "" when the value is not one."""

    if raw_value is None:
        return ""
    value = raw_value.strip()
    if _COLOR_PATTERN.fullmatch(value):
        return value
    return ""


def parse_render_options(params: Mapping[str, str]) -> RenderOptions:
    """Build render options from raw query parameters.

    Never raises: unknown keys are ignored, bad numbers keep their defaults and
    out-of-range numbers are clamped by `RenderOptions`.
    """

    theme = params.get("theme", DEFAULT_THEME_ID).strip().lower() or DEFAULT_THEME_ID

    custom_colors = tuple(
        color
        for color in (parse_color(params.get(key)) for key in CUSTOM_COLOR_KEYS)
        if color
    )
    if len(custom_colors) == 5:
        theme = CUSTOM_THEME_ID
    else:
        custom_colors = ()

    return RenderOptions(
        theme=theme,
        window_days=parse_int(params.get("days"), MAX_WINDOW_DAYS),
        cell_size=parse_int(params.get("cell_size"), DEFAULT_CELL_SIZE),
        cell_radius=parse_int(params.get("radius"), DEFAULT_CELL_RADIUS),
        hide_legend=parse_flag(params.get("hide_legend")),
        hide_total=parse_flag(params.get("hide_total")),
        hide_labels=parse_flag(params.get("hide_labels")),
        title=strip_xml_invalid(params.get("title", "")),
        custom_colors=custom_colors,
        background_color=parse_color(params.get("bg_color")),
        text_color=parse_color(params.get("text_color")),
    )
