import pytest

from activity_heatmap.models import DEFAULT_FONT_FAMILY
from activity_heatmap.models import RenderOptions
from activity_heatmap.services.options import parse_color
from activity_heatmap.services.options import parse_render_options


CUSTOM_COLORS = {
    "color0": "#000000",
    "color1": "#111111",
    "color2": "#222222",
    "color3": "#333333",
    "color4": "#444444",
}


def test_empty_params_use_defaults() -> None:
    options = parse_render_options({})

    assert options == RenderOptions()
    assert options.theme == "github"
    assert options.window_days == 365
    assert options.cell_size == 11
    assert options.cell_radius == 2
    assert options.font_family == DEFAULT_FONT_FAMILY
    assert not options.hide_legend
    assert not options.hide_total
    assert not options.hide_labels


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [("50", 20), ("20", 20), ("1", 1), ("0", 11), ("-3", 11), ("abc", 11), ("", 11)],
)
def test_cell_size_is_clamped(raw_value: str, expected: int) -> None:
    assert parse_render_options({"cell_size": raw_value}).cell_size == expected


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [("0", 365), ("9999", 365), ("-5", 365), ("30", 30), (" 7 ", 7), ("week", 365)],
)
def test_days_are_clamped(raw_value: str, expected: int) -> None:
    assert parse_render_options({"days": raw_value}).window_days == expected


@pytest.mark.parametrize(("raw_value", "expected"), [("-1", 2), ("0", 0), ("6", 6), ("x", 2)])
def test_radius_is_normalized(raw_value: str, expected: int) -> None:
    assert parse_render_options({"radius": raw_value}).cell_radius == expected


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [("true", True), ("1", True), ("TRUE", False), ("yes", False), ("0", False), ("", False)],
)
def test_flags_accept_only_true_tokens(raw_value: str, expected: bool) -> None:
    options = parse_render_options(
        {"hide_legend": raw_value, "hide_total": raw_value, "hide_labels": raw_value}
    )

    assert options.hide_legend is expected
    assert options.hide_total is expected
    assert options.hide_labels is expected


def test_theme_is_lower_cased() -> None:
    assert parse_render_options({"theme": "Tokyo-Night"}).theme == "tokyo-night"


def test_five_custom_colors_switch_to_custom_theme() -> None:
    options = parse_render_options({"theme": "nord", **CUSTOM_COLORS})

    assert options.theme == "custom"
    assert options.custom_colors == tuple(CUSTOM_COLORS.values())


def test_incomplete_custom_colors_are_ignored() -> None:
    params = dict(CUSTOM_COLORS, theme="nord")
    del params["color4"]

    options = parse_render_options(params)

    assert options.theme == "nord"
    assert options.custom_colors == ()


def test_unsafe_custom_color_is_discarded() -> None:
    params = dict(CUSTOM_COLORS, color2='red" onload="alert(1)')

    options = parse_render_options(params)

    assert options.theme == "github"
    assert options.custom_colors == ()


def test_background_and_text_overrides() -> None:
    options = parse_render_options({"bg_color": "#0d1117", "text_color": "url(x)"})

    assert options.background_color == "#0d1117"
    assert options.text_color == ""


def test_title_is_kept_raw() -> None:
    options = parse_render_options({"title": '<script>"x"</script>'})

    assert options.title == '<script>"x"</script>'


def test_parsing_is_idempotent() -> None:
    params = {"theme": "Dracula", "days": "90", "cell_size": "40", "title": "hi", **CUSTOM_COLORS}

    assert parse_render_options(params) == parse_render_options(params)


@pytest.mark.parametrize(
    "value",
    ["#abc", "#aabbcc", "#aabbccdd", "transparent", "rebeccapurple", "rgb(1, 2, 3)",
     "rgba(0,0,0,0.5)", "hsl(120, 50%, 50%)"],
)
def test_parse_color_accepts_css_colors(value: str) -> None:
    assert parse_color(value) == value


@pytest.mark.parametrize(
    "value", ["#ggg", "url(x)", "red;}", "#12", "expression(alert(1))", "", None]
)
def test_parse_color_rejects_other_values(value: str | None) -> None:
    assert parse_color(value) == ""


def test_title_drops_characters_invalid_in_xml() -> None:
    options = parse_render_options({"title": "a\x00b\x08c\x0bd\x1fe\tf\ng"})

    assert options.title == "abcde\tf\ng"
