from collections.abc import Iterable
from collections.abc import Mapping
from collections.abc import Sequence
from types import MappingProxyType

from activity_heatmap.models import CUSTOM_THEME_ID
from activity_heatmap.models import DEFAULT_THEME_ID
from activity_heatmap.models import Theme


BUILTIN_THEMES = (
    Theme(
        id="github",
        name="GitHub Dark",
        background_color="transparent",
        text_color="#8b949e",
        colors=("#161b22", "#0e4429", "#006d32", "#26a641", "#39d353"),
    ),
    Theme(
        id="github-light",
        name="GitHub Light",
        background_color="#ffffff",
        text_color="#57606a",
        colors=("#ebedf0", "#9be9a8", "#40c463", "#30a14e", "#216e39"),
    ),
    Theme(
        id="docker",
        name="Docker",
        background_color="transparent",
        text_color="#0db7ed",
        colors=("#1a2634", "#1a4971", "#1d6fa5", "#2496ed", "#6db3f2"),
    ),
    Theme(
        id="dracula",
        name="Dracula",
        background_color="#282a36",
        text_color="#f8f8f2",
        colors=("#44475a", "#6272a4", "#bd93f9", "#ff79c6", "#50fa7b"),
    ),
    Theme(
        id="nord",
        name="Nord",
        background_color="transparent",
        text_color="#d8dee9",
        colors=("#2e3440", "#3b4252", "#5e81ac", "#81a1c1", "#88c0d0"),
    ),
    Theme(
        id="monokai",
        name="Monokai",
        background_color="transparent",
        text_color="#f8f8f2",
        colors=("#272822", "#49483e", "#a6e22e", "#e6db74", "#f92672"),
    ),
    Theme(
        id="one-dark",
        name="One Dark",
        background_color="transparent",
        text_color="#abb2bf",
        colors=("#282c34", "#3e4451", "#61afef", "#98c379", "#e5c07b"),
    ),
    Theme(
        id="tokyo-night",
        name="Tokyo Night",
        background_color="transparent",
        text_color="#a9b1d6",
        colors=("#1a1b26", "#24283b", "#7aa2f7", "#bb9af7", "#73daca"),
    ),
    Theme(
        id="catppuccin",
        name="Catppuccin",
        background_color="transparent",
        text_color="#cdd6f4",
        colors=("#1e1e2e", "#313244", "#89b4fa", "#a6e3a1", "#f5c2e7"),
    ),
    Theme(
        id="ocean",
        name="Ocean",
        background_color="transparent",
        text_color="#6b8fa3",
        colors=("#1a2332", "#1e4976", "#2171b5", "#4292c6", "#6baed6"),
    ),
    Theme(
        id="sunset",
        name="Sunset",
        background_color="transparent",
        text_color="#b38867",
        colors=("#2d1f1f", "#6b3030", "#b54040", "#e06050", "#ff8c66"),
    ),
    Theme(
        id="forest",
        name="Forest",
        background_color="transparent",
        text_color="#7d9c7d",
        colors=("#1a2e1a", "#2d4a2d", "#3d6b3d", "#4d8c4d", "#5dac5d"),
    ),
    Theme(
        id="purple",
        name="Purple",
        background_color="transparent",
        text_color="#9d8abf",
        colors=("#1a1a2e", "#2d2d5a", "#6b3fa0", "#9d4edd", "#c77dff"),
    ),
    Theme(
        id="rose",
        name="Rose",
        background_color="transparent",
        text_color="#bf8a9d",
        colors=("#2e1a24", "#5a2d42", "#a03f6b", "#dd4e9d", "#ff7dc7"),
    ),
    Theme(
        id="minimal",
        name="Minimal",
        background_color="transparent",
        text_color="#666666",
        colors=("#f0f0f0", "#d4d4d4", "#a8a8a8", "#6b6b6b", "#333333"),
    ),
    Theme(
        id="minimal-dark",
        name="Minimal Dark",
        background_color="transparent",
        text_color="#999999",
        colors=("#1a1a1a", "#333333", "#4d4d4d", "#808080", "#b3b3b3"),
    ),
)


class ThemeRegistry:
    """Read-only lookup of named themes.

    Built once and shared between requests; lookups never mutate state, so
    concurrent reads need no locking.
    """

    def __init__(self, themes: Iterable[Theme], default_id: str = DEFAULT_THEME_ID):
        self._themes: Mapping[str, Theme] = MappingProxyType(
            {theme.id: theme for theme in themes}
        )
        if default_id not in self._themes:
            raise ValueError(f"default theme {default_id!r} is not registered")
        self._default_id = default_id

    @property
    def default(self) -> Theme:
        return self._themes[self._default_id]

    def ids(self) -> list[str]:
        return list(self._themes)

    def themes(self) -> list[Theme]:
        return list(self._themes.values())

    def get(self, theme_id: str) -> Theme:
        """Return the named theme, or the default one for unknown ids."""

        return self._themes.get(theme_id.strip().lower(), self.default)

    def resolve(
        self,
        theme_id: str,
        custom_colors: Sequence[str] = (),
        background_color: str = "",
        text_color: str = "",
    ) -> Theme:
        """Resolve the theme used for a render.

        A "custom" theme with exactly five colors bypasses the registry; any
        other combination falls back to a registered theme.
        """

        if theme_id == CUSTOM_THEME_ID and len(custom_colors) == 5:
            return Theme(
                id=CUSTOM_THEME_ID,
                name="Custom",
                background_color=background_color or "transparent",
                text_color=text_color or self.default.text_color,
                colors=tuple(custom_colors),
            )
        return self.get(theme_id)


default_registry = ThemeRegistry(BUILTIN_THEMES)


def resolve_theme(
    theme_id: str,
    custom_colors: Sequence[str] = (),
    background_color: str = "",
    text_color: str = "",
    registry: ThemeRegistry = default_registry,
) -> Theme:
    return registry.resolve(theme_id, custom_colors, background_color, text_color)
