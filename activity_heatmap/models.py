from datetime import date

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationInfo
from pydantic import field_validator

from activity_heatmap.services.levels import MAX_LEVEL
from activity_heatmap.services.levels import activity_level


EVENT_KINDS = ("push", "pull", "build")

DEFAULT_THEME_ID = "github"
CUSTOM_THEME_ID = "custom"
DEFAULT_FONT_FAMILY = (
    "-apple-system, BlinkMacSystemFont, 'Segoe UI', Helvetica, Arial, sans-serif"
)
MAX_WINDOW_DAYS = 365
DEFAULT_CELL_SIZE = 11
MAX_CELL_SIZE = 20
DEFAULT_CELL_RADIUS = 2


class DailyActivity(BaseModel):
    """Aggregated activity for one calendar day, as supplied by the source."""

    model_config = ConfigDict(frozen=True)

    day: date
    total_count: int = Field(default=0, ge=0)
    breakdown: dict[str, int] = Field(default_factory=dict)
    # None means "derive from total_count"; validation always yields an int.
    level: int | None = Field(default=None, validate_default=True)

    @field_validator("level", mode="before")
    @classmethod
    def _resolve_level(cls, value: int | None, info: ValidationInfo) -> int:
        if value is None:
            return activity_level(info.data.get("total_count", 0))
        return min(max(int(value), 0), MAX_LEVEL)

    def count_for(self, kind: str) -> int:
        return self.breakdown.get(kind, 0)


class Theme(BaseModel):
    """Named color ramp with background and text colors."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    background_color: str
    text_color: str
    colors: tuple[str, str, str, str, str]


class RenderOptions(BaseModel):
    """Validated rendering options.

    Out-of-range numbers are coerced instead of rejected, so any instance is
    safe to hand to the layout engine.
    """

    model_config = ConfigDict(frozen=True)

    theme: str = DEFAULT_THEME_ID
    window_days: int = MAX_WINDOW_DAYS
    cell_size: int = DEFAULT_CELL_SIZE
    cell_radius: int = DEFAULT_CELL_RADIUS
    hide_legend: bool = False
    hide_total: bool = False
    hide_labels: bool = False
    title: str = ""
    font_family: str = DEFAULT_FONT_FAMILY
    custom_colors: tuple[str, ...] = ()
    background_color: str = ""
    text_color: str = ""

    @field_validator("window_days")
    @classmethod
    def _clamp_window_days(cls, value: int) -> int:
        if value <= 0 or value > MAX_WINDOW_DAYS:
            return MAX_WINDOW_DAYS
        return value

    @field_validator("cell_size")
    @classmethod
    def _clamp_cell_size(cls, value: int) -> int:
        if value <= 0:
            return DEFAULT_CELL_SIZE
        return min(value, MAX_CELL_SIZE)

    @field_validator("cell_radius")
    @classmethod
    def _clamp_cell_radius(cls, value: int) -> int:
        if value < 0:
            return DEFAULT_CELL_RADIUS
        return value

    @field_validator("font_family")
    @classmethod
    def _default_font_family(cls, value: str) -> str:
        return value.strip() or DEFAULT_FONT_FAMILY


class CalendarDay(BaseModel):
    """One day placed on the week grid, before pixel geometry is applied."""

    model_config = ConfigDict(frozen=True)

    day: date
    column: int
    row: int
    count: int
    level: int


class CalendarGrid(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_date: date
    end_date: date
    days: tuple[CalendarDay, ...]

    @property
    def columns(self) -> int:
        if not self.days:
            return 0
        return self.days[-1].column + 1


class MonthBoundary(BaseModel):
    model_config = ConfigDict(frozen=True)

    column: int
    first_day: date


class GridCell(BaseModel):
    model_config = ConfigDict(frozen=True)

    column: int
    row: int
    x: int
    y: int
    width: int
    height: int
    radius: int
    color: str
    date: str
    label: str
    count: int


class TextLabel(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    text: str


class LegendSwatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int
    size: int
    color: str


class Layout(BaseModel):
    """Pixel geometry and resolved styling for a single render.

    Text fields (account, title, labels, colors, font) are stored raw and must
    be escaped by whoever serializes the layout.
    """

    model_config = ConfigDict(frozen=True)

    width: int
    height: int
    cells_offset_x: int
    cells_offset_y: int
    cells: tuple[GridCell, ...]
    month_labels: tuple[TextLabel, ...]
    day_labels: tuple[TextLabel, ...]
    legend_x: int
    legend_y: int
    legend_swatches: tuple[LegendSwatch, ...]
    footer_y: int
    font_size: int
    font_family: str
    background_color: str
    text_color: str
    account: str
    total_count: int
    title: str
    hide_legend: bool
    hide_total: bool
    hide_labels: bool
