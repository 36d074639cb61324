from datetime import date

from pydantic import BaseModel


class ActivityDay(BaseModel):
    """Single day item used in the activity response."""

    date: date
    count: int
    pushes: int
    pulls: int
    builds: int
    level: int


class ActivityTotals(BaseModel):
    activities: int
    pushes: int
    pulls: int
    builds: int


class ActivityResponse(BaseModel):
    """Per-day activity summary for programmatic consumers."""

    username: str
    days: int
    totals: ActivityTotals
    activity: list[ActivityDay]


class ThemeItem(BaseModel):
    id: str
    name: str
    bg_color: str
    text_color: str
    colors: list[str]


class ThemesResponse(BaseModel):
    themes: list[ThemeItem]
