"""
Page layouts for the Airkorea mobile page.

Pydantic models are used so that any missing or malformed selector simply
raises a validation error when a layout is built, making it easier to spot
typos early. Every CSS selector is compiled with soupsieve during validation,
so a broken selector never reaches extraction time.

The site has gone through two layout eras:
    - "level": each card shows the current level with its unit appended.
    - "timeseries": each card shows name, unit and grade, while the hourly
      values are seeded into charts by calls inside an embedded script.
"""

from typing import Dict, List, Literal, Optional

import soupsieve
from pydantic import BaseModel, Field, validator

LayoutKind = Literal["timeseries", "level"]
PayloadFormat = Literal["rows", "quasi_json"]


def _compile_selector(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError("selector must be a string")
    value = value.strip()
    if not value:
        raise ValueError("selector must not be empty")
    try:
        soupsieve.compile(value)
    except soupsieve.SelectorSyntaxError as exc:
        raise ValueError(f"invalid CSS selector {value!r}: {exc}") from exc
    return value


class ItemSelectors(BaseModel):
    """
    Selectors for the repeated pollutant cards.

    `name`, `unit`, `level` and `grade` are evaluated relative to each
    `container` match.
    """

    container: str = Field(".item", description="Selector matching one card per pollutant.")
    name: str = Field(
        ".ti>.t1",
        description="Display label; the pollutant code sits in parentheses.",
    )
    unit: Optional[str] = Field(
        default=None,
        description="Sub-node holding the unit suffix; empty for composite indices.",
    )
    level: Optional[str] = Field(
        default=None,
        description="Current level with unit appended (level layout only).",
    )
    grade: str = Field(".tx>.t", description="Localized status word (좋음, 보통, ...).")

    @validator("container", "name", "unit", "level", "grade", pre=True, always=True)
    def _check_selector(cls, value):
        return _compile_selector(value)


class SeriesSettings(BaseModel):
    """
    Where the chart-seeding calls live and how their payload is shaped.

    `expected_points` documents the hourly window the site emits. Decoding
    never pads or truncates to it.
    """

    script: str = Field("script", description="Selector for candidate script nodes.")
    call_name: str = Field("addRows", description="Function name of the chart-seeding call.")
    payload_format: PayloadFormat = Field(
        "rows",
        description="'rows' for the bracket splitter, 'quasi_json' for loose object literals.",
    )
    expected_points: int = Field(24, description="Hourly points per series on a complete day.")

    @validator("script", pre=True, always=True)
    def _check_selector(cls, value):
        return _compile_selector(value)

    @validator("call_name", pre=True, always=True)
    def _check_call_name(cls, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("call_name must be a non-empty string")
        return value.strip()


class PageLayout(BaseModel):
    """
    Top-level selectors for one layout era.

    Attributes
    ----------
    name:
        Key used by `get_layout` and the `layout` setting.
    kind:
        Which assembler handles the layout.
    station:
        Selector for the station address.
    observed_at:
        Selector for the source-formatted observation time. Optional because
        the level layout does not always show it.
    items:
        `ItemSelectors` instance describing the pollutant cards.
    series:
        `SeriesSettings` instance; only used by the time-series layout.
    """

    name: str
    kind: LayoutKind = "timeseries"
    station: str = Field(".tit", description="Station address header.")
    observed_at: Optional[str] = Field(default=None, description="Observation time header.")
    items: ItemSelectors = Field(default_factory=ItemSelectors)
    series: SeriesSettings = Field(default_factory=SeriesSettings)

    @validator("station", "observed_at", pre=True, always=True)
    def _check_selector(cls, value):
        return _compile_selector(value)


def get_timeseries_layout() -> PageLayout:
    """
    Layout of the current page, with 24 hourly points per pollutant.

    Cards carry `<span class="t1">미세먼지(PM10)</span>` labels and a
    `.unit` span; the values come from `addRows([[..],[..]]);` calls emitted
    in the same order as the cards.
    """
    return PageLayout(
        name="timeseries",
        kind="timeseries",
        station=".tit",
        observed_at=".tim",
        items=ItemSelectors(
            container=".item",
            name=".ti>.t1",
            unit=".ti>.t2>.unit",
            grade=".tx>.t",
        ),
        series=SeriesSettings(
            script="script",
            call_name="addRows",
            payload_format="rows",
            expected_points=24,
        ),
    )


def get_level_layout() -> PageLayout:
    """Older layout where each card only shows the current level."""
    return PageLayout(
        name="level",
        kind="level",
        station=".tit",
        observed_at=".tim",
        items=ItemSelectors(
            container=".item",
            name=".ti>.t1",
            level=".ti>.t2",
            grade=".tx>.t",
        ),
    )


def get_all_layouts() -> Dict[str, PageLayout]:
    layouts: List[PageLayout] = [get_timeseries_layout(), get_level_layout()]
    return {layout.name: layout for layout in layouts}


def get_layout(name: str) -> PageLayout:
    """Return the layout registered under `name`; raises KeyError otherwise."""
    layouts = get_all_layouts()
    if name not in layouts:
        raise KeyError(f"Unknown page layout: {name!r} (known: {', '.join(sorted(layouts))})")
    return layouts[name]
