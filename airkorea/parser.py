"""
Assembly of `AirStatus` records from a parsed page.

Each layout era has its own selector/decoder pair:
    - `parse_timeseries` reads card metadata from the DOM and hourly values
      from the chart calls in the embedded script.
    - `parse_level` reads both the metadata and the single current level
      from the DOM.
Both feed `assemble`, so callers get the same output shape either way.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Optional, Sequence, Union

from bs4 import Tag

from .dom import ItemMetadata, extract_item_metadata, extract_single, parse_document
from .models import AirStatus, Pollutant
from .script import Series, decode_series, find_script_text
from .selectors import PageLayout, get_timeseries_layout
from .text import parse_numeric

logger = logging.getLogger(__name__)

# Level text such as "0.003ppm", "45㎍/㎥" or "81" (composite index).
_LEVEL_RE = re.compile(r"^([\d.-]+)(.*)$")


def assemble(
    station: str,
    observed_at: str,
    metadata: Sequence[ItemMetadata],
    series: Sequence[Sequence[Optional[float]]],
) -> AirStatus:
    """
    Pair card metadata with numeric series by position.

    The site emits one chart call per card, in card order, so the i-th
    metadata entry belongs to the i-th series. Cards without a series at
    their index are dropped; surplus series are ignored.

    Parameters
    ----------
    station
        Station address as shown on the page.
    observed_at
        Source-formatted observation time; kept as text.
    metadata
        Output of `extract_item_metadata`, already filtered to cards with a
        pollutant code.
    series
        One readings vector per card.
    """
    pollutants: List[Pollutant] = []
    for index, item in enumerate(metadata):
        if index >= len(series):
            logger.debug("No series for card #%s (%s), dropping it.", index, item.name)
            continue
        pollutants.append(
            Pollutant(
                name=item.name,
                unit=item.unit,
                grade=item.grade,
                readings=tuple(series[index]),
            )
        )

    if len(series) > len(metadata):
        logger.debug("Ignoring %s series without a matching card.", len(series) - len(metadata))

    return AirStatus(
        station_address=station,
        observed_at=observed_at,
        pollutants=tuple(pollutants),
    )


def parse_timeseries(document: Tag, layout: PageLayout) -> AirStatus:
    station = extract_single(document, layout.station)
    observed_at = extract_single(document, layout.observed_at)
    metadata = extract_item_metadata(document, layout.items)

    settings = layout.series
    script_text = find_script_text(document, settings.script, settings.call_name)
    series = decode_series(script_text, settings.call_name, settings.payload_format)

    if len(series) != len(metadata):
        logger.debug("Found %s cards but %s chart calls.", len(metadata), len(series))
    for item, values in zip(metadata, series):
        if len(values) != settings.expected_points:
            logger.debug("%s has %s of %s hourly points.", item.name, len(values), settings.expected_points)

    return assemble(station, observed_at, metadata, series)


def _split_level(item: ItemMetadata) -> Optional[ItemMetadata]:
    match = _LEVEL_RE.match(item.level_text)
    if match is None:
        logger.debug("Dropping %s: level text %r has no number.", item.name, item.level_text)
        return None
    unit = item.unit or match.group(2).strip()
    return ItemMetadata(name=item.name, unit=unit, grade=item.grade, level_text=match.group(1))


def parse_level(document: Tag, layout: PageLayout) -> AirStatus:
    station = extract_single(document, layout.station)
    observed_at = extract_single(document, layout.observed_at)

    metadata: List[ItemMetadata] = []
    series: List[Series] = []
    for item in extract_item_metadata(document, layout.items):
        item = _split_level(item)
        if item is None:
            continue
        metadata.append(item)
        series.append([parse_numeric(item.level_text)])

    return assemble(station, observed_at, metadata, series)


PARSERS: Dict[str, Callable[[Tag, PageLayout], AirStatus]] = {
    "timeseries": parse_timeseries,
    "level": parse_level,
}


def parse_page(html: Union[str, bytes], layout: Optional[PageLayout] = None) -> AirStatus:
    """
    Extract an `AirStatus` from a raw page body.

    Raises `ExtractionError` when the body is empty or, for the time-series
    layout, when the script carrying the chart calls is missing.
    """
    layout = layout or get_timeseries_layout()
    document = parse_document(html)
    return PARSERS[layout.kind](document, layout)
