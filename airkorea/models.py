"""Value types produced by the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Optional, Tuple


class Grade(IntEnum):
    """Site-assigned severity bucket; unknown sorts first."""

    NONE = 0
    GOOD = 1
    NORMAL = 2
    BAD = 3
    CRITICAL = 4

    def __str__(self) -> str:
        return self.name.capitalize()


def _format_value(value: float) -> str:
    text = repr(value)
    return text[:-2] if text.endswith(".0") else text


@dataclass(frozen=True)
class Pollutant:
    """
    One pollutant card from the page.

    `readings` holds a single value for the instantaneous-level layout and the
    hourly series (oldest first) for the time-series layout. Tokens that did
    not parse as numbers are kept as `None`.
    """

    name: str
    unit: str
    grade: Grade
    readings: Tuple[Optional[float], ...] = ()

    @property
    def latest(self) -> Optional[float]:
        if not self.readings:
            return None
        return self.readings[-1]

    @property
    def level(self) -> Optional[float]:
        return self.latest

    def __str__(self) -> str:
        value = "--" if self.latest is None else _format_value(self.latest)
        return f"{self.name:<6} {value + self.unit:<10} {self.grade}"


@dataclass(frozen=True)
class AirStatus:
    station_address: str
    observed_at: str
    pollutants: Tuple[Pollutant, ...] = ()

    def __iter__(self) -> Iterator[Pollutant]:
        return iter(self.pollutants)

    def __len__(self) -> int:
        return len(self.pollutants)
