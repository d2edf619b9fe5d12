"""
Decoder for the chart-seeding calls embedded in the page script.

The page seeds one chart per pollutant with a call shaped like

    data.addRows([[74,'19시'],[68,'20시'], ... ,[81,'18시']]);

The array literal is loose (single quotes, occasional trailing commas or
placeholder tokens) so it is split on row boundaries rather than parsed as
JSON. Only the first token of each row is numeric data; everything after it
is label text and ignored.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Optional

from bs4 import Tag

from . import quasi_json
from .errors import ExtractionError
from .text import parse_numeric

logger = logging.getLogger(__name__)

Series = List[Optional[float]]

_ROW_BOUNDARY_RE = re.compile(r"\]\s*,\s*\[")


def call_pattern(call_name: str) -> "re.Pattern[str]":
    """Regex capturing the inner list of every `call_name([ ... ]);`."""
    return re.compile(
        r"(?<![\w$])" + re.escape(call_name) + r"\s*\(\s*\[(.*?)\]\s*\)\s*;",
        re.DOTALL,
    )


def find_script_text(document: Tag, script_selector: str, call_name: str) -> str:
    """
    Return the joined text of every script node carrying `call_name` calls.

    Nodes are joined in document order, so charts split over several
    <script> blocks keep the same order as their cards.

    Without such a node no pollutant has numeric data, so its absence is a
    structural failure rather than a missing field.
    """
    nodes = document.select(script_selector)
    if not nodes:
        raise ExtractionError(
            f"No script node matched {script_selector!r}.",
            "The page may have failed to render; check the raw body for <script> blocks.",
        )

    pattern = call_pattern(call_name)
    texts = [node.string or "" for node in nodes]
    carrying = [text for text in texts if pattern.search(text)]
    if carrying:
        return "\n".join(carrying)

    raise ExtractionError(
        f"None of {len(nodes)} script node(s) contains {call_name}([...]); calls.",
        "The chart seeding call may have been renamed; update SeriesSettings.call_name.",
    )


def find_calls(script_text: str, call_name: str) -> List[str]:
    return [match.group(1) for match in call_pattern(call_name).finditer(script_text or "")]


def split_rows(payload: str) -> List[str]:
    """Split `[a,b],[c,d]` into `a,b` and `c,d` without parsing the literal."""
    payload = payload.strip().rstrip(",").strip()
    if not payload:
        return []
    if payload.startswith("["):
        payload = payload[1:]
    if payload.endswith("]"):
        payload = payload[:-1]
    return _ROW_BOUNDARY_RE.split(payload)


def first_token(row: str) -> str:
    token = row.strip().lstrip("[").split(",", 1)[0]
    return token.strip().rstrip("]").strip()


def decode_rows(payload: str) -> Series:
    return [parse_numeric(first_token(row)) for row in split_rows(payload)]


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return parse_numeric(repr(float(value)))
    return parse_numeric(str(value))


def _first_value(row: Any) -> Any:
    if isinstance(row, (list, tuple)):
        return row[0] if row else None
    if isinstance(row, dict):
        return next(iter(row.values()), None)
    return row


def decode_quasi_json(payload: str) -> Series:
    """Decode a payload whose rows are loose object or array literals."""
    rows = quasi_json.loads(f"[{payload}]")
    if not isinstance(rows, list):
        raise quasi_json.QuasiJsonError(f"expected a list of rows, got {type(rows).__name__}")
    return [_to_number(_first_value(row)) for row in rows]


def decode_series(script_text: str, call_name: str = "addRows", payload_format: str = "rows") -> List[Series]:
    """
    Decode every chart call in `script_text`, one vector per call.

    Row order is kept as emitted (oldest first). Rows whose first token is
    not a number become None; short series are returned as they are.
    """
    series: List[Series] = []
    for index, payload in enumerate(find_calls(script_text, call_name)):
        if payload_format == "quasi_json":
            try:
                series.append(decode_quasi_json(payload))
                continue
            except quasi_json.QuasiJsonError as exc:
                logger.warning("Call #%s is not a readable literal (%s), splitting rows instead.", index, exc)
        series.append(decode_rows(payload))
    return series
