"""
Utilities for normalizing text fragments pulled out of the mobile page.

The functions here focus on:
    - Collapsing whitespace and stripping control characters from node text.
    - Recovering pollutant codes from display labels such as "미세먼지(PM10)".
    - Normalizing numeric tokens (treating placeholders such as "-" as NULL).
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Optional

NULL_TOKENS = {"", "-", "—", "--", "——", "null", "NULL", "undefined", "NaN", "nan"}

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f\u200b-\u200d\ufeff]")
_WHITESPACE_RE = re.compile(r"\s+")
_PARENTHESIZED_RE = re.compile(r"\((.+?)\)")
_QUOTES = ("'", '"')


def trim_text(raw: Optional[str]) -> str:
    """Collapse whitespace runs to single spaces and strip both ends."""
    if not raw:
        return ""
    text = raw.replace("&nbsp;", " ").replace("\xa0", " ")
    text = _CONTROL_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def join_text(fragments: Iterable[str]) -> str:
    """
    Concatenate text nodes the way they render inside a single field.

    Each node is trimmed on its own before joining, so indentation between
    nested tags never leaks into the value.
    """
    return "".join(piece for piece in (trim_text(fragment) for fragment in fragments) if piece)


def unwrap_parenthesized(value: Optional[str]) -> Optional[str]:
    """
    Return the content of the first parenthesized group.

    >>> unwrap_parenthesized("측정소(PM10)")
    'PM10'
    >>> unwrap_parenthesized("측정소") is None
    True
    """
    if not value:
        return None
    match = _PARENTHESIZED_RE.search(value)
    if match is None:
        return None
    inner = trim_text(match.group(1))
    return inner or None


def strip_quotes(token: str) -> str:
    token = token.strip()
    if len(token) >= 2 and token[0] == token[-1] and token[0] in _QUOTES:
        return token[1:-1].strip()
    return token


def parse_numeric(value: Optional[str]) -> Optional[float]:
    """Convert raw numeric tokens into floats with NULL token handling."""
    if value is None:
        return None
    raw = strip_quotes(trim_text(value))
    if raw in NULL_TOKENS:
        return None
    try:
        number = float(raw)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number
