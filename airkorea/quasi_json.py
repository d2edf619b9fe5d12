"""
Normalizer for the loose object literals some chart scripts emit.

Literals such as `[{v:74,f:'19시'}, {v:null}]` are not valid JSON
(unquoted keys, single-quoted strings, comments). They are valid Hjson, so
the hjson reader takes them as they are and re-emits strict JSON.
"""

from __future__ import annotations

from typing import Any

import hjson


class QuasiJsonError(ValueError):
    """Raised when a literal cannot be read as Hjson."""


def loads(text: str) -> Any:
    if not isinstance(text, str) or not text.strip():
        raise QuasiJsonError("empty literal")
    try:
        return hjson.loads(text)
    except hjson.HjsonDecodeError as exc:
        raise QuasiJsonError(f"cannot read literal: {exc}") from exc


def convert(text: str) -> str:
    """Return the literal re-emitted as pretty-printed JSON."""
    return hjson.dumpsJSON(loads(text), indent=2, ensure_ascii=False)
