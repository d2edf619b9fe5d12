"""Classification of the localized status word shown on each pollutant card."""

from __future__ import annotations

from typing import Optional, Tuple

from .models import Grade

# 좋음 / 보통 / 나쁨 / 매우나쁨
GRADE_PREFIXES: Tuple[Tuple[str, Grade], ...] = (
    ("좋", Grade.GOOD),
    ("보", Grade.NORMAL),
    ("나", Grade.BAD),
    ("매", Grade.CRITICAL),
)


def classify_grade(text: Optional[str]) -> Grade:
    """
    Map a status word onto a `Grade` by its leading glyph.

    Prefixes are checked in order and the first match wins. Anything else,
    including empty input, is `Grade.NONE`.
    """
    if not text:
        return Grade.NONE
    text = text.lstrip()
    for prefix, grade in GRADE_PREFIXES:
        if text.startswith(prefix):
            return grade
    return Grade.NONE
