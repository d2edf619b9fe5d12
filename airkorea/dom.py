"""
BeautifulSoup helpers for pulling fields out of the parsed page.

Absence is never an error here: a selector that matches nothing yields an
empty string, and a card without a recoverable pollutant code is dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from bs4 import BeautifulSoup, Tag

from .errors import ExtractionError
from .grade import classify_grade
from .models import Grade
from .selectors import ItemSelectors
from .text import join_text, unwrap_parenthesized

logger = logging.getLogger(__name__)

HTML_PARSER = "html.parser"


def parse_document(html: Union[str, bytes]) -> BeautifulSoup:
    """Parse the raw page body; raises ExtractionError when there is nothing to parse."""
    if isinstance(html, bytes):
        html = html.decode("utf-8", errors="replace")
    if not isinstance(html, str):
        raise ExtractionError(
            f"Page body must be text, got {type(html).__name__}.",
            "Pass the whole response body as returned by the fetch collaborator.",
        )
    if not html.strip():
        raise ExtractionError(
            "Page body is empty.",
            "Check that the request returned the mobile page rather than an empty response.",
        )
    return BeautifulSoup(html, HTML_PARSER)


class Block:
    """One structural unit of the page, usually a pollutant card."""

    def __init__(self, element: Tag):
        self.element = element

    def extract_single(self, selector: Optional[str]) -> str:
        if not selector:
            return ""
        match = self.element.select_one(selector)
        if match is None:
            return ""
        return join_text(match.strings)

    def extract_all(self, selector: str) -> List["Block"]:
        return [Block(element) for element in self.element.select(selector)]

    def __repr__(self) -> str:
        return f"Block(<{self.element.name}>)"


def extract_single(document: Tag, selector: Optional[str]) -> str:
    """First match's trimmed concatenated text, or an empty string."""
    return Block(document).extract_single(selector)


def extract_repeated_blocks(document: Tag, container_selector: str) -> List[Block]:
    """One `Block` per container match, in document order."""
    return Block(document).extract_all(container_selector)


@dataclass(frozen=True)
class ItemMetadata:
    """Per-card fields read from the DOM, before any numeric data is attached."""

    name: str
    unit: str
    grade: Grade
    level_text: str = ""


def read_item(block: Block, items: ItemSelectors) -> Optional[ItemMetadata]:
    """
    Read one card, or return None when its label carries no pollutant code.

    The site reuses the card class for informational panels; those have no
    parenthesized code and must not turn into pollutant records.
    """
    label = block.extract_single(items.name)
    name = unwrap_parenthesized(label)
    if name is None:
        logger.debug("Dropping card without pollutant code: %r", label)
        return None

    return ItemMetadata(
        name=name,
        unit=block.extract_single(items.unit),
        grade=classify_grade(block.extract_single(items.grade)),
        level_text=block.extract_single(items.level),
    )


def extract_item_metadata(document: Tag, items: ItemSelectors) -> List[ItemMetadata]:
    """Metadata for every card with a recoverable code, in presentation order."""
    metadata: List[ItemMetadata] = []
    for block in extract_repeated_blocks(document, items.container):
        item = read_item(block, items)
        if item is not None:
            metadata.append(item)
    return metadata
