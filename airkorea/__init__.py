"""
Airkorea mobile page scraper package.

The modules expose:
    - text: Whitespace normalization and small token helpers.
    - grade: Localized status word to grade classification.
    - models: Value types returned by the extraction pipeline.
    - selectors: Page layouts (CSS selectors and script call settings).
    - dom: BeautifulSoup helpers for selecting fields and item blocks.
    - script: Decoder for the chart-seeding calls embedded in the page.
    - quasi_json: Loose script literal to JSON normalizer.
    - parser: Record assembly for each page-layout era.
    - browser: Playwright helpers used to fetch the raw page.
    - job: URL construction, settings and the `search` entry point.
    - errors: The exception raised when a page cannot be extracted.
"""

__all__ = [
    "text",
    "grade",
    "models",
    "selectors",
    "dom",
    "script",
    "quasi_json",
    "parser",
    "browser",
    "job",
    "errors",
]
