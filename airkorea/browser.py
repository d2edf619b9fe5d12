"""
Playwright utilities used to fetch the mobile page.

The extraction pipeline never touches the network; these helpers only turn a
URL into the rendered page body. Playwright errors are not wrapped so callers
see the upstream failure as it happened.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from playwright.sync_api import Browser, BrowserContext, Page, sync_playwright

MOBILE_USER_AGENT = (
    "Mozilla/5.0 (Linux; Android 10; SM-G973N) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36"
)

SYSTEM_CHROMIUM_PATHS = (
    "/usr/bin/chromium",
    "/usr/bin/chromium-browser",
    "/usr/bin/google-chrome",
    "/usr/bin/google-chrome-stable",
)


@dataclass
class BrowserConfig:
    headless: bool = True
    timeout_ms: int = 15_000
    user_agent: str = MOBILE_USER_AGENT
    locale: str = "ko-KR"


def _system_chromium() -> Optional[str]:
    for path in SYSTEM_CHROMIUM_PATHS:
        if os.path.exists(path):
            return path
    return None


@contextmanager
def browser_page(config: BrowserConfig) -> Iterator[Page]:
    """
    Context manager yielding a single Playwright page.

    Closes all resources automatically, even if an exception bubbles up.
    """
    playwright = sync_playwright().start()
    browser: Optional[Browser] = None
    context: Optional[BrowserContext] = None
    try:
        browser = playwright.chromium.launch(
            headless=config.headless,
            args=[
                "--no-sandbox",
                "--disable-dev-shm-usage",
                "--disable-gpu",
                "--disable-extensions",
            ],
            executable_path=_system_chromium(),  # None falls back to the bundled build
        )
        context = browser.new_context(
            user_agent=config.user_agent,
            viewport={"width": 412, "height": 915},
            is_mobile=True,
            locale=config.locale,
            timezone_id="Asia/Seoul",
        )
        page = context.new_page()
        page.set_default_timeout(config.timeout_ms)
        yield page
    finally:
        if context is not None:
            context.close()
        if browser is not None:
            browser.close()
        playwright.stop()


def fetch_page_html(url: str, config: Optional[BrowserConfig] = None) -> str:
    """Load `url` and return the page body after scripts have run."""
    config = config or BrowserConfig()
    with browser_page(config) as page:
        page.goto(url, wait_until="domcontentloaded")
        return page.content()
