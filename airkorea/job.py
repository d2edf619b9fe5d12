"""
High-level orchestration for a single station lookup.

The job loads configuration, builds the page URL for a coordinate, fetches
the page through the browser helpers, and hands the body to the parser.
"""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlencode

import yaml

from .browser import BrowserConfig, fetch_page_html
from .errors import ExtractionError
from .models import AirStatus
from .parser import parse_page
from .selectors import get_layout

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SETTINGS_PATH = PROJECT_ROOT / "config" / "settings.yaml"

DEFAULT_BASE_URL = "http://m.airkorea.or.kr/main"
BASE_URL_ENV = "AIRKOREA_URL"

Fetcher = Callable[[str, BrowserConfig], str]


def load_settings(settings_path: Path = SETTINGS_PATH) -> Dict[str, Any]:
    with settings_path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)["default"]


def base_url_override() -> str:
    return os.environ.get(BASE_URL_ENV, "").strip()


def resolve_base_url(settings: Dict[str, Any]) -> str:
    """The AIRKOREA_URL environment variable wins over the configured base URL."""
    return base_url_override() or settings.get("base_url") or DEFAULT_BASE_URL


def build_url(longitude: float, latitude: float, base_url: str, device_id: Optional[str] = None) -> str:
    params: Dict[str, Any] = {"lng": longitude, "lat": latitude}
    if device_id:
        params["deviceID"] = device_id
    return f"{base_url}?{urlencode(params)}"


def page_url(longitude: float, latitude: float, settings: Dict[str, Any]) -> str:
    """
    URL of the station page for a coordinate.

    An overridden base URL gets only `lng` and `lat`; the configured
    `device_id` belongs to the real site.
    """
    override = base_url_override()
    if override:
        return build_url(longitude, latitude, override)
    return build_url(longitude, latitude, resolve_base_url(settings), settings.get("device_id"))


def browser_config(settings: Dict[str, Any]) -> BrowserConfig:
    playwright_cfg = settings.get("playwright") or {}
    return BrowserConfig(
        headless=bool(playwright_cfg.get("headless", True)),
        timeout_ms=int(playwright_cfg.get("timeout_ms", 15_000)),
    )


def search(
    longitude: float,
    latitude: float,
    settings: Optional[Dict[str, Any]] = None,
    fetch: Fetcher = fetch_page_html,
) -> AirStatus:
    """
    Look up the station nearest to a coordinate and extract its readings.

    A page that renders without its chart script is fetched again, up to
    `max_attempts` times, before the ExtractionError is re-raised. Errors
    raised by `fetch` are not caught.
    """
    if settings is None:
        settings = load_settings()

    layout = get_layout(settings.get("layout", "timeseries"))
    url = page_url(longitude, latitude, settings)
    config = browser_config(settings)
    max_attempts = max(1, int(settings.get("max_attempts", 3)))
    retry_delay = float(settings.get("retry_delay_seconds", 1.0))

    last_error: Optional[ExtractionError] = None
    for attempt in range(1, max_attempts + 1):
        logger.info("Fetching %s (attempt %s/%s)", url, attempt, max_attempts)
        body = fetch(url, config)
        try:
            status = parse_page(body, layout)
        except ExtractionError as exc:
            last_error = exc
            if attempt < max_attempts:
                logger.warning("Attempt %s/%s failed: %s, retrying...", attempt, max_attempts, exc)
                time.sleep(retry_delay)
            continue

        logger.info("Station %s: %s pollutant(s)", status.station_address, len(status))
        return status

    raise last_error
