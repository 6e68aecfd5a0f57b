"""Headless browser fetch strategy (Playwright)."""

import logging

from .errors import ConfigurationError, FetchError, NoJSONLDError
from .http_fetch import USER_AGENT
from .json_ld import extract_recipe_from_html
from .models import Recipe
from .strategies import FetchStrategy

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 20.0
DEFAULT_SETTLE_SECONDS = 1.0

# Hide the usual automation tells from bot detection
CHROMIUM_ARGS = [
    "--disable-blink-features=AutomationControlled",
    "--no-sandbox",
    "--disable-dev-shm-usage",
]


class BrowserStrategy(FetchStrategy):
    """
    Render the page in headless Chromium and parse its JSON-LD.

    Alternative fallback tier to Firecrawl for sites that block plain HTTP
    clients. Always last, never retryable.
    """

    name = "Headless Browser"

    def __init__(
        self,
        log: logging.Logger | logging.LoggerAdapter = logger,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        settle_seconds: float = DEFAULT_SETTLE_SECONDS,
    ):
        self.log = log
        self.timeout = timeout
        self.settle_seconds = settle_seconds

    def can_retry(self, error: Exception) -> bool:
        return False

    def fetch(self, url: str) -> Recipe:
        html = self._render(url)
        recipe = extract_recipe_from_html(html, base_url=url, log=self.log)
        if recipe is None:
            raise NoJSONLDError()
        return recipe

    def _render(self, url: str) -> str:
        try:
            from playwright.sync_api import Error as PlaywrightError
            from playwright.sync_api import sync_playwright
        except ImportError as e:
            raise ConfigurationError(
                "playwright is not installed; install the 'browser' extra"
            ) from e

        timeout_ms = self.timeout * 1000
        try:
            with sync_playwright() as p:
                browser = p.chromium.launch(
                    headless=True,
                    args=CHROMIUM_ARGS,
                    ignore_default_args=["--enable-automation"],
                    timeout=timeout_ms,
                )
                try:
                    page = browser.new_page(
                        user_agent=USER_AGENT,
                        viewport={"width": 1920, "height": 1080},
                        extra_http_headers={"Accept-Language": "en-US,en;q=0.9"},
                    )
                    page.goto(url, wait_until="load", timeout=timeout_ms)
                    # Give client-side scripts a moment to inject JSON-LD
                    page.wait_for_timeout(self.settle_seconds * 1000)
                    return page.content()
                finally:
                    browser.close()
        except PlaywrightError as e:
            raise FetchError(f"headless browser failed: {e}") from e
