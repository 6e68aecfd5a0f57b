"""Direct HTTP fetch strategy."""

import logging
from urllib.parse import urlparse

import httpx

from .errors import FetchError, NoJSONLDError
from .json_ld import extract_recipe_from_html
from .models import Recipe
from .strategies import FetchStrategy

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0

# Status codes sites use when they detect a bot
BOT_BLOCK_STATUS_CODES = frozenset({403, 429})

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


def browser_headers(url: str) -> dict[str, str]:
    """Headers that look like a desktop Chrome navigation to ``url``."""
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,"
            "image/avif,image/webp,image/apng,*/*;q=0.8,"
            "application/signed-exchange;v=b3;q=0.7"
        ),
        "Accept-Language": "en-US,en;q=0.9",
        "DNT": "1",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
        "Sec-Fetch-Dest": "document",
        "Sec-Fetch-Mode": "navigate",
        "Sec-Fetch-Site": "none",
        "Sec-Fetch-User": "?1",
        "Cache-Control": "max-age=0",
    }

    parsed = urlparse(url)
    if parsed.scheme and parsed.netloc:
        headers["Referer"] = f"{parsed.scheme}://{parsed.netloc}"

    return headers


class HTTPClientStrategy(FetchStrategy):
    """
    Fetch the page with a plain HTTP GET and parse its JSON-LD.

    Cheapest strategy, so it goes first. Bot blocks (403/429) and pages
    without JSON-LD are retryable by a more capable strategy.
    """

    name = "HTTP Client"

    def __init__(
        self,
        log: logging.Logger | logging.LoggerAdapter = logger,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ):
        self.log = log
        self.timeout = timeout
        self.transport = transport

    def can_retry(self, error: Exception) -> bool:
        if isinstance(error, NoJSONLDError):
            return True
        return isinstance(error, FetchError) and error.status_code in BOT_BLOCK_STATUS_CODES

    def fetch(self, url: str) -> Recipe:
        # Fresh client per call: the cookie jar lives for this request only
        try:
            with httpx.Client(
                follow_redirects=True,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = client.get(url, headers=browser_headers(url))
                html = response.text
                final_url = str(response.url)
        except httpx.TimeoutException as e:
            raise FetchError(f"failed to fetch URL: request timed out ({e})") from e
        except httpx.HTTPError as e:
            raise FetchError(f"failed to fetch URL: {e}") from e

        if response.status_code != 200:
            raise FetchError(
                f"unexpected status code: {response.status_code}",
                status_code=response.status_code,
            )

        self.log.debug(f"Fetched {len(html)} chars from {final_url}")

        recipe = extract_recipe_from_html(html, base_url=final_url, log=self.log)
        if recipe is None:
            raise NoJSONLDError()
        return recipe
