"""Main recipe extraction orchestration."""

import logging
from urllib.parse import urlparse

from recipe_ingest.config import Settings, get_settings

from .browser import BrowserStrategy
from .errors import InvalidURLError, NoJSONLDError
from .firecrawl import FirecrawlStrategy
from .http_fetch import HTTPClientStrategy
from .models import Recipe
from .strategies import FetchStrategy, StrategyExecutor

logger = logging.getLogger(__name__)


def validate_url(url: str | None) -> str:
    """
    Validate URL format.

    Returns the stripped URL, raises InvalidURLError otherwise.
    """
    if not url or not url.strip():
        raise InvalidURLError("URL is required")

    url = url.strip()
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise InvalidURLError(f"Invalid URL format: {url}") from e

    if not parsed.scheme or not parsed.netloc:
        raise InvalidURLError(f"Invalid URL format: {url}")
    if parsed.scheme.lower() not in ("http", "https"):
        raise InvalidURLError("URL must use http or https protocol")

    return url


def build_executor(
    settings: Settings | None = None,
    log: logging.Logger | logging.LoggerAdapter = logger,
) -> StrategyExecutor:
    """
    Strategy chain: direct HTTP first, then the configured fallback tier.

    Only one fallback tier is used (Firecrawl or headless browser).
    """
    settings = settings or get_settings()

    strategies: list[FetchStrategy] = [
        HTTPClientStrategy(log=log, timeout=settings.http_timeout_seconds),
    ]

    if settings.fallback_strategy == "firecrawl":
        strategies.append(
            FirecrawlStrategy(
                api_key=settings.firecrawl_api_key,
                log=log,
                api_url=settings.firecrawl_api_url,
                timeout=settings.firecrawl_timeout_seconds,
            )
        )
    elif settings.fallback_strategy == "browser":
        strategies.append(
            BrowserStrategy(
                log=log,
                timeout=settings.browser_timeout_seconds,
                settle_seconds=settings.browser_settle_seconds,
            )
        )

    return StrategyExecutor(*strategies)


def extract_recipe(
    url: str,
    executor: StrategyExecutor | None = None,
    log: logging.Logger | logging.LoggerAdapter = logger,
) -> Recipe | None:
    """
    Extract a recipe from URL using the strategy chain.

    Extraction pipeline:
    1. Validate URL format
    2. Direct HTTP fetch + JSON-LD
    3. Fallback tier (Firecrawl hybrid or headless browser)

    Returns:
        The Recipe, or None when no strategy found one on the page.

    Raises:
        InvalidURLError: URL failed validation.
        RecipeImportError: Any other failure of the last strategy attempted.
    """
    url = validate_url(url)
    executor = executor or build_executor(log=log)

    try:
        return executor.execute(url, log=log.info)
    except NoJSONLDError:
        log.info(f"No recipe structured data found for {url}")
        return None

