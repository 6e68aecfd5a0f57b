"""Recipe import exceptions.

These are raised by the fetch strategies and the parser, and are mapped to
HTTP status codes by the web layer.
"""


class RecipeImportError(Exception):
    """Base exception for recipe import errors."""


class InvalidURLError(RecipeImportError):
    """The URL is empty, not http(s), or has no host."""


class ConfigurationError(RecipeImportError):
    """Required credentials or optional dependencies are missing."""


class FetchError(RecipeImportError):
    """Fetching the page failed.

    Covers transport errors, timeouts and non-200 responses. When the server
    answered, ``status_code`` holds the HTTP status.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class HTMLParseError(RecipeImportError):
    """The page could not be parsed as HTML."""


class NoJSONLDError(RecipeImportError):
    """The page was fetched but carries no qualifying Recipe JSON-LD."""

    def __init__(self, message: str = "no JSON-LD structured data found"):
        super().__init__(message)


class ExtractionError(RecipeImportError):
    """The crawling service returned no usable recipe data."""


class StoreError(RecipeImportError):
    """Reading or writing the recipe store failed."""
