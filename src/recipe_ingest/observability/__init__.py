"""
Recipe Ingest - Observability Package.

Provides:
- Request-scoped structured logging
- JSON log formatting for the web functions
"""

from recipe_ingest.observability.request_logger import (
    JsonLogFormatter,
    RequestLogger,
    configure_logging,
)

__all__ = [
    "JsonLogFormatter",
    "RequestLogger",
    "configure_logging",
]
