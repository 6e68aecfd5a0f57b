"""Fetch strategy interface and the ordered fallback executor."""

import logging
from abc import ABC, abstractmethod
from typing import Callable

from .models import Recipe

logger = logging.getLogger(__name__)

LogCallback = Callable[[str], None]


class FetchStrategy(ABC):
    """
    One way of retrieving a page and parsing a recipe out of it.

    Subclasses raise on failure; ``can_retry`` tells the executor whether
    the next strategy in the chain is worth trying for that failure.
    """

    name: str = "strategy"

    @abstractmethod
    def fetch(self, url: str) -> Recipe:
        """Fetch the page at ``url`` and return its recipe."""

    def can_retry(self, error: Exception) -> bool:
        """Whether a later strategy may succeed where this one failed."""
        return False


class StrategyExecutor:
    """
    Try strategies strictly in order until one succeeds.

    A failure moves on to the next strategy only when the failing strategy
    classifies it as retryable and it is not the last one. Otherwise the
    failure is re-raised unchanged, so callers always see the error from
    the last strategy attempted.
    """

    def __init__(self, *strategies: FetchStrategy):
        if not strategies:
            raise ValueError("StrategyExecutor needs at least one strategy")
        self.strategies = list(strategies)

    def execute(self, url: str, log: LogCallback | None = None) -> Recipe:
        log = log or _log_to_module
        last_index = len(self.strategies) - 1

        for index, strategy in enumerate(self.strategies):
            log(f"Attempting to fetch recipe using {strategy.name}...")
            try:
                recipe = strategy.fetch(url)
            except Exception as e:
                if index < last_index and strategy.can_retry(e):
                    log(f"{strategy.name} failed with retryable error ({e}), trying next strategy...")
                    continue
                log(f"{strategy.name} failed: {e}")
                raise

            log(f"{strategy.name} succeeded")
            return recipe

        # Unreachable: the last strategy either returns or raises
        raise RuntimeError("no strategy produced a result")


def _log_to_module(message: str) -> None:
    logger.info(message)
