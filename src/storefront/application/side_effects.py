"""Best-effort side effects (SMS, invoices) run after a committed change.

A side effect must never undo or block the state change that triggered
it, so failures are logged and swallowed here instead of propagating to
the caller.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

logger = logging.getLogger(__name__)


class SideEffects(ABC):

    @abstractmethod
    def submit(self, description: str, fn: Callable[..., Any], *args: Any) -> None:
        """Run ``fn(*args)`` best-effort; never raises."""

    def close(self) -> None:
        """Wait for outstanding work (no-op for synchronous runners)."""


class InlineSideEffects(SideEffects):
    """Runs each side effect immediately in the calling thread."""

    def submit(self, description: str, fn: Callable[..., Any], *args: Any) -> None:
        try:
            fn(*args)
        except Exception:
            logger.exception("Side effect failed: %s", description)


class BackgroundSideEffects(SideEffects):
    """Fire-and-forget: side effects run on a small thread pool."""

    def __init__(self, max_workers: int = 2) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="side-effect"
        )

    def submit(self, description: str, fn: Callable[..., Any], *args: Any) -> None:
        future = self._executor.submit(fn, *args)
        future.add_done_callback(lambda f: self._log_failure(description, f))

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    @staticmethod
    def _log_failure(description: str, future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            logger.error(
                "Side effect failed: %s", description, exc_info=(type(exc), exc, exc.__traceback__)
            )
