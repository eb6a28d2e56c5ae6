"""Poll-and-diff loop that keeps a product view in sync with the catalog.

Each poll fetches the catalog, serialises it deterministically and calls
``on_change`` only when the serialised form differs from the last
successful fetch.  A failed fetch keeps the previous snapshot; the most
recent successful fetch always wins.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class CatalogPoller:

    def __init__(
        self,
        fetch: Callable[[], Any],
        on_change: Callable[[Any], None],
        interval: float,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if interval <= 0:
            raise ValueError("Poll interval must be positive")
        self._fetch = fetch
        self._on_change = on_change
        self._interval = interval
        self._sleep = sleep
        self._last_snapshot: str | None = None

    def poll_once(self) -> bool:
        """Fetch once; return True if the catalog changed since the last fetch."""
        try:
            data = self._fetch()
        except (OSError, ValueError) as exc:
            logger.warning("Catalog fetch failed, keeping previous snapshot: %s", exc)
            return False

        snapshot = json.dumps(data, sort_keys=True, default=str)
        if snapshot == self._last_snapshot:
            logger.debug("Catalog unchanged")
            return False

        self._last_snapshot = snapshot
        logger.debug("Catalog changed")
        self._on_change(data)
        return True

    def run(self, stop: threading.Event | None = None, max_polls: int | None = None) -> None:
        """Poll until *stop* is set or *max_polls* polls have been made."""
        polls = 0
        while stop is None or not stop.is_set():
            self.poll_once()
            polls += 1
            if max_polls is not None and polls >= max_polls:
                return
            self._sleep(self._interval)
