"""Where: src/projscan/platform/storage/rate_limit.py
What: Thread-safe throttle enforcing spacing between remote storage requests.
Why: Remote storage APIs are rate-limited; gateway calls run on worker threads.
"""

from __future__ import annotations

import threading
import time
from typing import Final


class RateLimiter:
    """Provide a minimal monotonic sleep guard for outgoing requests."""

    def __init__(self, min_interval_seconds: float) -> None:
        self._min_interval: float = max(0.0, min_interval_seconds)
        self._lock: Final[threading.Lock] = threading.Lock()
        self._last_start: float = 0.0

    def respect(self) -> None:
        """Delay the caller until the minimum spacing constraint is met."""

        if self._min_interval <= 0:
            return
        with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_start
            wait = self._min_interval - elapsed
            if wait > 0:
                time.sleep(wait)
            self._last_start = time.monotonic()


__all__ = ["RateLimiter"]
