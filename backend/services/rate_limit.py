"""Fixed-window request quota per client, kept in process memory."""

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from errors import RateLimitExceededError


@dataclass
class Window:
    start: float
    count: int = 0


@dataclass(frozen=True)
class Quota:
    limit: int
    remaining: int
    reset_seconds: int


class RateLimiter:
    def __init__(
        self,
        limit: int,
        window_seconds: int = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: dict[str, Window] = {}

    def hit(self, client_id: str) -> Quota:
        """Count one request for `client_id`.

        Raises RateLimitExceededError once the window's budget is spent.
        """
        now = self._clock()
        with self._lock:
            window = self._windows.get(client_id)
            if window is None or now - window.start >= self.window_seconds:
                self._cleanup(now)
                window = Window(start=now)
                self._windows[client_id] = window

            reset = max(math.ceil(window.start + self.window_seconds - now), 0)
            if window.count >= self.limit:
                raise RateLimitExceededError(retry_after=reset)
            window.count += 1
            return Quota(limit=self.limit, remaining=self.limit - window.count, reset_seconds=reset)

    def _cleanup(self, now: float) -> None:
        stale = [k for k, w in self._windows.items() if now - w.start >= self.window_seconds]
        for k in stale:
            del self._windows[k]
