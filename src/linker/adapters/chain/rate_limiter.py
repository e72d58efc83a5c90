import time
import random
from typing import Optional


class RequestPacer:
    def __init__(self, requests_per_sec: float) -> None:
        if requests_per_sec <= 0:
            raise ValueError("requests_per_sec must be > 0")
        self._min_interval = 1.0 / requests_per_sec
        self._next_ts = 0.0

    def wait(self) -> None:
        now = time.monotonic()
        if self._next_ts > now:
            time.sleep(self._next_ts - now)
            now = self._next_ts
        self._next_ts = now + self._min_interval


def backoff_delay(attempt: int, base: float = 0.5, cap: float = 8.0,
                  retry_after: Optional[float] = None) -> float:
    if retry_after is not None and retry_after > 0:
        return min(cap, retry_after)
    t = min(cap, base * (2 ** attempt))
    return t * (0.7 + random.random() * 0.6)


def backoff_sleep(attempt: int, retry_after: Optional[float] = None) -> None:
    time.sleep(backoff_delay(attempt, retry_after=retry_after))
