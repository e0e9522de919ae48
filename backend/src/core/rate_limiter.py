import time
from collections import defaultdict, deque

from config import settings


class RateLimiter:
    def __init__(self, limit_per_minute: int | None = None) -> None:
        self._limit = limit_per_minute
        self._windows: dict[str, deque[float]] = defaultdict(deque)

    @property
    def limit(self) -> int:
        return self._limit or settings.AUTH_RATE_LIMIT_PER_MINUTE

    def is_allowed(self, key: str) -> bool:
        now = time.monotonic()
        window = self._windows[key.lower()]

        # Purge expired entries (older than 60s)
        while window and window[0] <= now - 60:
            window.popleft()

        if len(window) >= self.limit:
            return False

        window.append(now)
        return True

    def reset(self) -> None:
        self._windows.clear()


# Sign-in attempts, keyed by email
auth_rate_limiter = RateLimiter()
