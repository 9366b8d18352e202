from __future__ import annotations
import threading
import time
from typing import Callable, Dict, Tuple
from fastapi import HTTPException, Request

# In-memory fixed-window limiter (per client IP, per route). Single-process only.


def get_client_ip(request: Request) -> str:
    # Try common forwarding headers first
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class FixedWindowLimiter:
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        # key: (ip, route) -> (window_start, count)
        self._buckets: Dict[Tuple[str, str], Tuple[float, int]] = {}

    def hit(self, key: Tuple[str, str], limit: int, window_seconds: int) -> int:
        """Record one request; return seconds to wait when over the limit, else 0."""
        now = self._clock()
        with self._lock:
            window_start, count = self._buckets.get(key, (now, 0))
            if now - window_start >= window_seconds:
                window_start, count = now, 0
            count += 1
            self._buckets[key] = (window_start, count)
        if count > limit:
            return max(1, int(window_seconds - (now - window_start)))
        return 0

    def reset(self) -> None:
        with self._lock:
            self._buckets.clear()


limiter = FixedWindowLimiter()


def enforce_rate_limit(request: Request, limit: int = 30, window_seconds: int = 60) -> None:
    key = (get_client_ip(request), request.url.path)
    retry_after = limiter.hit(key, limit, window_seconds)
    if retry_after:
        raise HTTPException(status_code=429, detail="Rate limit exceeded", headers={"Retry-After": str(retry_after)})
