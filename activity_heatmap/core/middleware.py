from collections import defaultdict
from collections import deque
from collections.abc import Awaitable
from collections.abc import Callable
from threading import RLock
from time import monotonic

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response


RATE_LIMITED_PREFIXES = ("/heatmap/", "/activity/")


class PublicRateLimitMiddleware(BaseHTTPMiddleware):
    """In-memory per-client rate limiter for the public render endpoints."""

    def __init__(
        self,
        app,
        requests_per_window: int = 60,
        window_seconds: int = 60,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        super().__init__(app)
        # Guard against invalid config values (0 or negatives).
        self.max_requests = max(1, requests_per_window)
        self.window_seconds = max(1, window_seconds)
        self._clock = clock
        self._ip_buckets: dict[str, deque[float]] = defaultdict(deque)
        self._lock = RLock()
        self._next_sweep = clock() + self.window_seconds

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.method != "GET" or not request.url.path.startswith(
            RATE_LIMITED_PREFIXES
        ):
            return await call_next(request)

        ip = self._client_ip(request)
        now = self._clock()

        with self._lock:
            if now >= self._next_sweep:
                self.sweep(now)

            bucket = self._ip_buckets[ip]
            self._evict(bucket, now)

            if len(bucket) >= self.max_requests:
                retry_after = max(1, int(self.window_seconds - (now - bucket[0])))
                return JSONResponse(
                    status_code=429,
                    content={"detail": "Too Many Requests"},
                    headers={"Retry-After": str(retry_after)},
                )

            bucket.append(now)

        return await call_next(request)

    def sweep(self, now: float | None = None) -> int:
        """Drop buckets of clients with no requests inside the window.

        Returns the number of buckets removed.
        """

        now = self._clock() if now is None else now
        with self._lock:
            for bucket in self._ip_buckets.values():
                self._evict(bucket, now)
            idle = [ip for ip, bucket in self._ip_buckets.items() if not bucket]
            for ip in idle:
                del self._ip_buckets[ip]
            self._next_sweep = now + self.window_seconds
        return len(idle)

    def tracked_clients(self) -> int:
        with self._lock:
            return len(self._ip_buckets)

    def _evict(self, bucket: deque[float], now: float) -> None:
        cutoff = now - self.window_seconds
        while bucket and bucket[0] <= cutoff:
            bucket.popleft()

    @staticmethod
    def _client_ip(request: Request) -> str:
        # Reverse proxies usually set X-Forwarded-For.
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip() or "unknown"

        if request.client and request.client.host:
            return request.client.host

        return "unknown"
