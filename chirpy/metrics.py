"""
Fileserver hit counting.

`HitCounter` is the single piece of mutable state shared between requests.
`MetricsMiddleware` wraps the static-files ASGI app so that every request to
the mounted subtree bumps the counter before the file lookup runs.
"""
import threading

from starlette.types import ASGIApp, Receive, Scope, Send


_INT32_MAX = 2**31 - 1


class HitCounter:
    """Integer counter whose increment, load and reset are mutually atomic."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def increment(self) -> int:
        with self._lock:
            self._value = 0 if self._value >= _INT32_MAX else self._value + 1
            return self._value

    def load(self) -> int:
        with self._lock:
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0


class MetricsMiddleware:
    def __init__(self, app: ASGIApp, counter: HitCounter) -> None:
        self.app = app
        self.counter = counter

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            self.counter.increment()
        await self.app(scope, receive, send)
