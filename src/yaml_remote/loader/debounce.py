"""Single-timer debouncer on the running asyncio loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable


class Debouncer:
    """Collapse rapid schedule() calls into one callback invocation.

    Each schedule() cancels the pending timer and starts a new one, so
    the callback runs once, delay after the last call. Must be used
    from inside a running event loop.
    """

    def __init__(self, callback: Callable[[], object]) -> None:
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def remaining(self) -> float:
        """Seconds until the pending timer fires, 0.0 if none is pending."""
        if self._handle is None:
            return 0.0
        return max(0.0, self._handle.when() - asyncio.get_running_loop().time())

    def schedule(self, delay_ms: int) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(delay_ms / 1000, self._fire)

    def cancel(self) -> bool:
        """Cancel the pending timer. Returns True if one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def _fire(self) -> None:
        self._handle = None
        self._callback()
