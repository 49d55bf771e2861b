"""A single cancellable timer on the running event loop.

Rescheduling cancels the pending callback and replaces it, so at most one
callback is ever waiting.
"""

import asyncio


class DebounceTimer:

    def __init__(self, delay: float):
        self.delay = delay
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, callback, *args) -> None:
        """Run ``callback(*args)`` after *delay* seconds of no further calls."""
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, callback, args)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, callback, args) -> None:
        self._handle = None
        callback(*args)
