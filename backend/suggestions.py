"""SuggestionEngine: debounced, race-free city suggestions.

Text edits go in through ``update()``; suggestion lists come out through
the ``on_change(suggestions, visible)`` hook.

- Only the last value in a quiet window of ``delay`` seconds triggers a
  lookup; earlier pending timers are cancelled, never stacked.
- The length check and the lookup both use the trimmed value, so
  surrounding whitespace never counts toward ``min_length`` and a
  whitespace-only value never reaches the network.  Values shorter than
  ``min_length`` clear the list at once.
- Every lookup carries a token.  A response is applied only if its token is
  still the latest issued, so a slow answer for an old query can never
  replace the answer for a newer one.
- Lookup failures are logged and treated like an empty result.
"""

import asyncio
import logging
from typing import Callable

import config
from debounce import DebounceTimer
from errors import UpstreamError
from geocoding import autocomplete_city
from models import SuggestionItem

logger = logging.getLogger(__name__)


class SuggestionEngine:

    def __init__(
        self,
        lookup: Callable[[str, int], list[SuggestionItem]] | None = None,
        on_change: Callable[[list[SuggestionItem], bool], None] | None = None,
        delay: float = config.SUGGESTION_DEBOUNCE_SECONDS,
        limit: int = config.SUGGESTION_LIMIT,
        min_length: int = config.MIN_QUERY_LENGTH,
    ):
        self._lookup = lookup or autocomplete_city
        self.on_change = on_change
        self.limit = limit
        self.min_length = min_length
        self._timer = DebounceTimer(delay)
        self._token = 0
        self._last_value: str | None = None
        self._unsent: str | None = None
        self._inflight: set[asyncio.Task] = set()

        self.suggestions: list[SuggestionItem] = []
        self.visible = False

    # ── Input ───────────────────────────────────────────────────

    def update(self, text: str) -> None:
        """Feed one text edit."""
        self._unsent = None
        if text == self._last_value:
            return
        self._last_value = text

        query = text.strip()
        if len(query) < self.min_length:
            self._supersede()
            self._publish([])
            return
        self._timer.schedule(self._issue, query)

    def dismiss(self) -> None:
        """Hide the list and drop any pending or in-flight lookup.

        A value still waiting out its quiet period, or whose lookup is still
        in flight, has not been answered; it is kept aside and looked up when
        the list is shown again.
        """
        if self._timer.pending or self._inflight:
            self._unsent, self._last_value = self._last_value, None
        self._supersede()
        if self.visible:
            self.visible = False
            self._notify()

    def show(self) -> None:
        """Reveal the current list again, if there is one.

        If the typed value was dismissed before its lookup ran, the old list
        stays hidden and that lookup is scheduled instead.
        """
        if self._unsent is not None:
            self.update(self._unsent)
            return
        if self.suggestions and not self.visible:
            self.visible = True
            self._notify()

    def reset(self) -> None:
        """Back to the empty state, as after a submission."""
        self._supersede()
        self._last_value = None
        self._unsent = None
        self._publish([])

    async def settle(self) -> None:
        """Wait until no debounce timer is pending and no lookup is in flight."""
        while self._timer.pending or self._inflight:
            if self._inflight:
                await asyncio.wait(set(self._inflight))
            else:
                await asyncio.sleep(self._timer.delay)

    # ── Lookups ─────────────────────────────────────────────────

    def _supersede(self) -> None:
        self._timer.cancel()
        self._token += 1

    def _issue(self, query: str) -> None:
        self._token += 1
        task = asyncio.get_running_loop().create_task(self._fetch(self._token, query))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _fetch(self, token: int, query: str) -> None:
        try:
            items = await asyncio.to_thread(self._lookup, query, self.limit)
        except UpstreamError as e:
            logger.warning("Suggestion lookup for %r failed: %s", query, e)
            items = []

        if token != self._token:
            logger.debug("Discarding stale suggestions for %r", query)
            return
        self._publish(list(items)[: self.limit])

    def _publish(self, items: list[SuggestionItem]) -> None:
        self.suggestions = items
        self.visible = bool(items)
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.suggestions, self.visible)
