"""SearchController: the search box as an explicit state machine.

Owns ``SearchState`` and turns keyboard, pointer and focus input into
suggestion updates and committed searches.  It never touches ``AppState``;
committed text goes to the ``submit`` callback.

Phases::

    IDLE ──edit──> SUGGESTING (when suggestions arrive)
    SUGGESTING ──Escape / blur──> IDLE
    IDLE | SUGGESTING ──Enter / click / submit──> SUBMITTING ──done──> IDLE
"""

import logging
from enum import Enum
from typing import Awaitable, Callable

import config
from debounce import DebounceTimer
from models import SearchState, SuggestionItem
from suggestions import SuggestionEngine

logger = logging.getLogger(__name__)


class SearchPhase(str, Enum):
    IDLE = "idle"
    SUGGESTING = "suggesting"
    SUBMITTING = "submitting"


class SearchController:

    def __init__(
        self,
        submit: Callable[[str], Awaitable[object]],
        engine: SuggestionEngine | None = None,
        blur_grace: float = config.BLUR_GRACE_SECONDS,
    ):
        self.state = SearchState()
        self._submit = submit
        self.engine = engine or SuggestionEngine()
        self.engine.on_change = self._on_suggestions
        self._blur_timer = DebounceTimer(blur_grace)

    @property
    def phase(self) -> SearchPhase:
        if self.state.submitting:
            return SearchPhase.SUBMITTING
        if self.state.visible:
            return SearchPhase.SUGGESTING
        return SearchPhase.IDLE

    # ── Input events ────────────────────────────────────────────

    def edit(self, text: str) -> None:
        """The user changed the input text."""
        if self.state.submitting:
            return  # input is disabled
        self.state.query_text = text
        self.state.selected_index = -1
        self.engine.update(text)

    async def press(self, key: str) -> None:
        """Handle one key press: ArrowDown, ArrowUp, Enter or Escape."""
        if self.state.submitting:
            return

        if self.phase is not SearchPhase.SUGGESTING:
            if key == "Enter":
                await self.submit()
            return

        if key == "ArrowDown":
            self._move_selection(1)
        elif key == "ArrowUp":
            self._move_selection(-1)
        elif key == "Enter":
            selected = self.state.selected
            if selected is not None:
                await self.choose(self.state.selected_index)
            else:
                await self.submit()
        elif key == "Escape":
            self.engine.dismiss()
            self.state.selected_index = -1

    async def choose(self, index: int) -> bool:
        """Pointer click (or Enter) on suggestion *index*."""
        if not 0 <= index < len(self.state.suggestions):
            return False
        name = self.state.suggestions[index].name
        self.state.query_text = name
        return await self.submit(name)

    async def submit(self, text: str | None = None) -> bool:
        """Commit *text* (default: the typed text) as a search.

        Blank text, or a submission already in flight, is a no-op and
        returns False.  Whatever the outcome of the search, the input and
        suggestions are cleared afterwards.
        """
        committed = (self.state.query_text if text is None else text).strip()
        if not committed or self.state.submitting:
            return False

        self.state.submitting = True
        self._blur_timer.cancel()
        self.engine.dismiss()
        logger.info("Submitting search for %r", committed)
        try:
            await self._submit(committed)
        finally:
            self.engine.reset()
            self.state.query_text = ""
            self.state.selected_index = -1
            self.state.submitting = False
        return True

    def blur(self) -> None:
        """Input lost focus; hide the list after a short grace period.

        The delay lets a click on a suggestion land before the list goes away.
        """
        self._blur_timer.schedule(self._hide_after_blur)

    def focus(self) -> None:
        self._blur_timer.cancel()
        if not self.state.submitting:
            self.engine.show()

    # ── Internals ───────────────────────────────────────────────

    def _move_selection(self, step: int) -> None:
        last = len(self.state.suggestions) - 1
        self.state.selected_index = max(-1, min(last, self.state.selected_index + step))

    def _hide_after_blur(self) -> None:
        if self.phase is SearchPhase.SUGGESTING:
            self.engine.dismiss()
            self.state.selected_index = -1

    def _on_suggestions(self, suggestions: list[SuggestionItem], visible: bool) -> None:
        # A fresh list or a hidden one never keeps the old selection.
        if not visible or suggestions != self.state.suggestions:
            self.state.selected_index = -1
        self.state.suggestions = list(suggestions)
        self.state.visible = visible and bool(suggestions)
