"""Autocomplete controller.

The controller is the single owner of popup state. It sits between the
host widget and the three leaf pieces:

1. Text changes are sent to the suggestion provider
2. Results are truncated and handed to the host popup
3. The popup is placed with ``geometry.place``
4. Keys are fed through ``navigation.transition`` while the popup is open
5. Focus loss, host moves, Escape and commits close the popup

Events arrive as typed messages (``TextChanged``, ``KeyPressed`` ...) so
the controller can be driven without a running UI.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, Union

from .config import DEFAULT_MAX_VISIBLE_ITEMS
from .geometry import AnchorGeometry, Point, Size, place_for
from .navigation import NavAction, NavKey, NavState, transition
from .providers import (
    AsyncSuggestionProvider,
    ProviderError,
    SuggestionProvider,
    normalize_candidates,
)

logger = logging.getLogger(__name__)


class AutocompleteHost(Protocol):
    """What the controller needs from the UI toolkit."""

    def set_text(self, text: str) -> None:
        """Replace the input's text."""
        ...

    def render_items(self, items: Sequence[str]) -> None:
        """Replace the popup list contents."""
        ...

    def popup_size(self) -> Size:
        """Size of the popup with its current items."""
        ...

    def highlight(self, index: int) -> None:
        """Highlight an item in the popup list."""
        ...

    def show_popup(self, origin: Point) -> None:
        """Show the popup with its top-left corner at ``origin``."""
        ...

    def hide_popup(self) -> None:
        """Hide the popup."""
        ...

    def anchor_geometry(self) -> AnchorGeometry:
        """Sample the field, screen and parent bounds."""
        ...

    def focus_within(self) -> bool:
        """True if the input or the suggestion list has focus."""
        ...

    def call_later(self, callback: Callable[[], Any]) -> Any:
        """Run ``callback`` on a later turn of the event loop."""
        ...


# =============================================================================
# Messages
# =============================================================================


@dataclass(frozen=True)
class TextChanged:
    """The input's text changed."""

    text: str


@dataclass(frozen=True)
class KeyPressed:
    """A key was pressed in the input."""

    key: NavKey | str


@dataclass(frozen=True)
class FocusLost:
    """The input or the suggestion list lost focus."""


@dataclass(frozen=True)
class HostMoved:
    """The window hosting the input moved or was resized."""


@dataclass(frozen=True)
class ItemCommitted:
    """An item was accepted from the list (click, Enter on the list)."""

    index: int


Message = Union[TextChanged, KeyPressed, FocusLost, HostMoved, ItemCommitted]


@dataclass
class PopupState:
    """Popup visibility, items and selection.

    ``items`` is stale while the popup is hidden.
    """

    visible: bool = False
    selected_index: int = -1
    items: list[str] = field(default_factory=list)
    origin: Point | None = None

    @property
    def selected_item(self) -> str | None:
        if self.visible and 0 <= self.selected_index < len(self.items):
            return self.items[self.selected_index]
        return None


class AutocompleteController:
    """Drives the suggestions popup for one text input.

    Usage:
        controller = AutocompleteController(host, provider)
        controller.on_text_changed("ap")
        consumed = controller.on_key_pressed(NavKey.DOWN)

    Args:
        host: The widget implementing ``AutocompleteHost``
        provider: Callable mapping text to candidates
        max_visible_items: Candidates beyond this count are discarded
        on_commit: Called with the committed value
        run_async: Schedules the rest of a text change when a provider
            returns an awaitable; without it such providers are rejected
    """

    def __init__(
        self,
        host: AutocompleteHost,
        provider: SuggestionProvider | AsyncSuggestionProvider | None,
        max_visible_items: int = DEFAULT_MAX_VISIBLE_ITEMS,
        on_commit: Callable[[str], None] | None = None,
        run_async: Callable[[Awaitable[bool]], Any] | None = None,
    ) -> None:
        self._host = host
        self._provider = provider
        self._max_visible_items = DEFAULT_MAX_VISIBLE_ITEMS
        self.set_max_visible_items(max_visible_items)
        self._on_commit = on_commit
        self._run_async = run_async
        self.state = PopupState()
        self._alive = True
        # Bumped on every text change and hide; older async results are dropped
        self._generation = 0
        # Text we just committed; its change event must not reopen the popup
        self._pending_commit: str | None = None

        self._handlers: dict[type, Callable[[Any], bool]] = {
            TextChanged: lambda m: self.on_text_changed(m.text),
            KeyPressed: lambda m: self.on_key_pressed(m.key),
            FocusLost: lambda m: self.on_focus_lost(),
            HostMoved: lambda m: self.on_host_moved(),
            ItemCommitted: lambda m: self.on_item_committed(m.index),
        }

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def provider(self) -> SuggestionProvider | AsyncSuggestionProvider | None:
        return self._provider

    @provider.setter
    def provider(self, provider: SuggestionProvider | AsyncSuggestionProvider | None) -> None:
        self._provider = provider

    @property
    def max_visible_items(self) -> int:
        return self._max_visible_items

    def set_max_visible_items(self, count: int) -> None:
        """Change the truncation limit. Lists already shown are left alone."""
        if count < 1:
            raise ValueError(f"max_visible_items must be at least 1, got {count}")
        self._max_visible_items = count

    @property
    def is_alive(self) -> bool:
        return self._alive

    @property
    def nav_state(self) -> NavState:
        return NavState(self.state.visible, self.state.selected_index, len(self.state.items))

    def dispose(self) -> None:
        """Mark the host as torn down. Pending deferred checks become no-ops."""
        self._alive = False

    # -------------------------------------------------------------------------
    # Message dispatch
    # -------------------------------------------------------------------------

    def dispatch(self, message: Message) -> bool:
        """Route a message to its handler.

        Returns:
            True if the message was consumed (for keys: suppress default handling)
        """
        handler = self._handlers.get(type(message))
        if handler is None:
            raise TypeError(f"Unknown message type: {type(message).__name__}")
        return bool(handler(message))

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------

    def on_text_changed(self, text: str) -> bool:
        """Fetch suggestions for ``text`` and show or hide the popup."""
        if not self._begin_change(text):
            return False

        try:
            result = self._provider(text) if self._provider else None
            if inspect.isawaitable(result):
                if self._run_async is not None:
                    self._run_async(self._finish_async(text, result, self._generation))
                    return False
                if inspect.iscoroutine(result):
                    result.close()
                raise ProviderError("Provider returned an awaitable, use on_text_changed_async")
            candidates = normalize_candidates(result)
        except Exception as e:
            logger.debug(f"Provider failed for {text!r}: {e}")
            self.hide()
            return False

        return self._show(candidates)

    async def on_text_changed_async(self, text: str) -> bool:
        """Like ``on_text_changed`` but awaits asynchronous providers.

        Results that resolve after a newer text change are discarded.
        """
        if not self._begin_change(text):
            return False

        try:
            result = self._provider(text) if self._provider else None
        except Exception as e:
            logger.debug(f"Provider failed for {text!r}: {e}")
            self.hide()
            return False

        return await self._finish_async(text, result, self._generation)

    async def _finish_async(self, text: str, result: Any, generation: int) -> bool:
        try:
            if inspect.isawaitable(result):
                result = await result
            candidates = normalize_candidates(result)
        except Exception as e:
            logger.debug(f"Provider failed for {text!r}: {e}")
            if generation == self._generation:
                self.hide()
            return False

        if generation != self._generation or not self._alive:
            logger.debug(f"Discarding stale suggestions for {text!r}")
            return False

        return self._show(candidates)

    def on_key_pressed(self, key: NavKey | str) -> bool:
        """Interpret a key against the popup state.

        Returns:
            True if the host must suppress the key's default behavior
        """
        nav_key = key if isinstance(key, NavKey) else NavKey.from_name(key)
        result = transition(self.nav_state, nav_key)

        if result.action is NavAction.MOVE:
            self.state.selected_index = result.state.selected_index
            self._host.highlight(self.state.selected_index)
        elif result.action is NavAction.COMMIT:
            self.on_item_committed(self.state.selected_index)
        elif result.action is NavAction.DISMISS:
            self.hide()

        return result.consumed

    def on_item_committed(self, index: int) -> bool:
        """Replace the input's text with ``items[index]`` and close the popup."""
        if not self.state.visible:
            logger.debug(f"Ignoring commit of {index}: popup hidden")
            return False
        if not 0 <= index < len(self.state.items):
            logger.debug(f"Ignoring commit of out-of-range index {index}")
            return False

        value = self.state.items[index]
        self.hide()
        self._pending_commit = value
        self._host.set_text(value)
        if self._on_commit:
            self._on_commit(value)
        return True

    def on_focus_lost(self) -> bool:
        """Schedule a focus check for the next turn of the event loop.

        At the moment focus leaves the input its new owner is not known
        yet, so the check cannot run inline.
        """
        if not self._alive:
            return False
        self._host.call_later(self._check_focus)
        return False

    def on_host_moved(self) -> bool:
        """Hide the popup; its placement is no longer valid."""
        self.hide()
        return False

    def select(self, index: int) -> bool:
        """Sync the selection when the list itself moved its highlight."""
        if not self.state.visible or not 0 <= index < len(self.state.items):
            return False
        self.state.selected_index = index
        return True

    def hide(self) -> None:
        """Hide the popup and clear the selection."""
        self._generation += 1
        self.state.visible = False
        self.state.selected_index = -1
        if self._alive:
            self._host.hide_popup()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _begin_change(self, text: str) -> bool:
        """Common prologue for text changes. False means stop here."""
        self._generation += 1

        if self._pending_commit is not None:
            committed, self._pending_commit = self._pending_commit, None
            if text == committed:
                return False

        if not text:
            self.hide()
            return False
        return True

    def _show(self, candidates: list[str]) -> bool:
        if not candidates:
            self.hide()
            return False

        items = candidates[: self._max_visible_items]
        self.state.items = items
        self.state.selected_index = -1
        self._host.render_items(items)

        origin = place_for(self._host.anchor_geometry(), self._host.popup_size())
        self.state.origin = origin
        self._host.show_popup(origin)
        self.state.visible = True
        return True

    def _check_focus(self) -> None:
        if not self._alive:
            return
        if not self._host.focus_within():
            logger.debug("Focus left the input, hiding suggestions")
            self.hide()
