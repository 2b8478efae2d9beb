"""Text input with a floating suggestions popup.

    ┃ ap▌
    ┌─────────┐
    │ apple   │
    │ apricot │
    │ apply   │
    └─────────┘

The widget is the Textual host for ``AutocompleteController``: it turns
Textual events into controller messages and implements the
``AutocompleteHost`` operations on top of an ``Input`` and a
``SuggestionsPopup``.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence

from textual import events
from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.geometry import Offset, Region
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input

from ..config import TextAssistConfig
from ..controller import (
    AutocompleteController,
    FocusLost,
    HostMoved,
    ItemCommitted,
    KeyPressed,
    TextChanged,
)
from ..geometry import AnchorGeometry, Point, Rect, Size
from ..providers import AsyncSuggestionProvider, SuggestionProvider, is_async_provider
from .suggestions import SuggestionsPopup

logger = logging.getLogger(__name__)

# The popup's top border sits on the input's bottom border row
CELL_OVERLAP = 1


def _rect(region: Region) -> Rect:
    return Rect(region.x, region.y, region.width, region.height)


class AssistInput(Input):
    """Input that offers keys to the autocomplete controller first.

    When the handler reports a key as consumed its default behavior
    (including bindings such as Enter to submit) is suppressed.
    """

    def __init__(self, key_handler: Callable[[str], bool] | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.key_handler = key_handler

    def _on_key(self, event: events.Key) -> None:
        """Handle key events - intercept popup navigation."""
        if self.key_handler is not None and self.key_handler(event.key):
            event.prevent_default()
            event.stop()


class TextAssist(Widget):
    """Text field that suggests completions as the user types.

    Keyboard (while suggestions are shown):
        Up/Down - Move the selection (wraps around)
        Enter   - Replace the text with the selected suggestion
        Escape  - Close the suggestions

    Args:
        provider: Callable mapping the current text to candidates
        config: Popup configuration (``max_visible_items``)
        placeholder: Placeholder text for the input
    """

    DEFAULT_CSS = """
    TextAssist {
        width: 100%;
        height: auto;
    }

    TextAssist AssistInput {
        width: 100%;
    }
    """

    class Committed(Message):
        """Fired when a suggestion replaces the input's text."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class Submitted(Message):
        """Fired when Enter reaches the input without committing a suggestion."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(
        self,
        provider: SuggestionProvider | AsyncSuggestionProvider | None = None,
        config: TextAssistConfig | None = None,
        placeholder: str = "",
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        config = config or TextAssistConfig()
        self._placeholder = placeholder
        self._async_provider = is_async_provider(provider)
        self._controller = AutocompleteController(
            self,
            provider,
            max_visible_items=config.max_visible_items,
            on_commit=self._handle_commit,
            run_async=self._run_suggestions,
        )

    def compose(self) -> ComposeResult:
        yield AssistInput(
            key_handler=self._handle_key,
            placeholder=self._placeholder,
            id="assist-input",
        )
        yield SuggestionsPopup(id="assist-popup")

    def on_unmount(self) -> None:
        self._controller.dispose()

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    @property
    def controller(self) -> AutocompleteController:
        return self._controller

    @property
    def input(self) -> AssistInput:
        return self.query_one("#assist-input", AssistInput)

    @property
    def popup(self) -> SuggestionsPopup:
        return self.query_one("#assist-popup", SuggestionsPopup)

    @property
    def value(self) -> str:
        """Current text of the input."""
        return self.input.value

    @value.setter
    def value(self, value: str) -> None:
        self.input.value = value

    @property
    def provider(self) -> SuggestionProvider | AsyncSuggestionProvider | None:
        return self._controller.provider

    @provider.setter
    def provider(self, provider: SuggestionProvider | AsyncSuggestionProvider | None) -> None:
        """Swap the suggestion provider. Applies from the next keystroke."""
        self._controller.provider = provider
        self._async_provider = is_async_provider(provider)

    @property
    def max_visible_items(self) -> int:
        return self._controller.max_visible_items

    @max_visible_items.setter
    def max_visible_items(self, count: int) -> None:
        self._controller.set_max_visible_items(count)

    @property
    def is_popup_visible(self) -> bool:
        return self._controller.state.visible

    def clear(self) -> None:
        """Clear the input."""
        self.input.value = ""

    def focus_input(self) -> None:
        """Focus the input field."""
        self.input.focus()

    def notify_host_moved(self) -> None:
        """Tell the widget its window moved; the popup is closed."""
        self._controller.dispatch(HostMoved())

    # -------------------------------------------------------------------------
    # Event wiring
    # -------------------------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input is not self.input:
            return
        if self._async_provider:
            self._run_suggestions(self._controller.on_text_changed_async(event.value))
        else:
            self._controller.dispatch(TextChanged(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input is not self.input:
            return
        event.stop()
        self.post_message(self.Submitted(event.value))

    def on_descendant_blur(self, event: events.DescendantBlur) -> None:
        self._controller.dispatch(FocusLost())

    def on_resize(self, event: events.Resize) -> None:
        self._controller.dispatch(HostMoved())

    def on_suggestions_popup_selected(self, event: SuggestionsPopup.Selected) -> None:
        event.stop()
        self._controller.dispatch(ItemCommitted(event.index))
        self.focus_input()

    def on_suggestions_popup_highlighted(self, event: SuggestionsPopup.Highlighted) -> None:
        event.stop()
        self._controller.select(event.index)

    def on_suggestions_popup_closed(self, event: SuggestionsPopup.Closed) -> None:
        event.stop()
        self._controller.hide()
        self.focus_input()

    def _handle_key(self, key: str) -> bool:
        return self._controller.dispatch(KeyPressed(key))

    def _run_suggestions(self, work: Awaitable[bool]) -> None:
        # A newer change cancels the lookup still in flight
        self.run_worker(work, group="suggestions", exclusive=True)

    def _handle_commit(self, value: str) -> None:
        logger.debug(f"Committed suggestion {value!r}")
        self.post_message(self.Committed(value))

    # -------------------------------------------------------------------------
    # AutocompleteHost
    # -------------------------------------------------------------------------

    def set_text(self, text: str) -> None:
        prompt_input = self.input
        prompt_input.value = text
        prompt_input.cursor_position = len(text)

    def render_items(self, items: Sequence[str]) -> None:
        self.popup.set_items(items)

    def popup_size(self) -> Size:
        return self.popup.measure(self.popup.suggestions)

    def highlight(self, index: int) -> None:
        self.popup.selected_index = index

    def show_popup(self, origin: Point) -> None:
        self.popup.show_at(Offset(origin.x, origin.y))

    def hide_popup(self) -> None:
        try:
            self.popup.hide()
        except NoMatches:
            # Not composed yet
            pass

    def anchor_geometry(self) -> AnchorGeometry:
        return AnchorGeometry(
            field=_rect(self.input.region),
            screen=_rect(self.screen.region),
            parent=_rect(self.region),
            border_width=0,
            overlap=CELL_OVERLAP,
        )

    def focus_within(self) -> bool:
        focused = self.app.focused
        return focused is not None and (focused is self.input or focused is self.popup)
