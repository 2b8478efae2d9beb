"""Suggestions popup widget.

A plain list of candidate strings drawn on the screen overlay. The
popup only renders and reports; the controller decides what it shows,
where, and when.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.cells import cell_len
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.geometry import Offset
from textual.message import Message
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Static

from ..geometry import Size
from ..navigation import next_index, previous_index

# Border (1 each side) plus horizontal padding (1 each side)
CHROME_WIDTH = 4
CHROME_HEIGHT = 2


class SuggestionItem(Static):
    """A single candidate in the list."""

    DEFAULT_CSS = """
    SuggestionItem {
        width: 100%;
        height: 1;
    }

    SuggestionItem.selected {
        background: $accent;
        color: $text;
    }
    """

    def __init__(self, value: str, index: int, **kwargs) -> None:
        super().__init__(value, markup=False, **kwargs)
        self.value = value
        self.index = index

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.post_message(SuggestionsPopup.Selected(self.index, self.value))


class SuggestionsPopup(Widget, can_focus=True):
    """Floating list of suggestions.

    Keyboard (when the list itself has focus):
        Up/Down - Move the highlight
        Enter   - Commit the highlighted item
        Escape  - Close without committing
    """

    DEFAULT_CSS = """
    SuggestionsPopup {
        overlay: screen;
        width: auto;
        height: auto;
        background: $surface;
        border: solid $primary;
        padding: 0 1;
        display: none;
    }

    SuggestionsPopup.visible {
        display: block;
    }

    SuggestionsPopup #suggestions-list {
        width: 100%;
        height: auto;
    }
    """

    BINDINGS = [
        Binding("up", "prev", "Previous", show=False),
        Binding("down", "next", "Next", show=False),
        Binding("enter", "select", "Select", show=False),
        Binding("escape", "close", "Close", show=False),
    ]

    selected_index: reactive[int] = reactive(-1)

    class Selected(Message):
        """Fired when an item is clicked or Enter is pressed on the list."""

        def __init__(self, index: int, value: str) -> None:
            super().__init__()
            self.index = index
            self.value = value

    class Highlighted(Message):
        """Fired when the highlight moves while the list has focus."""

        def __init__(self, index: int) -> None:
            super().__init__()
            self.index = index

    class Closed(Message):
        """Fired when Escape is pressed on the list."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.suggestions: list[str] = []
        self._items: list[SuggestionItem] = []

    def compose(self) -> ComposeResult:
        yield Vertical(id="suggestions-list")

    @staticmethod
    def measure(suggestions: Sequence[str]) -> Size:
        """Outer size of the popup when showing ``suggestions``."""
        width = max((cell_len(value) for value in suggestions), default=0)
        return Size(width + CHROME_WIDTH, len(suggestions) + CHROME_HEIGHT)

    def set_items(self, suggestions: Sequence[str]) -> None:
        """Replace the list contents."""
        self.suggestions = list(suggestions)
        self.selected_index = -1

        size = self.measure(self.suggestions)
        self.styles.width = size.width
        self.styles.height = size.height

        container = self.query_one("#suggestions-list", Vertical)
        container.remove_children()
        self._items = [SuggestionItem(value, i) for i, value in enumerate(self.suggestions)]
        if self._items:
            container.mount(*self._items)

    def show_at(self, offset: Offset) -> None:
        """Show the popup with its top-left corner at a screen offset."""
        self.absolute_offset = offset
        self.add_class("visible")

    def hide(self) -> None:
        """Hide the popup."""
        self.remove_class("visible")

    @property
    def is_visible(self) -> bool:
        return self.has_class("visible")

    @property
    def current_suggestion(self) -> str | None:
        if 0 <= self.selected_index < len(self.suggestions):
            return self.suggestions[self.selected_index]
        return None

    def watch_selected_index(self, old_index: int, new_index: int) -> None:
        """Move the highlight."""
        if 0 <= old_index < len(self._items):
            self._items[old_index].remove_class("selected")
        if 0 <= new_index < len(self._items):
            self._items[new_index].add_class("selected")

    def action_prev(self) -> None:
        if self.suggestions:
            self.selected_index = previous_index(self.selected_index, len(self.suggestions))
            self.post_message(self.Highlighted(self.selected_index))

    def action_next(self) -> None:
        if self.suggestions:
            self.selected_index = next_index(self.selected_index, len(self.suggestions))
            self.post_message(self.Highlighted(self.selected_index))

    def action_select(self) -> None:
        value = self.current_suggestion
        if value is not None:
            self.post_message(self.Selected(self.selected_index, value))

    def action_close(self) -> None:
        self.post_message(self.Closed())
