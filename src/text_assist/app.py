"""Text Assist - Demo Application.

A single autocomplete field over a word list, with a log of what was
committed or submitted.

    ┌─ Text Assist ───────────────────────────────┐
    │ ┃ ap▌                                       │
    │ ┌─────────┐                                 │
    │ │ apple   │                                 │
    │ │ apricot │                                 │
    │ └─────────┘                                 │
    │ committed: apricot                          │
    └─────────────────────────────────────────────┘
"""

from __future__ import annotations

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, RichLog

from .config import TextAssistConfig
from .providers import SuggestionProvider, WordListProvider
from .widgets.text_assist import TextAssist

DEFAULT_WORDS = [
    "apple",
    "apricot",
    "apply",
    "application",
    "approve",
    "banana",
    "band",
    "bandwidth",
    "cherry",
    "cherish",
    "grape",
    "grapefruit",
    "graph",
    "lemon",
    "lemonade",
    "mango",
    "melon",
    "orange",
    "peach",
    "pear",
    "pearl",
]


class TextAssistDemo(App):
    """Demo app hosting one ``TextAssist`` field."""

    TITLE = "Text Assist"

    CSS = """
    Screen {
        layout: vertical;
    }

    #assist {
        margin: 1 2;
    }

    #log {
        height: 1fr;
        margin: 0 2;
        border: solid $primary;
    }
    """

    BINDINGS = [
        Binding("f2", "focus_input", "Input", show=True),
        Binding("f3", "clear_log", "Clear log", show=True),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        provider: SuggestionProvider | None = None,
        config: TextAssistConfig | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._config = config or TextAssistConfig()
        self._provider = provider or WordListProvider(
            DEFAULT_WORDS,
            case_sensitive=self._config.case_sensitive,
            match=self._config.match,
        )

    def compose(self) -> ComposeResult:
        yield Header()
        yield TextAssist(
            self._provider,
            config=self._config,
            placeholder="Start typing...",
            id="assist",
        )
        yield RichLog(id="log", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.action_focus_input()

    def on_resize(self, event: events.Resize) -> None:
        for assist in self.query(TextAssist):
            assist.notify_host_moved()

    def on_text_assist_committed(self, event: TextAssist.Committed) -> None:
        self.query_one("#log", RichLog).write(f"committed: {event.value}")

    def on_text_assist_submitted(self, event: TextAssist.Submitted) -> None:
        self.query_one("#log", RichLog).write(f"submitted: {event.value}")
        self.query_one("#assist", TextAssist).clear()

    def action_focus_input(self) -> None:
        self.query_one("#assist", TextAssist).focus_input()

    def action_clear_log(self) -> None:
        self.query_one("#log", RichLog).clear()


def run(
    provider: SuggestionProvider | None = None,
    config: TextAssistConfig | None = None,
) -> None:
    """Run the demo application."""
    app = TextAssistDemo(provider=provider, config=config)
    app.run()
