"""Textual widgets for Text Assist."""

from .suggestions import SuggestionItem, SuggestionsPopup
from .text_assist import AssistInput, TextAssist

__all__ = [
    "AssistInput",
    "SuggestionItem",
    "SuggestionsPopup",
    "TextAssist",
]
