"""Text Assist - text input with a floating autocomplete popup.

Built with Textual + Rich.
"""

from .app import TextAssistDemo, run
from .controller import AutocompleteController
from .widgets import TextAssist

__version__ = "0.1.0"
__all__ = ["AutocompleteController", "TextAssist", "TextAssistDemo", "run"]
