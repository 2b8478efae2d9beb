"""Keyboard navigation for the suggestions popup.

A small state machine: given the popup's visibility and selection and a
key, decide the next selection and what the controller should do.
Keys only mean something while the popup is open; when it is closed
they fall through to normal text editing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NavKey(str, Enum):
    """Keys the state machine reacts to."""

    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    ESCAPE = "escape"

    @classmethod
    def from_name(cls, name: str) -> NavKey | None:
        """Map a host key name (e.g. Textual's ``"down"``) to a NavKey."""
        try:
            return cls(name)
        except ValueError:
            return None


class Phase(str, Enum):
    """Popup phases."""

    CLOSED = "closed"
    OPEN_NO_SELECTION = "open_no_selection"
    OPEN_WITH_SELECTION = "open_with_selection"


class NavAction(Enum):
    """What the controller should do after a transition."""

    NONE = "none"  # Key passes through
    MOVE = "move"  # Selection changed
    COMMIT = "commit"  # Accept the selected item
    DISMISS = "dismiss"  # Hide without committing


@dataclass(frozen=True)
class NavState:
    """Snapshot of the popup as seen by the state machine."""

    visible: bool = False
    selected_index: int = -1
    count: int = 0

    @property
    def phase(self) -> Phase:
        if not self.visible or self.count <= 0:
            return Phase.CLOSED
        if self.selected_index < 0:
            return Phase.OPEN_NO_SELECTION
        return Phase.OPEN_WITH_SELECTION


@dataclass(frozen=True)
class Transition:
    """Result of feeding a key to the state machine.

    Attributes:
        state: State after the key
        action: Action the controller must perform
        consumed: True when the host must suppress the key's default behavior
    """

    state: NavState
    action: NavAction = NavAction.NONE
    consumed: bool = False


def next_index(index: int, count: int) -> int:
    """Index after moving down, wrapping from the last item to the first."""
    return (index + 1) % count


def previous_index(index: int, count: int) -> int:
    """Index after moving up, wrapping from the first item (or none) to the last."""
    index -= 1
    if index < 0:
        index = count - 1
    return index


def transition(state: NavState, key: NavKey | None) -> Transition:
    """Feed one key to the state machine."""
    phase = state.phase
    if phase is Phase.CLOSED or key is None:
        return Transition(state)

    if key is NavKey.DOWN:
        moved = NavState(True, next_index(state.selected_index, state.count), state.count)
        return Transition(moved, NavAction.MOVE, consumed=True)

    if key is NavKey.UP:
        moved = NavState(True, previous_index(state.selected_index, state.count), state.count)
        return Transition(moved, NavAction.MOVE, consumed=True)

    if key is NavKey.ENTER:
        if phase is Phase.OPEN_NO_SELECTION:
            return Transition(state)
        closed = NavState(False, state.selected_index, state.count)
        return Transition(closed, NavAction.COMMIT, consumed=True)

    if key is NavKey.ESCAPE:
        return Transition(NavState(False, -1, state.count), NavAction.DISMISS, consumed=True)

    return Transition(state)
