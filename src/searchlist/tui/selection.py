"""Multi-selection tracking for list rows."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from textual import events
from textual.binding import Binding
from textual.message import Message

from ..util.log import Log
from .keys import key_matches
from .messages import SelectionChanged

if TYPE_CHECKING:
    from .list_state import ListState

log = Log.create({"service": "tui.selection"})

SelectionCallback = Callable[[Any, bool], Optional[Message]]

DEFAULT_TOGGLE_KEY = Binding("space", "toggle_selection", "Select")


def emit_selection_changed(item: Any, selected: bool) -> Optional[Message]:
    """Default toggle callback: report the change as a message."""
    return SelectionChanged(item, selected)


class SelectionTracker:
    """Selected state per original item index.

    The map is sparse: indices never toggled are absent and read as
    unselected. Entries are kept when the item sequence is replaced, so the
    map can outgrow the current items.
    """

    def __init__(
        self,
        toggle_key: Binding = DEFAULT_TOGGLE_KEY,
        on_change: SelectionCallback = emit_selection_changed,
    ) -> None:
        self.toggle_key = toggle_key
        self.on_change = on_change
        self._selected: Dict[int, bool] = {}

    def is_selected(self, index: int) -> bool:
        return self._selected.get(index, False)

    def selected_indices(self) -> List[int]:
        """Original indices currently selected, ascending."""
        return sorted(i for i, on in self._selected.items() if on)

    @property
    def selection(self) -> Dict[int, bool]:
        """Copy of the raw selection map."""
        return dict(self._selected)

    def toggle(self, index: int, item: Any) -> Optional[Message]:
        """Flip ``index`` and return whatever the callback returns."""
        selected = not self._selected.get(index, False)
        self._selected[index] = selected
        log.debug("selection toggled", {"index": index, "selected": selected})
        return self.on_change(item, selected)

    def clear(self) -> None:
        self._selected.clear()

    def update(self, event: Any, state: "ListState") -> Optional[Message]:
        """Toggle the row under the cursor when ``event`` is the toggle key."""
        if not isinstance(event, events.Key) or not key_matches(event, self.toggle_key):
            return None
        index = state.cursor_original_index()
        if index is None:
            return None
        return self.toggle(index, state.items[index])
