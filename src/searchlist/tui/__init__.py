"""Textual search list component.

The state machine (``SearchListController``) is usable without a running
app; ``SearchList`` hosts it as a widget and ``PickerApp`` runs it full
screen.
"""

from .controller import Consumption, SearchListController, UpdateResult, batch
from .delegate import ItemDelegate, ItemStyles, RowStyle, merge_style, row_style
from .items import Item, ListItem
from .keys import KeyMap
from .list_state import FilterState, ListState
from .messages import BlinkRequested, BlinkTick, SelectionChanged
from .search_input import SearchInput
from .selection import SelectionTracker
from .widget import SearchList

__all__ = [
    "BlinkRequested",
    "BlinkTick",
    "Consumption",
    "FilterState",
    "Item",
    "ItemDelegate",
    "ItemStyles",
    "KeyMap",
    "ListItem",
    "ListState",
    "RowStyle",
    "SearchInput",
    "SearchList",
    "SearchListController",
    "SelectionChanged",
    "SelectionTracker",
    "UpdateResult",
    "batch",
    "merge_style",
    "row_style",
]
