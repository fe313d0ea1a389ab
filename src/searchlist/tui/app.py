"""Standalone picker application.

Shows one ``SearchList`` full screen. Escape and enter reach the app only
when the list released them, so escape cancels a filter first and quits
second.
"""

from typing import List, Optional, Sequence

from textual.app import App, ComposeResult

from ..core.config import SearchListConfig
from ..util.log import Log
from .items import Item
from .messages import SelectionChanged
from .widget import SearchList

log = Log.create({"service": "tui.app"})


class PickerApp(App[Optional[List[Item]]]):
    """Pick one or more items; exits with the chosen items or None."""

    def __init__(self, items: Sequence[Item], config: Optional[SearchListConfig] = None) -> None:
        super().__init__()
        self._items = list(items)
        self._config = config

    def compose(self) -> ComposeResult:
        yield SearchList(self._items, config=self._config, id="search-list")

    def on_mount(self) -> None:
        self.query_one(SearchList).focus()

    def on_search_list_key_released(self, event: SearchList.KeyReleased) -> None:
        if event.key == "escape":
            self.exit(None)
        elif event.key == "enter":
            self.exit(self.chosen(event.search_list))

    def on_selection_changed(self, event: SelectionChanged) -> None:
        log.debug("selection changed", {"title": event.item.title, "selected": event.selected})

    @staticmethod
    def chosen(search_list: SearchList) -> List[Item]:
        """Selected items, or the highlighted one when nothing is selected."""
        selected = search_list.selected_items
        if selected:
            return selected
        highlighted = search_list.highlighted
        return [highlighted] if highlighted is not None else []


def run_picker(items: Sequence[Item], config: Optional[SearchListConfig] = None) -> Optional[List[Item]]:
    """Run the picker in the terminal and return its result."""
    return PickerApp(items, config).run()
