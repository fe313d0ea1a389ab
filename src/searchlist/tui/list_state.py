"""List model: items, cursor, and the filter lifecycle.

``ListState.update`` consumes navigation and filter keys. While filtering,
every change to the filter text re-ranks the items; the cursor then indexes
the ranking instead of the raw item sequence.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Tuple

from textual import events
from textual.message import Message

from ..ranking import RankedItem, SearchPolicy, rank
from ..util.log import Log
from .items import Item
from .keys import KeyMap

if TYPE_CHECKING:
    from .delegate import ItemDelegate

log = Log.create({"service": "tui.list_state"})


class FilterState(str, Enum):
    """Lifecycle phase of the search interaction."""

    UNFILTERED = "unfiltered"
    FILTERING = "filtering"
    APPLIED = "applied"


class ListState:
    """Ordered items with a cursor and a live filter."""

    def __init__(
        self,
        items: Sequence[Item],
        delegate: "ItemDelegate",
        policy: SearchPolicy,
        width: int = 0,
        height: int = 0,
        keymap: Optional[KeyMap] = None,
    ) -> None:
        self.items: List[Item] = list(items)
        self.delegate = delegate
        self.policy = policy
        self.width = width
        self.height = height
        self.keymap = keymap or KeyMap()
        self.filter_state = FilterState.UNFILTERED
        self.filter_text = ""
        self.show_help = False
        self.show_full_help = False
        self._ranking: List[RankedItem] = []
        self.cursor = 0 if self.items else -1

    # Queries

    def visible_count(self) -> int:
        if self.filter_state == FilterState.UNFILTERED:
            return len(self.items)
        return len(self._ranking)

    def visible_ranking(self) -> List[RankedItem]:
        """Visible rows in display order."""
        if self.filter_state == FilterState.UNFILTERED:
            return [RankedItem(index=i) for i in range(len(self.items))]
        return list(self._ranking)

    def visible_items(self) -> List[Item]:
        return [self.items[r.index] for r in self.visible_ranking()]

    @property
    def index(self) -> int:
        """Cursor position within the visible rows, -1 when none are visible."""
        return self.cursor

    def original_index(self, visible_index: int) -> Optional[int]:
        """Map a visible row to its position in ``items``."""
        ranked = self.ranked_at(visible_index)
        return ranked.index if ranked else None

    def cursor_original_index(self) -> Optional[int]:
        return self.original_index(self.cursor)

    def selected_item(self) -> Optional[Item]:
        """Item under the cursor, if any."""
        index = self.cursor_original_index()
        return None if index is None else self.items[index]

    def ranked_at(self, visible_index: int) -> Optional[RankedItem]:
        if not 0 <= visible_index < self.visible_count():
            return None
        if self.filter_state == FilterState.UNFILTERED:
            return RankedItem(index=visible_index)
        return self._ranking[visible_index]

    def matches_for(self, visible_index: int) -> Tuple[int, ...]:
        """Matched character offsets of a visible row's title."""
        ranked = self.ranked_at(visible_index)
        return ranked.matched_positions if ranked else ()

    @property
    def per_page(self) -> int:
        row = self.delegate.height + self.delegate.spacing
        return max(1, self.height // row) if self.height > 0 else max(1, self.visible_count())

    @property
    def page(self) -> int:
        return max(self.cursor, 0) // self.per_page

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.visible_count() / self.per_page))

    def page_bounds(self) -> Tuple[int, int]:
        """Slice of visible rows on the cursor's page."""
        start = self.page * self.per_page
        return start, min(start + self.per_page, self.visible_count())

    # Mutation

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = max(height, 0)

    def set_items(self, items: Sequence[Item]) -> None:
        """Replace the item sequence and re-rank against the current filter."""
        self.items = list(items)
        if self.filter_state != FilterState.UNFILTERED:
            self._refilter()
        self._clamp_cursor()

    def _set_filter_state(self, state: FilterState) -> None:
        if state != self.filter_state:
            log.debug("filter state changed", {"from": self.filter_state.value, "to": state.value})
        self.filter_state = state

    def _clamp_cursor(self) -> None:
        count = self.visible_count()
        if count == 0:
            self.cursor = -1
        else:
            self.cursor = max(0, min(self.cursor, count - 1))

    def _refilter(self) -> None:
        if not self.filter_text:
            self._ranking = [RankedItem(index=i) for i in range(len(self.items))]
            return
        titles = [item.title for item in self.items]
        self._ranking = rank(self.filter_text, titles, self.policy)

    def start_filtering(self) -> None:
        if not self.filter_text:
            self._ranking = [RankedItem(index=i) for i in range(len(self.items))]
        self.cursor = 0
        self._set_filter_state(FilterState.FILTERING)
        self._clamp_cursor()

    def reset_filtering(self) -> None:
        self.filter_text = ""
        self._ranking = []
        self._set_filter_state(FilterState.UNFILTERED)
        self._clamp_cursor()

    def set_filter_text(self, text: str) -> None:
        """Replace the filter text and re-rank when filtering."""
        if text == self.filter_text:
            return
        self.filter_text = text
        if self.filter_state != FilterState.UNFILTERED:
            self._refilter()
            self._clamp_cursor()

    def cursor_up(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def cursor_down(self) -> None:
        if self.cursor < self.visible_count() - 1:
            self.cursor += 1

    def next_page(self) -> None:
        if self.page < self.total_pages - 1:
            self.cursor = min(self.cursor + self.per_page, self.visible_count() - 1)

    def prev_page(self) -> None:
        if self.page > 0:
            self.cursor -= self.per_page

    def go_to_start(self) -> None:
        if self.visible_count():
            self.cursor = 0

    def go_to_end(self) -> None:
        if self.visible_count():
            self.cursor = self.visible_count() - 1

    # Event handling

    def update(self, event: Any) -> List[Message]:
        """Apply one event; returns the effects it produced."""
        if not isinstance(event, events.Key):
            return []
        if self.filter_state == FilterState.FILTERING:
            self._handle_filtering(event)
            return []
        return self._handle_browsing(event)

    def _handle_browsing(self, event: events.Key) -> List[Message]:
        km = self.keymap
        has_items = bool(self.items)

        if self.filter_state == FilterState.APPLIED and km.matches(event, km.clear_filter):
            self.reset_filtering()
        elif has_items and km.matches(event, km.cursor_up):
            self.cursor_up()
        elif has_items and km.matches(event, km.cursor_down):
            self.cursor_down()
        elif has_items and km.matches(event, km.prev_page):
            self.prev_page()
        elif has_items and km.matches(event, km.next_page):
            self.next_page()
        elif has_items and km.matches(event, km.go_to_start):
            self.go_to_start()
        elif has_items and km.matches(event, km.go_to_end):
            self.go_to_end()
        elif has_items and km.matches(event, km.filter):
            self.start_filtering()
        elif km.matches(event, km.show_full_help):
            self.show_full_help = not self.show_full_help

        effect = self.delegate.update(event, self)
        return [effect] if effect is not None else []

    def _handle_filtering(self, event: events.Key) -> None:
        km = self.keymap

        if km.matches(event, km.cancel_while_filtering):
            self.reset_filtering()
            return

        if km.matches(event, km.accept_while_filtering):
            if not self.items:
                return
            if not self.filter_text or not self._ranking:
                self.reset_filtering()
                return
            self._set_filter_state(FilterState.APPLIED)
            return

        text = self.filter_text
        if event.key in ("backspace", "ctrl+h"):
            text = text[:-1]
        elif event.key == "ctrl+u":
            text = ""
        elif event.key == "ctrl+w":
            text = text.rstrip()
            text = text[: text.rfind(" ") + 1] if " " in text else ""
        elif event.is_printable and event.character:
            text += event.character
        self.set_filter_text(text)
