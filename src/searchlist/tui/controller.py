"""Event routing for the search list.

``SearchListController.update`` runs one inbound event through the list and
decides three things: what the search box shows, whether the search box holds
focus, and whether the event did anything at all. Keys that changed nothing
while the user is not filtering come back as ``Consumption.UNUSED`` so an
enclosing widget can reinterpret them (escape closing the whole view, say).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

from textual import events
from textual.message import Message

from ..core.config import SearchListConfig
from ..util.log import Log
from .delegate import ItemDelegate
from .items import Item
from .keys import KeyMap
from .list_state import FilterState, ListState
from .messages import BlinkTick
from .search_input import SearchInput
from .selection import SelectionTracker

log = Log.create({"service": "tui.controller"})

# Row taken by the search box above the list.
SEARCH_ROWS = 1


class Consumption(str, Enum):
    """Whether an event had any effect on the list."""

    CONSUMED = "consumed"
    UNUSED = "unused"


Effects = Optional[Tuple[Message, ...]]


def batch(effects: Sequence[Optional[Message]]) -> Effects:
    """Drop empty effects; ``None`` when nothing is left."""
    kept = tuple(effect for effect in effects if effect is not None)
    return kept or None


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of one ``update`` call."""

    effects: Effects = None
    consumption: Consumption = Consumption.CONSUMED

    @property
    def unused(self) -> bool:
        return self.consumption == Consumption.UNUSED


@dataclass(frozen=True)
class _Snapshot:
    filtering: bool
    full_help: bool
    filter_state: FilterState
    cursor: int
    selection: Tuple[Tuple[int, bool], ...]


class SearchListController:
    """Composes the list, the search box and the selection tracker."""

    def __init__(
        self,
        items: Sequence[Item],
        config: Optional[SearchListConfig] = None,
        delegate: Optional[ItemDelegate] = None,
        keymap: Optional[KeyMap] = None,
    ) -> None:
        self.config = config or SearchListConfig()
        self.delegate = delegate or ItemDelegate(show_description=self.config.show_description)
        self.list = ListState(
            items,
            self.delegate,
            self.config.policy(),
            width=self.config.width,
            height=self.config.height,
            keymap=keymap,
        )
        self.search_input = SearchInput(prompt=self.config.prompt, width=self.config.width)

    @property
    def tracker(self) -> SelectionTracker:
        return self.delegate.tracker

    @property
    def filtering(self) -> bool:
        return self.list.filter_state == FilterState.FILTERING

    def selected_items(self) -> List[Item]:
        """Items toggled on, in original order."""
        return [self.list.items[i] for i in self.tracker.selected_indices() if i < len(self.list.items)]

    def set_items(self, items: Sequence[Item]) -> None:
        self.list.set_items(items)

    def _snapshot(self) -> _Snapshot:
        return _Snapshot(
            filtering=self.filtering,
            full_help=self.list.show_full_help,
            filter_state=self.list.filter_state,
            cursor=self.list.index,
            selection=tuple(sorted(self.tracker.selection.items())),
        )

    def handle_resize(self, width: int, height: int) -> None:
        log.debug("resize", {"width": width, "height": height})
        self.list.set_size(width, height - SEARCH_ROWS)
        self.search_input.width = width

    def update(self, event: Any) -> UpdateResult:
        """Process one event to completion."""
        if isinstance(event, events.Resize):
            self.handle_resize(event.size.width, event.size.height)
            return UpdateResult()
        if isinstance(event, events.Focus):
            self.list.show_help = True
            return UpdateResult()
        if isinstance(event, events.Blur):
            self.list.show_help = False
            return UpdateResult()
        return self._route(event)

    def _route(self, event: Any) -> UpdateResult:
        effects: List[Optional[Message]] = []

        before = self._snapshot()
        effects.extend(self.list.update(event))
        after = self._snapshot()

        transitioned = before.filtering != after.filtering
        changed = (
            before.full_help != after.full_help
            or before.filter_state != after.filter_state
            or before.cursor != after.cursor
            or before.selection != after.selection
        )

        # the box always mirrors the list's filter text, cursor at the end
        self.search_input.set_value(self.list.filter_text)
        self.search_input.cursor_end()

        if transitioned:
            if after.filtering:
                effects.append(self.search_input.focus())
            else:
                self.search_input.blur()

        if after.filtering and isinstance(event, (events.Key, BlinkTick)):
            effects.append(self.search_input.update(event))

        consumption = Consumption.CONSUMED
        if isinstance(event, events.Key) and not after.filtering and not changed:
            consumption = Consumption.UNUSED
        elif not isinstance(event, (events.Key, BlinkTick)):
            log.debug("event passed through", {"type": type(event).__name__})

        return UpdateResult(effects=batch(effects), consumption=consumption)
