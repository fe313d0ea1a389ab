"""Textual widget hosting a ``SearchListController``."""

from __future__ import annotations

from typing import List, Optional, Sequence

from rich.console import Group, RenderableType
from rich.text import Text
from textual import events
from textual.message import Message
from textual.widget import Widget

from ..core.config import SearchListConfig
from ..util.log import Log
from .controller import SearchListController, UpdateResult
from .delegate import ItemDelegate
from .items import Item
from .keys import KeyMap, binding_keys
from .messages import BlinkRequested, BlinkTick

log = Log.create({"service": "tui.widget"})


class SearchList(Widget, can_focus=True):
    """Filterable, multi-select list with a search box on top.

    Keys the list had no use for are left to bubble to the parent, and a
    ``SearchList.KeyReleased`` message is posted for them.
    """

    DEFAULT_CSS = """
    SearchList {
        width: 100%;
        height: 1fr;
    }
    """

    class KeyReleased(Message):
        """A key press that changed nothing in the list.

        ``bound`` tells whether the key belongs to the list's key map, so a
        host can tell a no-op list key from a key the list never handles.
        """

        def __init__(self, search_list: "SearchList", key: str, bound: bool = False) -> None:
            self.search_list = search_list
            self.key = key
            self.bound = bound
            super().__init__()

        @property
        def control(self) -> "SearchList":
            return self.search_list

    def __init__(
        self,
        items: Sequence[Item],
        config: Optional[SearchListConfig] = None,
        delegate: Optional[ItemDelegate] = None,
        keymap: Optional[KeyMap] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.controller = SearchListController(items, config=config, delegate=delegate, keymap=keymap)

    @property
    def selected_items(self) -> List[Item]:
        return self.controller.selected_items()

    @property
    def highlighted(self) -> Optional[Item]:
        """Item under the cursor."""
        return self.controller.list.selected_item()

    def set_items(self, items: Sequence[Item]) -> None:
        self.controller.set_items(items)
        self.refresh()

    def _apply(self, result: UpdateResult) -> None:
        for effect in result.effects or ():
            if isinstance(effect, BlinkRequested):
                tag = effect.tag
                self.set_timer(effect.delay, lambda: self._tick(tag))
            else:
                self.post_message(effect)
        self.refresh()

    def _tick(self, tag: int) -> None:
        self._apply(self.controller.update(BlinkTick(tag)))

    def on_key(self, event: events.Key) -> None:
        result = self.controller.update(event)
        self._apply(result)
        if result.unused:
            bound = self.controller.list.keymap.uses(event)
            self.post_message(self.KeyReleased(self, event.key, bound))
            return
        event.stop()
        event.prevent_default()

    def on_resize(self, event: events.Resize) -> None:
        self._apply(self.controller.update(event))

    def on_focus(self, event: events.Focus) -> None:
        self._apply(self.controller.update(event))

    def on_blur(self, event: events.Blur) -> None:
        self._apply(self.controller.update(event))

    def _help_line(self) -> Text:
        km = self.controller.list.keymap
        parts = [
            f"{b.key_display or binding_keys(b)[0]} {b.description}"
            for b in km.browsing()
            if b.action not in km.disabled
        ]
        return Text(" • ".join(parts), style="dim")

    def render(self) -> RenderableType:
        state = self.controller.list
        lines: List[RenderableType] = [self.controller.search_input.render()]
        start, end = state.page_bounds()
        visible = state.visible_items()
        for visible_index in range(start, end):
            lines.append(self.controller.delegate.render(state, visible_index, visible[visible_index]))
            if visible_index < end - 1:
                lines.extend(Text("") for _ in range(self.controller.delegate.spacing))
        if not visible:
            lines.append(Text("  No items.", style="dim"))
        if state.show_help and state.show_full_help:
            lines.append(self._help_line())
        return Group(*lines)
