"""Messages exchanged between the search list and its host.

``BlinkTick`` is inbound: the host delivers it when a scheduled blink is due.
``BlinkRequested`` and ``SelectionChanged`` are effects returned by an
update; the widget schedules the former and posts the latter.
"""

from typing import Any

from textual.message import Message


class BlinkTick(Message):
    """Cursor blink timer fired."""

    def __init__(self, tag: int) -> None:
        self.tag = tag
        super().__init__()


class BlinkRequested(Message):
    """Schedule a ``BlinkTick`` carrying ``tag`` after ``delay`` seconds."""

    def __init__(self, tag: int, delay: float) -> None:
        self.tag = tag
        self.delay = delay
        super().__init__()


class SelectionChanged(Message):
    """An item's selected state was toggled."""

    def __init__(self, item: Any, selected: bool) -> None:
        self.item = item
        self.selected = selected
        super().__init__()
