"""Single-line search box shown above the list.

The box only displays text: the list owns the filter text and the controller
copies it here after every update. What the box owns is focus and the
blinking edit cursor.
"""

from typing import Any, Optional

from rich.style import Style
from rich.text import Text
from textual import events

from .messages import BlinkRequested, BlinkTick

BLINK_INTERVAL = 0.53


class SearchInput:
    """Display value, edit cursor position, focus and blink phase."""

    def __init__(self, prompt: str = "🔍: ", width: int = 0) -> None:
        self.prompt = prompt
        self.width = width
        self.value = ""
        self.position = 0
        self.focused = False
        self.cursor_visible = True
        self._blink_tag = 0

    def set_value(self, value: str) -> None:
        self.value = value
        self.position = min(self.position, len(value))

    def cursor_end(self) -> None:
        self.position = len(self.value)

    def _restart_blink(self) -> BlinkRequested:
        self._blink_tag += 1
        self.cursor_visible = True
        return BlinkRequested(self._blink_tag, BLINK_INTERVAL)

    def focus(self) -> BlinkRequested:
        """Take focus and start blinking."""
        self.focused = True
        return self._restart_blink()

    def blur(self) -> None:
        """Drop focus; pending blink ticks become stale."""
        self.focused = False
        self.cursor_visible = True
        self._blink_tag += 1

    def update(self, event: Any) -> Optional[BlinkRequested]:
        """React to a key press or blink tick while focused."""
        if not self.focused:
            return None
        if isinstance(event, events.Key):
            # typing keeps the cursor solid, blinking resumes afterwards
            return self._restart_blink()
        if isinstance(event, BlinkTick):
            if event.tag != self._blink_tag:
                return None
            self.cursor_visible = not self.cursor_visible
            self._blink_tag += 1
            return BlinkRequested(self._blink_tag, BLINK_INTERVAL)
        return None

    def render(self) -> Text:
        text = Text(self.prompt)
        text.append(self.value[: self.position])
        if self.focused:
            under = self.value[self.position : self.position + 1] or " "
            text.append(under, style=Style(reverse=self.cursor_visible))
            text.append(self.value[self.position + 1 :])
        else:
            text.append(self.value[self.position :])
        if self.width > 0:
            text.truncate(self.width, overflow="ellipsis")
        return text
