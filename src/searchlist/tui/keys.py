"""Key bindings consulted by the list state machine."""

from dataclasses import dataclass, field
from typing import Iterable

from textual import events
from textual.binding import Binding


def binding_keys(binding: Binding) -> tuple[str, ...]:
    """Split a comma-separated binding key into individual key names."""
    return tuple(key.strip() for key in binding.key.split(",") if key.strip())


def key_matches(event: events.Key, binding: Binding) -> bool:
    """Return True if ``event`` is one of the keys of ``binding``."""
    keys = binding_keys(binding)
    if event.key in keys:
        return True
    return any(alias in keys for alias in event.aliases)


@dataclass
class KeyMap:
    """Bindings for browsing and filtering.

    Bindings listed in ``disabled`` (by action name) never match.
    """

    cursor_up: Binding = Binding("up,k", "cursor_up", "Up")
    cursor_down: Binding = Binding("down,j", "cursor_down", "Down")
    prev_page: Binding = Binding("left,h,pageup,b,u", "prev_page", "Prev page")
    next_page: Binding = Binding("right,l,pagedown,f,d", "next_page", "Next page")
    go_to_start: Binding = Binding("home,g", "go_to_start", "Go to start")
    go_to_end: Binding = Binding("end,G", "go_to_end", "Go to end")
    filter: Binding = Binding("slash", "filter", "Filter", key_display="/")
    clear_filter: Binding = Binding("escape", "clear_filter", "Clear filter")
    cancel_while_filtering: Binding = Binding("escape", "cancel_filter", "Cancel")
    accept_while_filtering: Binding = Binding(
        "enter,tab,shift+tab,ctrl+k,up,ctrl+j,down", "accept_filter", "Apply filter"
    )
    show_full_help: Binding = Binding("question_mark", "show_full_help", "More", key_display="?")
    disabled: set[str] = field(default_factory=set)

    def matches(self, event: events.Key, binding: Binding) -> bool:
        if binding.action in self.disabled:
            return False
        return key_matches(event, binding)

    def disable(self, actions: Iterable[str]) -> None:
        self.disabled.update(actions)

    def browsing(self) -> list[Binding]:
        """Bindings active while not filtering."""
        return [
            self.cursor_up,
            self.cursor_down,
            self.prev_page,
            self.next_page,
            self.go_to_start,
            self.go_to_end,
            self.filter,
            self.clear_filter,
            self.show_full_help,
        ]

    def uses(self, event: events.Key) -> bool:
        """True if any enabled binding claims ``event``, filtering keys included."""
        bindings = self.browsing() + [self.cancel_while_filtering, self.accept_while_filtering]
        return any(self.matches(event, b) for b in bindings)
