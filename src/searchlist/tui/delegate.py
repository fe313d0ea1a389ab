"""Row rendering for the search list.

The delegate decides which style class a row gets, highlights the title
characters that matched the filter, and routes the selection toggle key to
its ``SelectionTracker``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence

from rich.style import Style
from rich.text import Text
from textual.message import Message

from .items import Item
from .list_state import FilterState, ListState
from .selection import SelectionTracker

BULLET = "•"
EMPTY_SQUARE = " "

# Every title is prefixed with one selection glyph, so matched offsets
# into the title move right by this many columns when rendered.
PREFIX_WIDTH = 1


class RowStyle(str, Enum):
    """Mutually exclusive style classes for a row."""

    DIMMED = "dimmed"
    SELECTED = "selected"
    NORMAL = "normal"


def row_style(is_cursor: bool, filter_state: FilterState, filter_text: str) -> RowStyle:
    """Pick the style class for one row.

    Rows are dimmed while the filter is being typed but still empty. The
    cursor row is drawn selected unless the user is typing a filter.
    """
    if filter_state == FilterState.FILTERING and not filter_text:
        return RowStyle.DIMMED
    if is_cursor and filter_state != FilterState.FILTERING:
        return RowStyle.SELECTED
    return RowStyle.NORMAL


def merge_style(base: Style, overlay: Style) -> Style:
    """Combine two styles; attributes set on ``base`` win over ``overlay``."""
    return overlay + base


@dataclass
class ItemStyles:
    """Title and description styles for each row class."""

    normal_title: Style = field(default_factory=lambda: Style(color="#dddddd"))
    normal_desc: Style = field(default_factory=lambda: Style(color="#777777"))
    selected_title: Style = field(default_factory=lambda: Style(color="#ee6ff8"))
    selected_desc: Style = field(default_factory=lambda: Style(color="#ad58b4"))
    selected_border: Style = field(default_factory=lambda: Style(color="#ad58b4"))
    dimmed_title: Style = field(default_factory=lambda: Style(color="#777777"))
    dimmed_desc: Style = field(default_factory=lambda: Style(color="#4d4d4d"))
    filter_match: Style = field(default_factory=lambda: Style(underline=True))

    def for_row(self, style: RowStyle) -> tuple[Style, Style]:
        if style == RowStyle.DIMMED:
            return self.dimmed_title, self.dimmed_desc
        if style == RowStyle.SELECTED:
            return self.selected_title, self.selected_desc
        return self.normal_title, self.normal_desc


def highlight(text: str, positions: Sequence[int], unmatched: Style, matched: Style) -> Text:
    """Style ``text`` with ``matched`` at ``positions`` and ``unmatched`` elsewhere."""
    result = Text(text, style=unmatched)
    for pos in positions:
        if 0 <= pos < len(text):
            result.stylize(matched, pos, pos + 1)
    return result


class ItemDelegate:
    """Renders rows and owns the selection toggle."""

    def __init__(
        self,
        tracker: Optional[SelectionTracker] = None,
        styles: Optional[ItemStyles] = None,
        show_description: bool = True,
        spacing: int = 1,
    ) -> None:
        self.tracker = tracker or SelectionTracker()
        self.styles = styles or ItemStyles()
        self.show_description = show_description
        self.spacing = spacing

    @property
    def height(self) -> int:
        return 2 if self.show_description else 1

    def update(self, event: Any, state: ListState) -> Optional[Message]:
        return self.tracker.update(event, state)

    def render(self, state: ListState, visible_index: int, item: Item) -> Text:
        """Render one row (title, plus description when shown)."""
        if state.width <= 0:
            return Text()

        original = state.original_index(visible_index)
        selected = original is not None and self.tracker.is_selected(original)
        prefix = BULLET if selected else EMPTY_SQUARE
        title = f"{prefix}{item.title}"
        desc = item.description

        klass = row_style(visible_index == state.index, state.filter_state, state.filter_text)
        title_style, desc_style = self.styles.for_row(klass)
        is_filtered = state.filter_state in (FilterState.FILTERING, FilterState.APPLIED)

        if is_filtered and klass != RowStyle.DIMMED:
            matched = merge_style(title_style, self.styles.filter_match)
            ranked = state.ranked_at(visible_index)
            shifted = ranked.display_positions(PREFIX_WIDTH) if ranked else ()
            title_text = highlight(title, shifted, title_style, matched)
        else:
            title_text = Text(title, style=title_style)

        gutter = Text("│", style=self.styles.selected_border) if klass == RowStyle.SELECTED else Text(" ")
        text_width = max(state.width - 3, 1)
        title_text.truncate(text_width, overflow="ellipsis")

        row = Text.assemble(gutter, title_text)
        if self.show_description:
            first_line = desc.split("\n", 1)[0]
            desc_text = Text(f"{EMPTY_SQUARE}{first_line}", style=desc_style)
            desc_text.truncate(text_width, overflow="ellipsis")
            row.append("\n")
            row.append_text(Text.assemble(gutter.copy(), desc_text))
        return row
