"""Shared test helpers."""

from __future__ import annotations

from typing import Optional

from textual import events

from searchlist.tui import ListItem

_CHARACTERS = {
    "slash": "/",
    "space": " ",
    "question_mark": "?",
}


def key(name: str, character: Optional[str] = None) -> events.Key:
    """Build a key event the way the terminal driver would."""
    if character is None:
        character = _CHARACTERS.get(name, name if len(name) == 1 else None)
    return events.Key(name, character)


def typed(text: str) -> list[events.Key]:
    return [key("space") if ch == " " else key(ch) for ch in text]


def make_items(*titles: str) -> list[ListItem]:
    return [ListItem(title=title, description=f"about {title.lower()}") for title in titles]


NOTES = ("Alpha Notes", "Beta Plan", "Gamma Alpha")
