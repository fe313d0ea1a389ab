"""Items shown by the search list."""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class Item(Protocol):
    """Anything with a title and a description can be listed."""

    @property
    def title(self) -> str: ...

    @property
    def description(self) -> str: ...


@dataclass(frozen=True)
class ListItem:
    """Plain title/description item."""

    title: str
    description: str = ""

    @classmethod
    def parse(cls, line: str) -> "ListItem":
        """Build an item from ``title<TAB>description``."""
        title, _, description = line.rstrip("\n").partition("\t")
        return cls(title=title, description=description)
