"""Immutable breadcrumbs for locating nodes in a copied graph.

Usage:
    path = PathTracker()
    str(path.field("Users").index(2).key("name"))  # 'root.Users[2]["name"]'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PathTracker:
    """Human-readable location of a node, built one segment at a time.

    Every step returns a new tracker, so a tracker handed to a child visit can
    never be altered by a sibling.
    """

    rendered: str = "root"

    def field(self, name: str) -> PathTracker:
        """Step into a named field: ``root.Name``."""
        return PathTracker(f"{self.rendered}.{name}")

    def index(self, position: int) -> PathTracker:
        """Step into a positional element: ``root[2]``."""
        return PathTracker(f"{self.rendered}[{position}]")

    def key(self, key: Any) -> PathTracker:
        """Step into a mapping value: ``root["key"]`` or ``root[3]``."""
        if isinstance(key, str):
            return PathTracker(f'{self.rendered}["{key}"]')
        return PathTracker(f"{self.rendered}[{key!r}]")

    def __str__(self) -> str:
        return self.rendered
