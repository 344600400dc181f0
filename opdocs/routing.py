"""Maps source file locations to documentation categories."""

from __future__ import annotations

from pathlib import PurePath
from typing import Dict, Mapping, Optional

ANCHOR_DIRECTORY = "operations"
DEFAULT_CATEGORY = "other"

# Source folder directly under the anchor -> documentation category.
CATEGORY_TABLE: Dict[str, str] = {
    "comparison": "comparison",
    "equality": "equality",
    "exception": "callable",
    "memory": "callable",
    "string": "strings",
    "type": "types",
    "operations": "other",
}


class CategoryRouter:
    """Pure, total mapping from a file path to its documentation category."""

    def __init__(
        self,
        table: Optional[Mapping[str, str]] = None,
        *,
        anchor: str = ANCHOR_DIRECTORY,
        default: str = DEFAULT_CATEGORY,
    ) -> None:
        self.table: Dict[str, str] = dict(CATEGORY_TABLE)
        if table:
            self.table.update(table)
        self.anchor = anchor
        self.default = default

    def route(self, path: str | PurePath) -> str:
        parts = PurePath(path).parts
        try:
            index = parts.index(self.anchor)
        except ValueError:
            return self.default
        # A folder only counts when a file name follows it.
        if index >= len(parts) - 2:
            return self.default
        return self.table.get(parts[index + 1], self.default)


__all__ = ["CategoryRouter", "CATEGORY_TABLE", "ANCHOR_DIRECTORY", "DEFAULT_CATEGORY"]
