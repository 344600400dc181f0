"""Discovers candidate source files below a root directory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Collection, Iterator

from .config import DEFAULT_EXCLUDED_FILES, DEFAULT_SOURCE_EXTENSION


def iter_source_files(
    root: str | Path,
    *,
    extension: str = DEFAULT_SOURCE_EXTENSION,
    excluded: Collection[str] = DEFAULT_EXCLUDED_FILES,
) -> Iterator[Path]:
    """Yield source files under ``root``; a missing root yields nothing."""
    root_path = Path(root)
    if not root_path.is_dir():
        return
    excluded_names = set(excluded)
    for dirpath, dirnames, filenames in os.walk(root_path):
        dirnames.sort()
        current_dir = Path(dirpath)
        for filename in sorted(filenames):
            if not filename.endswith(extension) or filename in excluded_names:
                continue
            yield current_dir / filename


__all__ = ["iter_source_files"]
