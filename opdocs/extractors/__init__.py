"""Fact extractor implementations."""

from __future__ import annotations

from typing import Dict, List, Sequence

from .base import Extractor
from .matcher import PatternMatcher
from .patterns import BUILTIN_EXTRACTORS

EXTRACTORS_BY_NAME: Dict[str, type[Extractor]] = {
    extractor.name: extractor for extractor in BUILTIN_EXTRACTORS
}


def select_extractors(enabled: Sequence[str] | None = None) -> List[Extractor]:
    """Instantiate the built-in extractors, optionally restricted to ``enabled`` names."""
    if enabled is None:
        return [factory() for factory in BUILTIN_EXTRACTORS]

    wanted = {name.lower() for name in enabled}
    unknown = wanted - set(EXTRACTORS_BY_NAME)
    if unknown:
        raise ValueError(f"Unknown extractors requested: {', '.join(sorted(unknown))}")
    return [factory() for factory in BUILTIN_EXTRACTORS if factory.name in wanted]


__all__ = [
    "EXTRACTORS_BY_NAME",
    "Extractor",
    "PatternMatcher",
    "select_extractors",
]
