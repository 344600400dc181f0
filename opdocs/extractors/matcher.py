"""Runs every extractor over a source unit."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .base import Extractor
from ..logging import get_logger
from ..models import Fact, SourceUnit


class PatternMatcher:
    """Collects the independent facts produced by a set of extractors."""

    def __init__(self, extractors: Optional[Iterable[Extractor]] = None) -> None:
        if extractors is None:
            from . import select_extractors

            extractors = select_extractors()
        self.extractors: List[Extractor] = list(extractors)
        self.logger = get_logger("matcher")

    def match(self, unit: SourceUnit) -> List[Fact]:
        """Return every fact found in ``unit``; no extractor stops another."""
        facts: List[Fact] = []
        for extractor in self.extractors:
            found = list(extractor.extract(unit))
            if found:
                self.logger.debug(
                    "%s: %s produced %d fact(s)", unit.name, extractor.name, len(found)
                )
            facts.extend(found)
        return facts
