"""Assembles extracted facts into documentation records."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .extractors.base import ALIAS, DESCRIPTION, EXAMPLE, IDENTIFIER, NARRATIVE, SUPPORTED_TYPE
from .models import Example, ExtractedDoc, Fact, SourceUnit
from .routing import CategoryRouter


def is_documentable(doc: ExtractedDoc) -> bool:
    """Return True when the record carries at least one renderable fact."""
    return bool(
        doc.description or doc.narrative_comment or doc.examples or doc.primary_identifier
    )


class DocumentBuilder:
    """Combines the facts of one source unit into an ``ExtractedDoc``."""

    def __init__(self, router: CategoryRouter | None = None) -> None:
        self.router = router or CategoryRouter()

    def build(self, unit: SourceUnit, facts: Iterable[Fact]) -> Optional[ExtractedDoc]:
        """Return the normalized record, or None when nothing is documentable."""
        doc = ExtractedDoc(name=unit.name, file_path=unit.path)
        examples: List[Example] = []

        for fact in facts:
            if fact.kind == IDENTIFIER:
                if not doc.primary_identifier and fact.value:
                    doc.primary_identifier = str(fact.value)
            elif fact.kind == DESCRIPTION:
                if not doc.description and fact.value:
                    doc.description = str(fact.value)
            elif fact.kind == NARRATIVE:
                if not doc.narrative_comment and fact.value:
                    doc.narrative_comment = str(fact.value)
            elif fact.kind == EXAMPLE:
                examples.append(fact.value)
            elif fact.kind == SUPPORTED_TYPE:
                _append_unique(doc.supported_types, str(fact.value))
            elif fact.kind == ALIAS:
                alias = str(fact.value)
                if alias != doc.name:
                    _append_unique(doc.aliases, alias)

        doc.examples = examples
        doc.has_negation_modifier = any(example.is_negated for example in examples)

        if not is_documentable(doc):
            return None
        doc.category = self.router.route(unit.path)
        return doc


def _append_unique(values: List[str], value: str) -> None:
    if value and value not in values:
        values.append(value)


__all__ = ["DocumentBuilder", "is_documentable"]
