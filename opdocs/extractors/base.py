"""Base classes for fact extractors."""

from abc import ABC, abstractmethod
from typing import Any, Iterable

from ..models import Fact, SourceUnit

IDENTIFIER = "identifier"
DESCRIPTION = "description"
NARRATIVE = "narrative"
EXAMPLE = "example"
SUPPORTED_TYPE = "supported_type"
ALIAS = "alias"


class Extractor(ABC):
    """Contract for extractors that recover one kind of fact from source text."""

    name: str = ""
    kind: str = ""

    @abstractmethod
    def extract(self, unit: SourceUnit) -> Iterable[Fact]:
        """Yield zero or more facts; an absent match yields nothing."""

    def fact(self, value: Any) -> Fact:
        return Fact(kind=self.kind, value=value, source=self.name or type(self).__name__)
