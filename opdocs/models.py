"""Core data models shared across opdocs components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional


@dataclass
class SourceUnit:
    """A discovered source file and its raw text."""

    path: Path
    text: str

    @property
    def name(self) -> str:
        """Base file name without extension."""
        return self.path.stem


@dataclass
class Fact:
    """Structured fact emitted by an extractor for the document builder."""

    kind: str
    value: Any
    source: str


@dataclass(frozen=True)
class Example:
    """Usage snippets recovered from one labelled unittest block."""

    label: str
    code: str
    is_negated: bool = False
    is_failure_illustration: bool = False


@dataclass
class ExtractedDoc:
    """Normalized documentation record for one source file."""

    name: str
    file_path: Path
    description: Optional[str] = None
    narrative_comment: Optional[str] = None
    examples: List[Example] = field(default_factory=list)
    supported_types: List[str] = field(default_factory=list)
    aliases: List[str] = field(default_factory=list)
    has_negation_modifier: bool = False
    primary_identifier: Optional[str] = None
    category: str = "other"

    @property
    def display_name(self) -> str:
        return self.primary_identifier or self.name
