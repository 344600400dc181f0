"""Pattern-based extractors for D assertion operation sources.

Each extractor owns one regular expression (or a small family of them) and
recovers a single kind of fact. Extractors never consult each other: a file
with no description still yields its examples, and a file with no match at all
simply yields no facts.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, List, Optional, Tuple

from .base import ALIAS, DESCRIPTION, EXAMPLE, IDENTIFIER, NARRATIVE, SUPPORTED_TYPE, Extractor
from ..models import Example, Fact, SourceUnit

EXPECT_ENTRY_POINT = "expect"
NEGATION_MARKER = ".not."
FAILURE_HELPER = "recordEvaluation"

# `void equal(ref Evaluation evaluation)`
_PRIMARY_DECLARATION = r"void\s+(\w+)\s*\(\s*ref\s+Evaluation\b"
_PRIMARY_PATTERN = re.compile(_PRIMARY_DECLARATION)

# `static immutable equalDescription = "..."`, optionally typed
_DESCRIPTION_PATTERN = re.compile(
    r'static\s+immutable\s+(?:\w+\s+)?\w*[Dd]escription\s*=\s*"([^"]*)"'
)

# One or more `///` lines with nothing but attributes between them and the declaration.
_NARRATIVE_PATTERN = re.compile(
    r"^([ \t]*///[^\n]*(?:\n[ \t]*///[^\n]*)*)\n[ \t]*"
    r"(?:(?:@\w+(?:\([^)\n]*\))?|public|package|static|pure|nothrow)(?:[ \t]+|[ \t]*\n[ \t]*))*"
    + _PRIMARY_DECLARATION,
    re.MULTILINE,
)

_UNITTEST_PATTERN = re.compile(r'@\("([^"]+)"\)\s*(?:@\w+\s*)*unittest\s*\{')
# String literals may contain `;` without ending the statement.
_STATEMENT_CHUNK = r'(?:"(?:[^"\\]|\\.)*"|[^;"])'
_EXPECT_PATTERN = re.compile(
    r"\b" + EXPECT_ENTRY_POINT + r"\(" + _STATEMENT_CHUNK + r"*?\)" + _STATEMENT_CHUNK + r"+;"
)

_TYPE_LIST_PATTERN = re.compile(r"static\s+foreach\s*\(\s*Type\s*;\s*AliasSeq!\(([^)]+)\)")

_ALIAS_PATTERN = re.compile(r"\balias\s+(\w+)\s*=\s*(\w+)")


class IdentifierExtractor(Extractor):
    """Captures the name of the `void op(ref Evaluation ...)` declaration."""

    name = "identifier"
    kind = IDENTIFIER

    def extract(self, unit: SourceUnit) -> Iterable[Fact]:
        match = _PRIMARY_PATTERN.search(unit.text)
        if match:
            yield self.fact(match.group(1))


class DescriptionExtractor(Extractor):
    """Captures the first `static immutable *Description` string literal.

    An empty first literal still wins; it just produces no fact.
    """

    name = "description"
    kind = DESCRIPTION

    def extract(self, unit: SourceUnit) -> Iterable[Fact]:
        match = _DESCRIPTION_PATTERN.search(unit.text)
        if match and match.group(1):
            yield self.fact(match.group(1))


class NarrativeExtractor(Extractor):
    """Joins the ddoc block sitting directly on top of the primary declaration."""

    name = "narrative"
    kind = NARRATIVE

    def extract(self, unit: SourceUnit) -> Iterable[Fact]:
        match = _NARRATIVE_PATTERN.search(unit.text)
        if not match:
            return
        lines = [_strip_ddoc(line) for line in match.group(1).splitlines()]
        narrative = " ".join(line for line in lines if line)
        if narrative:
            yield self.fact(narrative)


class ExampleExtractor(Extractor):
    """Turns `@("label") unittest { ... }` blocks into usage examples."""

    name = "examples"
    kind = EXAMPLE

    def extract(self, unit: SourceUnit) -> Iterable[Fact]:
        for label, body in iter_labelled_unittests(unit.text):
            calls = [call.strip() for call in _EXPECT_PATTERN.findall(body)]
            if not calls:
                continue
            yield self.fact(
                Example(
                    label=label,
                    code="\n".join(calls),
                    is_negated=is_negation(label, body),
                    is_failure_illustration=is_failure_illustration(label, body),
                )
            )


class SupportedTypesExtractor(Extractor):
    """Reads the `static foreach (Type; AliasSeq!(...))` type list."""

    name = "supported_types"
    kind = SUPPORTED_TYPE

    def extract(self, unit: SourceUnit) -> Iterable[Fact]:
        match = _TYPE_LIST_PATTERN.search(unit.text)
        if not match:
            return
        seen: set[str] = set()
        for entry in match.group(1).split(","):
            type_name = entry.strip()
            if type_name and type_name not in seen:
                seen.add(type_name)
                yield self.fact(type_name)


class AliasExtractor(Extractor):
    """Records `alias X = <file name>` statements as alternate names."""

    name = "aliases"
    kind = ALIAS

    def extract(self, unit: SourceUnit) -> Iterable[Fact]:
        target = unit.name.lower()
        seen: set[str] = set()
        for alias, original in _ALIAS_PATTERN.findall(unit.text):
            if original.lower() != target or alias == unit.name or alias in seen:
                continue
            seen.add(alias)
            yield self.fact(alias)


def is_negation(label: str, body: str) -> bool:
    # Substring heuristic: labels such as "cannot ..." also count.
    return "not" in label or NEGATION_MARKER in body


def is_failure_illustration(label: str, body: str) -> bool:
    lowered = label.lower()
    return "fail" in lowered or "error" in lowered or FAILURE_HELPER in body


def iter_labelled_unittests(text: str) -> Iterator[Tuple[str, str]]:
    """Yield `(label, body)` for every labelled unittest block in order."""
    position = 0
    while True:
        match = _UNITTEST_PATTERN.search(text, position)
        if match is None:
            return
        body, end = _block_body(text, match.end())
        if body is None:
            return
        yield match.group(1), body
        position = end


def _block_body(text: str, start: int) -> Tuple[Optional[str], int]:
    """Return the text up to the brace closing the block opened just before ``start``."""
    depth = 1
    index = start
    length = len(text)
    while index < length:
        char = text[index]
        if char in "\"'`":
            index = _skip_quoted(text, index, char)
            continue
        if text.startswith("//", index):
            newline = text.find("\n", index)
            index = length if newline == -1 else newline
            continue
        if text.startswith("/*", index):
            close = text.find("*/", index + 2)
            index = length if close == -1 else close + 2
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:index], index + 1
        index += 1
    return None, length


def _skip_quoted(text: str, index: int, quote: str) -> int:
    index += 1
    length = len(text)
    while index < length:
        char = text[index]
        if char == "\\" and quote != "`":
            index += 2
            continue
        if char == quote:
            return index + 1
        index += 1
    return length


def _strip_ddoc(line: str) -> str:
    stripped = line.strip()
    if stripped.startswith("///"):
        stripped = stripped[3:]
    return stripped.strip()


BUILTIN_EXTRACTORS: List[type[Extractor]] = [
    IdentifierExtractor,
    DescriptionExtractor,
    NarrativeExtractor,
    ExampleExtractor,
    SupportedTypesExtractor,
    AliasExtractor,
]
