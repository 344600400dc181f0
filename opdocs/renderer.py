"""Renders documentation records as Starlight-compatible Markdown."""

from __future__ import annotations

from typing import List, Sequence

import yaml

from .models import Example, ExtractedDoc

FRONT_MATTER_DELIMITER = "---"
CODE_LANGUAGE = "d"
BASIC_USAGE_LIMIT = 3
NEGATION_LIMIT = 2
FAILURE_LIMIT = 1

MODIFIERS = (
    (".not", "Negates the assertion"),
    (".to", "Language chain (no effect)"),
    (".be", "Language chain (no effect)"),
)


class DocumentRenderer:
    """Turns an ``ExtractedDoc`` into front matter plus a sectioned body.

    Output depends only on the record: sections appear in a fixed order, empty
    sections are skipped entirely, and nothing time- or environment-dependent is
    embedded.
    """

    def render(self, doc: ExtractedDoc) -> str:
        lines: List[str] = []
        lines.extend(self._front_matter(doc))
        lines.append(f"# .{doc.display_name}()")
        lines.append("")

        if doc.description:
            lines.extend([doc.description, ""])
        if doc.narrative_comment and doc.narrative_comment != doc.description:
            lines.extend([doc.narrative_comment, ""])

        lines.extend(self._examples(doc.examples))

        if doc.supported_types:
            lines.extend(["## Supported Types", ""])
            lines.extend(f"- `{type_name}`" for type_name in doc.supported_types)
            lines.append("")

        if doc.aliases:
            lines.extend(["## Aliases", ""])
            lines.extend(f"- `.{alias}()`" for alias in doc.aliases)
            lines.append("")

        if doc.has_negation_modifier:
            lines.extend(["## Modifiers", "", "This assertion supports the following modifiers:", ""])
            lines.extend(f"- `{modifier}` - {summary}" for modifier, summary in MODIFIERS)
            lines.append("")

        return "\n".join(lines)

    def _front_matter(self, doc: ExtractedDoc) -> List[str]:
        description = (
            doc.description
            or doc.narrative_comment
            or f"The {doc.display_name} assertion"
        )
        block = yaml.safe_dump(
            {"title": doc.display_name, "description": description},
            sort_keys=False,
            allow_unicode=True,
            width=float("inf"),
        )
        return [FRONT_MATTER_DELIMITER, *block.splitlines(), FRONT_MATTER_DELIMITER, ""]

    def _examples(self, examples: Sequence[Example]) -> List[str]:
        basic = [e for e in examples if not e.is_negated and not e.is_failure_illustration]
        negated = [e for e in examples if e.is_negated and not e.is_failure_illustration]
        failures = [e for e in examples if e.is_failure_illustration]
        if not (basic or negated or failures):
            return []

        lines = ["## Examples", ""]
        if basic:
            lines.extend(["### Basic Usage", ""])
            lines.extend(_code_block(e.code for e in basic[:BASIC_USAGE_LIMIT]))
        if negated:
            lines.extend(["### With Negation", ""])
            lines.extend(_code_block(e.code for e in negated[:NEGATION_LIMIT]))
        if failures:
            lines.extend(
                [
                    "### What Failures Look Like",
                    "",
                    "When the assertion fails, you'll see a clear error message:",
                    "",
                ]
            )
            snippets = ["// This would fail:"]
            snippets.extend(e.code for e in failures[:FAILURE_LIMIT])
            lines.extend(_code_block(snippets))
        return lines


def _code_block(snippets) -> List[str]:
    return [f"```{CODE_LANGUAGE}", *snippets, "```", ""]


__all__ = ["DocumentRenderer", "BASIC_USAGE_LIMIT", "NEGATION_LIMIT"]
