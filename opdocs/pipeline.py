"""Pipeline orchestration: walk, extract, route, render and write."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Collection, List, Optional

from .builder import DocumentBuilder
from .config import (
    DEFAULT_EXCLUDED_FILES,
    DEFAULT_OUTPUT_EXTENSION,
    DEFAULT_SOURCE_EXTENSION,
    OpDocsConfig,
)
from .extractors import PatternMatcher, select_extractors
from .logging import get_logger
from .models import ExtractedDoc, SourceUnit
from .renderer import DocumentRenderer
from .routing import CategoryRouter
from .walker import iter_source_files


@dataclass
class RunSummary:
    """Counters and outputs accumulated by one pipeline run."""

    scanned: int = 0
    generated: int = 0
    skipped: int = 0
    outputs: List[Path] = field(default_factory=list)


class Pipeline:
    """Coordinates extraction of documentation from a source tree."""

    def __init__(
        self,
        matcher: PatternMatcher | None = None,
        builder: DocumentBuilder | None = None,
        renderer: DocumentRenderer | None = None,
        *,
        source_extension: str = DEFAULT_SOURCE_EXTENSION,
        output_extension: str = DEFAULT_OUTPUT_EXTENSION,
        excluded_files: Collection[str] = DEFAULT_EXCLUDED_FILES,
    ) -> None:
        self.matcher = matcher or PatternMatcher()
        self.builder = builder or DocumentBuilder()
        self.renderer = renderer or DocumentRenderer()
        self.source_extension = source_extension
        self.output_extension = output_extension
        self.excluded_files = tuple(excluded_files)
        self.logger = get_logger("pipeline")

    @classmethod
    def from_config(cls, config: OpDocsConfig) -> "Pipeline":
        extractors = select_extractors(config.extractors.enabled)
        return cls(
            matcher=PatternMatcher(extractors),
            builder=DocumentBuilder(CategoryRouter(config.categories)),
            source_extension=config.source_extension,
            output_extension=config.output_extension,
            excluded_files=config.excluded_files,
        )

    def extract(self, path: Path) -> Optional[ExtractedDoc]:
        """Read one source file and return its record, or None if not documentable."""
        unit = SourceUnit(path=path, text=path.read_text(encoding="utf-8"))
        facts = self.matcher.match(unit)
        return self.builder.build(unit, facts)

    def render_file(self, path: Path) -> Optional[str]:
        """Render a single source file without writing anything."""
        doc = self.extract(path)
        if doc is None:
            return None
        return self.renderer.render(doc)

    def run(self, source_root: Path, output_root: Path, *, dry_run: bool = False) -> RunSummary:
        """Generate one document per eligible source file under ``source_root``."""
        self.logger.info("Extracting documentation from %s", source_root)
        self.logger.info("Writing documents to %s", output_root)
        summary = RunSummary()

        for path in iter_source_files(
            source_root, extension=self.source_extension, excluded=self.excluded_files
        ):
            summary.scanned += 1
            try:
                doc = self.extract(path)
            except Exception as exc:
                summary.skipped += 1
                self.logger.warning("Could not parse %s: %s", path, exc)
                continue
            if doc is None:
                self.logger.debug("Nothing to document in %s", path)
                continue

            identifier = f" ({doc.primary_identifier})" if doc.primary_identifier else ""
            self.logger.debug("Parsed %s%s", doc.name, identifier)

            output_path = output_root / doc.category / f"{doc.name}{self.output_extension}"
            markdown = self.renderer.render(doc)
            if not dry_run:
                output_path.parent.mkdir(parents=True, exist_ok=True)
                output_path.write_text(markdown, encoding="utf-8")
                self.logger.debug("Generated %s", output_path)
            summary.generated += 1
            summary.outputs.append(output_path)

        self.logger.info(
            "Scanned %d source files, generated %d documents, skipped %d",
            summary.scanned,
            summary.generated,
            summary.skipped,
        )
        return summary


__all__ = ["Pipeline", "RunSummary"]
