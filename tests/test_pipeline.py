"""Tests for opdocs.pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pytest
import yaml

from opdocs.extractors import Extractor, PatternMatcher, select_extractors
from opdocs.models import Fact, SourceUnit
from opdocs.pipeline import Pipeline, RunSummary
from tests._fixtures.samples import CONTAIN_SOURCE, EQUAL_SOURCE, GREATER_THAN_SOURCE, HELPER_SOURCE
from tests._fixtures.source_builder import SourceTreeBuilder


class ExplodingExtractor(Extractor):
    """Raises for one specific file to simulate an unexpected parse failure."""

    name = "exploding"
    kind = "exploding"

    def extract(self, unit: SourceUnit) -> Iterable[Fact]:
        if unit.name == "equal":
            raise RuntimeError("boom")
        return []


def test_pipeline_end_to_end_contain_scenario(source_tree: SourceTreeBuilder, tmp_path: Path) -> None:
    source_tree.write({"string/contain.d": CONTAIN_SOURCE})
    output_root = tmp_path / "out"

    summary = Pipeline().run(source_tree.root, output_root)

    target = output_root / "strings" / "contain.mdx"
    assert summary.outputs == [target]
    assert summary.scanned == 1
    assert summary.generated == 1
    markdown = target.read_text(encoding="utf-8")
    _, block, body = markdown.split("---\n", 2)
    assert yaml.safe_load(block)["description"] == "Checks that a string contains a value"
    basic_usage = body.split("### Basic Usage", 1)[1]
    assert 'expect("abc").to.contain("a");' in basic_usage


def test_pipeline_routes_and_skips_undocumentable_files(
    source_tree: SourceTreeBuilder, tmp_path: Path
) -> None:
    source_tree.write(
        {
            "equality/equal.d": EQUAL_SOURCE,
            "comparison/greaterThan.d": GREATER_THAN_SOURCE,
            "string/helpers.d": HELPER_SOURCE,
            "string/package.d": CONTAIN_SOURCE,
            "registry.d": EQUAL_SOURCE,
        }
    )
    output_root = tmp_path / "out"

    summary = Pipeline().run(source_tree.root, output_root)

    assert summary.scanned == 3
    assert summary.generated == 2
    assert summary.skipped == 0
    written = sorted(path.relative_to(output_root).as_posix() for path in output_root.rglob("*.mdx"))
    assert written == ["comparison/greaterThan.mdx", "equality/equal.mdx"]


def test_pipeline_missing_root_generates_nothing(tmp_path: Path) -> None:
    output_root = tmp_path / "out"

    summary = Pipeline().run(tmp_path / "missing", output_root)

    assert summary == RunSummary()
    assert not output_root.exists()


def test_pipeline_skips_unreadable_files(source_tree: SourceTreeBuilder, tmp_path: Path) -> None:
    source_tree.write({"string/contain.d": CONTAIN_SOURCE})
    broken = source_tree.root / "string" / "broken.d"
    broken.write_bytes(b"static immutable description = \"\xff\xfe\";\n")

    summary = Pipeline().run(source_tree.root, tmp_path / "out")

    assert summary.scanned == 2
    assert summary.skipped == 1
    assert summary.generated == 1


def test_pipeline_skips_files_whose_extraction_raises(
    source_tree: SourceTreeBuilder, tmp_path: Path
) -> None:
    source_tree.write({"equality/equal.d": EQUAL_SOURCE, "string/contain.d": CONTAIN_SOURCE})
    matcher = PatternMatcher([*select_extractors(), ExplodingExtractor()])

    summary = Pipeline(matcher=matcher).run(source_tree.root, tmp_path / "out")

    assert summary.skipped == 1
    assert summary.generated == 1
    assert (tmp_path / "out" / "strings" / "contain.mdx").exists()


def test_pipeline_overwrites_existing_documents(source_tree: SourceTreeBuilder, tmp_path: Path) -> None:
    source_tree.write({"string/contain.d": CONTAIN_SOURCE})
    target = tmp_path / "out" / "strings" / "contain.mdx"
    target.parent.mkdir(parents=True)
    target.write_text("stale content that is much longer than anything we render\n" * 50, encoding="utf-8")

    Pipeline().run(source_tree.root, tmp_path / "out")

    content = target.read_text(encoding="utf-8")
    assert "stale content" not in content
    assert content.startswith("---\ntitle: contain\n")


def test_pipeline_dry_run_writes_nothing(source_tree: SourceTreeBuilder, tmp_path: Path) -> None:
    source_tree.write({"string/contain.d": CONTAIN_SOURCE})
    output_root = tmp_path / "out"

    summary = Pipeline().run(source_tree.root, output_root, dry_run=True)

    assert summary.generated == 1
    assert summary.outputs == [output_root / "strings" / "contain.mdx"]
    assert not output_root.exists()


def test_pipeline_write_failures_propagate(source_tree: SourceTreeBuilder, tmp_path: Path) -> None:
    source_tree.write({"string/contain.d": CONTAIN_SOURCE})
    output_root = tmp_path / "out"
    output_root.write_text("not a directory", encoding="utf-8")

    with pytest.raises(OSError):
        Pipeline().run(source_tree.root, output_root)


def test_render_file_returns_none_for_plain_code(source_tree: SourceTreeBuilder) -> None:
    source_tree.write({"string/helpers.d": HELPER_SOURCE, "string/contain.d": CONTAIN_SOURCE})
    pipeline = Pipeline()

    assert pipeline.render_file(source_tree.root / "string" / "helpers.d") is None
    rendered = pipeline.render_file(source_tree.root / "string" / "contain.d")
    assert rendered is not None
    assert rendered.startswith("---\ntitle: contain\n")
