"""CLI parser and command behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from opdocs.cli import _build_parser, main
from tests._fixtures.samples import CONTAIN_SOURCE, HELPER_SOURCE
from tests._fixtures.source_builder import SourceTreeBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "extract"])
    assert args.verbose is True
    assert args.command == "extract"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["extract", "--verbose"])
    assert args.verbose is True
    assert args.command == "extract"


def test_cli_accepts_quiet_on_either_side_of_command() -> None:
    parser = _build_parser()
    assert parser.parse_args(["-q", "show", "x.d"]).quiet is True
    assert parser.parse_args(["extract", "--quiet"]).quiet is True
    assert parser.parse_args(["extract"]).quiet is False


def test_cli_accepts_extract_overrides() -> None:
    parser = _build_parser()
    args = parser.parse_args(["extract", "--source", "src", "--output", "out", "--dry-run"])
    assert args.source == "src"
    assert args.output == "out"
    assert args.dry_run is True
    assert args.config == "."


def test_cli_extract_reports_summary(
    source_tree: SourceTreeBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source_tree.write({"string/contain.d": CONTAIN_SOURCE, "string/helpers.d": HELPER_SOURCE})

    main(["extract", "--config", str(source_tree.project), "--output", str(tmp_path / "out")])

    captured = capsys.readouterr()
    assert "Generated 1 documentation files (scanned 2, skipped 0)" in captured.out
    assert (tmp_path / "out" / "strings" / "contain.mdx").exists()


def test_cli_extract_uses_configured_roots(
    source_tree: SourceTreeBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    source_tree.write({"string/contain.d": CONTAIN_SOURCE})
    (source_tree.project / ".opdocs.yml").write_text(
        "output_root: generated\ncategories:\n  string: text\n", encoding="utf-8"
    )

    main(["extract", "--config", str(source_tree.project)])

    assert (source_tree.project / "generated" / "text" / "contain.mdx").exists()
    assert "Generated 1 documentation files" in capsys.readouterr().out


def test_cli_extract_missing_source_succeeds(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["extract", "--config", str(tmp_path), "--source", str(tmp_path / "missing")])

    assert "Generated 0 documentation files (scanned 0, skipped 0)" in capsys.readouterr().out


def test_cli_extract_reports_config_errors(tmp_path: Path) -> None:
    (tmp_path / ".opdocs.yml").write_text("- not a mapping\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["extract", "--config", str(tmp_path)])

    assert excinfo.value.code == 1


def test_cli_extract_reports_unreadable_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / ".opdocs.yml").mkdir()

    with pytest.raises(SystemExit) as excinfo:
        main(["extract", "--config", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "Could not read .opdocs.yml" in capsys.readouterr().err


def test_cli_extract_reports_unknown_extractors(tmp_path: Path) -> None:
    (tmp_path / ".opdocs.yml").write_text("extractors:\n  enabled: [signatures]\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["extract", "--config", str(tmp_path)])

    assert excinfo.value.code == 1


def test_cli_extract_reports_write_failures(source_tree: SourceTreeBuilder, tmp_path: Path) -> None:
    source_tree.write({"string/contain.d": CONTAIN_SOURCE})
    blocked = tmp_path / "blocked"
    blocked.write_text("file in the way", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["extract", "--config", str(source_tree.project), "--output", str(blocked)])

    assert excinfo.value.code == 1


def test_cli_show_prints_rendered_document(
    source_tree: SourceTreeBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    source_tree.write({"string/contain.d": CONTAIN_SOURCE, "string/helpers.d": HELPER_SOURCE})

    main(["show", "--config", str(source_tree.project), str(source_tree.root / "string" / "contain.d")])
    assert capsys.readouterr().out.startswith("---\ntitle: contain\n")

    main(["show", "--config", str(source_tree.project), str(source_tree.root / "string" / "helpers.d")])
    assert "has nothing to document" in capsys.readouterr().out


def test_cli_show_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["show", "--config", str(tmp_path), str(tmp_path / "missing.d")])

    assert excinfo.value.code == 1
