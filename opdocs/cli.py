"""CLI entrypoints for opdocs commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, OpDocsConfig, load_config
from .logging import configure_logging
from .pipeline import Pipeline


def _add_verbosity_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: object = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only log warnings and errors to the console.",
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .opdocs.yml or the directory containing it (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="opdocs",
        description="Generate API reference pages from assertion operation sources.",
    )
    _add_verbosity_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract",
        help="Scan the operations tree and write one document per operation.",
    )
    _add_verbosity_options(extract_parser, suppress_default=True)
    _add_config_option(extract_parser)
    extract_parser.add_argument(
        "--source",
        help="Root of the source tree to scan (overrides source_root).",
    )
    extract_parser.add_argument(
        "--output",
        help="Directory that receives the category folders (overrides output_root).",
    )
    extract_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Render documents and report counts without writing files.",
    )

    show_parser = subparsers.add_parser(
        "show",
        help="Print the document generated for a single source file.",
    )
    _add_verbosity_options(show_parser, suppress_default=True)
    _add_config_option(show_parser)
    show_parser.add_argument("path", help="Source file to render.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for opdocs commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=config.log_file,
    )

    try:
        pipeline = Pipeline.from_config(config)
    except ValueError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "extract":
        _run_extract(parser, args, config, pipeline)
    elif args.command == "show":
        _run_show(parser, args, pipeline)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_extract(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    config: OpDocsConfig,
    pipeline: Pipeline,
) -> None:
    source_root = Path(args.source).expanduser() if args.source else config.source_root
    output_root = Path(args.output).expanduser() if args.output else config.output_root
    dry_run = bool(getattr(args, "dry_run", False))
    try:
        summary = pipeline.run(source_root, output_root, dry_run=dry_run)
    except OSError as exc:
        parser.exit(1, f"opdocs extract failed: {exc}\nRun with --verbose for more details.\n")

    message = (
        f"Generated {summary.generated} documentation files "
        f"(scanned {summary.scanned}, skipped {summary.skipped})"
    )
    if dry_run:
        message += " (dry-run)"
    print(message)


def _run_show(
    parser: argparse.ArgumentParser, args: argparse.Namespace, pipeline: Pipeline
) -> None:
    path = Path(args.path).expanduser()
    try:
        rendered = pipeline.render_file(path)
    except (OSError, UnicodeDecodeError) as exc:
        parser.exit(1, f"Could not read {_relativize(path)}: {exc}\n")
    if rendered is None:
        print(f"{_relativize(path)} has nothing to document")
        return
    print(rendered, end="")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
