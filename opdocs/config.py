"""Configuration loading for opdocs (.opdocs.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".opdocs.yml"

DEFAULT_SOURCE_ROOT = Path("source") / "fluentasserts" / "operations"
DEFAULT_OUTPUT_ROOT = Path("docs") / "src" / "content" / "docs" / "api"
DEFAULT_SOURCE_EXTENSION = ".d"
DEFAULT_OUTPUT_EXTENSION = ".mdx"
DEFAULT_EXCLUDED_FILES = ("package.d", "registry.d")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ExtractorConfig:
    """Extractor enablement."""

    enabled: Optional[List[str]] = None


@dataclass
class OpDocsConfig:
    """Represents the settings defined in .opdocs.yml."""

    root: Path
    source_root: Path
    output_root: Path
    source_extension: str = DEFAULT_SOURCE_EXTENSION
    output_extension: str = DEFAULT_OUTPUT_EXTENSION
    excluded_files: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_FILES))
    categories: Dict[str, str] = field(default_factory=dict)
    extractors: ExtractorConfig = field(default_factory=ExtractorConfig)
    log_file: Optional[Path] = None

    @classmethod
    def defaults(cls, root: Path) -> "OpDocsConfig":
        return cls(
            root=root,
            source_root=root / DEFAULT_SOURCE_ROOT,
            output_root=root / DEFAULT_OUTPUT_ROOT,
        )


def load_config(config_path: Path) -> OpDocsConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()
    config = OpDocsConfig.defaults(root)

    if not config_file.exists():
        return config

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    source_root = _as_str(data.get("source_root"))
    if source_root:
        config.source_root = root / source_root
    output_root = _as_str(data.get("output_root"))
    if output_root:
        config.output_root = root / output_root

    source_extension = _as_str(data.get("source_extension"))
    if source_extension:
        config.source_extension = _normalise_extension(source_extension)
    output_extension = _as_str(data.get("output_extension"))
    if output_extension:
        config.output_extension = _normalise_extension(output_extension)

    if "excluded_files" in data:
        config.excluded_files = _as_str_list(data.get("excluded_files"))

    categories = data.get("categories")
    if categories is not None:
        if not isinstance(categories, dict):
            raise ConfigError("categories must map source folders to category names")
        config.categories = {
            str(folder): str(category)
            for folder, category in categories.items()
            if category is not None
        }

    extractor_data = _as_dict(data.get("extractors"))
    if extractor_data and "enabled" in extractor_data:
        config.extractors.enabled = _as_str_list(extractor_data.get("enabled"))

    log_file = _as_str(data.get("log_file"))
    if log_file:
        config.log_file = root / log_file

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Could not read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _normalise_extension(value: str) -> str:
    value = value.strip()
    return value if value.startswith(".") else f".{value}"


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["ConfigError", "ExtractorConfig", "OpDocsConfig", "load_config", "CONFIG_FILENAME"]
