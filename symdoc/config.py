"""Configuration loading for symdoc (.symdoc.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .engine import DEFAULT_MAX_DEPTH
from .errors import ConfigError

CONFIG_FILENAME = ".symdoc.yml"
OUTPUT_FORMATS = ("json", "yaml")


@dataclass
class ExpansionConfig:
    """Macro expansion limits."""

    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass
class OutputConfig:
    """Serialisation settings for expanded documents."""

    format: str = "json"
    indent: int = 2


@dataclass
class SymdocConfig:
    """Represents the settings defined in .symdoc.yml."""

    root: Path
    index_path: Optional[Path] = None
    package: Optional[str] = None
    expansion: ExpansionConfig = field(default_factory=ExpansionConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(config_path: Path) -> SymdocConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SymdocConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    index_str = _as_str(data.get("index"))
    index_path = root / index_str if index_str else None

    expansion = ExpansionConfig()
    expansion_data = _as_dict(data.get("expansion"))
    if expansion_data:
        max_depth = _as_int(expansion_data.get("max_depth"))
        if max_depth is not None:
            if max_depth < 1:
                raise ConfigError("expansion.max_depth must be a positive integer")
            expansion.max_depth = max_depth

    output = OutputConfig()
    output_data = _as_dict(data.get("output"))
    if output_data:
        output_format = _as_str(output_data.get("format"))
        if output_format is not None:
            if output_format not in OUTPUT_FORMATS:
                raise ConfigError(
                    f"output.format must be one of {', '.join(OUTPUT_FORMATS)}, got {output_format!r}"
                )
            output.format = output_format
        indent = _as_int(output_data.get("indent"))
        if indent is not None:
            output.indent = indent

    return SymdocConfig(
        root=root,
        index_path=index_path,
        package=_as_str(data.get("package")),
        expansion=expansion,
        output=output,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    return loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ExpansionConfig",
    "OutputConfig",
    "SymdocConfig",
    "load_config",
]
