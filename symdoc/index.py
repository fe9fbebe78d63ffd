"""In-memory symbol index and its on-disk loader."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Protocol, Sequence

import yaml

from .errors import IndexLoadError
from .logging import get_logger
from .models import RECORD_TYPES, OperatorRecord, RecordTypeRecord, SlotRecord, SymbolKind, SymbolRecord
from .registry import SymbolCategory

_INDEX_VERSION = 1

logger = get_logger("index")


class SymbolIndex(Protocol):
    """Read-only query interface over symbol records."""

    def query(
        self, category: SymbolCategory, package: Optional[str], name: str
    ) -> Sequence[SymbolRecord]:
        """Return records matching ``category``, ``package`` (None = any) and upper-case ``name``."""


class MemoryIndex:
    """Insertion-ordered symbol index held in memory."""

    def __init__(self, records: Iterable[SymbolRecord] = ()) -> None:
        self._records: List[SymbolRecord] = list(records)

    def add(self, record: SymbolRecord) -> None:
        self._records.append(record)

    def query(
        self, category: SymbolCategory, package: Optional[str], name: str
    ) -> List[SymbolRecord]:
        return [
            record
            for record in self._records
            if category.covers(record.kind)
            and record.name == name
            and (package is None or record.package == package)
        ]

    def packages(self) -> List[str]:
        seen: List[str] = []
        for record in self._records:
            if record.package is not None and record.package not in seen:
                seen.append(record.package)
        return seen

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SymbolRecord]:
        return iter(self._records)


def load_index(path: Path) -> MemoryIndex:
    """Load a symbol index from a YAML or JSON file."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise IndexLoadError(f"Cannot read symbol index {path}: {exc}") from exc

    data = _parse(path, text)
    if isinstance(data, dict):
        version = data.get("version", _INDEX_VERSION)
        if version != _INDEX_VERSION:
            raise IndexLoadError(f"Unsupported symbol index version {version!r} in {path.name}")
        entries = data.get("symbols", [])
    else:
        entries = data
    if not isinstance(entries, list):
        raise IndexLoadError(f"{path.name} must contain a list of symbols")

    index = MemoryIndex(records_from_entries(entries))
    logger.debug("Loaded %d symbols from %s", len(index), path)
    return index


def records_from_entries(entries: Sequence[Any]) -> List[SymbolRecord]:
    """Build symbol records from plain mappings."""
    return [_record_from_entry(position, entry) for position, entry in enumerate(entries)]


def _parse(path: Path, text: str) -> Any:
    if not text.strip():
        return []
    try:
        if path.suffix.lower() == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise IndexLoadError(f"Failed to parse {path.name}: {exc}") from exc


def _record_from_entry(position: int, entry: Any) -> SymbolRecord:
    if not isinstance(entry, dict):
        raise IndexLoadError(f"Symbol #{position} must be a mapping")
    try:
        kind = SymbolKind(entry.get("kind"))
    except ValueError:
        raise IndexLoadError(f"Symbol #{position} has unknown kind {entry.get('kind')!r}") from None
    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise IndexLoadError(f"Symbol #{position} is missing a name")

    record_type = RECORD_TYPES[kind]
    fields: Dict[str, Any] = {
        "name": name.upper(),
        "package": _as_optional_str(entry.get("package")),
        "docstring": _as_optional_str(entry.get("docstring")) or "",
    }
    if issubclass(record_type, OperatorRecord):
        fields["parameters"] = _as_parameters(position, entry.get("parameters", []))
    elif issubclass(record_type, RecordTypeRecord):
        slots = entry.get("slots")
        if slots is None:
            slots = []
        if not isinstance(slots, list):
            raise IndexLoadError(f"Symbol #{position} has a malformed slot list")
        fields["slots"] = tuple(_as_slot(position, slot) for slot in slots)
    return record_type(**fields)


def _as_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _as_parameters(position: int, value: Any) -> tuple:
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list):
        raise IndexLoadError(f"Symbol #{position} has a malformed parameter list")
    return tuple(
        item if isinstance(item, str) else _as_parameters(position, item) for item in value
    )


def _as_slot(position: int, value: Any) -> SlotRecord:
    if isinstance(value, str):
        return SlotRecord(name=value.upper())
    if isinstance(value, dict) and isinstance(value.get("name"), str):
        return SlotRecord(
            name=value["name"].upper(),
            docstring=_as_optional_str(value.get("docstring")) or "",
        )
    raise IndexLoadError(f"Symbol #{position} has a malformed slot entry")


__all__ = ["MemoryIndex", "SymbolIndex", "load_index", "records_from_entries"]
