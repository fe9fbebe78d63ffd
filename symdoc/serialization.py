"""Conversion between document trees and plain mappings (YAML/JSON)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .document import (
    CodeNode,
    ContentNode,
    ListItem,
    ListNode,
    Node,
    PackageScope,
    ParamHighlight,
    SymbolDocRequest,
    TextNode,
)
from .errors import DocumentLoadError

_CONTAINER_TYPES = {
    "content": ContentNode,
    "code": CodeNode,
    "list-item": ListItem,
}


def node_to_dict(node: Node) -> Dict[str, Any]:
    """Return a JSON-serialisable mapping describing ``node``."""
    if isinstance(node, TextNode):
        return _with_tags({"type": "text", "text": node.text}, node.tags)
    if isinstance(node, ListNode):
        data = {"type": "list", "items": [node_to_dict(item) for item in node.items]}
        return _with_tags(data, node.tags)
    if isinstance(node, SymbolDocRequest):
        return {"type": "symbol-doc", "argument": node.argument}
    if isinstance(node, PackageScope):
        return {
            "type": "package",
            "package": node.package,
            "children": [node_to_dict(child) for child in node.children],
        }
    if isinstance(node, ParamHighlight):
        return {"type": "param", "children": [node_to_dict(child) for child in node.children]}
    for name, node_type in _CONTAINER_TYPES.items():
        if isinstance(node, node_type):
            data = {"type": name, "children": [node_to_dict(child) for child in node.children]}
            return _with_tags(data, node.tags)
    raise TypeError(f"Cannot serialise {type(node).__name__}")


def node_from_dict(data: Any) -> Node:
    """Build a node tree from the mapping produced by :func:`node_to_dict`.

    Bare strings are accepted as text nodes for hand-written documents.
    """
    if isinstance(data, str):
        return TextNode(data)
    if not isinstance(data, dict):
        raise DocumentLoadError(f"Expected a node mapping, got {type(data).__name__}")

    node_type = data.get("type")
    tags = frozenset(_as_str_list(data.get("tags")))
    if node_type == "text":
        return TextNode(str(data.get("text", "")), tags=tags)
    if node_type == "list":
        items = []
        for raw in _as_list(data.get("items")):
            item = node_from_dict(raw)
            if not isinstance(item, ListItem):
                raise DocumentLoadError("List items must have type 'list-item'")
            items.append(item)
        return ListNode(items=tuple(items), tags=tags)
    if node_type == "symbol-doc":
        argument = data.get("argument")
        if not isinstance(argument, str):
            raise DocumentLoadError("symbol-doc nodes require a string 'argument'")
        return SymbolDocRequest(argument=argument)
    if node_type == "package":
        package = data.get("package")
        if not isinstance(package, str) or not package:
            raise DocumentLoadError("package nodes require a 'package' name")
        return PackageScope(package=package, children=_children(data))
    if node_type == "param":
        return ParamHighlight(children=_children(data))
    container = _CONTAINER_TYPES.get(node_type)  # type: ignore[arg-type]
    if container is None:
        raise DocumentLoadError(f"Unknown node type {node_type!r}")
    return container(children=_children(data), tags=tags)


def load_document(path: Path) -> Node:
    """Read a document tree from a YAML or JSON file."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentLoadError(f"Cannot read document {path}: {exc}") from exc
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise DocumentLoadError(f"Failed to parse {path.name}: {exc}") from exc
    if isinstance(data, list):
        data = {"type": "content", "children": data}
    return node_from_dict(data)


def dump_document(node: Node, *, output_format: str = "json", indent: int = 2) -> str:
    """Serialise ``node`` as JSON or YAML text."""
    data = node_to_dict(node)
    if output_format == "yaml":
        return yaml.safe_dump(data, sort_keys=False, indent=indent)
    if output_format == "json":
        return json.dumps(data, indent=indent) + "\n"
    raise ValueError(f"Unsupported output format: {output_format}")


def _with_tags(data: Dict[str, Any], tags: frozenset) -> Dict[str, Any]:
    if tags:
        data["tags"] = sorted(tags)
    return data


def _children(data: Dict[str, Any]) -> tuple:
    return tuple(node_from_dict(child) for child in _as_list(data.get("children")))


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    raise DocumentLoadError("Expected a list of child nodes")


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(item) for item in value]
    return []


__all__ = ["dump_document", "load_document", "node_from_dict", "node_to_dict"]
