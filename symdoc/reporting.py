"""Inline error nodes for references that cannot be resolved."""

from __future__ import annotations

from collections import Counter
from typing import Dict, List

from .document import CodeNode, ContentNode, Node, Tag, TextNode, walk


def no_type_error(type_tag: str) -> ContentNode:
    """Error node for a type tag missing from the registry."""
    return ContentNode(
        children=(
            TextNode("No type with name "),
            CodeNode.of_text(type_tag),
            TextNode("."),
        ),
        tags=frozenset({Tag.ERROR, Tag.NO_TYPE}),
    )


def no_node_error(symbol_name: str) -> ContentNode:
    """Error node for a symbol missing from the index."""
    return ContentNode(
        children=(
            TextNode("No node with name "),
            CodeNode.of_text(symbol_name),
            TextNode("."),
        ),
        tags=frozenset({Tag.ERROR, Tag.NO_NODE}),
    )


def unsupported_node_error(variant: str) -> TextNode:
    """Placeholder for record variants the expander cannot render."""
    return TextNode(
        f"Unsupported node type {variant}.",
        tags=frozenset({Tag.ERROR, Tag.UNSUPPORTED_NODE_ERROR}),
    )


def find_errors(tree: Node) -> List[Node]:
    """Return every error-tagged node in ``tree`` in document order."""
    return [node for node in walk(tree) if Tag.ERROR in getattr(node, "tags", ())]


def error_summary(tree: Node) -> Dict[str, int]:
    """Count error nodes in ``tree`` by their distinguishing tag."""
    counts: Counter[str] = Counter()
    for node in find_errors(tree):
        for tag in node.tags - {Tag.ERROR}:
            counts[tag] += 1
    return dict(counts)


__all__ = [
    "error_summary",
    "find_errors",
    "no_node_error",
    "no_type_error",
    "unsupported_node_error",
]
