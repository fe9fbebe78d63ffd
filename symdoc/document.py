"""Generic document tree and the macro nodes embedded in it before expansion."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, Tuple, Union


class Tag:
    """Classification tags assigned to document nodes."""

    DOC_NODE = "doc-node"
    FUNCTION = "function"
    MACRO = "macro"
    GENERIC_FUNCTION = "generic-function"
    METHOD = "method"
    OPERATOR = "operator"
    STRUCT = "struct"
    CLASS = "class"
    VARIABLE = "variable"
    TYPE = "type"
    NAME = "name"
    LAMBDA_LIST = "lambda-list"
    TYPE_DEF = "type-def"
    DOCSTRING = "docstring"
    SLOT_LIST = "slot-list"
    SLOT = "slot"
    PARAM = "param"
    ERROR = "error"
    NO_TYPE = "no-type"
    NO_NODE = "no-node"
    UNSUPPORTED_NODE_ERROR = "unsupported-node-error"


VOCABULARY: FrozenSet[str] = frozenset(
    value for key, value in vars(Tag).items() if not key.startswith("_")
)


@dataclass(frozen=True)
class TextNode:
    """Literal text."""

    text: str
    tags: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ContentNode:
    """Ordered container of child nodes."""

    children: Tuple["Node", ...] = ()
    tags: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class CodeNode:
    """Monospaced container; usually holds a single text node."""

    children: Tuple["Node", ...] = ()
    tags: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def of_text(cls, text: str, *tags: str) -> "CodeNode":
        return cls(children=(TextNode(text),), tags=frozenset(tags))

    @property
    def text(self) -> str:
        return node_text(self)


@dataclass(frozen=True)
class ListItem:
    children: Tuple["Node", ...] = ()
    tags: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ListNode:
    items: Tuple[ListItem, ...] = ()
    tags: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class SymbolDocRequest:
    """Request to document one symbol; ``argument`` is the raw ``"<type> <name> ..."`` text."""

    argument: str


@dataclass(frozen=True)
class PackageScope:
    """Resolve symbols in ``children`` relative to ``package``."""

    package: str
    children: Tuple["Node", ...] = ()


@dataclass(frozen=True)
class ParamHighlight:
    """Mark ``children`` as a parameter reference."""

    children: Tuple["Node", ...] = ()


DocumentNode = Union[TextNode, ContentNode, CodeNode, ListNode, ListItem]
MacroNode = Union[SymbolDocRequest, PackageScope, ParamHighlight]
Node = Union[DocumentNode, MacroNode]

MACRO_TYPES = (SymbolDocRequest, PackageScope, ParamHighlight)


def is_macro(node: object) -> bool:
    return isinstance(node, MACRO_TYPES)


def child_nodes(node: Node) -> Tuple[Node, ...]:
    """Return the direct children of ``node`` (list items for a list)."""
    if isinstance(node, ListNode):
        return node.items
    if isinstance(node, TextNode):
        return ()
    if isinstance(node, SymbolDocRequest):
        return ()
    return node.children


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in pre-order."""
    yield node
    for child in child_nodes(node):
        yield from walk(child)


def contains_macros(node: Node) -> bool:
    return any(is_macro(item) for item in walk(node))


def node_text(node: Node) -> str:
    """Concatenate the literal text found in a subtree."""
    return "".join(item.text for item in walk(node) if isinstance(item, TextNode))


__all__ = [
    "CodeNode",
    "ContentNode",
    "DocumentNode",
    "ListItem",
    "ListNode",
    "MACRO_TYPES",
    "MacroNode",
    "Node",
    "PackageScope",
    "ParamHighlight",
    "SymbolDocRequest",
    "Tag",
    "TextNode",
    "VOCABULARY",
    "child_nodes",
    "contains_macros",
    "is_macro",
    "node_text",
    "walk",
]
