"""Transforms symbol records into document node subtrees."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from .document import CodeNode, ContentNode, ListItem, ListNode, Node, Tag, TextNode
from .logging import get_logger
from .markup import parse_markup
from .models import (
    OperatorRecord,
    RecordTypeRecord,
    SlotRecord,
    SymbolKind,
    SymbolRecord,
    humanize,
    render_parameters,
)
from .reporting import unsupported_node_error

MarkupParser = Callable[[str], Node]

logger = get_logger("expander")

# Tag of the structural analogue used for each record kind.
_VARIANT_TAGS: Dict[SymbolKind, str] = {
    SymbolKind.FUNCTION: Tag.FUNCTION,
    SymbolKind.MACRO: Tag.MACRO,
    SymbolKind.GENERIC_FUNCTION: Tag.GENERIC_FUNCTION,
    SymbolKind.METHOD: Tag.METHOD,
    SymbolKind.TYPE: Tag.TYPE,
    SymbolKind.VARIABLE: Tag.VARIABLE,
    SymbolKind.STRUCT: Tag.STRUCT,
    SymbolKind.CLASS: Tag.CLASS,
    SymbolKind.FOREIGN_FUNCTION: Tag.FUNCTION,
    SymbolKind.FOREIGN_TYPE: Tag.TYPE,
    SymbolKind.FOREIGN_STRUCT: Tag.STRUCT,
    SymbolKind.FOREIGN_UNION: Tag.STRUCT,
    SymbolKind.FOREIGN_ENUM: Tag.TYPE,
    SymbolKind.FOREIGN_BITFIELD: Tag.TYPE,
}

_TYPE_DEF_KINDS = frozenset({SymbolKind.TYPE, SymbolKind.FOREIGN_TYPE})
_DOCUMENTED_SLOT_KINDS = frozenset({SymbolKind.CLASS})


class NodeExpander:
    """Expands a symbol record into a ``doc-node`` content subtree.

    Dispatch is by record shape: operators carry a lambda list, record types
    carry a slot list and variables carry neither. Records of any other kind
    degrade to an ``unsupported-node-error`` placeholder; ``expand`` never
    raises.
    """

    def __init__(self, markup_parser: Optional[MarkupParser] = None) -> None:
        self._parse_markup = markup_parser or parse_markup
        self._shapes: Dict[SymbolKind, Callable[[SymbolRecord, str], Node]] = {}
        for kind in _VARIANT_TAGS:
            self._shapes[kind] = self._shape_for(kind)

    def expand(self, record: SymbolRecord) -> Node:
        kind = record.kind
        shape = self._shapes.get(kind) if isinstance(kind, SymbolKind) else None
        if shape is None:
            variant = kind.value if isinstance(kind, SymbolKind) else type(record).__name__
            logger.warning("No expansion for record variant %s (%s)", variant, record.name)
            return unsupported_node_error(variant)
        return shape(record, _VARIANT_TAGS[kind])

    def _shape_for(self, kind: SymbolKind) -> Callable[[SymbolRecord, str], Node]:
        if kind is SymbolKind.VARIABLE:
            return self._expand_variable
        if kind in {
            SymbolKind.STRUCT,
            SymbolKind.CLASS,
            SymbolKind.FOREIGN_STRUCT,
            SymbolKind.FOREIGN_UNION,
            SymbolKind.FOREIGN_ENUM,
            SymbolKind.FOREIGN_BITFIELD,
        }:
            return self._expand_record_type
        return self._expand_operator

    # ------------------------------------------------------------------
    # Shapes

    def _expand_operator(self, record: SymbolRecord, variant_tag: str) -> Node:
        if not isinstance(record, OperatorRecord):
            return unsupported_node_error(record.kind.value)
        lambda_tags = {Tag.LAMBDA_LIST}
        if record.kind in _TYPE_DEF_KINDS:
            lambda_tags.add(Tag.TYPE_DEF)
        lambda_list = CodeNode(
            children=(TextNode(render_parameters(record.parameters)),),
            tags=frozenset(lambda_tags),
        )
        return ContentNode(
            children=(self._name(record.name), lambda_list, self._docstring(record.docstring)),
            tags=frozenset({Tag.DOC_NODE, variant_tag}),
        )

    def _expand_record_type(self, record: SymbolRecord, variant_tag: str) -> Node:
        if not isinstance(record, RecordTypeRecord):
            return unsupported_node_error(record.kind.value)
        documented = record.kind in _DOCUMENTED_SLOT_KINDS
        slot_list = ListNode(
            items=tuple(self._slot(slot, documented) for slot in record.slots),
            tags=frozenset({Tag.SLOT_LIST}),
        )
        return ContentNode(
            children=(self._name(record.name), self._docstring(record.docstring), slot_list),
            tags=frozenset({Tag.DOC_NODE, variant_tag}),
        )

    def _expand_variable(self, record: SymbolRecord, variant_tag: str) -> Node:
        return ContentNode(
            children=(self._name(record.name), self._docstring(record.docstring)),
            tags=frozenset({Tag.DOC_NODE, variant_tag}),
        )

    # ------------------------------------------------------------------
    # Parts

    def _slot(self, slot: SlotRecord, documented: bool) -> ListItem:
        children: Tuple[Node, ...] = (self._name(slot.name),)
        if documented:
            children += (self._docstring(slot.docstring),)
        return ListItem(children=children, tags=frozenset({Tag.SLOT}))

    @staticmethod
    def _name(name: str) -> CodeNode:
        return CodeNode.of_text(humanize(name), Tag.NAME)

    def _docstring(self, text: str) -> ContentNode:
        if not text:
            return ContentNode(tags=frozenset({Tag.DOCSTRING}))
        try:
            parsed = self._parse_markup(text)
        except Exception as exc:
            logger.warning("Docstring markup failed to parse, keeping raw text: %s", exc)
            parsed = TextNode(text)
        return ContentNode(children=(parsed,), tags=frozenset({Tag.DOCSTRING}))


__all__ = ["MarkupParser", "NodeExpander"]
