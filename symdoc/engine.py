"""MacroExpander
=============
Walks a document tree and replaces every macro node with its expansion.

Expansion is recursive: a symbol's docstring may itself contain macros, and a
package scope's children are expanded under that scope. A depth limit turns a
self-referential macro into a structural error instead of unbounded recursion.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import replace
from typing import Iterator, List, Optional, Sequence, Tuple

from .document import (
    CodeNode,
    ContentNode,
    ListItem,
    ListNode,
    Node,
    PackageScope,
    ParamHighlight,
    SymbolDocRequest,
    Tag,
    TextNode,
)
from .errors import ExpansionDepthError, MacroSyntaxError, ScopeError
from .expander import NodeExpander
from .index import SymbolIndex
from .logging import get_logger
from .registry import resolve_category
from .reporting import no_node_error, no_type_error
from .resolver import SymbolResolver

logger = get_logger("engine")

DEFAULT_MAX_DEPTH = 32


class ExpansionScope:
    """Package-name stack owned by a single expansion pass."""

    def __init__(self) -> None:
        self._stack: List[str] = []

    @property
    def current(self) -> Optional[str]:
        return self._stack[-1] if self._stack else None

    @property
    def depth(self) -> int:
        return len(self._stack)

    def push(self, package: str) -> None:
        self._stack.append(package)

    def pop(self) -> str:
        if not self._stack:
            raise ScopeError("Package scope exited more times than it was entered")
        return self._stack.pop()

    @contextmanager
    def entered(self, package: str) -> Iterator[None]:
        """Make ``package`` current for the duration of the block."""
        self.push(package)
        try:
            yield
        finally:
            self.pop()


def parse_request(argument: str) -> Tuple[str, str, Tuple[str, ...]]:
    """Split a symbol request into ``(type_tag, symbol_name, extra_args)``.

    Extra arguments are tokenised but not interpreted.
    """
    tokens = argument.split()
    if len(tokens) < 2:
        raise MacroSyntaxError(
            f"Symbol request {argument!r} must name a type and a symbol, e.g. 'function my-fn'"
        )
    return tokens[0], tokens[1], tuple(tokens[2:])


class MacroExpander:
    """
    Expand every macro node in a document tree.

    Usage::

        engine = MacroExpander(index)
        expanded = engine.expand(tree)

    The index is only read, and each ``expand`` call owns its scope, so one
    engine may serve concurrent passes.
    """

    def __init__(
        self,
        index: SymbolIndex,
        expander: Optional[NodeExpander] = None,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._resolver = SymbolResolver(index)
        self._expander = expander or NodeExpander()
        self._max_depth = max_depth

    # ----------------------------------------------------------------- public

    def expand(self, tree: Node, *, package: Optional[str] = None) -> Node:
        """Return ``tree`` with all macros expanded.

        ``package`` optionally sets the ambient package for the whole pass.
        """
        scope = ExpansionScope()
        if package is None:
            expanded = self._expand(tree, scope, 0)
        else:
            with scope.entered(package):
                expanded = self._expand(tree, scope, 0)
        if len(expanded) == 1:
            return expanded[0]
        return ContentNode(children=expanded)

    # ----------------------------------------------------------------- private

    def _expand(self, node: Node, scope: ExpansionScope, depth: int) -> Tuple[Node, ...]:
        """Expand ``node``; a package scope may splice several nodes into its parent."""
        if depth > self._max_depth:
            raise ExpansionDepthError(self._max_depth)

        if isinstance(node, SymbolDocRequest):
            return self._expand(self._expand_request(node, scope), scope, depth + 1)
        if isinstance(node, PackageScope):
            logger.debug("Entering package scope %s", node.package)
            with scope.entered(node.package):
                return self._expand_all(node.children, scope, depth)
        if isinstance(node, ParamHighlight):
            children = self._expand_all(node.children, scope, depth)
            return (CodeNode(children=children, tags=frozenset({Tag.PARAM})),)
        if isinstance(node, TextNode):
            return (node,)
        if isinstance(node, ListNode):
            items = tuple(self._expand_item(item, scope, depth) for item in node.items)
            if _same(items, node.items):
                return (node,)
            return (replace(node, items=items),)
        if isinstance(node, (ContentNode, CodeNode, ListItem)):
            children = self._expand_all(node.children, scope, depth)
            if _same(children, node.children):
                return (node,)
            return (replace(node, children=children),)
        raise TypeError(f"Unexpected node in document tree: {type(node).__name__}")

    def _expand_all(
        self, nodes: Sequence[Node], scope: ExpansionScope, depth: int
    ) -> Tuple[Node, ...]:
        expanded: List[Node] = []
        for child in nodes:
            expanded.extend(self._expand(child, scope, depth))
        return tuple(expanded)

    def _expand_item(self, item: ListItem, scope: ExpansionScope, depth: int) -> ListItem:
        children = self._expand_all(item.children, scope, depth)
        if _same(children, item.children):
            return item
        return replace(item, children=children)

    def _expand_request(self, request: SymbolDocRequest, scope: ExpansionScope) -> Node:
        type_tag, symbol_name, _extra = parse_request(request.argument)
        category = resolve_category(type_tag)
        if category is None:
            logger.warning("No type with name %s", type_tag)
            return no_type_error(type_tag)
        record = self._resolver.resolve(category, symbol_name, scope.current)
        if record is None:
            logger.warning("No node with name %s (%s)", symbol_name, type_tag)
            return no_node_error(symbol_name)
        return self._expander.expand(record)


def expand_document(
    tree: Node,
    index: SymbolIndex,
    *,
    package: Optional[str] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Node:
    """Expand ``tree`` against ``index`` with a default node expander."""
    return MacroExpander(index, max_depth=max_depth).expand(tree, package=package)


def _same(new: Sequence[Node], old: Sequence[Node]) -> bool:
    return len(new) == len(old) and all(a is b for a, b in zip(new, old))


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "ExpansionScope",
    "MacroExpander",
    "expand_document",
    "parse_request",
]
