"""Lightweight docstring markup parser.

Docstrings are split into paragraphs on blank lines. Within a paragraph three
inline forms are recognised:

- ``@c(text)`` renders ``text`` as code.
- ``@param(name)`` highlights a parameter reference.
- ``@doc(type name)`` embeds the documentation of another symbol.

Anything else, including unbalanced forms, is kept as literal text.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, List, Optional

from .document import CodeNode, ContentNode, Node, ParamHighlight, SymbolDocRequest, TextNode

_PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n")
_INLINE_START = re.compile(r"@(c|param|doc)\(")

_INLINE_BUILDERS: Dict[str, Callable[[str], Node]] = {
    "c": lambda body: CodeNode.of_text(body),
    "param": lambda body: ParamHighlight(children=(TextNode(body),)),
    "doc": lambda body: SymbolDocRequest(argument=body),
}


def parse_markup(text: str) -> ContentNode:
    """Parse docstring ``text`` into a content node of paragraphs."""
    if not text or not text.strip():
        return ContentNode()
    paragraphs = []
    for raw in _PARAGRAPH_BREAK.split(text.strip()):
        collapsed = " ".join(raw.split())
        if collapsed:
            paragraphs.append(ContentNode(children=tuple(_parse_inline(collapsed))))
    return ContentNode(children=tuple(paragraphs))


def _parse_inline(text: str) -> List[Node]:
    nodes: List[Node] = []
    literal: List[str] = []
    position = 0

    def flush() -> None:
        if literal:
            joined = "".join(literal)
            if joined:
                nodes.append(TextNode(joined))
            literal.clear()

    while position < len(text):
        match = _INLINE_START.search(text, position)
        if match is None:
            literal.append(text[position:])
            break
        close = _closing_paren(text, match.end())
        if close is None:
            literal.append(text[position : match.end()])
            position = match.end()
            continue
        literal.append(text[position : match.start()])
        flush()
        nodes.append(_INLINE_BUILDERS[match.group(1)](text[match.end() : close]))
        position = close + 1

    flush()
    return nodes


def _closing_paren(text: str, start: int) -> Optional[int]:
    depth = 1
    for index in range(start, len(text)):
        char = text[index]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index
    return None


__all__ = ["parse_markup"]
