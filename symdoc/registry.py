"""Mapping from user-facing type tags to symbol categories."""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from .models import SymbolKind

_OPERATOR_KINDS = frozenset(
    {
        SymbolKind.FUNCTION,
        SymbolKind.MACRO,
        SymbolKind.GENERIC_FUNCTION,
        SymbolKind.METHOD,
    }
)


class SymbolCategory(Enum):
    """Queryable category; each covers one or more record kinds."""

    FUNCTION = "function"
    MACRO = "macro"
    GENERIC_FUNCTION = "generic-function"
    METHOD = "method"
    OPERATOR = "operator"
    VARIABLE = "variable"
    STRUCT = "struct"
    CLASS = "class"
    TYPE = "type"
    FOREIGN_FUNCTION = "cfunction"
    FOREIGN_TYPE = "ctype"
    FOREIGN_STRUCT = "cstruct"
    FOREIGN_UNION = "cunion"
    FOREIGN_ENUM = "cenum"
    FOREIGN_BITFIELD = "cbitfield"

    @property
    def kinds(self) -> FrozenSet[SymbolKind]:
        if self is SymbolCategory.OPERATOR:
            return _OPERATOR_KINDS
        return frozenset({SymbolKind(self.value)})

    def covers(self, kind: Optional[SymbolKind]) -> bool:
        return kind in self.kinds


TYPE_TAGS: Dict[str, SymbolCategory] = {
    "function": SymbolCategory.FUNCTION,
    "macro": SymbolCategory.MACRO,
    "generic-function": SymbolCategory.GENERIC_FUNCTION,
    "generic": SymbolCategory.GENERIC_FUNCTION,
    "method": SymbolCategory.METHOD,
    "operator": SymbolCategory.OPERATOR,
    "variable": SymbolCategory.VARIABLE,
    "struct": SymbolCategory.STRUCT,
    "class": SymbolCategory.CLASS,
    "type": SymbolCategory.TYPE,
    "cfunction": SymbolCategory.FOREIGN_FUNCTION,
    "ctype": SymbolCategory.FOREIGN_TYPE,
    "cstruct": SymbolCategory.FOREIGN_STRUCT,
    "cunion": SymbolCategory.FOREIGN_UNION,
    "cenum": SymbolCategory.FOREIGN_ENUM,
    "cbitfield": SymbolCategory.FOREIGN_BITFIELD,
}


def resolve_category(tag: str) -> Optional[SymbolCategory]:
    """Return the category for ``tag`` (exact, case-sensitive) or None."""
    return TYPE_TAGS.get(tag)


def type_tags() -> List[str]:
    return sorted(TYPE_TAGS)


__all__ = ["SymbolCategory", "TYPE_TAGS", "resolve_category", "type_tags"]
