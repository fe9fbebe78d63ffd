"""Single-symbol lookup against a symbol index."""

from __future__ import annotations

from typing import Optional

from .index import SymbolIndex
from .logging import get_logger
from .models import SymbolRecord
from .registry import SymbolCategory

logger = get_logger("resolver")


class SymbolResolver:
    """Finds the record documenting a symbol within an optional package."""

    def __init__(self, index: SymbolIndex) -> None:
        self._index = index

    def resolve(
        self,
        category: SymbolCategory,
        symbol_name: str,
        package: Optional[str] = None,
    ) -> Optional[SymbolRecord]:
        """Return the first matching record in index order, or None."""
        canonical = symbol_name.upper()
        logger.debug(
            "Resolving %s %s in package %s",
            category.value,
            canonical,
            package if package is not None else "<any>",
        )
        matches = self._index.query(category, package, canonical)
        if not matches:
            return None
        return matches[0]


__all__ = ["SymbolResolver"]
