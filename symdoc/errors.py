"""Exception hierarchy for symdoc."""

from __future__ import annotations


class SymdocError(RuntimeError):
    """Base class for all symdoc failures."""


class StructuralError(SymdocError):
    """Raised when the document markup itself is broken and expansion must stop."""


class MacroSyntaxError(StructuralError):
    """Raised when a macro argument cannot be parsed."""


class ScopeError(StructuralError):
    """Raised when package scopes are exited out of order."""


class ExpansionDepthError(StructuralError):
    """Raised when macro re-expansion nests deeper than the configured limit."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            f"Macro expansion exceeded the depth limit of {limit}; "
            "check for a macro that expands into itself"
        )
        self.limit = limit


class IndexLoadError(SymdocError):
    """Raised when a symbol index file cannot be parsed."""


class DocumentLoadError(SymdocError):
    """Raised when a document file does not describe a valid node tree."""


class ConfigError(SymdocError):
    """Raised when the configuration file cannot be parsed."""


__all__ = [
    "ConfigError",
    "DocumentLoadError",
    "ExpansionDepthError",
    "IndexLoadError",
    "MacroSyntaxError",
    "ScopeError",
    "StructuralError",
    "SymdocError",
]
