"""Tests for single-symbol resolution."""

from __future__ import annotations

import logging

from symdoc.index import MemoryIndex
from symdoc.models import FunctionRecord
from symdoc.registry import SymbolCategory
from symdoc.resolver import SymbolResolver


def test_resolve_upper_cases_the_symbol_name(sample_index: MemoryIndex) -> None:
    record = SymbolResolver(sample_index).resolve(SymbolCategory.FUNCTION, "foo", "alpha")
    assert record is not None
    assert record.name == "FOO"
    assert record.package == "alpha"


def test_resolve_respects_package_scope(sample_index: MemoryIndex) -> None:
    record = SymbolResolver(sample_index).resolve(SymbolCategory.FUNCTION, "foo", "beta")
    assert record is not None
    assert record.docstring == "beta variant"


def test_resolve_without_package_takes_first_match(sample_index: MemoryIndex) -> None:
    record = SymbolResolver(sample_index).resolve(SymbolCategory.FUNCTION, "Foo")
    assert record is not None
    assert record.package == "alpha"


def test_resolve_returns_none_when_missing(sample_index: MemoryIndex) -> None:
    resolver = SymbolResolver(sample_index)
    assert resolver.resolve(SymbolCategory.FUNCTION, "bar") is None
    assert resolver.resolve(SymbolCategory.CLASS, "foo") is None
    assert resolver.resolve(SymbolCategory.FUNCTION, "foo", "gamma") is None


def test_resolve_does_not_deduplicate() -> None:
    first = FunctionRecord(name="DUP", docstring="first")
    second = FunctionRecord(name="DUP", docstring="second")
    resolver = SymbolResolver(MemoryIndex([first, second]))
    assert resolver.resolve(SymbolCategory.FUNCTION, "dup") is first


def test_resolve_emits_debug_trace(sample_index: MemoryIndex, caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="symdoc.resolver")
    SymbolResolver(sample_index).resolve(SymbolCategory.VARIABLE, "*limit*")
    assert "Resolving variable *LIMIT*" in caplog.text
