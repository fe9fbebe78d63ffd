"""Tests for the in-memory symbol index and its loader."""

from __future__ import annotations

import pytest

from symdoc.errors import IndexLoadError
from symdoc.index import MemoryIndex, load_index, records_from_entries
from symdoc.models import (
    ClassRecord,
    ForeignEnumRecord,
    FunctionRecord,
    MacroRecord,
    SlotRecord,
    VariableRecord,
)
from symdoc.registry import SymbolCategory


def test_query_filters_by_category_package_and_name(sample_index: MemoryIndex) -> None:
    results = sample_index.query(SymbolCategory.FUNCTION, "beta", "FOO")
    assert [record.docstring for record in results] == ["beta variant"]


def test_query_without_package_returns_all_in_insertion_order(sample_index: MemoryIndex) -> None:
    results = sample_index.query(SymbolCategory.FUNCTION, None, "FOO")
    assert [record.package for record in results] == ["alpha", "beta"]


def test_query_is_exact_on_name(sample_index: MemoryIndex) -> None:
    assert sample_index.query(SymbolCategory.FUNCTION, None, "foo") == []


def test_operator_category_matches_macros() -> None:
    index = MemoryIndex([MacroRecord(name="WITH-LOCK"), VariableRecord(name="WITH-LOCK")])
    results = index.query(SymbolCategory.OPERATOR, None, "WITH-LOCK")
    assert len(results) == 1
    assert isinstance(results[0], MacroRecord)


def test_packages_lists_each_package_once(sample_index: MemoryIndex) -> None:
    assert sample_index.packages() == ["alpha", "beta"]
    assert len(sample_index) == 5


def test_load_index_from_yaml(workspace) -> None:
    workspace.write(
        {
            "symbols.yml": """
            version: 1
            symbols:
              - kind: function
                name: add
                package: math
                docstring: Add two numbers.
                parameters: [a, b, [c, d]]
              - kind: class
                name: account
                slots:
                  - name: balance
                    docstring: Current balance.
                  - owner
              - kind: cenum
                name: color
                slots: [red, green]
            """,
        }
    )

    index = workspace.load_index("symbols.yml")
    records = list(index)

    assert records[0] == FunctionRecord(
        name="ADD",
        package="math",
        docstring="Add two numbers.",
        parameters=("a", "b", ("c", "d")),
    )
    assert records[1] == ClassRecord(
        name="ACCOUNT",
        slots=(SlotRecord("BALANCE", "Current balance."), SlotRecord("OWNER")),
    )
    assert isinstance(records[2], ForeignEnumRecord)
    assert [slot.name for slot in records[2].slots] == ["RED", "GREEN"]


def test_load_index_from_json_list(workspace) -> None:
    workspace.write(
        {"symbols.json": '[{"kind": "variable", "name": "*debug*", "docstring": "Verbose mode."}]'}
    )
    index = workspace.load_index("symbols.json")
    assert list(index) == [VariableRecord(name="*DEBUG*", docstring="Verbose mode.")]


def test_load_index_rejects_unknown_kind(workspace) -> None:
    workspace.write({"symbols.yml": "- kind: widget\n  name: knob\n"})
    with pytest.raises(IndexLoadError, match="unknown kind"):
        workspace.load_index("symbols.yml")


def test_load_index_rejects_unsupported_version(workspace) -> None:
    workspace.write({"symbols.yml": "version: 7\nsymbols: []\n"})
    with pytest.raises(IndexLoadError, match="version"):
        workspace.load_index("symbols.yml")


def test_load_index_reports_missing_file(workspace) -> None:
    with pytest.raises(IndexLoadError):
        workspace.load_index("missing.yml")


def test_records_from_entries_requires_names() -> None:
    with pytest.raises(IndexLoadError, match="#1"):
        records_from_entries([{"kind": "function", "name": "ok"}, {"kind": "function"}])


def test_load_index_rejects_undecodable_bytes(workspace) -> None:
    path = workspace.path("symbols.yml")
    path.write_bytes(b"\xff\xfe\x00symbols")
    with pytest.raises(IndexLoadError, match="Cannot read symbol index"):
        load_index(path)


@pytest.mark.parametrize("slots", ["xy", {"name": "x"}, 3])
def test_records_from_entries_rejects_non_list_slots(slots) -> None:
    with pytest.raises(IndexLoadError, match="malformed slot list"):
        records_from_entries([{"kind": "struct", "name": "point", "slots": slots}])


def test_records_from_entries_accepts_null_slots() -> None:
    [record] = records_from_entries([{"kind": "class", "name": "shape", "slots": None}])
    assert record == ClassRecord(name="SHAPE")
