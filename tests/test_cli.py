"""CLI behaviour tests."""

from __future__ import annotations

import json

import pytest

from symdoc.cli import _build_parser, main

_INDEX = """
symbols:
  - kind: function
    name: foo
    package: alpha
    docstring: does a thing
    parameters: [x, y]
"""

_DOCUMENT = """
type: content
children:
  - type: package
    package: alpha
    children:
      - type: symbol-doc
        argument: function foo
"""


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "types"])
    assert args.verbose is True
    assert args.command == "types"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["expand", "doc.yml", "--verbose"])
    assert args.verbose is True
    assert args.command == "expand"
    assert args.document == "doc.yml"


def test_cli_expand_flags() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        ["expand", "doc.yml", "--index", "s.yml", "--format", "yaml", "--fail-on-missing"]
    )
    assert args.index == "s.yml"
    assert args.format == "yaml"
    assert args.fail_on_missing is True


def test_cli_rejects_unknown_format() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["expand", "doc.yml", "--format", "html"])


def test_expand_writes_json_to_stdout(workspace, capsys, monkeypatch) -> None:
    workspace.write({"symbols.yml": _INDEX, "doc.yml": _DOCUMENT})
    monkeypatch.chdir(workspace.path())

    main(["expand", "doc.yml", "--index", "symbols.yml"])

    output = json.loads(capsys.readouterr().out)
    doc_node = output["children"][0]
    assert doc_node["tags"] == ["doc-node", "function"]
    assert doc_node["children"][0]["children"][0]["text"] == "foo"


def test_expand_uses_configured_index_and_output(workspace, monkeypatch) -> None:
    workspace.write(
        {
            "symbols.yml": _INDEX,
            "doc.yml": _DOCUMENT,
            ".symdoc.yml": "index: symbols.yml\noutput:\n  format: yaml\n",
        }
    )
    monkeypatch.chdir(workspace.path())

    main(["expand", "doc.yml", "-o", "out/api.yml"])

    rendered = workspace.path("out/api.yml").read_text(encoding="utf-8")
    assert "doc-node" in rendered
    assert "symbol-doc" not in rendered


def test_expand_without_index_exits(workspace, capsys, monkeypatch) -> None:
    workspace.write({"doc.yml": _DOCUMENT})
    monkeypatch.chdir(workspace.path())

    with pytest.raises(SystemExit) as excinfo:
        main(["expand", "doc.yml"])

    assert excinfo.value.code == 1
    assert "No symbol index configured" in capsys.readouterr().err


def test_expand_malformed_macro_exits(workspace, capsys, monkeypatch) -> None:
    workspace.write(
        {
            "symbols.yml": _INDEX,
            "doc.yml": "type: symbol-doc\nargument: function\n",
        }
    )
    monkeypatch.chdir(workspace.path())

    with pytest.raises(SystemExit) as excinfo:
        main(["expand", "doc.yml", "--index", "symbols.yml"])

    assert excinfo.value.code == 1
    assert "symdoc expand failed" in capsys.readouterr().err


def test_expand_fail_on_missing(workspace, capsys, monkeypatch) -> None:
    workspace.write(
        {
            "symbols.yml": _INDEX,
            "doc.yml": "type: symbol-doc\nargument: function missing\n",
        }
    )
    monkeypatch.chdir(workspace.path())

    main(["expand", "doc.yml", "--index", "symbols.yml"])
    assert "no-node" in capsys.readouterr().out

    with pytest.raises(SystemExit) as excinfo:
        main(["expand", "doc.yml", "--index", "symbols.yml", "--fail-on-missing"])
    assert excinfo.value.code == 2


def test_types_lists_tags(capsys) -> None:
    main(["types"])
    lines = capsys.readouterr().out.splitlines()
    assert "function\tfunction" in lines
    assert "generic\tgeneric-function" in lines


def test_expand_warning_names_the_document(workspace, capsys, monkeypatch) -> None:
    workspace.write(
        {
            "symbols.yml": _INDEX,
            "doc.yml": "type: symbol-doc\nargument: function missing\n",
        }
    )
    monkeypatch.chdir(workspace.path())

    main(["expand", "doc.yml", "--index", "symbols.yml"])

    err = capsys.readouterr().err
    assert "[symdoc] WARNING doc.yml: No node with name missing" in err
    assert "doc.yml: Unresolved references remain (no-node: 1)" in err


def test_expand_undecodable_document_exits(workspace, capsys, monkeypatch) -> None:
    workspace.write({"symbols.yml": _INDEX})
    workspace.path("doc.yml").write_bytes(b"\xff\xfe\x00")
    monkeypatch.chdir(workspace.path())

    with pytest.raises(SystemExit) as excinfo:
        main(["expand", "doc.yml", "--index", "symbols.yml"])

    assert excinfo.value.code == 1
    assert "Cannot read document" in capsys.readouterr().err


def test_packages_lists_index_packages(workspace, capsys, monkeypatch) -> None:
    workspace.write(
        {
            "symbols.yml": _INDEX
            + """
  - kind: variable
    name: "*limit*"
    package: beta
  - kind: variable
    name: "*other*"
    package: alpha
  - kind: variable
    name: "*free*"
""",
            ".symdoc.yml": "index: symbols.yml\n",
        }
    )
    monkeypatch.chdir(workspace.path())

    main(["packages"])

    assert capsys.readouterr().out.splitlines() == ["alpha", "beta"]


def test_packages_without_index_exits(workspace, capsys, monkeypatch) -> None:
    monkeypatch.chdir(workspace.path())

    with pytest.raises(SystemExit) as excinfo:
        main(["packages"])

    assert excinfo.value.code == 1
    assert "No symbol index configured" in capsys.readouterr().err
