"""CLI entrypoints for symdoc commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import OUTPUT_FORMATS, load_config
from .engine import MacroExpander
from .errors import StructuralError, SymdocError
from .index import load_index
from .logging import configure_logging, document_context, get_logger, report_unresolved
from .registry import TYPE_TAGS, type_tags
from .reporting import error_summary
from .serialization import dump_document, load_document

logger = get_logger("cli")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="symdoc",
        description="Expand symbol reference macros in documentation trees.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    expand_parser = subparsers.add_parser(
        "expand",
        help="Expand every macro in a document against a symbol index.",
    )
    _add_verbose_option(expand_parser, suppress_default=True)
    expand_parser.add_argument(
        "document",
        help="Path to the document tree (YAML or JSON).",
    )
    expand_parser.add_argument(
        "--index",
        default=None,
        help="Symbol index file (overrides the configured index).",
    )
    expand_parser.add_argument(
        "--config",
        default=None,
        help="Path to .symdoc.yml or its directory (defaults to current directory).",
    )
    expand_parser.add_argument(
        "--package",
        default=None,
        help="Ambient package used for symbols outside any package scope.",
    )
    expand_parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format for the expanded tree.",
    )
    expand_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the expanded tree to this file instead of stdout.",
    )
    expand_parser.add_argument(
        "--fail-on-missing",
        action="store_true",
        help="Exit with status 2 when unresolved references remain.",
    )

    types_parser = subparsers.add_parser(
        "types",
        help="List the type tags accepted in symbol requests.",
    )
    _add_verbose_option(types_parser, suppress_default=True)

    packages_parser = subparsers.add_parser(
        "packages",
        help="List the packages that appear in a symbol index.",
    )
    _add_verbose_option(packages_parser, suppress_default=True)
    packages_parser.add_argument(
        "--index",
        default=None,
        help="Symbol index file (overrides the configured index).",
    )
    packages_parser.add_argument(
        "--config",
        default=None,
        help="Path to .symdoc.yml or its directory (defaults to current directory).",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for symdoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "expand":
        _run_expand(parser, args)
    elif args.command == "types":
        for tag in type_tags():
            print(f"{tag}\t{TYPE_TAGS[tag].value}")
    elif args.command == "packages":
        _run_packages(parser, args)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_expand(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    try:
        config = load_config(Path(args.config) if args.config else Path.cwd())
        index_path = Path(args.index) if args.index else config.index_path
        if index_path is None:
            parser.exit(1, "No symbol index configured. Pass --index or set 'index' in .symdoc.yml.\n")
        index = load_index(index_path)
        document = load_document(Path(args.document))
        engine = MacroExpander(index, max_depth=config.expansion.max_depth)
        with document_context(args.document):
            expanded = engine.expand(document, package=args.package or config.package)
    except StructuralError as exc:
        parser.exit(1, f"symdoc expand failed: {exc}\n")
    except SymdocError as exc:
        parser.exit(1, f"{exc}\n")

    output_format = args.format or config.output.format
    rendered = dump_document(expanded, output_format=output_format, indent=config.output.indent)
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered, encoding="utf-8")
        print(f"Expanded document written to {_relativize(output_path)}")
    else:
        sys.stdout.write(rendered)

    with document_context(args.document):
        unresolved = report_unresolved(logger, error_summary(expanded))
    if unresolved and args.fail_on_missing:
        parser.exit(2, "Unresolved references remain; see warnings above.\n")


def _run_packages(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    try:
        index = load_index(_index_path(parser, args))
    except SymdocError as exc:
        parser.exit(1, f"{exc}\n")
    for package in index.packages():
        print(package)


def _index_path(parser: argparse.ArgumentParser, args: argparse.Namespace) -> Path:
    if args.index:
        return Path(args.index)
    config = load_config(Path(args.config) if args.config else Path.cwd())
    if config.index_path is None:
        parser.exit(1, "No symbol index configured. Pass --index or set 'index' in .symdoc.yml.\n")
    return config.index_path


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
