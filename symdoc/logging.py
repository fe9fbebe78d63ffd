"""Logging for symdoc: a ``symdoc`` logger tree whose lines name the document being expanded."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Iterator, Mapping

_LOGGER_NAME = "symdoc"
_CONSOLE_FORMAT = "[symdoc] %(levelname)s %(document)s%(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(document)s%(message)s"

_current_document: ContextVar[str | None] = ContextVar("symdoc_document", default=None)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the symdoc hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class DocumentFilter(logging.Filter):
    """Stamp each record with the document whose expansion produced it."""

    def filter(self, record: logging.LogRecord) -> bool:
        document = _current_document.get()
        record.document = f"{document}: " if document else ""
        return True


@contextmanager
def document_context(document: str | Path) -> Iterator[None]:
    """Attribute log lines emitted inside the block to ``document``."""
    token = _current_document.set(str(document))
    try:
        yield
    finally:
        _current_document.reset(token)


def report_unresolved(logger: logging.Logger, summary: Mapping[str, int]) -> bool:
    """Warn once about the error nodes left in an expanded tree.

    ``summary`` maps error tags to counts, as returned by
    :func:`symdoc.reporting.error_summary`. Returns whether anything was reported.
    """
    if not summary:
        return False
    details = ", ".join(f"{tag}: {count}" for tag, count in sorted(summary.items()))
    logger.warning("Unresolved references remain (%s)", details)
    return True


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the symdoc logger with console output and optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handlers: list[logging.Handler] = []
    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    handlers.append(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
        handler.addFilter(DocumentFilter())
        logger.addHandler(handler)

    return logger


__all__ = [
    "DocumentFilter",
    "configure_logging",
    "document_context",
    "get_logger",
    "report_unresolved",
]
