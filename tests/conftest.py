from __future__ import annotations

import logging
from pathlib import Path

import pytest

from symdoc.index import MemoryIndex
from symdoc.models import (
    ClassRecord,
    FunctionRecord,
    SlotRecord,
    StructRecord,
    VariableRecord,
)
from tests._fixtures.workspace_builder import WorkspaceBuilder


@pytest.fixture
def workspace(tmp_path: Path) -> WorkspaceBuilder:
    """Provide a reusable workspace builder rooted at the pytest tmp_path."""
    return WorkspaceBuilder(tmp_path)


@pytest.fixture
def sample_index() -> MemoryIndex:
    """Small index spanning two packages."""
    return MemoryIndex(
        [
            FunctionRecord(
                name="FOO",
                package="alpha",
                docstring="does a thing",
                parameters=("X", "Y"),
            ),
            FunctionRecord(
                name="FOO",
                package="beta",
                docstring="beta variant",
                parameters=("Z",),
            ),
            VariableRecord(name="*LIMIT*", package="alpha", docstring="Upper bound."),
            StructRecord(
                name="POINT",
                package="alpha",
                docstring="A point.",
                slots=(SlotRecord("X", "horizontal"), SlotRecord("Y", "vertical")),
            ),
            ClassRecord(
                name="SHAPE",
                package="alpha",
                docstring="A shape.",
                slots=(SlotRecord("AREA", "Cached area."), SlotRecord("COLOR")),
            ),
        ]
    )


@pytest.fixture(autouse=True)
def _reset_symdoc_logger():
    """Undo handler changes made by configure_logging so caplog keeps working."""
    yield
    logger = logging.getLogger("symdoc")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
