"""Symbol-metadata records consumed by the expansion engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

ParameterSpec = Union[str, Sequence["ParameterSpec"]]


class SymbolKind(str, Enum):
    """Variant tag of a symbol record."""

    FUNCTION = "function"
    MACRO = "macro"
    GENERIC_FUNCTION = "generic-function"
    METHOD = "method"
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


@dataclass(frozen=True)
class SlotRecord:
    """A named member of a record-shaped symbol."""

    name: str
    docstring: str = ""


@dataclass(frozen=True)
class SymbolRecord:
    """Fields shared by every symbol record."""

    name: str
    package: Optional[str] = None
    docstring: str = ""

    kind = None  # type: Optional[SymbolKind]


@dataclass(frozen=True)
class OperatorRecord(SymbolRecord):
    """Symbols documented with a parameter list."""

    parameters: Tuple[ParameterSpec, ...] = ()


@dataclass(frozen=True)
class RecordTypeRecord(SymbolRecord):
    """Symbols documented with an ordered list of slots."""

    slots: Tuple[SlotRecord, ...] = ()


@dataclass(frozen=True)
class FunctionRecord(OperatorRecord):
    kind = SymbolKind.FUNCTION


@dataclass(frozen=True)
class MacroRecord(OperatorRecord):
    kind = SymbolKind.MACRO


@dataclass(frozen=True)
class GenericFunctionRecord(OperatorRecord):
    kind = SymbolKind.GENERIC_FUNCTION


@dataclass(frozen=True)
class MethodRecord(OperatorRecord):
    kind = SymbolKind.METHOD


@dataclass(frozen=True)
class TypeRecord(OperatorRecord):
    kind = SymbolKind.TYPE


@dataclass(frozen=True)
class VariableRecord(SymbolRecord):
    kind = SymbolKind.VARIABLE


@dataclass(frozen=True)
class StructRecord(RecordTypeRecord):
    kind = SymbolKind.STRUCT


@dataclass(frozen=True)
class ClassRecord(RecordTypeRecord):
    kind = SymbolKind.CLASS


@dataclass(frozen=True)
class ForeignFunctionRecord(OperatorRecord):
    kind = SymbolKind.FOREIGN_FUNCTION


@dataclass(frozen=True)
class ForeignTypeRecord(OperatorRecord):
    kind = SymbolKind.FOREIGN_TYPE


@dataclass(frozen=True)
class ForeignStructRecord(RecordTypeRecord):
    kind = SymbolKind.FOREIGN_STRUCT


@dataclass(frozen=True)
class ForeignUnionRecord(RecordTypeRecord):
    kind = SymbolKind.FOREIGN_UNION


@dataclass(frozen=True)
class ForeignEnumRecord(RecordTypeRecord):
    """Enum variants are stored as slots."""

    kind = SymbolKind.FOREIGN_ENUM


@dataclass(frozen=True)
class ForeignBitfieldRecord(RecordTypeRecord):
    """Bitfield masks are stored as slots."""

    kind = SymbolKind.FOREIGN_BITFIELD


RECORD_TYPES = {
    record_type.kind: record_type
    for record_type in (
        FunctionRecord,
        MacroRecord,
        GenericFunctionRecord,
        MethodRecord,
        TypeRecord,
        VariableRecord,
        StructRecord,
        ClassRecord,
        ForeignFunctionRecord,
        ForeignTypeRecord,
        ForeignStructRecord,
        ForeignUnionRecord,
        ForeignEnumRecord,
        ForeignBitfieldRecord,
    )
}


def humanize(name: str) -> str:
    """Return the display form of a canonical (upper-case) symbol name."""
    return name.lower()


def render_parameters(parameters: Sequence[ParameterSpec]) -> str:
    """Render a parameter list in canonical lower-case form, e.g. ``(x (y z))``."""
    parts = []
    for parameter in parameters:
        if isinstance(parameter, str):
            parts.append(parameter.lower())
        else:
            parts.append(render_parameters(parameter))
    return "(" + " ".join(parts) + ")"


__all__ = [
    "ClassRecord",
    "ForeignBitfieldRecord",
    "ForeignEnumRecord",
    "ForeignFunctionRecord",
    "ForeignStructRecord",
    "ForeignTypeRecord",
    "ForeignUnionRecord",
    "FunctionRecord",
    "GenericFunctionRecord",
    "MacroRecord",
    "MethodRecord",
    "OperatorRecord",
    "ParameterSpec",
    "RECORD_TYPES",
    "RecordTypeRecord",
    "SlotRecord",
    "StructRecord",
    "SymbolKind",
    "SymbolRecord",
    "TypeRecord",
    "VariableRecord",
    "humanize",
    "render_parameters",
]
