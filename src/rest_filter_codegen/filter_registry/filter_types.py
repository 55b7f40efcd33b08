"""Filter type entities and the operator algebra per type family."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from rest_filter_codegen.naming import to_delimited

NUMERIC_OPERATORS: tuple[str, ...] = (
    "eq",
    "ne",
    "lt",
    "lte",
    "gt",
    "gte",
    "in_values",
    "not_in_values",
)
STRING_OPERATORS: tuple[str, ...] = (
    "eq",
    "ne",
    "contains",
    "starts_with",
    "ends_with",
    "like",
    "not_like",
    "in_values",
    "not_in_values",
)
BOOL_OPERATORS: tuple[str, ...] = ("eq", "ne")
MAP_OPERATORS: tuple[str, ...] = ("has_key", "not_has_key", "has_any_key", "has_all_keys")
PRESENCE_OPERATORS: tuple[str, ...] = ("is_null", "is_not_null")


class ScalarKind(str, Enum):
    """Base scalar kind of a filter family."""

    UINT32 = "uint32"
    UINT64 = "uint64"
    INT32 = "int32"
    INT64 = "int64"
    STRING = "string"
    BOOL = "bool"

    @property
    def type_name(self) -> str:
        """Capitalized spelling used inside schema type names (``UInt32``)."""
        return _TYPE_NAMES[self]

    @property
    def is_numeric(self) -> bool:
        return self not in (ScalarKind.STRING, ScalarKind.BOOL)

    @property
    def python_type(self) -> str:
        if self.is_numeric:
            return "int"
        return "str" if self is ScalarKind.STRING else "bool"


_TYPE_NAMES = {
    ScalarKind.UINT32: "UInt32",
    ScalarKind.UINT64: "UInt64",
    ScalarKind.INT32: "Int32",
    ScalarKind.INT64: "Int64",
    ScalarKind.STRING: "String",
    ScalarKind.BOOL: "Bool",
}


def operator_set_for(base_kind: ScalarKind, *, nullable: bool, is_map: bool) -> tuple[str, ...]:
    """Return the ordered operator tokens legal for a (kind, nullable, map) family."""
    if is_map:
        operators = MAP_OPERATORS
    elif base_kind.is_numeric:
        operators = NUMERIC_OPERATORS
    elif base_kind is ScalarKind.STRING:
        operators = STRING_OPERATORS
    else:
        operators = BOOL_OPERATORS
    if nullable:
        return operators + PRESENCE_OPERATORS
    return operators


@dataclass(frozen=True)
class FilterTypeDescriptor:
    """One named filter family.

    ``base_kind`` is the value kind for map families. The operator set is derived from
    ``(base_kind, nullable, is_map)`` and never set per field.
    """

    name: str
    base_kind: ScalarKind
    nullable: bool = False
    is_map: bool = False

    @property
    def operators(self) -> tuple[str, ...]:
        return operator_set_for(self.base_kind, nullable=self.nullable, is_map=self.is_map)

    @property
    def builds_range(self) -> bool:
        return self.base_kind.is_numeric and not self.is_map

    @property
    def builder_name(self) -> str:
        """Name of the synthesized construction routine (``build_nullable_uint32_filter``)."""
        return "build_" + to_delimited(self.name.replace("UInt", "Uint"), split_digits=False)

    @property
    def range_type_name(self) -> str:
        return f"{self.base_kind.type_name}Range"

    @property
    def list_type_name(self) -> str:
        if self.is_map:
            return "StringList"
        return f"{self.base_kind.type_name}List"

    @property
    def wrapper_type_name(self) -> str:
        return f"{self.base_kind.type_name}Value"
