"""Single-value wrapper kinds and their REST-facing scalar type and format."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from rest_filter_codegen.naming import strip_package

WRAPPER_REST_TYPES: Mapping[str, tuple[str, str]] = MappingProxyType(
    {
        "DoubleValue": ("number", "double"),
        "FloatValue": ("number", "float"),
        "Int32Value": ("integer", "int32"),
        "Int64Value": ("integer", "int64"),
        "UInt32Value": ("integer", "uint32"),
        "UInt64Value": ("integer", "uint64"),
        "BoolValue": ("boolean", ""),
        "StringValue": ("string", ""),
        "BytesValue": ("string", "byte"),
    }
)
WRAPPER_KINDS = tuple(WRAPPER_REST_TYPES)

_WRAPPER_PACKAGE = "google.protobuf."


def wrapper_kind_of(type_name: str) -> str | None:
    """Wrapper kind of a fully qualified field type, if it is one."""
    qualified = type_name.lstrip(".")
    if not qualified.startswith(_WRAPPER_PACKAGE):
        return None
    kind = strip_package(qualified)
    return kind if kind in WRAPPER_REST_TYPES else None


def rest_type_for(wrapper_kind: str) -> tuple[str, str] | None:
    """REST ``(type, format)`` pair for a wrapper kind; format is empty when unset."""
    return WRAPPER_REST_TYPES.get(wrapper_kind)
