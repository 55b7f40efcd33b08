"""Filter type registry exports."""

from .filter_types import (
    BOOL_OPERATORS,
    MAP_OPERATORS,
    NUMERIC_OPERATORS,
    PRESENCE_OPERATORS,
    STRING_OPERATORS,
    FilterTypeDescriptor,
    ScalarKind,
    operator_set_for,
)
from .registry import FilterTypeRegistry

__all__ = [
    "BOOL_OPERATORS",
    "MAP_OPERATORS",
    "NUMERIC_OPERATORS",
    "PRESENCE_OPERATORS",
    "STRING_OPERATORS",
    "FilterTypeDescriptor",
    "FilterTypeRegistry",
    "ScalarKind",
    "operator_set_for",
]
