"""Filter construction routine synthesis tests."""

from __future__ import annotations

import ast
from typing import Any

import pytest
from rest_filter_codegen.code_synthesis import build_filter_builder
from rest_filter_codegen.filter_registry import FilterTypeRegistry

REGISTRY = FilterTypeRegistry.standard()


class _Recorder:
    """Stand-in for generated message modules; every type records its fields."""

    def __getattr__(self, type_name: str) -> Any:
        if type_name.startswith("_"):
            raise AttributeError(type_name)

        def construct(**fields: Any) -> tuple[str, dict[str, Any]]:
            return (type_name, fields)

        return construct


def _split_list(value: str, convert: Any) -> list[Any]:
    return [convert(item.strip()) for item in value.split(",") if item.strip()]


def _source(family: str) -> str:
    function = build_filter_builder(REGISTRY.get(family), REGISTRY)
    module = ast.Module(body=[function], type_ignores=[])
    return ast.unparse(ast.fix_missing_locations(module))


def _load(family: str) -> Any:
    function = build_filter_builder(REGISTRY.get(family), REGISTRY)
    future = ast.ImportFrom(module="__future__", names=[ast.alias(name="annotations")], level=0)
    module = ast.fix_missing_locations(ast.Module(body=[future, function], type_ignores=[]))
    namespace: dict[str, Any] = {
        "pb": _Recorder(),
        "wrappers_pb2": _Recorder(),
        "empty_pb2": _Recorder(),
        "_split_list": _split_list,
    }
    exec(compile(module, f"<{family}>", "exec"), namespace)
    return namespace[function.name]


def test_signature_lists_every_operator_as_optional_keyword() -> None:
    function = build_filter_builder(REGISTRY.get("NullableUInt32Filter"), REGISTRY)

    assert function.name == "build_nullable_uint32_filter"
    assert function.args.args == []
    assert [argument.arg for argument in function.args.kwonlyargs] == [
        "eq",
        "ne",
        "lt",
        "lte",
        "gt",
        "gte",
        "in_values",
        "not_in_values",
        "is_null",
        "is_not_null",
    ]
    assert all(
        isinstance(default, ast.Constant) and default.value is None
        for default in function.args.kw_defaults
    )


def test_numeric_builder_returns_none_without_arguments() -> None:
    assert _load("UInt32Filter")() is None


def test_numeric_builder_collapses_bounds_into_range() -> None:
    build = _load("UInt32Filter")

    assert build(gte=10, lte=20) == (
        "UInt32Filter",
        {"between": ("UInt32Range", {"min": 10, "max_value": ("UInt32Value", {"value": 20})})},
    )
    assert build(gte=10) == ("UInt32Filter", {"gte": 10})
    assert build(lte=20) == ("UInt32Filter", {"lte": 20})


def test_numeric_builder_prefers_earlier_forms() -> None:
    build = _load("Int64Filter")

    assert build(eq=1, gte=2, lte=3) == ("Int64Filter", {"eq": 1})
    assert build(lt=5, gte=2) == ("Int64Filter", {"lt": 5})
    assert build(ne=0, in_values="1,2") == ("Int64Filter", {"ne": 0})


def test_membership_arguments_become_value_lists() -> None:
    build = _load("UInt64Filter")

    assert build(in_values="1, 2,3") == (
        "UInt64Filter",
        {"in": ("UInt64List", {"values": [1, 2, 3]})},
    )
    assert build(not_in_values="7") == ("UInt64Filter", {"not_in": ("UInt64List", {"values": [7]})})


def test_nullable_builder_checks_presence_first() -> None:
    build = _load("NullableStringFilter")

    assert build(is_null=True, eq="x") == ("NullableStringFilter", {"is_null": ("Empty", {})})
    assert build(is_not_null=True) == ("NullableStringFilter", {"is_not_null": ("Empty", {})})
    assert build(is_null=False, eq="x") == ("NullableStringFilter", {"eq": "x"})


def test_string_builder_covers_pattern_operators_without_range() -> None:
    build = _load("StringFilter")

    assert build(starts_with="0x") == ("StringFilter", {"starts_with": "0x"})
    assert build(not_like="%a%") == ("StringFilter", {"not_like": "%a%"})
    assert build(in_values="a,b") == (
        "StringFilter",
        {"in": ("StringList", {"values": ["a", "b"]})},
    )
    assert "between" not in _source("StringFilter")


def test_bool_builder_accepts_false() -> None:
    assert _load("BoolFilter")(eq=False) == ("BoolFilter", {"eq": False})


def test_map_builder_splits_key_lists() -> None:
    build = _load("MapStringUInt32Filter")

    assert build() is None
    assert build(has_key="env") == ("MapStringUInt32Filter", {"has_key": "env"})
    assert build(has_all_keys="env,region") == (
        "MapStringUInt32Filter",
        {"has_all_keys": ("StringList", {"values": ["env", "region"]})},
    )
    assert "between" not in _source("MapStringUInt32Filter")


@pytest.mark.parametrize("family", ["UInt32Filter", "NullableInt32Filter", "StringFilter"])
def test_builder_source_is_valid_python(family: str) -> None:
    ast.parse(_source(family))
