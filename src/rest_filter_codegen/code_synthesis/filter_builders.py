"""Synthesis of one construction routine per filter family."""

from __future__ import annotations

import ast

from rest_filter_codegen.filter_registry import (
    PRESENCE_OPERATORS,
    FilterTypeDescriptor,
    FilterTypeRegistry,
)

from . import syntax

SCHEMA_ALIAS = "pb"
WRAPPERS_ALIAS = "wrappers_pb2"
EMPTY_ALIAS = "empty_pb2"
SPLIT_LIST_HELPER = "_split_list"

MEMBERSHIP_FIELDS = {"in_values": "in", "not_in_values": "not_in"}
RANGE_FIELD = "between"
RANGE_LOWER = "gte"
RANGE_UPPER = "lte"
KEY_LIST_OPERATORS = ("has_any_key", "has_all_keys")


def build_filter_builder(
    descriptor: FilterTypeDescriptor, registry: FilterTypeRegistry
) -> ast.FunctionDef:
    """Return ``def build_<family>(*, <operator>=None, ...)`` for ``descriptor``.

    The routine returns the first populated filter form, or ``None`` when every argument is
    unset.
    """
    operators = registry.operators_for(descriptor)
    kwonly = [
        (
            syntax.arg(operator, syntax.optional(_argument_type(descriptor, operator))),
            ast.Constant(None),
        )
        for operator in operators
    ]
    body: list[ast.stmt] = []
    for operator in _construction_order(operators):
        if operator == "lt" and registry.builds_range_for(descriptor):
            body.append(_range_branch(descriptor))
        if operator in PRESENCE_OPERATORS:
            body.append(_presence_branch(descriptor, operator))
        else:
            body.append(_value_branch(descriptor, operator))
    body.append(syntax.returns(ast.Constant(None)))
    return syntax.function(
        descriptor.builder_name,
        kwonly=kwonly,
        body=body,
        returns_annotation=syntax.optional(f"{SCHEMA_ALIAS}.{descriptor.name}"),
    )


def _construction_order(operators: tuple[str, ...]) -> list[str]:
    presence = [operator for operator in operators if operator in PRESENCE_OPERATORS]
    return presence + [operator for operator in operators if operator not in PRESENCE_OPERATORS]


def _argument_type(descriptor: FilterTypeDescriptor, operator: str) -> str:
    if operator in PRESENCE_OPERATORS:
        return "bool"
    if operator in MEMBERSHIP_FIELDS or descriptor.is_map:
        return "str"
    return descriptor.base_kind.python_type


def _construct(descriptor: FilterTypeDescriptor, field: str, value: ast.expr) -> ast.Call:
    return syntax.call(
        syntax.dotted(f"{SCHEMA_ALIAS}.{descriptor.name}"), keywords=[(field, value)]
    )


def _presence_branch(descriptor: FilterTypeDescriptor, operator: str) -> ast.If:
    empty = syntax.call(syntax.dotted(f"{EMPTY_ALIAS}.Empty"))
    return syntax.if_then(
        syntax.name(operator),
        [syntax.returns(_construct(descriptor, operator, empty))],
    )


def _value_branch(descriptor: FilterTypeDescriptor, operator: str) -> ast.If:
    argument = syntax.name(operator)
    if operator in MEMBERSHIP_FIELDS:
        field = MEMBERSHIP_FIELDS[operator]
        value: ast.expr = _value_list(descriptor, argument)
    elif operator in KEY_LIST_OPERATORS:
        field = operator
        value = _value_list(descriptor, argument)
    else:
        field = operator
        value = argument
    return syntax.if_then(
        syntax.is_not_none(argument),
        [syntax.returns(_construct(descriptor, field, value))],
    )


def _value_list(descriptor: FilterTypeDescriptor, argument: ast.expr) -> ast.Call:
    element_type = "str" if descriptor.is_map else descriptor.base_kind.python_type
    values = syntax.call(syntax.name(SPLIT_LIST_HELPER), [argument, syntax.name(element_type)])
    return syntax.call(
        syntax.dotted(f"{SCHEMA_ALIAS}.{descriptor.list_type_name}"),
        keywords=[("values", values)],
    )


def _range_branch(descriptor: FilterTypeDescriptor) -> ast.If:
    lower = syntax.name(RANGE_LOWER)
    upper = syntax.name(RANGE_UPPER)
    upper_value = syntax.call(
        syntax.dotted(f"{WRAPPERS_ALIAS}.{descriptor.wrapper_type_name}"),
        keywords=[("value", upper)],
    )
    range_value = syntax.call(
        syntax.dotted(f"{SCHEMA_ALIAS}.{descriptor.range_type_name}"),
        keywords=[("min", lower), ("max_value", upper_value)],
    )
    return syntax.if_then(
        syntax.all_of([syntax.is_not_none(lower), syntax.is_not_none(upper)]),
        [syntax.returns(_construct(descriptor, RANGE_FIELD, range_value))],
    )
