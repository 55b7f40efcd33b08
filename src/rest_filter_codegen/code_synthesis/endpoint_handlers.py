"""Synthesis of per-endpoint handlers and per-item row translators."""

from __future__ import annotations

import ast
from collections.abc import Sequence

from rest_filter_codegen.endpoint_modeling import Endpoint, FilterBinding, RequiredGroup
from rest_filter_codegen.naming import to_delimited

from . import syntax
from .filter_builders import SCHEMA_ALIAS

QUERY_ALIAS = "queries"
HANDLERS_ALIAS = "handlers"
VALIDATION_ERROR = "RequestValidationError"
NOT_FOUND = "NotFound"

DB_ARG = "db"
PARAMS_ARG = "params"
OPTIONS_ARG = "query_options"
REQUEST_VAR = "req"
QUERY_VAR = "sql_query"
ROWS_VAR = "rows"
ROW_VAR = "row"


def translator_name_for(item_type: str) -> str:
    return f"translate_{to_delimited(item_type)}"


def build_row_translator(item_type: str, properties: Sequence[str] | None) -> ast.FunctionDef:
    """``translate_<item>(row)`` mapping a data-store row onto the REST item model.

    Without a known property list the row is splatted into the model.
    """
    model = syntax.dotted(f"{HANDLERS_ALIAS}.{item_type}")
    row = syntax.name(ROW_VAR)
    if properties is None:
        value: ast.expr = ast.Call(func=model, args=[], keywords=[ast.keyword(arg=None, value=row)])
    else:
        row_get = syntax.attribute(row, "get")
        value = syntax.call(
            model,
            keywords=[
                (prop, syntax.call(row_get, [ast.Constant(prop)])) for prop in sorted(properties)
            ],
        )
    return syntax.function(
        translator_name_for(item_type),
        args=[syntax.arg(ROW_VAR)],
        body=[syntax.returns(value)],
    )


def build_list_handler(endpoint: Endpoint, *, default_page_size: int) -> ast.FunctionDef:
    """``<handler>(db, params: <ParamsType>, *query_options)`` for a List endpoint."""
    body: list[ast.stmt] = [syntax.docstring(_list_handler_docstring(endpoint))]
    body.extend(_group_check(group) for group in endpoint.required_groups)
    body.append(
        syntax.assign(
            REQUEST_VAR,
            syntax.call(
                syntax.dotted(f"{SCHEMA_ALIAS}.{endpoint.request_type}"),
                keywords=[("page_size", ast.Constant(default_page_size))],
            ),
        )
    )
    for param in endpoint.forwarded:
        body.append(
            syntax.if_then(
                syntax.is_not_none(_param_value(param.name)),
                [_assign_field(param.name, _param_value(param.name))],
            )
        )
    for binding in endpoint.filters:
        body.extend(_filter_assignment(binding))
    body.append(_build_query(endpoint))
    body.append(syntax.assign(ROWS_VAR, _execute_query()))

    translate = syntax.name(translator_name_for(endpoint.item_type))
    items = ast.ListComp(
        elt=syntax.call(translate, [syntax.name(ROW_VAR)]),
        generators=[
            ast.comprehension(
                target=syntax.store(ROW_VAR), iter=syntax.name(ROWS_VAR), ifs=[], is_async=0
            )
        ],
    )
    response = syntax.call(
        syntax.dotted(f"{HANDLERS_ALIAS}.{endpoint.response_type}"),
        keywords=[(endpoint.table, items)],
    )
    body.append(syntax.returns(response))
    return syntax.function(
        endpoint.function_name,
        args=[
            syntax.arg(DB_ARG),
            syntax.arg(PARAMS_ARG, syntax.dotted(f"{HANDLERS_ALIAS}.{endpoint.params_type}")),
        ],
        vararg=syntax.arg(OPTIONS_ARG),
        body=body,
    )


def build_get_handler(endpoint: Endpoint) -> ast.FunctionDef:
    """``<handler>(db, <key>, *query_options)`` for a Get endpoint."""
    args = [syntax.arg(DB_ARG)]
    request_fields: list[tuple[str, ast.expr]] = []
    if endpoint.path_param is not None and endpoint.key_field:
        key_name = syntax.python_name(endpoint.key_field)
        if key_name in (DB_ARG, OPTIONS_ARG):
            key_name = f"{key_name}_"
        python_type = endpoint.path_param.python_type
        annotation = None if python_type == "Any" else syntax.name(python_type)
        args.append(syntax.arg(key_name, annotation))
        request_fields.append((endpoint.key_field, syntax.name(key_name)))

    request = syntax.call(
        syntax.dotted(f"{SCHEMA_ALIAS}.{endpoint.request_type}"), keywords=request_fields
    )
    first_row = syntax.call(
        syntax.name("next"),
        [syntax.call(syntax.name("iter"), [_execute_query()]), ast.Constant(None)],
    )
    not_found = syntax.call(
        syntax.name(NOT_FOUND), keywords=[("resource", ast.Constant(endpoint.table))]
    )
    translate = syntax.name(translator_name_for(endpoint.item_type))
    body: list[ast.stmt] = [
        syntax.docstring(f"{endpoint.method} {endpoint.path}"),
        syntax.assign(REQUEST_VAR, request),
        _build_query(endpoint),
        syntax.assign(ROW_VAR, first_row),
        syntax.if_then(syntax.is_none(syntax.name(ROW_VAR)), [syntax.returns(not_found)]),
        syntax.returns(syntax.call(translate, [syntax.name(ROW_VAR)])),
    ]
    return syntax.function(
        endpoint.function_name,
        args=args,
        vararg=syntax.arg(OPTIONS_ARG),
        body=body,
    )


def _list_handler_docstring(endpoint: Endpoint) -> str:
    """Operation line followed by one line per parameter the handler reads."""
    read = {param.name for param in endpoint.forwarded}
    read.update(name for binding in endpoint.filters for _, name in binding.arguments)
    lines = []
    for param in sorted(endpoint.params, key=lambda param: param.name):
        if param.name not in read:
            continue
        line = f"        {param.name}"
        if param.description:
            line = f"{line}: {param.description}"
        lines.append(f"{line} (required)" if param.required else line)
    summary = f"{endpoint.method} {endpoint.path}"
    if not lines:
        return summary
    return "\n".join([summary, "", "    Params:", *lines, "    "])


def _param_value(param_name: str) -> ast.expr:
    return syntax.attribute(syntax.name(PARAMS_ARG), param_name)


def _assign_field(field: str, value: ast.expr) -> ast.stmt:
    if syntax.is_identifier(field):
        target = ast.Attribute(value=syntax.name(REQUEST_VAR), attr=field, ctx=ast.Store())
        return ast.Assign(targets=[target], value=value)
    setter = syntax.call(
        syntax.name("setattr"), [syntax.name(REQUEST_VAR), ast.Constant(field), value]
    )
    return ast.Expr(value=setter)


def _group_check(group: RequiredGroup) -> ast.If:
    missing = [syntax.is_none(_param_value(member)) for member in group.members]
    members = ast.Tuple(elts=[ast.Constant(member) for member in group.members], ctx=ast.Load())
    error = syntax.call(syntax.name(VALIDATION_ERROR), [ast.Constant(group.name), members])
    return syntax.if_then(syntax.all_of(missing), [ast.Raise(exc=error, cause=None)])


def _filter_assignment(binding: FilterBinding) -> list[ast.stmt]:
    local = syntax.python_name(f"{binding.field}_filter")
    built = syntax.call(
        syntax.name(binding.descriptor.builder_name),
        keywords=[
            (operator, _param_value(param_name)) for operator, param_name in binding.arguments
        ],
    )
    copy_from = syntax.attribute(
        syntax.attribute(syntax.name(REQUEST_VAR), binding.field), "CopyFrom"
    )
    return [
        syntax.assign(local, built),
        syntax.if_then(
            syntax.is_not_none(syntax.name(local)),
            [ast.Expr(value=syntax.call(copy_from, [syntax.name(local)]))],
        ),
    ]


def _build_query(endpoint: Endpoint) -> ast.Assign:
    options = ast.Starred(value=syntax.name(OPTIONS_ARG), ctx=ast.Load())
    build_query = syntax.call(
        syntax.dotted(f"{QUERY_ALIAS}.{endpoint.query_builder}"),
        [syntax.name(REQUEST_VAR), options],
    )
    return syntax.assign(QUERY_VAR, build_query)


def _execute_query() -> ast.Call:
    query = syntax.name(QUERY_VAR)
    return syntax.call(
        syntax.dotted(f"{DB_ARG}.query"),
        [syntax.attribute(query, "query"), syntax.attribute(query, "args")],
    )
