"""Small constructors for the syntax-tree nodes the synthesizer emits."""

from __future__ import annotations

import ast
import keyword
from collections.abc import Iterable, Sequence


def is_identifier(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


def python_name(name: str) -> str:
    """Identifier safe to bind locally; reserved words gain a trailing underscore."""
    return f"{name}_" if keyword.iskeyword(name) else name


def name(identifier: str) -> ast.Name:
    return ast.Name(id=identifier, ctx=ast.Load())


def store(identifier: str) -> ast.Name:
    return ast.Name(id=identifier, ctx=ast.Store())


def dotted(path: str) -> ast.expr:
    """``a.b.c`` as nested attribute access."""
    head, *rest = path.split(".")
    node: ast.expr = name(head)
    for part in rest:
        node = ast.Attribute(value=node, attr=part, ctx=ast.Load())
    return node


def attribute(target: ast.expr, field: str) -> ast.expr:
    """``target.field``, or ``getattr(target, 'field')`` when the field is no identifier."""
    if is_identifier(field):
        return ast.Attribute(value=target, attr=field, ctx=ast.Load())
    return call(name("getattr"), [target, ast.Constant(field)])


def call(
    func: ast.expr,
    args: Sequence[ast.expr] = (),
    keywords: Iterable[tuple[str, ast.expr]] = (),
) -> ast.Call:
    """Call node; keyword names that are not identifiers travel in a ``**{...}`` mapping."""
    plain: list[ast.keyword] = []
    splatted: list[tuple[str, ast.expr]] = []
    for keyword_name, value in keywords:
        if is_identifier(keyword_name):
            plain.append(ast.keyword(arg=keyword_name, value=value))
        else:
            splatted.append((keyword_name, value))
    if splatted:
        plain.append(
            ast.keyword(
                arg=None,
                value=ast.Dict(
                    keys=[ast.Constant(key) for key, _ in splatted],
                    values=[value for _, value in splatted],
                ),
            )
        )
    return ast.Call(func=func, args=list(args), keywords=plain)


def is_none(value: ast.expr) -> ast.Compare:
    return ast.Compare(left=value, ops=[ast.Is()], comparators=[ast.Constant(None)])


def is_not_none(value: ast.expr) -> ast.Compare:
    return ast.Compare(left=value, ops=[ast.IsNot()], comparators=[ast.Constant(None)])


def all_of(conditions: Sequence[ast.expr]) -> ast.expr:
    if len(conditions) == 1:
        return conditions[0]
    return ast.BoolOp(op=ast.And(), values=list(conditions))


def assign(target: str, value: ast.expr) -> ast.Assign:
    return ast.Assign(targets=[store(target)], value=value)


def returns(value: ast.expr) -> ast.Return:
    return ast.Return(value=value)


def if_then(condition: ast.expr, body: Sequence[ast.stmt]) -> ast.If:
    return ast.If(test=condition, body=list(body), orelse=[])


def docstring(text: str) -> ast.Expr:
    return ast.Expr(value=ast.Constant(text))


def arg(identifier: str, annotation: ast.expr | None = None) -> ast.arg:
    return ast.arg(arg=identifier, annotation=annotation)


def optional(annotation: str) -> ast.expr:
    """``<annotation> | None``."""
    return ast.BinOp(left=dotted(annotation), op=ast.BitOr(), right=ast.Constant(None))


def function(
    identifier: str,
    *,
    args: Sequence[ast.arg] = (),
    vararg: ast.arg | None = None,
    kwonly: Sequence[tuple[ast.arg, ast.expr]] = (),
    body: Sequence[ast.stmt],
    returns_annotation: ast.expr | None = None,
) -> ast.FunctionDef:
    return ast.FunctionDef(
        name=identifier,
        args=ast.arguments(
            posonlyargs=[],
            args=list(args),
            vararg=vararg,
            kwonlyargs=[argument for argument, _ in kwonly],
            kw_defaults=[default for _, default in kwonly],
            kwarg=None,
            defaults=[],
        ),
        body=list(body),
        decorator_list=[],
        returns=returns_annotation,
        type_params=[],
    )
