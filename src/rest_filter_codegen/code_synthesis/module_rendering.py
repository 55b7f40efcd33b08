"""Assembly of the generated module and its single rendering pass."""

from __future__ import annotations

import ast
from dataclasses import dataclass

from rest_filter_codegen.endpoint_modeling import EndpointCatalog
from rest_filter_codegen.filter_registry import FilterTypeRegistry
from rest_filter_codegen.schema_extraction import MethodKind

from .endpoint_handlers import (
    HANDLERS_ALIAS,
    QUERY_ALIAS,
    build_get_handler,
    build_list_handler,
    build_row_translator,
)
from .filter_builders import EMPTY_ALIAS, SCHEMA_ALIAS, WRAPPERS_ALIAS, build_filter_builder

BANNER = "# Code generated by rest-filter-codegen. DO NOT EDIT."
MODULE_DOCSTRING = "Filter construction routines and endpoint handlers."

_RUNTIME_SUPPORT = '''
class RequestValidationError(ValueError):
    """Raised when a request supplies no member of a required parameter group."""

    def __init__(self, group, members):
        super().__init__(f"one of {', '.join(members)} is required ({group})")
        self.group = group
        self.members = tuple(members)


@dataclasses.dataclass(frozen=True)
class NotFound:
    """Result of a Get handler whose lookup matched no row."""

    resource: str


def _split_list(value, convert):
    return [convert(item.strip()) for item in value.split(",") if item.strip()]
'''


class SynthesisError(Exception):
    """Raised when the generated module cannot be assembled."""


@dataclass(frozen=True)
class SynthesisOptions:
    """Import paths the generated module binds, plus handler defaults."""

    schema_module: str
    query_module: str
    handlers_module: str
    default_page_size: int = 100


def synthesize_module(
    catalog: EndpointCatalog,
    *,
    registry: FilterTypeRegistry,
    options: SynthesisOptions,
) -> ast.Module:
    """Build the syntax tree of the generated module.

    Filter routines are ordered by family name, translators by item type and handlers by
    endpoint order, which itself follows the sorted REST paths.
    """
    body: list[ast.stmt] = [ast.Expr(value=ast.Constant(MODULE_DOCSTRING))]
    body.extend(_imports(options))
    body.extend(ast.parse(_RUNTIME_SUPPORT).body)
    body.extend(build_filter_builder(descriptor, registry) for descriptor in catalog.filter_types)
    for item_type, properties in sorted(catalog.item_properties.items()):
        body.append(build_row_translator(item_type, properties))
    for endpoint in catalog.endpoints:
        if endpoint.kind is MethodKind.LIST:
            body.append(
                build_list_handler(endpoint, default_page_size=options.default_page_size)
            )
        else:
            body.append(build_get_handler(endpoint))
    return ast.fix_missing_locations(ast.Module(body=body, type_ignores=[]))


def render_module(module: ast.Module) -> str:
    """Render ``module`` as source text headed by the generated-code banner."""
    try:
        source = ast.unparse(module)
    except (AttributeError, TypeError, ValueError) as exc:
        raise SynthesisError(f"Failed to render generated module: {exc}") from exc
    return f"{BANNER}\n{source}\n"


def generate_source(
    catalog: EndpointCatalog,
    *,
    registry: FilterTypeRegistry,
    options: SynthesisOptions,
) -> str:
    """Synthesize and render the module for ``catalog``."""
    return render_module(synthesize_module(catalog, registry=registry, options=options))


def _imports(options: SynthesisOptions) -> list[ast.stmt]:
    return [
        ast.ImportFrom(module="__future__", names=[ast.alias(name="annotations")], level=0),
        ast.Import(names=[ast.alias(name="dataclasses")]),
        ast.ImportFrom(
            module="google.protobuf",
            names=[ast.alias(name=EMPTY_ALIAS), ast.alias(name=WRAPPERS_ALIAS)],
            level=0,
        ),
        ast.Import(names=[ast.alias(name=options.schema_module, asname=SCHEMA_ALIAS)]),
        ast.Import(names=[ast.alias(name=options.query_module, asname=QUERY_ALIAS)]),
        ast.Import(names=[ast.alias(name=options.handlers_module, asname=HANDLERS_ALIAS)]),
    ]
