"""Merges the REST description with the schema model into endpoint records."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from types import MappingProxyType
from typing import Any

from rest_filter_codegen.filter_registry import FilterTypeRegistry
from rest_filter_codegen.naming import to_capitalized, to_delimited
from rest_filter_codegen.parameter_flattening import (
    OperatorVocabulary,
    Param,
    flatten_parameter_name,
    parse_parameter_name,
)
from rest_filter_codegen.schema_extraction import (
    MethodKind,
    SchemaMessage,
    SchemaModel,
    rest_type_for,
)

from .endpoint_models import Endpoint, EndpointCatalog, FilterBinding, RequiredGroup
from .rest_document import RestDocument, RestOperation

logger = logging.getLogger(__name__)

DEFAULT_BASE_PATH = "/api/v1"
PAGINATION_PARAMETERS = ("page_size", "page_token", "order_by")
REQUIRED_GROUP_EXTENSION = "x-required-group"

_OPERATION_KIND_SEPARATOR = "_"
_VALUE_OPERATORS = ("eq", "ne", "lt", "lte", "gt", "gte")


def extract_table_name(path: str, base_path: str = DEFAULT_BASE_PATH) -> str:
    """``/api/v1/fct_block/{slot}`` -> ``fct_block``."""
    prefix = base_path.rstrip("/")
    remainder = path[len(prefix) :] if prefix and path.startswith(prefix + "/") else path
    for segment in remainder.split("/"):
        if segment and not segment.startswith("{"):
            return segment
    return ""


def method_kind_from_operation_id(operation_id: str) -> MethodKind | None:
    """``FctBlockService_List`` -> ``MethodKind.LIST``."""
    _, separator, suffix = operation_id.rpartition(_OPERATION_KIND_SEPARATOR)
    if not separator:
        return None
    for kind in MethodKind:
        if suffix == kind.value:
            return kind
    return None


def handler_name_for(operation_id: str) -> str:
    return operation_id.replace(_OPERATION_KIND_SEPARATOR, "")


def list_response_type_for(table: str) -> str:
    return f"List{to_capitalized(table)}Response"


def build_endpoints(
    document: RestDocument,
    schema_model: SchemaModel,
    *,
    registry: FilterTypeRegistry,
    vocabulary: OperatorVocabulary,
    base_path: str = DEFAULT_BASE_PATH,
) -> EndpointCatalog:
    """Build one endpoint record per List or Get operation of ``document``.

    Operations are visited in sorted path order. Conditions that only drop a parameter or an
    operation are reported as warnings on the returned catalog.
    """
    builder = _EndpointBuilder(
        document=document,
        schema_model=schema_model,
        registry=registry,
        vocabulary=vocabulary,
        base_path=base_path,
    )
    endpoints = []
    for operation in document.operations():
        endpoint = builder.build(operation)
        if endpoint is not None:
            endpoints.append(endpoint)

    item_properties = {
        endpoint.item_type: document.schema_properties(endpoint.item_type)
        for endpoint in endpoints
    }
    return EndpointCatalog(
        endpoints=tuple(endpoints),
        item_properties=MappingProxyType(dict(sorted(item_properties.items()))),
        warnings=tuple(builder.warnings),
    )


class _EndpointBuilder:  # pylint: disable=too-few-public-methods
    def __init__(
        self,
        *,
        document: RestDocument,
        schema_model: SchemaModel,
        registry: FilterTypeRegistry,
        vocabulary: OperatorVocabulary,
        base_path: str,
    ) -> None:
        self._document = document
        self._schema_model = schema_model
        self._registry = registry
        self._vocabulary = vocabulary
        self._base_path = base_path
        self.warnings: list[str] = []

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)

    def build(self, operation: RestOperation) -> Endpoint | None:
        operation_id = operation.operation_id
        kind = method_kind_from_operation_id(operation_id)
        if kind is None:
            self._warn(
                f"{operation.method} {operation.path}: operation {operation_id or '<unnamed>'} "
                "is neither List nor Get; skipped"
            )
            return None

        table = extract_table_name(operation.path, self._base_path)
        schema_method = self._schema_model.method_for(table, kind)
        if schema_method is None:
            self._warn(f"{operation_id}: no {kind.value} method for {table} in the schema")
            request_type = f"{kind.value}{to_capitalized(table)}Request"
            query_builder = f"build_{kind.value.lower()}_{table}_query"
            request_message = None
        else:
            request_type = schema_method.request_type
            query_builder = schema_method.query_builder_name
            request_message = self._schema_model.request_message(schema_method)

        params: list[Param] = []
        path_params: list[Param] = []
        for definition in self._document.parameters(operation):
            param = self._param(definition)
            if param.location == "path":
                path_params.append(param)
            elif param.location == "query":
                params.append(param)
        if len(path_params) > 1:
            self._warn(
                f"{operation_id}: {len(path_params)} path parameters declared; "
                f"using {path_params[0].name} as the key"
            )
        path_param = path_params[0] if path_params else None

        handler_name = handler_name_for(operation_id)
        item_type = to_capitalized(table)
        endpoint = Endpoint(
            path=operation.path,
            method=operation.method,
            operation_id=operation_id,
            kind=kind,
            table=table,
            handler_name=handler_name,
            params_type=f"{handler_name}Params",
            response_type=list_response_type_for(table) if kind is MethodKind.LIST else item_type,
            item_type=item_type,
            request_type=request_type,
            query_builder=query_builder,
            params=tuple(params),
            path_param=path_param,
            required_groups=_required_groups(params),
        )
        if kind is MethodKind.LIST:
            return self._with_list_bindings(endpoint, request_message)
        return self._with_key_field(endpoint, request_message)

    def _param(self, definition: Mapping[str, Any]) -> Param:
        raw_name = str(definition.get("name") or "")
        name = flatten_parameter_name(raw_name).name if "." in raw_name else raw_name
        parsed = parse_parameter_name(name, self._vocabulary)
        schema = definition.get("schema")
        schema = schema if isinstance(schema, Mapping) else {}
        scalar_type = str(schema.get("type") or "")
        scalar_format = str(schema.get("format") or "")

        wrapper_kind = self._schema_model.wrapper_kinds.get(parsed.field)
        rest_type = rest_type_for(wrapper_kind) if wrapper_kind else None
        if rest_type and parsed.operator in ("",) + _VALUE_OPERATORS:
            scalar_type, scalar_format = rest_type

        group = definition.get(REQUIRED_GROUP_EXTENSION)
        return Param(
            name=name,
            field=parsed.field,
            operator=parsed.operator,
            raw_name=raw_name,
            location=str(definition.get("in") or "query"),
            scalar_type=scalar_type,
            format=scalar_format,
            description=str(definition.get("description") or ""),
            required=bool(definition.get("required", False)),
            required_group=group if isinstance(group, str) and group else None,
        )

    def _with_list_bindings(
        self, endpoint: Endpoint, request_message: SchemaMessage | None
    ) -> Endpoint:
        arguments_by_field: dict[str, dict[str, str]] = {}
        forwarded: list[Param] = []
        for param in endpoint.params:
            if param.name in PAGINATION_PARAMETERS:
                forwarded.append(param)
            elif param.is_filter:
                self._bind_filter_param(endpoint, param, request_message, arguments_by_field)
            elif request_message is not None and request_message.has_field(param.name):
                forwarded.append(param)
            else:
                self._warn(
                    f"{endpoint.operation_id}: parameter {param.name} has no field on "
                    f"{endpoint.request_type}; not forwarded"
                )

        filters = []
        for field_name in sorted(arguments_by_field):
            schema_field = request_message.field(field_name) if request_message else None
            if schema_field is None or not schema_field.filter_type:
                continue
            descriptor = self._registry.get(schema_field.filter_type)
            if descriptor is None:
                continue
            supplied = arguments_by_field[field_name]
            filters.append(
                FilterBinding(
                    field=field_name,
                    descriptor=descriptor,
                    arguments=tuple(
                        (operator, supplied[operator])
                        for operator in self._registry.operators_for(descriptor)
                        if operator in supplied
                    ),
                )
            )
        return replace(endpoint, filters=tuple(filters), forwarded=tuple(forwarded))

    def _bind_filter_param(
        self,
        endpoint: Endpoint,
        param: Param,
        request_message: SchemaMessage | None,
        arguments_by_field: dict[str, dict[str, str]],
    ) -> None:
        schema_field = request_message.field(param.field) if request_message else None
        if schema_field is None or not schema_field.filter_type:
            self._warn(
                f"{endpoint.operation_id}: parameter {param.name} has no filter field "
                f"{param.field} on {endpoint.request_type}; skipped"
            )
            return
        descriptor = self._registry.get(schema_field.filter_type)
        operator = self._vocabulary.canonical(param.operator)
        if descriptor is None or operator not in self._registry.operators_for(descriptor):
            self._warn(
                f"{endpoint.operation_id}: operator {param.operator} is not supported by "
                f"{schema_field.filter_type}; parameter {param.name} skipped"
            )
            return
        supplied = arguments_by_field.setdefault(param.field, {})
        if operator in supplied:
            self._warn(
                f"{endpoint.operation_id}: parameter {param.name} repeats operator {operator} "
                f"already supplied by {supplied[operator]}; skipped"
            )
            return
        supplied[operator] = param.name

    def _with_key_field(
        self, endpoint: Endpoint, request_message: SchemaMessage | None
    ) -> Endpoint:
        if endpoint.path_param is None:
            self._warn(f"{endpoint.operation_id}: Get operation declares no path parameter")
            return endpoint
        key_field = to_delimited(endpoint.path_param.name, split_digits=False)
        if request_message is not None and not request_message.has_field(key_field):
            self._warn(
                f"{endpoint.operation_id}: key {key_field} is not a field of "
                f"{endpoint.request_type}"
            )
        return replace(endpoint, key_field=key_field)


def _required_groups(params: list[Param]) -> tuple[RequiredGroup, ...]:
    members: dict[str, list[str]] = {}
    for param in params:
        if param.required_group:
            members.setdefault(param.required_group, []).append(param.name)
    return tuple(
        RequiredGroup(name=name, members=tuple(members[name])) for name in sorted(members)
    )
