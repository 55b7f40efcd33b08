"""Endpoint model builder tests."""

from __future__ import annotations

from typing import Any

import pytest
from rest_filter_codegen.endpoint_modeling import (
    EndpointCatalog,
    RequiredGroup,
    build_endpoints,
    extract_table_name,
    handler_name_for,
    list_response_type_for,
    method_kind_from_operation_id,
    parse_rest_document,
)
from rest_filter_codegen.filter_registry import FilterTypeRegistry
from rest_filter_codegen.parameter_flattening import OperatorVocabulary
from rest_filter_codegen.schema_extraction import (
    MethodKind,
    SchemaField,
    SchemaMessage,
    SchemaMethod,
    SchemaModel,
    SchemaService,
)

REGISTRY = FilterTypeRegistry.standard()
VOCABULARY = OperatorVocabulary.standard()


def _query(name: str, schema_type: str = "string", **extra: Any) -> dict[str, Any]:
    return {"name": name, "in": "query", "schema": {"type": schema_type}, **extra}


def _schema_model() -> SchemaModel:
    list_request = SchemaMessage(
        name="ListFctBlockRequest",
        fields=(
            SchemaField(name="slot", type_name="UInt32Filter", filter_type="UInt32Filter"),
            SchemaField(name="block_root", type_name="StringFilter", filter_type="StringFilter"),
            SchemaField(name="include_orphaned", type_name=""),
            SchemaField(name="page_size"),
        ),
    )
    get_request = SchemaMessage(name="GetFctBlockRequest", fields=(SchemaField(name="slot"),))
    service = SchemaService(
        name="FctBlockService",
        methods=(
            SchemaMethod(
                name="List",
                kind=MethodKind.LIST,
                request_type="ListFctBlockRequest",
                response_type="ListFctBlockResponse",
                resource="FctBlock",
            ),
            SchemaMethod(
                name="Get",
                kind=MethodKind.GET,
                request_type="GetFctBlockRequest",
                response_type="GetFctBlockResponse",
                resource="FctBlock",
            ),
        ),
    )
    return SchemaModel(
        services=(service,),
        messages={message.name: message for message in (list_request, get_request)},
        wrapper_kinds={"proposer_index": "UInt64Value"},
    )


def _document() -> dict[str, Any]:
    return {
        "paths": {
            "/api/v1/fct_block": {
                "get": {
                    "operationId": "FctBlockService_List",
                    "parameters": [
                        _query("slot_eq", "integer", **{"x-required-group": "slot_or_root"}),
                        _query("slot_gte", "integer"),
                        _query("slot_lte", "integer"),
                        _query("slot_in_values"),
                        _query("slot_in"),
                        _query("slot_contains"),
                        _query(
                            "block_root_starts_with", **{"x-required-group": "slot_or_root"}
                        ),
                        _query("block_root_between"),
                        _query("proposer_index_eq"),
                        _query("include_orphaned", "boolean"),
                        _query("unknown_param"),
                        _query("page_size", "integer"),
                        _query("page_token"),
                        _query("order_by"),
                    ],
                },
                "post": {"operationId": "FctBlockService_Create"},
            },
            "/api/v1/fct_block/{slot}": {
                "get": {
                    "operationId": "FctBlockService_Get",
                    "parameters": [
                        {"name": "slot", "in": "path", "schema": {"type": "integer"}}
                    ],
                }
            },
        },
        "components": {
            "schemas": {"FctBlock": {"properties": {"slot": {}, "block_root": {}}}},
        },
    }


def _catalog() -> EndpointCatalog:
    return build_endpoints(
        parse_rest_document(_document()),
        _schema_model(),
        registry=REGISTRY,
        vocabulary=VOCABULARY,
    )


def test_list_endpoint_binds_filters_in_field_and_operator_order() -> None:
    catalog = _catalog()

    assert [endpoint.operation_id for endpoint in catalog.endpoints] == [
        "FctBlockService_List",
        "FctBlockService_Get",
    ]
    endpoint = catalog.endpoints[0]
    assert endpoint.kind is MethodKind.LIST
    assert endpoint.table == "fct_block"
    assert endpoint.handler_name == "FctBlockServiceList"
    assert endpoint.function_name == "fct_block_service_list"
    assert endpoint.params_type == "FctBlockServiceListParams"
    assert endpoint.response_type == "ListFctBlockResponse"
    assert endpoint.item_type == "FctBlock"
    assert endpoint.request_type == "ListFctBlockRequest"
    assert endpoint.query_builder == "build_list_fct_block_query"

    assert [(binding.field, binding.descriptor.name) for binding in endpoint.filters] == [
        ("block_root", "StringFilter"),
        ("slot", "UInt32Filter"),
    ]
    assert endpoint.filters[0].arguments == (("starts_with", "block_root_starts_with"),)
    assert endpoint.filters[1].arguments == (
        ("eq", "slot_eq"),
        ("lte", "slot_lte"),
        ("gte", "slot_gte"),
        ("in_values", "slot_in_values"),
    )


def test_list_endpoint_forwards_pagination_and_declared_fields() -> None:
    endpoint = _catalog().endpoints[0]

    assert [param.name for param in endpoint.forwarded] == [
        "include_orphaned",
        "page_size",
        "page_token",
        "order_by",
    ]
    assert endpoint.required_groups == (
        RequiredGroup(name="slot_or_root", members=("slot_eq", "block_root_starts_with")),
    )


def test_builder_warns_about_dropped_parameters_and_operations() -> None:
    warnings = _catalog().warnings

    expected_fragments = (
        "FctBlockService_Create is neither List nor Get",
        "operator contains is not supported by UInt32Filter",
        "operator between is not supported by StringFilter",
        "parameter slot_in repeats operator in_values",
        "parameter proposer_index_eq has no filter field proposer_index",
        "parameter unknown_param has no field on ListFctBlockRequest",
    )
    for fragment in expected_fragments:
        assert any(fragment in warning for warning in warnings), fragment
    assert len(warnings) == len(expected_fragments)


def test_get_endpoint_uses_path_parameter_as_key() -> None:
    endpoint = _catalog().endpoints[1]

    assert endpoint.kind is MethodKind.GET
    assert endpoint.path_param is not None
    assert endpoint.path_param.python_type == "int"
    assert endpoint.key_field == "slot"
    assert endpoint.response_type == "FctBlock"
    assert endpoint.query_builder == "build_get_fct_block_query"
    assert endpoint.filters == ()


def test_catalog_lists_item_properties_and_filter_types() -> None:
    catalog = _catalog()

    assert dict(catalog.item_properties) == {"FctBlock": ("block_root", "slot")}
    assert [descriptor.name for descriptor in catalog.filter_types] == [
        "StringFilter",
        "UInt32Filter",
    ]


def test_missing_schema_method_falls_back_to_conventional_names() -> None:
    document = parse_rest_document(
        {
            "paths": {
                "/api/v1/fct_attestation": {
                    "get": {
                        "operationId": "FctAttestationService_List",
                        "parameters": [_query("slot_eq", "integer")],
                    }
                }
            }
        }
    )

    catalog = build_endpoints(document, SchemaModel(), registry=REGISTRY, vocabulary=VOCABULARY)

    endpoint = catalog.endpoints[0]
    assert endpoint.request_type == "ListFctAttestationRequest"
    assert endpoint.query_builder == "build_list_fct_attestation_query"
    assert endpoint.filters == ()
    assert dict(catalog.item_properties) == {"FctAttestation": None}
    assert any("no List method for fct_attestation" in warning for warning in catalog.warnings)


def test_wrapper_kind_corrects_value_parameter_types() -> None:
    document = parse_rest_document(
        {
            "paths": {
                "/api/v1/fct_block": {
                    "get": {
                        "operationId": "FctBlockService_List",
                        "parameters": [
                            _query("proposer_index"),
                            _query("proposer_index_in_values"),
                        ],
                    }
                }
            }
        }
    )

    catalog = build_endpoints(
        document, _schema_model(), registry=REGISTRY, vocabulary=VOCABULARY
    )

    params = {param.name: param for param in catalog.endpoints[0].params}
    assert (params["proposer_index"].scalar_type, params["proposer_index"].format) == (
        "integer",
        "uint64",
    )
    assert params["proposer_index_in_values"].scalar_type == "string"


def test_dot_notation_parameters_are_flattened_before_parsing() -> None:
    document = parse_rest_document(
        {
            "paths": {
                "/api/v1/fct_block": {
                    "get": {
                        "operationId": "FctBlockService_List",
                        "parameters": [_query("blockRoot.startsWith")],
                    }
                }
            }
        }
    )

    catalog = build_endpoints(
        document, _schema_model(), registry=REGISTRY, vocabulary=VOCABULARY
    )

    binding = catalog.endpoints[0].filters[0]
    assert binding.field == "block_root"
    assert binding.arguments == (("starts_with", "block_root_starts_with"),)
    assert catalog.endpoints[0].params[0].raw_name == "blockRoot.startsWith"


@pytest.mark.parametrize(
    ("path", "base_path", "table"),
    [
        ("/api/v1/fct_block", "/api/v1", "fct_block"),
        ("/api/v1/fct_block/{slot}", "/api/v1/", "fct_block"),
        ("/v2/fct_attestation", "/v2", "fct_attestation"),
        ("/fct_block", "/api/v1", "fct_block"),
        ("/api/v1/{slot}", "/api/v1", ""),
    ],
)
def test_extract_table_name(path: str, base_path: str, table: str) -> None:
    assert extract_table_name(path, base_path) == table


def test_operation_id_helpers() -> None:
    assert method_kind_from_operation_id("FctBlockService_List") is MethodKind.LIST
    assert method_kind_from_operation_id("FctBlockService_Get") is MethodKind.GET
    assert method_kind_from_operation_id("FctBlockService_Create") is None
    assert method_kind_from_operation_id("List") is None
    assert handler_name_for("FctBlockService_Get") == "FctBlockServiceGet"
    assert list_response_type_for("fct_node_active_last_24h") == (
        "ListFctNodeActiveLast24HResponse"
    )


def test_required_group_needs_members() -> None:
    with pytest.raises(ValueError, match="at least one member"):
        RequiredGroup(name="empty", members=())
