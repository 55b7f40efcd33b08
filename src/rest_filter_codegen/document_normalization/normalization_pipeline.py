"""Document-level normalization of a REST description before generation.

Steps run in a fixed order: dot-notation filter parameters are flattened, component schema
names get digit-boundary capitalization (with every ``$ref`` updated), wrapper-typed
properties get their REST type and format, and field annotations are copied onto the
parameters they describe.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

from rest_filter_codegen.endpoint_modeling import HTTP_METHODS, SCHEMA_REF_PREFIX
from rest_filter_codegen.naming import fix_capitalization
from rest_filter_codegen.parameter_flattening import (
    OperatorVocabulary,
    flatten_parameter,
    parse_parameter_name,
)
from rest_filter_codegen.schema_extraction import SchemaMessage, SchemaModel, rest_type_for

logger = logging.getLogger(__name__)

ANNOTATION_EXTENSIONS = (
    ("required_group", "x-required-group"),
    ("projection_name", "x-projection-name"),
    ("projection_alternative_for", "x-projection-alternative-for"),
)
_SERVICE_SUFFIX = "Service"


@dataclass(frozen=True)
class NormalizationStats:
    """Counts of the changes applied by one normalization run."""

    parameters_flattened: int = 0
    schemas_renamed: int = 0
    types_fixed: int = 0
    annotations_added: int = 0


@dataclass(frozen=True)
class NormalizationResult:
    document: dict[str, Any]
    stats: NormalizationStats


def normalize_document(
    root: Mapping[str, Any],
    schema_model: SchemaModel,
    *,
    vocabulary: OperatorVocabulary,
) -> NormalizationResult:
    """Return a normalized copy of ``root``; the input is left untouched."""
    document = copy.deepcopy(dict(root))
    flattened = flatten_filter_parameters(document, schema_model, vocabulary=vocabulary)
    renamed = fix_schema_names(document)
    fixed = fix_wrapper_types(document, schema_model)
    annotated = add_annotation_extensions(document, schema_model, vocabulary=vocabulary)
    stats = NormalizationStats(
        parameters_flattened=flattened,
        schemas_renamed=renamed,
        types_fixed=fixed,
        annotations_added=annotated,
    )
    logger.debug("Normalization stats: %s", stats)
    return NormalizationResult(document=document, stats=stats)


def flatten_filter_parameters(
    document: MutableMapping[str, Any],
    schema_model: SchemaModel,
    *,
    vocabulary: OperatorVocabulary,
) -> int:
    """Rewrite dot-notation parameters in place; returns how many were rewritten."""
    converted = 0
    for _, operation in _operations(document):
        parameters = operation.get("parameters")
        if not isinstance(parameters, list):
            continue
        service = service_name_from_operation_id(str(operation.get("operationId") or ""))
        descriptions = schema_model.field_descriptions.get(service.lower(), {})
        for index, parameter in enumerate(parameters):
            if not isinstance(parameter, Mapping) or "." not in str(parameter.get("name", "")):
                continue
            parameters[index] = flatten_parameter(
                parameter, vocabulary=vocabulary, field_descriptions=descriptions
            )
            converted += 1
    return converted


def fix_schema_names(document: MutableMapping[str, Any]) -> int:
    """Capitalize letters after digits in component schema names and update references."""
    schemas = _component_schemas(document)
    if not schemas:
        return 0
    renamed = {name: fix_capitalization(name) for name in schemas}
    renamed = {old: new for old, new in renamed.items() if old != new}
    if not renamed:
        return 0
    document["components"]["schemas"] = {
        renamed.get(name, name): schema for name, schema in schemas.items()
    }
    references = {
        f"{SCHEMA_REF_PREFIX}{old}": f"{SCHEMA_REF_PREFIX}{new}" for old, new in renamed.items()
    }
    _rewrite_references(document, references)
    return len(renamed)


def fix_wrapper_types(document: MutableMapping[str, Any], schema_model: SchemaModel) -> int:
    """Set the REST type and format of properties backed by wrapper-kind schema fields."""
    fixed = 0
    for schema in _component_schemas(document).values():
        properties = schema.get("properties") if isinstance(schema, Mapping) else None
        if not isinstance(properties, MutableMapping):
            continue
        for property_name, property_schema in properties.items():
            wrapper_kind = schema_model.wrapper_kinds.get(property_name)
            rest_type = rest_type_for(wrapper_kind) if wrapper_kind else None
            if rest_type is None or not isinstance(property_schema, MutableMapping):
                continue
            if _apply_rest_type(property_schema, *rest_type):
                fixed += 1
    return fixed


def add_annotation_extensions(
    document: MutableMapping[str, Any],
    schema_model: SchemaModel,
    *,
    vocabulary: OperatorVocabulary,
) -> int:
    """Copy schema field annotations onto matching parameters as ``x-`` extensions."""
    messages = {name.lower(): message for name, message in schema_model.messages.items()}
    added = 0
    for method, operation in _operations(document):
        if method not in ("get", "post"):
            continue
        message_name = operation_id_to_message_name(str(operation.get("operationId") or ""))
        message = messages.get(message_name.lower())
        parameters = operation.get("parameters")
        if message is None or not isinstance(parameters, list):
            continue
        for parameter in parameters:
            if isinstance(parameter, MutableMapping):
                added += _annotate_parameter(parameter, message, vocabulary)
    return added


def service_name_from_operation_id(operation_id: str) -> str:
    """``FctAttestationService_List`` -> ``FctAttestationService``."""
    return operation_id.split("_", 1)[0]


def operation_id_to_message_name(operation_id: str) -> str:
    """``FctBlockMevService_List`` -> ``ListFctBlockMevRequest``; empty when not derivable."""
    parts = operation_id.split("_")
    if len(parts) < 2:
        return ""
    service = parts[0]
    if service.endswith(_SERVICE_SUFFIX):
        service = service[: -len(_SERVICE_SUFFIX)]
    return f"{parts[1]}{service}Request"


def _annotate_parameter(
    parameter: MutableMapping[str, Any], message: SchemaMessage, vocabulary: OperatorVocabulary
) -> int:
    field_name = parse_parameter_name(str(parameter.get("name") or ""), vocabulary).field
    schema_field = next(
        (field for field in message.fields if field.name.lower() == field_name.lower()), None
    )
    if schema_field is None or not schema_field.annotations:
        return 0
    added = 0
    for attribute, extension in ANNOTATION_EXTENSIONS:
        value = getattr(schema_field.annotations, attribute)
        if value:
            parameter[extension] = value
            added += 1
    return added


def _apply_rest_type(schema: MutableMapping[str, Any], rest_type: str, rest_format: str) -> bool:
    if schema.get("type") == rest_type and (schema.get("format") or "") == rest_format:
        return False
    schema["type"] = rest_type
    if rest_format:
        schema["format"] = rest_format
    else:
        schema.pop("format", None)
    return True


def _operations(document: Mapping[str, Any]) -> list[tuple[str, MutableMapping[str, Any]]]:
    paths = document.get("paths")
    if not isinstance(paths, Mapping):
        return []
    operations = []
    for path in sorted(paths):
        item = paths[path]
        if not isinstance(item, Mapping):
            continue
        for method in HTTP_METHODS:
            operation = item.get(method)
            if isinstance(operation, MutableMapping):
                operations.append((method, operation))
    return operations


def _component_schemas(document: Mapping[str, Any]) -> dict[str, Any]:
    components = document.get("components")
    if not isinstance(components, Mapping):
        return {}
    schemas = components.get("schemas")
    return schemas if isinstance(schemas, dict) else {}


def _rewrite_references(node: Any, references: Mapping[str, str]) -> None:
    if isinstance(node, MutableMapping):
        ref = node.get("$ref")
        if isinstance(ref, str) and ref in references:
            node["$ref"] = references[ref]
        for value in node.values():
            _rewrite_references(value, references)
    elif isinstance(node, list):
        for value in node:
            _rewrite_references(value, references)
