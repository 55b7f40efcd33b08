"""Schema extraction exports."""

from .descriptor_reader import (
    SchemaExtractionError,
    build_schema_model,
    discover_descriptor_files,
    is_request_message,
    load_schema_model,
    read_descriptor_set,
    resource_from_message_name,
)
from .field_annotations import ANNOTATION_PACKAGE, EXTENSION_NUMBERS, AnnotationSchema
from .proto_comments import ProtoSourceNotes, extract_field_description, read_proto_sources
from .schema_models import (
    FieldAnnotations,
    MethodKind,
    SchemaField,
    SchemaMessage,
    SchemaMethod,
    SchemaModel,
    SchemaService,
    resource_key,
)
from .wrapper_types import WRAPPER_KINDS, WRAPPER_REST_TYPES, rest_type_for, wrapper_kind_of

__all__ = [
    "ANNOTATION_PACKAGE",
    "EXTENSION_NUMBERS",
    "WRAPPER_KINDS",
    "WRAPPER_REST_TYPES",
    "AnnotationSchema",
    "FieldAnnotations",
    "MethodKind",
    "ProtoSourceNotes",
    "SchemaExtractionError",
    "SchemaField",
    "SchemaMessage",
    "SchemaMethod",
    "SchemaModel",
    "SchemaService",
    "build_schema_model",
    "discover_descriptor_files",
    "extract_field_description",
    "is_request_message",
    "load_schema_model",
    "read_descriptor_set",
    "read_proto_sources",
    "resource_from_message_name",
    "resource_key",
    "rest_type_for",
    "wrapper_kind_of",
]
