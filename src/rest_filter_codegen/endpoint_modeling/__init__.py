"""Endpoint modeling exports."""

from .endpoint_builder import (
    DEFAULT_BASE_PATH,
    PAGINATION_PARAMETERS,
    REQUIRED_GROUP_EXTENSION,
    build_endpoints,
    extract_table_name,
    handler_name_for,
    list_response_type_for,
    method_kind_from_operation_id,
)
from .endpoint_models import Endpoint, EndpointCatalog, FilterBinding, RequiredGroup
from .rest_document import (
    HTTP_METHODS,
    SCHEMA_REF_PREFIX,
    RestDescriptionError,
    RestDocument,
    RestOperation,
    load_rest_document,
    parse_rest_document,
)

__all__ = [
    "DEFAULT_BASE_PATH",
    "HTTP_METHODS",
    "PAGINATION_PARAMETERS",
    "REQUIRED_GROUP_EXTENSION",
    "SCHEMA_REF_PREFIX",
    "Endpoint",
    "EndpointCatalog",
    "FilterBinding",
    "RequiredGroup",
    "RestDescriptionError",
    "RestDocument",
    "RestOperation",
    "build_endpoints",
    "extract_table_name",
    "handler_name_for",
    "list_response_type_for",
    "load_rest_document",
    "method_kind_from_operation_id",
    "parse_rest_document",
]
