"""Document normalization exports."""

from .normalization_pipeline import (
    ANNOTATION_EXTENSIONS,
    NormalizationResult,
    NormalizationStats,
    add_annotation_extensions,
    fix_schema_names,
    fix_wrapper_types,
    flatten_filter_parameters,
    normalize_document,
    operation_id_to_message_name,
    service_name_from_operation_id,
)

__all__ = [
    "ANNOTATION_EXTENSIONS",
    "NormalizationResult",
    "NormalizationStats",
    "add_annotation_extensions",
    "fix_schema_names",
    "fix_wrapper_types",
    "flatten_filter_parameters",
    "normalize_document",
    "operation_id_to_message_name",
    "service_name_from_operation_id",
]
