"""Generation and normalization use-case services."""

from __future__ import annotations

import logging

import yaml

from rest_filter_codegen.code_synthesis import SynthesisError, SynthesisOptions, generate_source
from rest_filter_codegen.configuration import ConfigurationError, load_configuration
from rest_filter_codegen.document_normalization import normalize_document
from rest_filter_codegen.endpoint_modeling import (
    RestDescriptionError,
    build_endpoints,
    load_rest_document,
)
from rest_filter_codegen.filter_registry import FilterTypeRegistry
from rest_filter_codegen.parameter_flattening import OperatorVocabulary
from rest_filter_codegen.schema_extraction import (
    SchemaExtractionError,
    SchemaModel,
    load_schema_model,
)

from .atomic_output import write_text_atomically
from .run_contracts import (
    GenerationArtifacts,
    GenerationOutcome,
    GenerationRequest,
    NormalizationOutcome,
    NormalizationRequest,
)

logger = logging.getLogger(__name__)


class GenerationRunError(Exception):
    """Raised when a generation or normalization run cannot be completed."""


def execute_generation_run(
    request: GenerationRequest,
    *,
    registry: FilterTypeRegistry | None = None,
    vocabulary: OperatorVocabulary | None = None,
) -> GenerationOutcome:
    """Generate the handler module for one REST description and compiled schema.

    Nothing is written unless every input was read and the whole module was rendered.
    """
    resolved_registry = registry or FilterTypeRegistry.standard()
    resolved_vocabulary = vocabulary or OperatorVocabulary.standard()

    artifacts = _load_generation_artifacts(request, resolved_registry)
    try:
        catalog = build_endpoints(
            artifacts.document,
            artifacts.schema_model,
            registry=resolved_registry,
            vocabulary=resolved_vocabulary,
            base_path=artifacts.base_path,
        )
    except RestDescriptionError as exc:
        raise GenerationRunError(str(exc)) from exc
    generation = artifacts.configuration.generation
    options = SynthesisOptions(
        schema_module=generation.schema_module,
        query_module=generation.query_module,
        handlers_module=generation.handlers_module,
        default_page_size=generation.default_page_size,
    )
    try:
        source = generate_source(catalog, registry=resolved_registry, options=options)
        output_path = write_text_atomically(request.output_path, source)
    except (SynthesisError, OSError) as exc:
        raise GenerationRunError(str(exc)) from exc

    logger.info("Generated %d endpoints into %s", len(catalog.endpoints), output_path)
    return GenerationOutcome(
        output_path=output_path,
        line_count=len(source.splitlines()),
        endpoint_count=len(catalog.endpoints),
        filter_type_count=len(catalog.filter_types),
        warnings=artifacts.schema_model.warnings + catalog.warnings,
    )


def execute_normalization_run(
    request: NormalizationRequest,
    *,
    registry: FilterTypeRegistry | None = None,
    vocabulary: OperatorVocabulary | None = None,
) -> NormalizationOutcome:
    """Normalize a REST description and write the result as YAML."""
    resolved_registry = registry or FilterTypeRegistry.standard()
    resolved_vocabulary = vocabulary or OperatorVocabulary.standard()
    try:
        document = load_rest_document(request.input_path)
        schema_model = (
            load_schema_model(request.proto_path, registry=resolved_registry)
            if request.proto_path
            else SchemaModel()
        )
    except (RestDescriptionError, SchemaExtractionError) as exc:
        raise GenerationRunError(str(exc)) from exc

    result = normalize_document(document.root, schema_model, vocabulary=resolved_vocabulary)
    try:
        text = yaml.safe_dump(result.document, sort_keys=False, allow_unicode=True)
        output_path = write_text_atomically(request.output_path, text)
    except (yaml.YAMLError, OSError) as exc:
        raise GenerationRunError(str(exc)) from exc
    return NormalizationOutcome(output_path=output_path, stats=result.stats)


def _load_generation_artifacts(
    request: GenerationRequest, registry: FilterTypeRegistry
) -> GenerationArtifacts:
    try:
        configuration = load_configuration(request.config_path)
        document = load_rest_document(request.openapi_path)
        schema_model = load_schema_model(request.proto_path, registry=registry)
    except (ConfigurationError, RestDescriptionError, SchemaExtractionError) as exc:
        raise GenerationRunError(str(exc)) from exc
    return GenerationArtifacts(
        configuration=configuration,
        document=document,
        schema_model=schema_model,
        base_path=request.base_path or configuration.api.base_path,
    )
