"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rest_filter_codegen.configuration import Configuration
from rest_filter_codegen.document_normalization import NormalizationStats
from rest_filter_codegen.endpoint_modeling import RestDocument
from rest_filter_codegen.schema_extraction import SchemaModel


@dataclass(frozen=True)
class GenerationRequest:
    """Input contract for one generation run."""

    openapi_path: str
    proto_path: str
    output_path: str
    config_path: str | None = None
    base_path: str | None = None


@dataclass(frozen=True)
class GenerationOutcome:
    """Output contract for one completed generation run."""

    output_path: Path
    line_count: int
    endpoint_count: int
    filter_type_count: int
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class GenerationArtifacts:
    """Loaded inputs required during a generation run."""

    configuration: Configuration
    document: RestDocument
    schema_model: SchemaModel
    base_path: str


@dataclass(frozen=True)
class NormalizationRequest:
    """Input contract for one REST description normalization run."""

    input_path: str
    output_path: str
    proto_path: str | None = None


@dataclass(frozen=True)
class NormalizationOutcome:
    """Output contract for one completed normalization run."""

    output_path: Path
    stats: NormalizationStats
