"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_BASE_PATH = "/api/v1"
DEFAULT_PAGE_SIZE = 100
DEFAULT_SCHEMA_MODULE = "clickhouse_pb2"
DEFAULT_QUERY_MODULE = "queries"
DEFAULT_HANDLERS_MODULE = "handlers"


@dataclass(frozen=True)
class ApiSettings:
    """REST surface settings."""

    base_path: str = DEFAULT_BASE_PATH


@dataclass(frozen=True)
class GenerationSettings:
    """Import paths bound by the generated module and handler defaults."""

    schema_module: str = DEFAULT_SCHEMA_MODULE
    query_module: str = DEFAULT_QUERY_MODULE
    handlers_module: str = DEFAULT_HANDLERS_MODULE
    default_page_size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None = None
    api: ApiSettings = field(default_factory=ApiSettings)
    generation: GenerationSettings = field(default_factory=GenerationSettings)
