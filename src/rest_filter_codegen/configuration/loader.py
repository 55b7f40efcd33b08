"""Configuration loader service."""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .config_scaffold_builder import DEFAULT_CONFIG_FILENAME
from .runtime_settings import (
    DEFAULT_BASE_PATH,
    DEFAULT_HANDLERS_MODULE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_QUERY_MODULE,
    DEFAULT_SCHEMA_MODULE,
    ApiSettings,
    Configuration,
    GenerationSettings,
)

_MODULE_PATH_PATTERN = re.compile(r"^[A-Za-z_]\w*(\.[A-Za-z_]\w*)*$")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str | None = None) -> Configuration:
    """Load and validate the configuration file.

    Without an explicit path the default file is read when present; otherwise built-in
    defaults apply. An explicitly named file must exist.
    """
    if config_path is None:
        path = Path(DEFAULT_CONFIG_FILENAME)
        if not path.exists():
            return Configuration()
    else:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Failed to read configuration file {path}: {exc}") from exc
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return Configuration(
        path=path,
        api=_parse_api_section(parsed.get("api")),
        generation=_parse_generation_section(parsed.get("generation")),
    )


def _parse_api_section(value: Any) -> ApiSettings:
    section = _optional_mapping(value, "api")
    base_path = _optional_string(section.get("base_path"), "api.base_path") or DEFAULT_BASE_PATH
    if not base_path.startswith("/"):
        raise ConfigurationError("api.base_path must start with '/'.")
    return ApiSettings(base_path=base_path)


def _parse_generation_section(value: Any) -> GenerationSettings:
    section = _optional_mapping(value, "generation")
    page_size = section.get("default_page_size", DEFAULT_PAGE_SIZE)
    return GenerationSettings(
        schema_module=_module_path(
            section.get("schema_module"), "generation.schema_module", DEFAULT_SCHEMA_MODULE
        ),
        query_module=_module_path(
            section.get("query_module"), "generation.query_module", DEFAULT_QUERY_MODULE
        ),
        handlers_module=_module_path(
            section.get("handlers_module"), "generation.handlers_module", DEFAULT_HANDLERS_MODULE
        ),
        default_page_size=_require_positive_int(page_size, "generation.default_page_size"),
    )


def _module_path(value: Any, field_name: str, default: str) -> str:
    module_path = _optional_string(value, field_name) or default
    if not _MODULE_PATH_PATTERN.match(module_path):
        raise ConfigurationError(f"{field_name} must be a dotted module path.")
    return module_path


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
