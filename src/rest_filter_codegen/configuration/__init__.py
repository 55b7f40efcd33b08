"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration
from .runtime_settings import (
    DEFAULT_BASE_PATH,
    DEFAULT_PAGE_SIZE,
    ApiSettings,
    Configuration,
    GenerationSettings,
)

__all__ = [
    "ApiSettings",
    "Configuration",
    "GenerationSettings",
    "ConfigurationError",
    "load_configuration",
    "DEFAULT_BASE_PATH",
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_PAGE_SIZE",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
