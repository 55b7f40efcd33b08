"""Code synthesis exports."""

from .endpoint_handlers import (
    build_get_handler,
    build_list_handler,
    build_row_translator,
    translator_name_for,
)
from .filter_builders import build_filter_builder
from .module_rendering import (
    BANNER,
    SynthesisError,
    SynthesisOptions,
    generate_source,
    render_module,
    synthesize_module,
)

__all__ = [
    "BANNER",
    "SynthesisError",
    "SynthesisOptions",
    "build_filter_builder",
    "build_get_handler",
    "build_list_handler",
    "build_row_translator",
    "generate_source",
    "render_module",
    "synthesize_module",
    "translator_name_for",
]
