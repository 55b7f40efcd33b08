"""Run execution domain exports."""

from .atomic_output import write_text_atomically
from .generation_use_case import (
    GenerationRunError,
    execute_generation_run,
    execute_normalization_run,
)
from .run_contracts import (
    GenerationArtifacts,
    GenerationOutcome,
    GenerationRequest,
    NormalizationOutcome,
    NormalizationRequest,
)

__all__ = [
    "GenerationRequest",
    "GenerationOutcome",
    "GenerationArtifacts",
    "NormalizationRequest",
    "NormalizationOutcome",
    "GenerationRunError",
    "execute_generation_run",
    "execute_normalization_run",
    "write_text_atomically",
]
