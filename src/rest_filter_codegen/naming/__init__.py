"""Name canonicalization exports."""

from .canonical_names import (
    WORD_DELIMITER,
    fix_capitalization,
    strip_package,
    to_capitalized,
    to_delimited,
)

__all__ = [
    "WORD_DELIMITER",
    "fix_capitalization",
    "strip_package",
    "to_capitalized",
    "to_delimited",
]
