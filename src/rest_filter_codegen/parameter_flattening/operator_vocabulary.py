"""Operator suffix vocabulary recognized in REST parameter names."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from rest_filter_codegen.naming import WORD_DELIMITER

_STANDARD_TOKENS = (
    "eq",
    "ne",
    "lt",
    "lte",
    "gt",
    "gte",
    "in",
    "not_in",
    "between",
    "in_values",
    "not_in_values",
    "contains",
    "starts_with",
    "ends_with",
    "like",
    "not_like",
    "is_null",
    "is_not_null",
    "has_key",
    "not_has_key",
    "has_any_key",
    "has_all_keys",
)
_STANDARD_ALIASES = {"in": "in_values", "not_in": "not_in_values"}
_MEMBERSHIP_TOKENS = ("in", "not_in", "in_values", "not_in_values")


@dataclass(frozen=True)
class OperatorVocabulary:
    """Known operator tokens plus the aliases that address the same builder argument."""

    tokens: frozenset[str]
    aliases: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    membership_tokens: frozenset[str] = frozenset()

    @classmethod
    def standard(cls) -> OperatorVocabulary:
        return cls(
            tokens=frozenset(_STANDARD_TOKENS),
            aliases=MappingProxyType(dict(_STANDARD_ALIASES)),
            membership_tokens=frozenset(_MEMBERSHIP_TOKENS),
        )

    @property
    def max_width(self) -> int:
        """Largest number of delimited words in a single operator token."""
        if not self.tokens:
            return 0
        return max(len(token.split(WORD_DELIMITER)) for token in self.tokens)

    def is_operator(self, token: str) -> bool:
        return token in self.tokens

    def is_membership(self, token: str) -> bool:
        return token in self.membership_tokens

    def canonical(self, token: str) -> str:
        """Map an alias onto the operator name used by filter construction routines."""
        return self.aliases.get(token, token)
