"""Parameter flattening entities."""

from __future__ import annotations

from dataclasses import dataclass

_PYTHON_TYPES = {
    "integer": "int",
    "number": "float",
    "string": "str",
    "boolean": "bool",
}


@dataclass(frozen=True)
class ParsedName:
    """Field and operator recovered from a delimited parameter name.

    ``operator`` is empty for non-filter parameters such as pagination controls.
    """

    field: str
    operator: str = ""


@dataclass(frozen=True)
class FlattenedName:
    """Dot-notation parameter name rewritten to delimited form."""

    name: str
    field: str
    operator: str


@dataclass(frozen=True)
class Param:  # pylint: disable=too-many-instance-attributes
    """One REST parameter after flattening."""

    name: str
    field: str
    operator: str = ""
    raw_name: str = ""
    location: str = "query"
    scalar_type: str = ""
    format: str = ""
    description: str = ""
    required: bool = False
    required_group: str | None = None

    @property
    def is_filter(self) -> bool:
        return bool(self.operator)

    @property
    def python_type(self) -> str:
        return _PYTHON_TYPES.get(self.scalar_type, "Any")
