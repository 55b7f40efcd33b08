"""Endpoint modeling entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from rest_filter_codegen.filter_registry import FilterTypeDescriptor
from rest_filter_codegen.naming import to_delimited
from rest_filter_codegen.parameter_flattening import Param
from rest_filter_codegen.schema_extraction import MethodKind


@dataclass(frozen=True)
class RequiredGroup:
    """Alternative parameters of which at least one must be supplied."""

    name: str
    members: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.members:
            raise ValueError(f"Required group {self.name!r} must have at least one member.")


@dataclass(frozen=True)
class FilterBinding:
    """Request filter field populated from one or more operator parameters.

    ``arguments`` pairs each construction-routine argument with the parameter attribute that
    supplies it, in the descriptor's operator order.
    """

    field: str
    descriptor: FilterTypeDescriptor
    arguments: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class Endpoint:  # pylint: disable=too-many-instance-attributes
    """One REST operation merged with its schema method."""

    path: str
    method: str
    operation_id: str
    kind: MethodKind
    table: str
    handler_name: str
    params_type: str
    response_type: str
    item_type: str
    request_type: str
    query_builder: str
    params: tuple[Param, ...] = ()
    path_param: Param | None = None
    key_field: str = ""
    filters: tuple[FilterBinding, ...] = ()
    forwarded: tuple[Param, ...] = ()
    required_groups: tuple[RequiredGroup, ...] = ()

    @property
    def function_name(self) -> str:
        return to_delimited(self.handler_name)


@dataclass(frozen=True)
class EndpointCatalog:
    """Every endpoint of a REST description plus the item schemas they return."""

    endpoints: tuple[Endpoint, ...] = ()
    item_properties: Mapping[str, tuple[str, ...] | None] = field(
        default_factory=lambda: MappingProxyType({})
    )
    warnings: tuple[str, ...] = ()

    @property
    def filter_types(self) -> tuple[FilterTypeDescriptor, ...]:
        """Distinct filter families referenced by any endpoint, sorted by name."""
        referenced = {
            binding.descriptor.name: binding.descriptor
            for endpoint in self.endpoints
            for binding in endpoint.filters
        }
        return tuple(referenced[name] for name in sorted(referenced))
