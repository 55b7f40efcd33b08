"""Immutable registry of the known filter families."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .filter_types import FilterTypeDescriptor, ScalarKind

_SCALAR_FAMILY_KINDS = (
    ScalarKind.UINT32,
    ScalarKind.UINT64,
    ScalarKind.INT32,
    ScalarKind.INT64,
    ScalarKind.STRING,
    ScalarKind.BOOL,
)
_MAP_VALUE_KINDS = (
    ScalarKind.STRING,
    ScalarKind.UINT32,
    ScalarKind.INT32,
    ScalarKind.UINT64,
    ScalarKind.INT64,
)


@dataclass(frozen=True)
class FilterTypeRegistry:
    """Lookup of filter families by schema type name.

    Built once per pipeline run and handed to every component that needs it.
    """

    descriptors: Mapping[str, FilterTypeDescriptor] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_descriptors(cls, descriptors: Iterable[FilterTypeDescriptor]) -> FilterTypeRegistry:
        table = {descriptor.name: descriptor for descriptor in descriptors}
        return cls(descriptors=MappingProxyType(table))

    @classmethod
    def standard(cls) -> FilterTypeRegistry:
        """Registry holding every scalar, nullable and map family of the compiled schema."""
        descriptors: list[FilterTypeDescriptor] = []
        for kind in _SCALAR_FAMILY_KINDS:
            descriptors.append(FilterTypeDescriptor(name=f"{kind.type_name}Filter", base_kind=kind))
            descriptors.append(
                FilterTypeDescriptor(
                    name=f"Nullable{kind.type_name}Filter", base_kind=kind, nullable=True
                )
            )
        for kind in _MAP_VALUE_KINDS:
            descriptors.append(
                FilterTypeDescriptor(
                    name=f"MapString{kind.type_name}Filter", base_kind=kind, is_map=True
                )
            )
        return cls.from_descriptors(descriptors)

    def get(self, name: str) -> FilterTypeDescriptor | None:
        return self.descriptors.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.descriptors

    def __iter__(self) -> Iterator[FilterTypeDescriptor]:
        for name in sorted(self.descriptors):
            yield self.descriptors[name]

    def operators_for(self, descriptor: FilterTypeDescriptor) -> tuple[str, ...]:
        """Ordered operator tokens accepted by the descriptor's construction routine."""
        return descriptor.operators

    def builds_range_for(self, descriptor: FilterTypeDescriptor) -> bool:
        """Whether a simultaneous lower and upper bound collapse into one range construct."""
        return descriptor.builds_range
