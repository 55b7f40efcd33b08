"""Schema extraction entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from rest_filter_codegen.naming import fix_capitalization, to_capitalized, to_delimited


class MethodKind(str, Enum):
    """Kinds of service methods the generator understands."""

    LIST = "List"
    GET = "Get"


@dataclass(frozen=True)
class FieldAnnotations:
    """Side-channel annotations declared on one schema field."""

    required_group: str = ""
    projection_name: str = ""
    projection_alternative_for: str = ""

    def __bool__(self) -> bool:
        return bool(self.required_group or self.projection_name or self.projection_alternative_for)


@dataclass(frozen=True)
class SchemaField:
    """One field of a schema message."""

    name: str
    type_name: str = ""
    filter_type: str | None = None
    wrapper_kind: str | None = None
    description: str = ""
    annotations: FieldAnnotations = FieldAnnotations()


@dataclass(frozen=True)
class SchemaMessage:
    """Named message with its fields in declaration order."""

    name: str
    fields: tuple[SchemaField, ...] = ()

    def field(self, name: str) -> SchemaField | None:
        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        return None

    def has_field(self, name: str) -> bool:
        return self.field(name) is not None

    @property
    def filter_fields(self) -> tuple[SchemaField, ...]:
        return tuple(candidate for candidate in self.fields if candidate.filter_type)


@dataclass(frozen=True)
class SchemaMethod:
    """Service method classified as List or Get."""

    name: str
    kind: MethodKind
    request_type: str
    response_type: str
    resource: str

    @property
    def table(self) -> str:
        return to_delimited(self.resource)

    @property
    def query_builder_name(self) -> str:
        """Data-access entry point invoked by the synthesized handler."""
        return f"build_{to_delimited(self.kind.value + self.resource)}_query"


@dataclass(frozen=True)
class SchemaService:
    """Service with its classified methods."""

    name: str
    methods: tuple[SchemaMethod, ...] = ()


@dataclass(frozen=True)
class SchemaModel:
    """In-memory view of every service-declaring file of a descriptor set."""

    services: tuple[SchemaService, ...] = ()
    messages: Mapping[str, SchemaMessage] = field(default_factory=lambda: MappingProxyType({}))
    wrapper_kinds: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    field_descriptions: Mapping[str, Mapping[str, str]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    warnings: tuple[str, ...] = ()

    def method_for(self, resource: str, kind: MethodKind) -> SchemaMethod | None:
        """Find the method serving ``resource`` (delimited or capitalized) for ``kind``."""
        key = resource_key(resource)
        for service in self.services:
            for method in service.methods:
                if method.kind is kind and resource_key(method.resource) == key:
                    return method
        return None

    def message(self, name: str) -> SchemaMessage | None:
        return self.messages.get(name)

    def request_message(self, method: SchemaMethod) -> SchemaMessage | None:
        return self.messages.get(method.request_type)

    def description_for(self, service_name: str, field_name: str) -> str:
        """Documented description of ``field_name`` within a service, matched case-insensitively."""
        return self.field_descriptions.get(service_name.lower(), {}).get(field_name, "")


def resource_key(resource: str) -> str:
    """Comparable identity of a resource name in either rendering."""
    return fix_capitalization(to_capitalized(resource))
