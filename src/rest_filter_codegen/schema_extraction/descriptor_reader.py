"""Descriptor-set reader building the in-memory schema model."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from types import MappingProxyType

from google.protobuf import descriptor_pb2
from google.protobuf.message import DecodeError

from rest_filter_codegen.filter_registry import FilterTypeRegistry
from rest_filter_codegen.naming import fix_capitalization, strip_package, to_delimited

from .field_annotations import AnnotationSchema
from .proto_comments import ProtoSourceNotes, extract_field_description, read_proto_sources
from .schema_models import (
    MethodKind,
    SchemaField,
    SchemaMessage,
    SchemaMethod,
    SchemaModel,
    SchemaService,
)
from .wrapper_types import wrapper_kind_of

logger = logging.getLogger(__name__)

DESCRIPTOR_GLOB = "*.pb"

_FILTER_SUFFIX = "Filter"
_MESSAGE_SUFFIXES = ("Request", "Response")
_MESSAGE_TYPE_PATH = descriptor_pb2.FileDescriptorProto.MESSAGE_TYPE_FIELD_NUMBER
_FIELD_PATH = descriptor_pb2.DescriptorProto.FIELD_FIELD_NUMBER


class SchemaExtractionError(Exception):
    """Raised when a compiled schema cannot be read or parsed."""


def discover_descriptor_files(schema_path: Path | str) -> list[Path]:
    """Return the descriptor set files named by a file or directory path."""
    path = Path(schema_path)
    if not path.is_dir():
        return [path]
    files = sorted(path.glob(DESCRIPTOR_GLOB))
    if not files:
        raise SchemaExtractionError(
            f"parsing proto descriptors: no descriptor set ({DESCRIPTOR_GLOB}) found in {path}"
        )
    return files


def read_descriptor_set(path: Path | str) -> descriptor_pb2.FileDescriptorSet:
    """Parse one serialized ``FileDescriptorSet``."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise SchemaExtractionError(f"reading descriptor file {path}: {exc}") from exc
    try:
        return descriptor_pb2.FileDescriptorSet.FromString(data)
    except DecodeError as exc:
        raise SchemaExtractionError(f"unmarshaling descriptor {path}: {exc}") from exc


def load_schema_model(
    schema_path: Path | str,
    *,
    registry: FilterTypeRegistry,
    annotation_schema: AnnotationSchema | None = None,
) -> SchemaModel:
    """Read every descriptor set under ``schema_path`` into one schema model.

    ``.proto`` sources found next to the descriptor sets supply descriptions and wrapper
    kinds the descriptors do not carry.
    """
    path = Path(schema_path)
    file_protos: list[descriptor_pb2.FileDescriptorProto] = []
    seen_names: set[str] = set()
    for descriptor_path in discover_descriptor_files(path):
        for file_proto in read_descriptor_set(descriptor_path).file:
            if file_proto.name and file_proto.name in seen_names:
                continue
            seen_names.add(file_proto.name)
            file_protos.append(file_proto)

    source_dir = path if path.is_dir() else path.parent
    return build_schema_model(
        file_protos,
        registry=registry,
        annotation_schema=annotation_schema,
        source_notes=read_proto_sources(source_dir),
    )


def build_schema_model(
    file_protos: Iterable[descriptor_pb2.FileDescriptorProto],
    *,
    registry: FilterTypeRegistry,
    annotation_schema: AnnotationSchema | None = None,
    source_notes: ProtoSourceNotes | None = None,
) -> SchemaModel:
    """Build a schema model from already parsed file descriptors.

    Files that declare no service are skipped.
    """
    builder = _SchemaModelBuilder(
        registry=registry,
        annotation_schema=annotation_schema or AnnotationSchema(),
        source_notes=source_notes or ProtoSourceNotes(),
    )
    for file_proto in file_protos:
        if not file_proto.service:
            logger.debug("Skipping %s: no service declared", file_proto.name or "<unnamed>")
            continue
        builder.add_file(file_proto)
    return builder.build()


def resource_from_message_name(type_name: str) -> str:
    """``.cbt.ListFctNodeActiveLast24hRequest`` -> ``FctNodeActiveLast24H``."""
    name = strip_package(type_name)
    for kind in MethodKind:
        if name.startswith(kind.value):
            name = name[len(kind.value) :]
            break
    for suffix in _MESSAGE_SUFFIXES:
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break
    return fix_capitalization(name)


def is_request_message(name: str) -> bool:
    return name.endswith("Request") and any(name.startswith(kind.value) for kind in MethodKind)


class _SchemaModelBuilder:
    def __init__(
        self,
        *,
        registry: FilterTypeRegistry,
        annotation_schema: AnnotationSchema,
        source_notes: ProtoSourceNotes,
    ) -> None:
        self._registry = registry
        self._annotation_schema = annotation_schema
        self._source_notes = source_notes
        self._services: list[SchemaService] = []
        self._messages: dict[str, SchemaMessage] = {}
        self._wrapper_kinds: dict[str, str] = dict(source_notes.wrapper_kinds)
        self._descriptions: dict[str, dict[str, str]] = {
            service: dict(fields) for service, fields in source_notes.descriptions.items()
        }
        self._warnings: list[str] = []

    def add_file(self, file_proto: descriptor_pb2.FileDescriptorProto) -> None:
        service_key = file_proto.service[0].name.lower()
        comments = _leading_comments(file_proto)
        for message_index, message_proto in enumerate(file_proto.message_type):
            fields = tuple(
                self._field(
                    message_proto.name,
                    field_proto,
                    service_key=service_key,
                    comment=comments.get((message_index, field_index), ""),
                )
                for field_index, field_proto in enumerate(message_proto.field)
            )
            self._messages[message_proto.name] = SchemaMessage(
                name=message_proto.name, fields=fields
            )

        for service_proto in file_proto.service:
            methods = [_classify_method(method_proto) for method_proto in service_proto.method]
            self._services.append(
                SchemaService(
                    name=service_proto.name,
                    methods=tuple(method for method in methods if method is not None),
                )
            )

    def _field(
        self,
        message_name: str,
        field_proto: descriptor_pb2.FieldDescriptorProto,
        *,
        service_key: str,
        comment: str,
    ) -> SchemaField:
        name = to_delimited(field_proto.name, split_digits=False)
        type_name = strip_package(field_proto.type_name) if field_proto.type_name else ""

        wrapper_kind = wrapper_kind_of(field_proto.type_name)
        if wrapper_kind:
            self._wrapper_kinds[name] = wrapper_kind

        filter_type = None
        if is_request_message(message_name):
            filter_type = self._filter_type(message_name, name, type_name)

        service_descriptions = self._descriptions.setdefault(service_key, {})
        description = extract_field_description(comment)
        if description:
            service_descriptions[name] = description
        else:
            description = service_descriptions.get(name, "")

        return SchemaField(
            name=name,
            type_name=type_name,
            filter_type=filter_type,
            wrapper_kind=wrapper_kind,
            description=description,
            annotations=self._annotation_schema.read(field_proto),
        )

    def _filter_type(self, message_name: str, field_name: str, type_name: str) -> str | None:
        if type_name in self._registry:
            return type_name
        if type_name.endswith(_FILTER_SUFFIX):
            warning = (
                f"{message_name}.{field_name}: filter type {type_name} is not registered; "
                "field skipped"
            )
            logger.warning(warning)
            self._warnings.append(warning)
        return None

    def build(self) -> SchemaModel:
        return SchemaModel(
            services=tuple(self._services),
            messages=MappingProxyType(dict(self._messages)),
            wrapper_kinds=MappingProxyType(dict(self._wrapper_kinds)),
            field_descriptions=MappingProxyType(
                {
                    service: MappingProxyType(fields)
                    for service, fields in self._descriptions.items()
                }
            ),
            warnings=tuple(self._warnings),
        )


def _classify_method(method_proto: descriptor_pb2.MethodDescriptorProto) -> SchemaMethod | None:
    kind = next((kind for kind in MethodKind if method_proto.name.endswith(kind.value)), None)
    if kind is None:
        logger.debug("Ignoring method %s: neither List nor Get", method_proto.name)
        return None
    return SchemaMethod(
        name=method_proto.name,
        kind=kind,
        request_type=strip_package(method_proto.input_type),
        response_type=strip_package(method_proto.output_type),
        resource=resource_from_message_name(method_proto.input_type),
    )


def _leading_comments(
    file_proto: descriptor_pb2.FileDescriptorProto,
) -> dict[tuple[int, int], str]:
    comments: dict[tuple[int, int], str] = {}
    for location in file_proto.source_code_info.location:
        path = tuple(location.path)
        if (
            len(path) == 4
            and path[0] == _MESSAGE_TYPE_PATH
            and path[2] == _FIELD_PATH
            and location.leading_comments
        ):
            comments[(path[1], path[3])] = location.leading_comments
    return comments
