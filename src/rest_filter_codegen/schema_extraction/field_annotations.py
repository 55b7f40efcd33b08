"""Declared extension schema for field-level generator annotations.

Annotations are custom ``google.protobuf.FieldOptions`` extensions. A descriptor set parsed
with the stock descriptor classes keeps them as unknown fields; re-parsing the options with a
message class built from a pool that declares the extensions exposes them through the regular
``Extensions`` accessor.
"""

from __future__ import annotations

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

from .schema_models import FieldAnnotations

ANNOTATION_PACKAGE = "clickhouse.v1"
ANNOTATION_FILE = "clickhouse/v1/annotations.proto"
EXTENSION_NUMBERS = {
    "projection_alternative_for": 50001,
    "projection_name": 50002,
    "required_group": 50003,
}

_DESCRIPTOR_FILE = descriptor_pb2.DESCRIPTOR.name
_FIELD_OPTIONS = "google.protobuf.FieldOptions"


class AnnotationSchema:
    """Private descriptor pool declaring the annotation extensions."""

    def __init__(self) -> None:
        self._pool = descriptor_pool.DescriptorPool()
        self._pool.AddSerializedFile(descriptor_pb2.DESCRIPTOR.serialized_pb)
        self._pool.AddSerializedFile(_annotation_file().SerializeToString())
        classes = message_factory.GetMessageClassesForFiles(
            [_DESCRIPTOR_FILE, ANNOTATION_FILE], self._pool
        )
        self.options_class = classes[_FIELD_OPTIONS]
        self.extensions = {
            name: self._pool.FindExtensionByName(f"{ANNOTATION_PACKAGE}.{name}")
            for name in EXTENSION_NUMBERS
        }

    def read(self, field_proto: descriptor_pb2.FieldDescriptorProto) -> FieldAnnotations:
        """Return the annotations declared on ``field_proto`` (empty when none are set)."""
        if not field_proto.HasField("options"):
            return FieldAnnotations()
        options = self.options_class.FromString(field_proto.options.SerializeToString())
        values = {
            name: options.Extensions[extension]
            for name, extension in self.extensions.items()
            if options.HasExtension(extension)
        }
        return FieldAnnotations(**values)

    def encode(self, annotations: FieldAnnotations) -> bytes:
        """Serialize ``annotations`` as field options bytes."""
        options = self.options_class()
        for name, extension in self.extensions.items():
            value = getattr(annotations, name)
            if value:
                options.Extensions[extension] = value
        return options.SerializeToString()


def _annotation_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=ANNOTATION_FILE,
        package=ANNOTATION_PACKAGE,
        dependency=[_DESCRIPTOR_FILE],
    )
    for name, number in EXTENSION_NUMBERS.items():
        file_proto.extension.add(
            name=name,
            number=number,
            label=descriptor_pb2.FieldDescriptorProto.LABEL_OPTIONAL,
            type=descriptor_pb2.FieldDescriptorProto.TYPE_STRING,
            extendee=f".{_FIELD_OPTIONS}",
        )
    return file_proto
