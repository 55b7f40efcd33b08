"""REST description document loading and traversal."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")
SCHEMA_REF_PREFIX = "#/components/schemas/"
PARAMETER_REF_PREFIX = "#/components/parameters/"


class RestDescriptionError(Exception):
    """Raised when the REST description cannot be read or is malformed."""


@dataclass(frozen=True)
class RestOperation:
    """One operation of the REST description."""

    path: str
    method: str
    definition: Mapping[str, Any]

    @property
    def operation_id(self) -> str:
        value = self.definition.get("operationId")
        return value if isinstance(value, str) else ""


@dataclass(frozen=True)
class RestDocument:
    """Parsed REST description."""

    root: Mapping[str, Any]
    source_path: Path | None = None

    @property
    def paths(self) -> Mapping[str, Any]:
        paths = self.root.get("paths")
        return paths if isinstance(paths, Mapping) else {}

    @property
    def component_schemas(self) -> Mapping[str, Any]:
        return _components(self.root).get("schemas") or {}

    def operations(self) -> Iterator[RestOperation]:
        """Yield operations ordered by path, then by HTTP method."""
        for path in sorted(self.paths):
            item = self.paths[path]
            if not isinstance(item, Mapping):
                continue
            for method in HTTP_METHODS:
                definition = item.get(method)
                if isinstance(definition, Mapping):
                    yield RestOperation(path=path, method=method.upper(), definition=definition)

    def parameters(self, operation: RestOperation) -> list[Mapping[str, Any]]:
        """Path-level and operation-level parameters with ``$ref`` entries resolved."""
        item = self.paths.get(operation.path) or {}
        declared = list(item.get("parameters") or []) + list(
            operation.definition.get("parameters") or []
        )
        return [self.resolve_parameter(parameter) for parameter in declared]

    def resolve_parameter(self, parameter: Any) -> Mapping[str, Any]:
        if not isinstance(parameter, Mapping):
            raise RestDescriptionError(f"Parameter definitions must be mappings: {parameter!r}")
        ref = parameter.get("$ref")
        if ref is None:
            return parameter
        if not isinstance(ref, str) or not ref.startswith(PARAMETER_REF_PREFIX):
            raise RestDescriptionError(f"Unsupported parameter reference: {ref!r}")
        name = ref[len(PARAMETER_REF_PREFIX) :]
        resolved = (_components(self.root).get("parameters") or {}).get(name)
        if not isinstance(resolved, Mapping):
            raise RestDescriptionError(f"Unresolved parameter reference: {ref}")
        return resolved

    def schema_properties(self, schema_name: str) -> tuple[str, ...] | None:
        """Property names of a component schema, sorted, or None when it is not declared."""
        schema = self.component_schemas.get(schema_name)
        if not isinstance(schema, Mapping):
            return None
        properties = schema.get("properties")
        if not isinstance(properties, Mapping):
            return ()
        return tuple(sorted(properties))


def load_rest_document(document_path: Path | str) -> RestDocument:
    """Load a YAML or JSON REST description."""
    path = Path(document_path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RestDescriptionError(f"Failed to read REST description {path}: {exc}") from exc
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RestDescriptionError(f"Failed to parse REST description {path}: {exc}") from exc
    return parse_rest_document(parsed, source_path=path)


def parse_rest_document(parsed: Any, *, source_path: Path | None = None) -> RestDocument:
    """Validate the document shape and wrap it."""
    label = source_path or "<inline>"
    if not isinstance(parsed, Mapping):
        raise RestDescriptionError(f"REST description root must be a mapping: {label}")
    if not isinstance(parsed.get("paths"), Mapping):
        raise RestDescriptionError(f"REST description requires a 'paths' mapping: {label}")
    return RestDocument(root=parsed, source_path=source_path)


def _components(root: Mapping[str, Any]) -> Mapping[str, Any]:
    components = root.get("components")
    return components if isinstance(components, Mapping) else {}
