"""Rewrite of dot-notation REST filter parameters into delimited parameters."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from rest_filter_codegen.naming import WORD_DELIMITER, to_delimited

from .operator_vocabulary import OperatorVocabulary
from .param_models import FlattenedName
from .parameter_parsing import parse_parameter_name

LIST_SUFFIX_DESCRIPTION = "(comma-separated list)"

_UNSIGNED_FORMATS = ("uint32", "uint64")


def flatten_parameter_name(name: str) -> FlattenedName:
    """Convert ``slotStartDateTime.gte`` into ``slot_start_date_time_gte``.

    Every dot-separated segment is converted on its own; digits inside a segment never
    introduce a word boundary.
    """
    segments = [to_delimited(segment, split_digits=False) for segment in name.split(".")]
    return FlattenedName(
        name=WORD_DELIMITER.join(segments),
        field=segments[0],
        operator=WORD_DELIMITER.join(segments[1:]),
    )


def flatten_parameter(
    parameter: Mapping[str, Any],
    *,
    vocabulary: OperatorVocabulary,
    field_descriptions: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Return a copy of a REST parameter object with a flattened name and description.

    Parameters whose name carries no dot are returned unchanged. Membership parameters
    declared as arrays become a single comma-separated string validated by a pattern that
    matches the array's element type.
    """
    flattened = copy.deepcopy(dict(parameter))
    raw_name = flattened.get("name")
    if not isinstance(raw_name, str) or "." not in raw_name:
        return flattened

    names = flatten_parameter_name(raw_name)
    known_description = (field_descriptions or {}).get(names.field)
    if known_description:
        flattened["description"] = f"{known_description} (filter: {names.operator})"
    else:
        flattened["description"] = f"Filter {names.field} using {names.operator}"
    flattened["name"] = names.name

    parsed = parse_parameter_name(names.name, vocabulary)
    if vocabulary.is_membership(parsed.operator):
        _coerce_array_to_delimited_string(flattened)
    return flattened


def _coerce_array_to_delimited_string(parameter: dict[str, Any]) -> None:
    schema = parameter.get("schema")
    if not isinstance(schema, dict) or schema.get("type") != "array":
        return
    items = schema.pop("items", None)
    item_type = ""
    item_format = ""
    if isinstance(items, Mapping):
        item_type = str(items.get("type") or "")
        item_format = str(items.get("format") or "")
    schema["type"] = "string"
    pattern = array_item_pattern(item_type, item_format)
    if pattern:
        schema["pattern"] = pattern
    parameter["description"] = f"{parameter.get('description', '')} {LIST_SUFFIX_DESCRIPTION}"


def array_item_pattern(item_type: str, item_format: str) -> str:
    """Validation pattern for a comma-separated list of ``item_type`` values."""
    if item_type == "integer":
        if item_format in _UNSIGNED_FORMATS:
            return r"^\d+(,\d+)*$"
        return r"^-?\d+(,-?\d+)*$"
    if item_type == "number":
        return r"^-?\d+(\.\d+)?(,-?\d+(\.\d+)?)*$"
    if item_type == "string":
        return r"^[^,]+(,[^,]+)*$"
    return ""
