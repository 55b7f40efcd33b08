"""Parameter flattening exports."""

from .dot_notation import (
    LIST_SUFFIX_DESCRIPTION,
    array_item_pattern,
    flatten_parameter,
    flatten_parameter_name,
)
from .operator_vocabulary import OperatorVocabulary
from .param_models import FlattenedName, Param, ParsedName
from .parameter_parsing import parse_parameter_name

__all__ = [
    "LIST_SUFFIX_DESCRIPTION",
    "FlattenedName",
    "OperatorVocabulary",
    "Param",
    "ParsedName",
    "array_item_pattern",
    "flatten_parameter",
    "flatten_parameter_name",
    "parse_parameter_name",
]
