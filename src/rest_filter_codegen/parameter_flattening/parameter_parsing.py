"""Field/operator extraction from delimited compound parameter names."""

from __future__ import annotations

from rest_filter_codegen.naming import WORD_DELIMITER

from .operator_vocabulary import OperatorVocabulary
from .param_models import ParsedName


def parse_parameter_name(name: str, vocabulary: OperatorVocabulary) -> ParsedName:
    """Split ``name`` into its field and trailing operator token.

    Longer operator suffixes are tried first so ``slot_not_in`` resolves to the ``not_in``
    operator rather than field ``slot_not`` with ``in``. At least one leading word always
    remains for the field. Names without a known suffix are returned whole as the field.
    """
    words = name.split(WORD_DELIMITER)
    for width in range(vocabulary.max_width, 0, -1):
        if len(words) <= width:
            continue
        candidate = WORD_DELIMITER.join(words[-width:])
        if vocabulary.is_operator(candidate):
            return ParsedName(field=WORD_DELIMITER.join(words[:-width]), operator=candidate)
    return ParsedName(field=name)
