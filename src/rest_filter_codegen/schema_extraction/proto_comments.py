"""Field documentation and wrapper kinds recovered from ``.proto`` sources."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DESCRIPTION_PREFIX = "Filter by "

_SERVICE_PATTERN = re.compile(r"service\s+(\w+)")
_MESSAGE_PATTERN = re.compile(r"^message\s+(\w+)")
_COMMENT_PATTERN = re.compile(r"^\s*//\s*(.+)")
_FIELD_PATTERN = re.compile(r"^\s*(?:[\w.]+)\s+(\w+)\s+=\s+\d+")
_WRAPPER_FIELD_PATTERN = re.compile(r"^\s*google\.protobuf\.(\w+)\s+(\w+)\s+=\s+\d+")
_TRAILING_NOTE_PATTERN = re.compile(r"\s*\([^)]+\)\s*$")


@dataclass
class ProtoSourceNotes:
    """Descriptions keyed by lowercased service name, plus wrapper kinds by field name."""

    descriptions: dict[str, dict[str, str]] = field(default_factory=dict)
    wrapper_kinds: dict[str, str] = field(default_factory=dict)


def extract_field_description(comment: str) -> str:
    """Return the description of a ``Filter by <field> - <description>`` comment.

    A trailing parenthetical note is dropped. Comments not following the convention yield an
    empty string.
    """
    text = " ".join(line.strip() for line in comment.strip().splitlines())
    if not text.startswith(DESCRIPTION_PREFIX):
        return ""
    text = text[len(DESCRIPTION_PREFIX) :]
    _, separator, description = text.partition(" - ")
    if separator:
        text = description
    return _TRAILING_NOTE_PATTERN.sub("", text)


def read_proto_sources(directory: Path) -> ProtoSourceNotes:
    """Scan every ``*.proto`` file directly inside ``directory``."""
    notes = ProtoSourceNotes()
    for path in sorted(directory.glob("*.proto")):
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Skipping unreadable proto source %s: %s", path, exc)
            continue
        _scan_proto_source(text, notes)
    return notes


def _scan_proto_source(text: str, notes: ProtoSourceNotes) -> None:
    service_match = _SERVICE_PATTERN.search(text)
    if service_match is None:
        return
    descriptions = notes.descriptions.setdefault(service_match.group(1).lower(), {})
    in_message = False
    last_description = ""
    for line in text.splitlines():
        if _MESSAGE_PATTERN.match(line):
            in_message = True
            continue
        if not in_message:
            continue
        wrapper_match = _WRAPPER_FIELD_PATTERN.match(line)
        if wrapper_match:
            notes.wrapper_kinds[wrapper_match.group(2)] = wrapper_match.group(1)
            continue
        comment_match = _COMMENT_PATTERN.match(line)
        if comment_match:
            last_description = extract_field_description(comment_match.group(1))
            continue
        field_match = _FIELD_PATTERN.match(line)
        if last_description and field_match:
            descriptions[field_match.group(1)] = last_description
        last_description = ""
