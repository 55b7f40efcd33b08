"""Name canonicalization tests."""

from __future__ import annotations

import pytest
from rest_filter_codegen.naming import (
    fix_capitalization,
    strip_package,
    to_capitalized,
    to_delimited,
)


@pytest.mark.parametrize(
    ("delimited", "capitalized"),
    [
        ("fct_block", "FctBlock"),
        ("fct_node_active_last_24h", "FctNodeActiveLast24H"),
        ("int_block_50ms_chunked", "IntBlock50MsChunked"),
        ("slot", "Slot"),
        ("last_24h", "Last24H"),
        ("fct_attestation_first_seen_chunked_50ms", "FctAttestationFirstSeenChunked50Ms"),
        ("__double__delimiter_", "DoubleDelimiter"),
        ("", ""),
    ],
)
def test_to_capitalized_joins_words(delimited: str, capitalized: str) -> None:
    assert to_capitalized(delimited) == capitalized


@pytest.mark.parametrize(
    ("capitalized", "delimited"),
    [
        ("FctBlock", "fct_block"),
        ("HTTPServer", "http_server"),
        ("ID", "id"),
        ("Top100By", "top_100_by"),
        ("FctNodeActiveLast24H", "fct_node_active_last_24h"),
        ("IntBlock50MsChunked", "int_block_50_ms_chunked"),
        ("ListFctBlock", "list_fct_block"),
    ],
)
def test_to_delimited_splits_words_and_digit_runs(capitalized: str, delimited: str) -> None:
    assert to_delimited(capitalized) == delimited


def test_to_delimited_without_digit_split_keeps_digits_inside_words() -> None:
    assert to_delimited("slotStartDateTime", split_digits=False) == "slot_start_date_time"
    assert to_delimited("last24h", split_digits=False) == "last24h"
    assert to_delimited("already_delimited", split_digits=False) == "already_delimited"


def test_round_trip_for_words_without_digits() -> None:
    for name in ("fct_block", "fct_attestation_correctness_head", "slot"):
        assert to_delimited(to_capitalized(name)) == name


@pytest.mark.parametrize(
    ("delimited", "round_tripped"),
    [
        ("top_100_by", "top_100_by"),
        ("fct_node_active_last_24h", "fct_node_active_last_24h"),
        ("fct_attestation_first_seen_chunked_50ms", "fct_attestation_first_seen_chunked_50_ms"),
    ],
)
def test_round_trip_splits_unit_letters_after_digit_run(
    delimited: str, round_tripped: str
) -> None:
    assert to_delimited(to_capitalized(delimited)) == round_tripped


def test_fix_capitalization_uppercases_letter_after_digit() -> None:
    assert fix_capitalization("IntBlock50msChunked") == "IntBlock50MsChunked"
    assert fix_capitalization("FctNodeActiveLast24h") == "FctNodeActiveLast24H"
    assert fix_capitalization("FctBlock") == "FctBlock"
    assert fix_capitalization("Last24H") == "Last24H"


def test_strip_package_returns_last_segment() -> None:
    assert strip_package(".cbt.UInt32Filter") == "UInt32Filter"
    assert strip_package("google.protobuf.StringValue") == "StringValue"
    assert strip_package("Plain") == "Plain"
