"""Tests for the single-line entry codec."""

import json

import pendulum
import pytest

from did.errors import DecodeError
from did.repository.codec import decode_entry, encode_entry

from conftest import make_entry


def test_round_trip_minimal_entry():
    entry = make_entry()
    assert decode_entry(encode_entry(entry)) == entry


def test_round_trip_full_entry():
    entry = make_entry(
        project="acme",
        tags=["bugfix", "urgent"],
        deleted_at=pendulum.datetime(2024, 1, 16, 9, 0, 0, 123456, tz="UTC"),
    )
    assert decode_entry(encode_entry(entry)) == entry


def test_round_trip_non_ascii_is_written_verbatim():
    entry = make_entry(
        description="café ☕ 日本語 🚀",
        project="проект",
        tags=["ñandú", "emoji-✨"],
    )
    line = encode_entry(entry)

    assert "café ☕ 日本語 🚀" in line
    assert "\\u" not in line
    assert decode_entry(line) == entry


def test_encoded_line_has_no_newline():
    entry = make_entry(description="first line\nsecond line")
    line = encode_entry(entry)

    assert "\n" not in line
    assert decode_entry(line)["description"] == "first line\nsecond line"


def test_empty_optional_fields_are_omitted():
    raw = json.loads(encode_entry(make_entry()))

    assert list(raw) == ["timestamp", "description", "duration_minutes", "raw_input"]
    assert raw["timestamp"] == "2024-01-15T10:30:00+00:00"


def test_empty_project_and_tags_decode_to_none():
    entry = decode_entry(
        '{"timestamp": "2024-01-15T10:30:00Z", "description": "x",'
        ' "duration_minutes": 5, "raw_input": "x for 5m", "project": "", "tags": []}'
    )

    assert entry["project"] is None
    assert entry["tags"] is None
    assert entry["deleted_at"] is None


def test_offsets_are_preserved_as_instants():
    entry = decode_entry(
        '{"timestamp": "2024-01-15T10:30:00.123456789-05:00", "description": "x",'
        ' "duration_minutes": 5, "raw_input": "x for 5m"}'
    )

    assert entry["timestamp"] == pendulum.datetime(2024, 1, 15, 15, 30, 0, 123456, tz="UTC")


@pytest.mark.parametrize(
    "line",
    [
        "not json",
        '{"timestamp": "2024-01-15T10:30:00Z"',
        "[1, 2, 3]",
        '"just a string"',
        '{"description": "x", "duration_minutes": 5}',
        '{"timestamp": "yesterday", "description": "x", "duration_minutes": 5}',
        '{"timestamp": "2024-01-15T10:30:00", "description": "x", "duration_minutes": 5}',
        '{"timestamp": "2024-01-15T10:30:00Z", "description": "x", "duration_minutes": "5"}',
        '{"timestamp": "2024-01-15T10:30:00Z", "description": "x", "duration_minutes": true}',
        '{"timestamp": "2024-01-15T10:30:00Z", "description": "x", "duration_minutes": 5, "tags": [1]}',
        '{"timestamp": "2024-01-15T10:30:00Z", "description": "x", "duration_minutes": 5, "deleted_at": 7}',
        r'{"timestamp": "2024-01-15T10:30:00Z", "description": "bad \ud800", "duration_minutes": 5}',
        r'{"timestamp": "2024-01-15T10:30:00Z", "description": "x", "duration_minutes": 5, "tags": ["\udfff"]}',
    ],
)
def test_malformed_lines_raise_decode_error(line):
    with pytest.raises(DecodeError):
        decode_entry(line)


def test_escaped_surrogate_pair_is_valid_text():
    line = (
        '{"timestamp": "2024-01-15T10:30:00Z",'
        r' "description": "launch \ud83d\ude80", "duration_minutes": 5}'
    )

    entry = decode_entry(line)

    assert entry["description"] == "launch 🚀"
    assert decode_entry(encode_entry(entry)) == entry
