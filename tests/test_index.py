"""Tests for mapping active indices onto storage positions."""

import pendulum
import pytest

from did.errors import IndexOutOfRangeError, InvalidIndexError, NoEntriesError
from did.service.index import index_active, resolve_active

from conftest import make_entry

DELETED = pendulum.datetime(2024, 1, 15, tz="UTC")


def _interleaved():
    return [
        make_entry("gone-1", deleted_at=DELETED),
        make_entry("one"),
        make_entry("gone-2", deleted_at=DELETED),
        make_entry("two"),
        make_entry("three"),
    ]


def test_resolve_skips_tombstones():
    entries = _interleaved()

    resolved = [resolve_active(i, entries) for i in (1, 2, 3)]

    assert [r["entry"]["description"] for r in resolved] == ["one", "two", "three"]
    assert [r["storage_index"] for r in resolved] == [1, 3, 4]
    assert [r["active_index"] for r in resolved] == [1, 2, 3]


@pytest.mark.parametrize("index", [0, -3])
def test_resolve_rejects_indices_below_one(index):
    with pytest.raises(InvalidIndexError, match="1 or greater"):
        resolve_active(index, _interleaved())


def test_resolve_past_the_end_reports_valid_range():
    with pytest.raises(IndexOutOfRangeError) as excinfo:
        resolve_active(4, _interleaved())

    assert excinfo.value.active_count == 3
    assert "1-3" in str(excinfo.value)


def test_resolve_with_only_tombstones_is_no_entries():
    entries = [make_entry("gone", deleted_at=DELETED)]

    with pytest.raises(NoEntriesError):
        resolve_active(1, entries)


def test_resolve_empty_sequence_is_no_entries():
    with pytest.raises(NoEntriesError):
        resolve_active(1, [])


def test_index_active_numbers_without_gaps():
    indexed = index_active(_interleaved())

    assert [ie["active_index"] for ie in indexed] == [1, 2, 3]
    assert [ie["storage_index"] for ie in indexed] == [1, 3, 4]
