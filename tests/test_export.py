"""Tests for JSON and CSV export."""

import csv
import io
import json

import pendulum

from did.query.filter import EntryFilter
from did.service.export import CSV_HEADERS, export_csv, export_json

from conftest import make_entry

NOW = pendulum.datetime(2024, 1, 20, 8, 0, tz="UTC")


def _entries():
    return [
        make_entry("fix login bug", 90, project="acme", tags=["bugfix", "urgent"]),
        make_entry(
            "lunch, with \"team\"",
            45,
            timestamp=pendulum.datetime(2024, 1, 15, 23, 30, tz="UTC"),
        ),
    ]


def test_export_json_document():
    document = json.loads(export_json(_entries(), {"project": "acme"}, NOW))

    assert document["metadata"] == {
        "export_timestamp": "2024-01-20T08:00:00+00:00",
        "total_entries": 2,
        "filter_criteria": {"project": "acme"},
    }
    first = document["entries"][0]
    assert first["description"] == "fix login bug"
    assert first["duration_minutes"] == 90
    assert first["project"] == "acme"
    assert first["tags"] == ["bugfix", "urgent"]
    assert "deleted_at" not in first
    assert "project" not in document["entries"][1]


def test_export_json_keeps_non_ascii_text():
    text = export_json([make_entry("café ☕")], {}, NOW)

    assert "café ☕" in text
    assert text.endswith("}\n")


def test_export_csv_rows():
    rows = list(csv.reader(io.StringIO(export_csv(_entries(), tz="UTC"))))

    assert rows == [
        CSV_HEADERS,
        ["2024-01-15", "fix login bug", "90", "1.50", "acme", "bugfix;urgent"],
        ["2024-01-15", 'lunch, with "team"', "45", "0.75", "", ""],
    ]


def test_export_csv_dates_follow_timezone():
    rows = list(csv.reader(io.StringIO(export_csv(_entries(), tz="Asia/Tokyo"))))

    assert rows[2][0] == "2024-01-16"


def test_export_csv_without_entries_has_only_the_header():
    assert export_csv([]) == ",".join(CSV_HEADERS) + "\n"


def test_filter_criteria():
    entry_filter = EntryFilter(
        project="@acme",
        tags=["#review"],
        keyword="deploy",
        start=pendulum.date(2024, 1, 1),
        end=pendulum.date(2024, 1, 31),
    )

    assert entry_filter.criteria() == {
        "project": "acme",
        "tags": ["review"],
        "keyword": "deploy",
        "from": "2024-01-01",
        "to": "2024-01-31",
    }
    assert EntryFilter().criteria() == {}
