# SPDX-License-Identifier: MIT

import csv
import io
import json
from typing import Any

import pendulum

from did import time
from did.model.entry import Entry
from did.repository.codec import entry_to_dict

CSV_HEADERS = [
    "date",
    "description",
    "duration_minutes",
    "duration_hours",
    "project",
    "tags",
]
CSV_TAG_SEPARATOR = ";"


def export_json(
    entries: list[Entry], criteria: dict[str, Any], now: pendulum.DateTime
) -> str:
    """
    Entries as one indented JSON document, with metadata describing when
    and with which filters it was made. Entries use the stored field names.
    """
    document = {
        "metadata": {
            "export_timestamp": time.datetime_to_iso_str(now),
            "total_entries": len(entries),
            "filter_criteria": criteria,
        },
        "entries": [entry_to_dict(entry) for entry in entries],
    }
    return json.dumps(document, ensure_ascii=False, indent=2) + "\n"


def export_csv(entries: list[Entry], tz: str = "local") -> str:
    """Entries as CSV with a header row; dates are local calendar days in tz."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for entry in entries:
        writer.writerow(
            [
                time.datetime_to_local_date(entry["timestamp"], tz).to_date_string(),
                entry["description"],
                entry["duration_minutes"],
                f"{entry['duration_minutes'] / 60:.2f}",
                entry["project"] or "",
                CSV_TAG_SEPARATOR.join(entry["tags"] or []),
            ]
        )
    return buffer.getvalue()
