# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

MAX_DURATION_MINUTES = 24 * 60


class Entry(TypedDict):
    timestamp: pendulum.DateTime  # When the entry was logged
    description: str  # Project and tag markers stripped
    duration_minutes: int  # 1..MAX_DURATION_MINUTES
    raw_input: str
    project: Optional[str]
    tags: Optional[list[str]]
    deleted_at: Optional[pendulum.DateTime]  # Soft delete


class IndexedEntry(TypedDict):
    entry: Entry
    active_index: int  # 1-based among non-deleted entries, never stored
    storage_index: int  # 0-based position in the store file


def new_entry(
    timestamp: pendulum.DateTime,
    description: str,
    duration_minutes: int,
    raw_input: str,
    project: Optional[str] = None,
    tags: Optional[list[str]] = None,
    deleted_at: Optional[pendulum.DateTime] = None,
) -> Entry:
    """
    Build an entry with empty project and tags normalised to None, which is
    how they come back from the store.
    """
    return {
        "timestamp": timestamp,
        "description": description,
        "duration_minutes": duration_minutes,
        "raw_input": raw_input,
        "project": project or None,
        "tags": list(tags) if tags else None,
        "deleted_at": deleted_at,
    }


def is_deleted(entry: Entry) -> bool:
    return entry["deleted_at"] is not None
