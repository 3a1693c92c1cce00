# SPDX-License-Identifier: MIT

from did.errors import IndexOutOfRangeError, InvalidIndexError, NoEntriesError
from did.model.entry import Entry, IndexedEntry, is_deleted


def index_active(entries: list[Entry]) -> list[IndexedEntry]:
    """
    Number the non-deleted entries 1..N in file order, keeping each one's
    position in the full sequence.
    """
    indexed: list[IndexedEntry] = []
    for storage_index, entry in enumerate(entries):
        if is_deleted(entry):
            continue
        indexed.append(
            {
                "entry": entry,
                "active_index": len(indexed) + 1,
                "storage_index": storage_index,
            }
        )
    return indexed


def resolve_active(user_index: int, entries: list[Entry]) -> IndexedEntry:
    if user_index < 1:
        raise InvalidIndexError(user_index)

    active_count = 0
    for storage_index, entry in enumerate(entries):
        if is_deleted(entry):
            continue
        active_count += 1
        if active_count == user_index:
            return {
                "entry": entry,
                "active_index": active_count,
                "storage_index": storage_index,
            }

    if active_count == 0:
        raise NoEntriesError()
    raise IndexOutOfRangeError(user_index, active_count)
