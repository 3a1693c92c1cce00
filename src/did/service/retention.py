# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from did import time
from did.errors import NoDeletedEntriesError
from did.model.entry import Entry, IndexedEntry, is_deleted
from did.repository.backup import BackupRepository
from did.repository.entry import EntryRepository

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_DAYS = 7


def most_recently_deleted(entries: list[Entry]) -> IndexedEntry:
    """
    Find the tombstone with the latest deleted_at. On a tie the later file
    position wins.
    """
    found: Optional[IndexedEntry] = None
    for storage_index, entry in enumerate(entries):
        deleted_at = entry["deleted_at"]
        if deleted_at is None:
            continue
        if found is None or deleted_at >= found["entry"]["deleted_at"]:  # type: ignore[operator]
            found = {
                "entry": entry,
                "active_index": 0,
                "storage_index": storage_index,
            }
    if found is None:
        raise NoDeletedEntriesError()
    return found


def without_expired(
    entries: list[Entry],
    now: pendulum.DateTime,
    retention: pendulum.Duration,
) -> list[Entry]:
    cutoff = now - retention
    return [
        entry
        for entry in entries
        if entry["deleted_at"] is None or entry["deleted_at"] >= cutoff
    ]


def without_deleted(entries: list[Entry]) -> list[Entry]:
    return [entry for entry in entries if not is_deleted(entry)]


class RetentionService:
    def __init__(
        self,
        entry_repo: EntryRepository,
        backup_repo: BackupRepository,
        clock: time.Clock = time.now_utc,
        retention: Optional[pendulum.Duration] = None,
    ) -> None:
        self.entry_repo = entry_repo
        self.backup_repo = backup_repo
        self.clock = clock
        self.retention = retention or pendulum.duration(days=DEFAULT_RETENTION_DAYS)

    def soft_delete(self, storage_index: int) -> Entry:
        entries = self.entry_repo.read_all()
        if storage_index < 0 or storage_index >= len(entries):
            raise IndexError(f"storage index {storage_index} out of bounds")

        deleted = entries[storage_index].copy()
        deleted["deleted_at"] = self.clock()
        self.entry_repo.rewrite_at(storage_index, deleted)
        logger.debug("soft deleted entry at storage index %d", storage_index)

        # Cleanup of old tombstones must not fail the delete itself
        try:
            self.purge_expired()
        except Exception:
            logger.warning("cleanup of expired deleted entries failed", exc_info=True)

        return deleted

    def restore(self, storage_index: int) -> Entry:
        entries = self.entry_repo.read_all()
        if storage_index < 0 or storage_index >= len(entries):
            raise IndexError(f"storage index {storage_index} out of bounds")

        restored = entries[storage_index].copy()
        restored["deleted_at"] = None
        self.entry_repo.rewrite_at(storage_index, restored)
        logger.debug("restored entry at storage index %d", storage_index)
        return restored

    def purge_expired(self, entries: Optional[list[Entry]] = None) -> int:
        """
        Permanently remove tombstones older than the retention window.

        Returns the number of entries removed; the file is only rewritten
        when that number is non-zero.
        """
        if entries is None:
            entries = self.entry_repo.read_all()
        kept = without_expired(entries, self.clock(), self.retention)
        removed = len(entries) - len(kept)
        if removed:
            self.entry_repo.commit(kept)
            logger.debug("purged %d expired deleted entries", removed)
        return removed

    def purge_all(self, entries: Optional[list[Entry]] = None) -> int:
        if entries is None:
            entries = self.entry_repo.read_all()
        kept = without_deleted(entries)
        removed = len(entries) - len(kept)
        if removed:
            self.backup_repo.create_backup()
            self.entry_repo.commit(kept)
            logger.debug("purged %d deleted entries", removed)
        return removed
