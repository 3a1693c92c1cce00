# SPDX-License-Identifier: MIT

import logging
import shutil
from pathlib import Path
from typing import Optional

import pendulum

from did.errors import NoSuchBackupError, StorageIOError
from did.model.backup import BackupInfo
from did.repository.entry import atomic_write

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".bak"
MAX_BACKUP_COUNT = 3


class BackupRepository:
    """
    Rotating snapshots of the store file.

    Slots live next to the store as ``<store>.bak.1`` to ``<store>.bak.N``;
    slot 1 is always the most recent and the oldest slot is dropped when a
    new snapshot is taken.
    """

    def __init__(self, storage_path: Path, max_count: int = MAX_BACKUP_COUNT) -> None:
        self.storage_path = storage_path
        self.max_count = max_count

    def backup_path(self, slot: int) -> Path:
        return self.storage_path.with_name(
            f"{self.storage_path.name}{BACKUP_SUFFIX}.{slot}"
        )

    def create_backup(self) -> Optional[BackupInfo]:
        if not self.storage_path.is_file():
            return None

        try:
            self.__rotate()
            shutil.copyfile(self.storage_path, self.backup_path(1))
        except OSError as e:
            raise StorageIOError(
                f"failed to create backup ({e})", self.storage_path
            ) from e

        logger.debug("backed up %s to slot 1", self.storage_path)
        return self.__backup_info(1)

    def list_backups(self) -> list[BackupInfo]:
        return [
            self.__backup_info(slot)
            for slot in range(1, self.max_count + 1)
            if self.backup_path(slot).is_file()
        ]

    def restore_backup(self, slot: int = 1) -> None:
        """
        Copy the given slot over the store file.

        The current store is itself backed up first, so the restore can be
        undone by restoring slot 2 afterwards.
        """
        if slot < 1 or slot > self.max_count:
            raise NoSuchBackupError(
                slot,
                f"invalid backup number {slot}, must be between 1 and {self.max_count}",
            )

        backup_path = self.backup_path(slot)
        try:
            # Read before rotating, rotation moves the slot's file
            data = backup_path.read_bytes()
        except FileNotFoundError:
            raise NoSuchBackupError(slot) from None
        except OSError as e:
            raise StorageIOError(f"failed to read backup ({e})", backup_path) from e

        self.create_backup()
        atomic_write(self.storage_path, data)
        logger.debug("restored %s from slot %d", self.storage_path, slot)

    def __rotate(self) -> None:
        self.backup_path(self.max_count).unlink(missing_ok=True)
        for slot in range(self.max_count - 1, 0, -1):
            current = self.backup_path(slot)
            if current.exists():
                current.replace(self.backup_path(slot + 1))

    def __backup_info(self, slot: int) -> BackupInfo:
        path = self.backup_path(slot)
        return {
            "number": slot,
            "path": path,
            "modified": pendulum.from_timestamp(path.stat().st_mtime),
        }
