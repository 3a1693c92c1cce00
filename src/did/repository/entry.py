# SPDX-License-Identifier: MIT

import logging
import os
import tempfile
from pathlib import Path

from did.errors import EntryValidationError, StorageIOError
from did.model.entry import Entry, is_deleted
from did.model.warning import ReadResult, StorageHealth
from did.repository.codec import encode_entry
from did.repository.reader import check_storage, read_entries

logger = logging.getLogger(__name__)

FILE_MODE = 0o644


def atomic_write(path: Path, data: bytes) -> None:
    """
    Replace the file at path with data, all or nothing.

    The data goes to a temporary file in the same directory, is fsynced and
    then renamed over path. A failure before the rename leaves path
    untouched and removes the temporary file.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="wb",
            delete=False,
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            try:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            except BaseException:
                f.close()
                tmp_path.unlink(missing_ok=True)
                raise
    except OSError as e:
        raise StorageIOError(f"failed to write ({e})", path) from e

    try:
        os.chmod(tmp_path, FILE_MODE)
        os.replace(tmp_path, path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise StorageIOError(f"failed to replace ({e})", path) from e


class EntryRepository:
    def __init__(self, path: Path) -> None:
        self.path = path

    def append(self, entry: Entry) -> None:
        line = _encode_lines([entry])
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(
                self.path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, FILE_MODE
            )
            with os.fdopen(fd, "wb") as f:
                f.write(line)
        except OSError as e:
            raise StorageIOError(f"failed to save entry ({e})", self.path) from e
        logger.debug("appended entry to %s", self.path)

    def read_all_with_warnings(self) -> ReadResult:
        return read_entries(self.path)

    def read_all(self) -> list[Entry]:
        return self.read_all_with_warnings()["entries"]

    def read_active(self) -> list[Entry]:
        return [entry for entry in self.read_all() if not is_deleted(entry)]

    def rewrite_at(self, storage_index: int, entry: Entry) -> None:
        """
        Replace the entry at the 0-based storage index (tombstones included)
        and commit the whole file.
        """
        result = self.read_all_with_warnings()
        entries = result["entries"]
        if result["warnings"]:
            logger.warning(
                "rewriting %s drops %d corrupted line(s)",
                self.path,
                len(result["warnings"]),
            )
        if storage_index < 0 or storage_index >= len(entries):
            raise IndexError(
                f"storage index {storage_index} out of bounds"
                f" (file holds {len(entries)} entries)"
            )
        entries[storage_index] = entry
        self.commit(entries)

    def commit(self, entries: list[Entry]) -> None:
        atomic_write(self.path, _encode_lines(entries))
        logger.debug("committed %d entries to %s", len(entries), self.path)

    def check(self) -> StorageHealth:
        return check_storage(self.path)


def _encode_lines(entries: list[Entry]) -> bytes:
    data = "".join(encode_entry(entry) + "\n" for entry in entries)
    try:
        return data.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EntryValidationError(
            f"entry text is not valid UTF-8 ({e.reason})"
        ) from e
