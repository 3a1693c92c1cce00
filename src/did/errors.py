# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional


class DidError(Exception):
    """Base class for errors surfaced to the user."""

    pass


class DecodeError(DidError):
    """Raised when a single stored line is not a valid entry."""

    pass


class StorageIOError(OSError):
    """Raised when the store file cannot be read or written."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class InvalidIndexError(DidError):
    def __init__(self, index: int) -> None:
        super().__init__(f"index must be 1 or greater (got {index})")
        self.index = index


class IndexOutOfRangeError(DidError):
    def __init__(self, index: int, active_count: int) -> None:
        super().__init__(
            f"index {index} out of range: valid range is 1-{active_count}"
        )
        self.index = index
        self.active_count = active_count


class NoEntriesError(DidError):
    def __init__(self) -> None:
        super().__init__("no entries found")


class NoDeletedEntriesError(DidError):
    def __init__(self) -> None:
        super().__init__("no deleted entries to restore")


class NoSuchBackupError(DidError):
    def __init__(self, slot: int, message: Optional[str] = None) -> None:
        super().__init__(message or f"backup {slot} does not exist")
        self.slot = slot


class EntryValidationError(DidError):
    """Raised when entry input cannot be turned into a valid entry."""

    pass


class ConfigurationError(DidError):
    pass


class TimerAlreadyRunningError(DidError):
    def __init__(self, description: str) -> None:
        super().__init__(f"a timer is already running: {description}")
        self.description = description


class NoTimerRunningError(DidError):
    def __init__(self) -> None:
        super().__init__("no timer is running")


class TimerStateError(DidError):
    """Raised when the timer state file exists but cannot be understood."""

    pass
