# SPDX-License-Identifier: MIT

from typing import TypedDict

from did.model.entry import Entry


class ParseWarning(TypedDict):
    line_number: int  # 1-based over non-blank lines
    content: str  # Raw line, untruncated
    error: str


class ReadResult(TypedDict):
    entries: list[Entry]
    warnings: list[ParseWarning]


class StorageHealth(TypedDict):
    total_lines: int
    valid_entries: int
    corrupted_entries: int
    warnings: list[ParseWarning]
