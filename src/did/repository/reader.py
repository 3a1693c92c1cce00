# SPDX-License-Identifier: MIT

import logging
from pathlib import Path

from did.errors import DecodeError, StorageIOError
from did.model.warning import ParseWarning, ReadResult, StorageHealth
from did.repository.codec import decode_entry

logger = logging.getLogger(__name__)

WARNING_CONTENT_MAX_LENGTH = 50


def read_entries(path: Path) -> ReadResult:
    """
    Decode every line of the store file independently.

    Lines that fail to decode are collected as warnings and never stop the
    read. Blank lines are skipped and do not count towards line numbers. A
    missing file reads as empty.
    """
    result: ReadResult = {"entries": [], "warnings": []}

    try:
        data = path.read_bytes()
    except FileNotFoundError:
        return result
    except OSError as e:
        raise StorageIOError(f"failed to read entries ({e})", path) from e

    line_number = 0
    # Split on LF only, U+2028 may legally appear inside JSON strings
    for raw_line in data.split(b"\n"):
        if not raw_line.strip():
            continue
        line_number += 1
        try:
            line = raw_line.decode("utf-8").strip()
        except UnicodeDecodeError as e:
            result["warnings"].append(
                {
                    "line_number": line_number,
                    "content": raw_line.decode("utf-8", errors="replace").strip(),
                    "error": f"invalid UTF-8: {e.reason}",
                }
            )
            continue
        try:
            result["entries"].append(decode_entry(line))
        except DecodeError as e:
            result["warnings"].append(
                {"line_number": line_number, "content": line, "error": str(e)}
            )

    if result["warnings"]:
        logger.debug(
            "%s: %d corrupted line(s) skipped", path, len(result["warnings"])
        )
    return result


def check_storage(path: Path) -> StorageHealth:
    result = read_entries(path)
    valid = len(result["entries"])
    corrupted = len(result["warnings"])
    return {
        "total_lines": valid + corrupted,
        "valid_entries": valid,
        "corrupted_entries": corrupted,
        "warnings": result["warnings"],
    }


def format_warning_content(warning: ParseWarning) -> str:
    content = warning["content"]
    if len(content) > WARNING_CONTENT_MAX_LENGTH:
        content = content[: WARNING_CONTENT_MAX_LENGTH - 3] + "..."
    return content


def format_warning(warning: ParseWarning) -> str:
    return (
        f"  Line {warning['line_number']}: {format_warning_content(warning)}"
        f" (error: {warning['error']})"
    )
