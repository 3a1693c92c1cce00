# SPDX-License-Identifier: MIT

import json
from typing import Any, cast

from did import time
from did.errors import DecodeError
from did.model.entry import Entry, new_entry


def entry_to_dict(entry: Entry) -> dict[str, Any]:
    """
    Plain dict form of an entry in stored field order. Empty project, tags
    and deleted_at are left out.
    """
    serializable_entry: dict[str, Any] = {
        "timestamp": time.datetime_to_iso_str(entry["timestamp"]),
        "description": entry["description"],
        "duration_minutes": entry["duration_minutes"],
        "raw_input": entry["raw_input"],
    }
    if entry["project"]:
        serializable_entry["project"] = entry["project"]
    if entry["tags"]:
        serializable_entry["tags"] = list(entry["tags"])
    if entry["deleted_at"] is not None:
        serializable_entry["deleted_at"] = time.datetime_to_iso_str(
            entry["deleted_at"]
        )
    return serializable_entry


def encode_entry(entry: Entry) -> str:
    """
    Encode an entry as a single JSON line (without the trailing newline).

    Non-ASCII text is written as-is so it round-trips byte for byte in the
    UTF-8 store file; json.dumps escapes any newline inside strings.
    """
    return json.dumps(entry_to_dict(entry), ensure_ascii=False)


def is_utf8_text(value: str) -> bool:
    """False for strings holding lone surrogates, which UTF-8 cannot carry."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def decode_entry(line: str) -> Entry:
    try:
        raw_entry = json.loads(line)
    except json.JSONDecodeError as e:
        raise DecodeError(str(e)) from e

    if not isinstance(raw_entry, dict):
        raise DecodeError(f"expected a JSON object, got {type(raw_entry).__name__}")

    timestamp = __require(raw_entry, "timestamp", str)
    description = __require(raw_entry, "description", str)
    duration_minutes = __require(raw_entry, "duration_minutes", int)
    # bool is an int subclass
    if isinstance(duration_minutes, bool):
        raise DecodeError("field 'duration_minutes' must be an integer")
    raw_input = __optional(raw_entry, "raw_input", str) or ""
    project = __optional(raw_entry, "project", str)
    tags = __optional(raw_entry, "tags", list)
    if tags is not None and not all(isinstance(tag, str) for tag in tags):
        raise DecodeError("field 'tags' must be a list of strings")
    deleted_at = __optional(raw_entry, "deleted_at", str)

    # JSON escapes can spell lone surrogates that could never be written back
    texts = [description, raw_input, project or "", *(tags or [])]
    if not all(is_utf8_text(cast(str, text)) for text in texts):
        raise DecodeError("text contains invalid unicode (lone surrogate)")

    try:
        return new_entry(
            timestamp=time.datetime_from_iso_str(cast(str, timestamp)),
            description=cast(str, description),
            duration_minutes=cast(int, duration_minutes),
            raw_input=cast(str, raw_input),
            project=cast(str | None, project),
            tags=cast(list[str] | None, tags),
            deleted_at=time.datetime_from_iso_str_optional(
                cast(str | None, deleted_at)
            ),
        )
    except ValueError as e:
        raise DecodeError(str(e)) from e


def __require(raw_entry: dict[str, Any], key: str, kind: type) -> object:
    if key not in raw_entry:
        raise DecodeError(f"missing field '{key}'")
    value = raw_entry[key]
    if not isinstance(value, kind):
        raise DecodeError(f"field '{key}' must be of type {kind.__name__}")
    return value


def __optional(raw_entry: dict[str, Any], key: str, kind: type) -> object:
    value = raw_entry.get(key)
    if value is not None and not isinstance(value, kind):
        raise DecodeError(f"field '{key}' must be of type {kind.__name__}")
    return value
