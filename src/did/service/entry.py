# SPDX-License-Identifier: MIT

import logging
from typing import Optional, TypedDict

from did import time
from did.errors import EntryValidationError
from did.model.entry import (
    MAX_DURATION_MINUTES,
    Entry,
    IndexedEntry,
    is_deleted,
    new_entry,
)
from did.model.warning import ParseWarning
from did.query.filter import EntryFilter
from did.repository.entry import EntryRepository
from did.service.index import index_active, resolve_active
from did.service.parse import (
    build_raw_input,
    parse_duration,
    parse_project_and_tags,
    split_raw_input,
)
from did.service.retention import RetentionService, most_recently_deleted

logger = logging.getLogger(__name__)


class ListResult(TypedDict):
    entries: list[IndexedEntry]
    warnings: list[ParseWarning]
    total_minutes: int


class EntryService:
    def __init__(
        self,
        entry_repo: EntryRepository,
        retention: RetentionService,
        clock: time.Clock = time.now_utc,
    ) -> None:
        self.entry_repo = entry_repo
        self.retention = retention
        self.clock = clock

    def create(self, raw_input: str) -> Entry:
        """Log an entry from '<description> for <duration>'."""
        description, duration = split_raw_input(raw_input)
        clean_description, project, tags = parse_project_and_tags(description)
        if not clean_description:
            raise EntryValidationError("description cannot be empty")
        minutes = parse_duration(duration)

        entry = new_entry(
            timestamp=self.clock(),
            description=clean_description,
            duration_minutes=minutes,
            raw_input=raw_input,
            project=project,
            tags=tags,
        )
        self.entry_repo.append(entry)
        return entry

    def create_from_parts(
        self,
        description: str,
        duration_minutes: int,
        project: Optional[str] = None,
        tags: Optional[list[str]] = None,
    ) -> Entry:
        if not description:
            raise EntryValidationError("description cannot be empty")
        if duration_minutes <= 0 or duration_minutes > MAX_DURATION_MINUTES:
            raise EntryValidationError(
                f"invalid duration: must be 1-{MAX_DURATION_MINUTES} minutes"
            )

        entry = new_entry(
            timestamp=self.clock(),
            description=description,
            duration_minutes=duration_minutes,
            raw_input=build_raw_input(description, duration_minutes, project, tags),
            project=project,
            tags=tags,
        )
        self.entry_repo.append(entry)
        return entry

    def list_entries(
        self, entry_filter: Optional[EntryFilter] = None, deleted: bool = False
    ) -> ListResult:
        """
        Active entries in timestamp order, or with deleted=True the
        soft-deleted ones, which carry no active index.
        """
        result = self.entry_repo.read_all_with_warnings()

        if deleted:
            indexed: list[IndexedEntry] = [
                {"entry": entry, "active_index": 0, "storage_index": storage_index}
                for storage_index, entry in enumerate(result["entries"])
                if is_deleted(entry)
            ]
        else:
            indexed = index_active(result["entries"])
        if entry_filter is not None and not entry_filter.is_empty():
            indexed = [ie for ie in indexed if entry_filter.matches(ie["entry"])]
        indexed.sort(key=lambda ie: ie["entry"]["timestamp"])

        return {
            "entries": indexed,
            "warnings": result["warnings"],
            "total_minutes": sum(ie["entry"]["duration_minutes"] for ie in indexed),
        }

    def get_by_index(self, user_index: int) -> IndexedEntry:
        return resolve_active(user_index, self.entry_repo.read_all())

    def active_count(self) -> int:
        return len(self.entry_repo.read_active())

    def edit(
        self,
        user_index: int,
        description: Optional[str] = None,
        duration: Optional[str] = None,
    ) -> Entry:
        """
        Change the description (with its project and tags) and/or duration of
        an entry. The creation timestamp is kept and raw_input is rebuilt.
        """
        if not description and not duration:
            raise EntryValidationError("at least one change must be specified")

        indexed = resolve_active(user_index, self.entry_repo.read_all())
        entry = indexed["entry"].copy()

        if description:
            clean_description, project, tags = parse_project_and_tags(description)
            if not clean_description:
                raise EntryValidationError("description cannot be empty")
            entry["description"] = clean_description
            entry["project"] = project
            entry["tags"] = tags

        if duration:
            entry["duration_minutes"] = parse_duration(duration)

        entry["raw_input"] = build_raw_input(
            entry["description"],
            entry["duration_minutes"],
            entry["project"],
            entry["tags"],
        )

        self.entry_repo.rewrite_at(indexed["storage_index"], entry)
        logger.debug("edited entry %d", user_index)
        return entry

    def delete(self, user_index: int) -> Entry:
        indexed = resolve_active(user_index, self.entry_repo.read_all())
        return self.retention.soft_delete(indexed["storage_index"])

    def undo(self) -> Entry:
        """Restore the most recently deleted entry."""
        indexed = most_recently_deleted(self.entry_repo.read_all())
        return self.retention.restore(indexed["storage_index"])
