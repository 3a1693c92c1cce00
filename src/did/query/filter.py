# SPDX-License-Identifier: MIT

from typing import Any, Optional

import pendulum

from did.model.entry import Entry
from did.time import datetime_to_local_date


class EntryFilter:
    """
    Match entries on project, tags, a description keyword and an inclusive
    range of local calendar days. Unset criteria match everything.
    """

    def __init__(
        self,
        project: Optional[str] = None,
        tags: Optional[list[str]] = None,
        keyword: Optional[str] = None,
        start: Optional[pendulum.Date] = None,
        end: Optional[pendulum.Date] = None,
        tz: str = "local",
    ) -> None:
        self.project = project.lstrip("@") if project else None
        self.tags = [tag.lstrip("#") for tag in tags] if tags else []
        self.keyword = keyword
        self.start = start
        self.end = end
        self.tz = tz

    def is_empty(self) -> bool:
        return (
            self.project is None
            and not self.tags
            and not self.keyword
            and self.start is None
            and self.end is None
        )

    def matches(self, entry: Entry) -> bool:
        if self.project is not None:
            if (entry["project"] or "").lower() != self.project.lower():
                return False

        if self.tags:
            entry_tags = {tag.lower() for tag in entry["tags"] or []}
            if not all(tag.lower() in entry_tags for tag in self.tags):
                return False

        if self.keyword:
            if self.keyword.lower() not in entry["description"].lower():
                return False

        if self.start is not None or self.end is not None:
            day = datetime_to_local_date(entry["timestamp"], self.tz)
            if self.start is not None and day < self.start:
                return False
            if self.end is not None and day > self.end:
                return False

        return True

    def describe(self) -> str:
        """Short label for report headers, e.g. '@acme #bugfix "deploy"'."""
        parts = []
        if self.project is not None:
            parts.append(f"@{self.project}")
        parts.extend(f"#{tag}" for tag in self.tags)
        if self.keyword:
            parts.append(f'"{self.keyword}"')
        if self.start is not None or self.end is not None:
            start = self.start.to_date_string() if self.start else "..."
            end = self.end.to_date_string() if self.end else "..."
            parts.append(f"{start} to {end}")
        return " ".join(parts)

    def criteria(self) -> dict[str, Any]:
        criteria: dict[str, Any] = {}
        if self.project is not None:
            criteria["project"] = self.project
        if self.tags:
            criteria["tags"] = list(self.tags)
        if self.keyword:
            criteria["keyword"] = self.keyword
        if self.start is not None:
            criteria["from"] = self.start.to_date_string()
        if self.end is not None:
            criteria["to"] = self.end.to_date_string()
        return criteria
