# SPDX-License-Identifier: MIT

from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from did.model.entry import Entry, IndexedEntry
from did.model.warning import ParseWarning, StorageHealth
from did.repository.reader import format_warning
from did.time import (
    datetime_to_display_local_datetime_str,
    datetime_to_display_local_datetime_str_optional,
    datetime_to_display_local_time_str,
    datetime_to_local_date,
    duration_to_str,
)
from did.view.state import get_display_tz
from did.view.views.header import header


def format_project_and_tags(project: Optional[str], tags: Optional[list[str]]) -> str:
    parts = []
    if project:
        parts.append(f"@{project}")
    parts.extend(f"#{tag}" for tag in tags or [])
    return " ".join(parts)


def format_entry(entry: Entry) -> str:
    """'description' or 'description [@project #tag]'"""
    metadata = format_project_and_tags(entry["project"], entry["tags"])
    if not metadata:
        return entry["description"]
    return f"{entry['description']} [{metadata}]"


def warnings_view(warnings: list[ParseWarning]) -> None:
    """Report corrupted store lines on stderr."""
    if not warnings:
        return
    typer.echo(
        f"Warning: Found {len(warnings)} corrupted line(s) in storage file:",
        err=True,
    )
    for warning in warnings:
        typer.echo(format_warning(warning), err=True)
    typer.echo("", err=True)


def entries_view(
    report_name: str, entries: list[IndexedEntry], total_minutes: int
) -> None:
    header(report_name)

    tz = get_display_tz()
    # Only show the date column when entries span several days
    days = {datetime_to_local_date(ie["entry"]["timestamp"], tz) for ie in entries}
    show_date = len(days) > 1
    show_deleted = any(ie["entry"]["deleted_at"] is not None for ie in entries)

    entries_table = Table(box=box.SIMPLE)
    entries_table.add_column("id", justify="right")
    entries_table.add_column("when" if show_date else "time")
    entries_table.add_column("description")
    entries_table.add_column("project")
    entries_table.add_column("tags")
    entries_table.add_column("duration", justify="right")
    if show_deleted:
        entries_table.add_column("deleted")

    for ie in entries:
        entry = ie["entry"]
        if show_date:
            when = datetime_to_display_local_datetime_str(entry["timestamp"], tz)
        else:
            when = datetime_to_display_local_time_str(entry["timestamp"], tz)
        row = [
            str(ie["active_index"]) if ie["active_index"] else "-",
            when,
            escape(entry["description"]),
            escape(entry["project"] or ""),
            escape(" ".join(f"#{tag}" for tag in entry["tags"] or [])),
            duration_to_str(entry["duration_minutes"]),
        ]
        if show_deleted:
            row.append(
                datetime_to_display_local_datetime_str_optional(entry["deleted_at"], tz)
                or ""
            )
        entries_table.add_row(*row)

    console = Console()
    console.print(entries_table)
    console.print(f" Total: {duration_to_str(total_minutes)}")


def single_entry_report(report_name: str, entry: Entry) -> None:
    header(report_name)
    tz = get_display_tz()

    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    entry_table.add_row("description", escape(entry["description"]))
    entry_table.add_row("duration", duration_to_str(entry["duration_minutes"]))
    entry_table.add_row("project", escape(entry["project"] or ""))
    entry_table.add_row(
        "tags", escape(" ".join(f"#{tag}" for tag in entry["tags"] or []))
    )
    entry_table.add_row(
        "timestamp", datetime_to_display_local_datetime_str(entry["timestamp"], tz)
    )
    entry_table.add_row(
        "deleted",
        datetime_to_display_local_datetime_str_optional(entry["deleted_at"], tz) or "",
    )
    entry_table.add_row("raw input", escape(entry["raw_input"]))

    console = Console()
    console.print(entry_table)


def storage_health_view(health: StorageHealth) -> None:
    header("storage health")

    health_table = Table(box=box.SIMPLE)
    health_table.add_column("metric")
    health_table.add_column("value", justify="right")
    health_table.add_row("total lines", str(health["total_lines"]))
    health_table.add_row("valid entries", str(health["valid_entries"]))
    health_table.add_row("corrupted entries", str(health["corrupted_entries"]))

    console = Console()
    console.print(health_table)
