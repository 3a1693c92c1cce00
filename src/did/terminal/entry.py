# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from did.errors import NoEntriesError
from did.query.filter import EntryFilter
from did.terminal.errors import exit_on_error
from did.terminal.parse import parse_date
from did.terminal.services import build_services
from did.time import duration_to_str
from did.view.views.entry import (
    entries_view,
    format_entry,
    single_entry_report,
    storage_health_view,
    warnings_view,
)


def add(
    words: Annotated[
        list[str],
        typer.Argument(
            help="'<description> for <duration>', e.g. fix login bug @acme #bugfix for 1h30m"
        ),
    ],
) -> None:
    """
    Log what you did and for how long.
    """
    with exit_on_error():
        services = build_services()
        entry = services["entry"].create(" ".join(words))

    typer.echo(
        f"Logged: {format_entry(entry)} ({duration_to_str(entry['duration_minutes'])})"
    )


def list_entries(
    project: Annotated[
        Optional[str], typer.Option("--project", "-p", help="only this project")
    ] = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-t", help="accepts multiple tag options"),
    ] = None,
    search: Annotated[
        Optional[str],
        typer.Option("--search", "-s", help="keyword in the description"),
    ] = None,
    start: Annotated[
        Optional[str],
        typer.Option("--from", "-f", help="first day, YYYY-MM-DD"),
    ] = None,
    end: Annotated[
        Optional[str],
        typer.Option("--to", help="last day, YYYY-MM-DD"),
    ] = None,
    deleted: Annotated[
        bool,
        typer.Option("--deleted", help="show soft-deleted entries instead"),
    ] = False,
) -> None:
    """
    List active entries with the index used by edit and delete.
    """
    with exit_on_error():
        services = build_services()
        entry_filter = EntryFilter(
            project=project,
            tags=tags,
            keyword=search,
            start=parse_date(start, services["config"]["timezone"]),
            end=parse_date(end, services["config"]["timezone"]),
            tz=services["config"]["timezone"],
        )
        result = services["entry"].list_entries(entry_filter, deleted=deleted)

    warnings_view(result["warnings"])

    report_name = "deleted entries" if deleted else "entries"
    if not entry_filter.is_empty():
        report_name += f" ({entry_filter.describe()})"

    if not result["entries"]:
        typer.echo(f"No {report_name} found")
        return

    entries_view(report_name, result["entries"], result["total_minutes"])


def edit(
    index: Annotated[int, typer.Argument(help="index shown by 'did list'")],
    description: Annotated[
        Optional[str],
        typer.Option("--description", "-d", help="new text, may carry @project and #tags"),
    ] = None,
    duration: Annotated[
        Optional[str],
        typer.Option("--duration", "-D", help="new duration: Xh, Xm or XhYm"),
    ] = None,
) -> None:
    """
    Change the description and/or duration of an entry.
    """
    with exit_on_error():
        services = build_services()
        entry = services["entry"].edit(index, description, duration)

    typer.echo(
        f"Updated entry {index}: {format_entry(entry)}"
        f" ({duration_to_str(entry['duration_minutes'])})"
    )


def delete(
    index: Annotated[int, typer.Argument(help="index shown by 'did list'")],
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="skip confirmation prompt")
    ] = False,
) -> None:
    """
    Delete an entry. It stays recoverable with 'did undo' for the retention window.
    """
    with exit_on_error():
        services = build_services()
        try:
            indexed = services["entry"].get_by_index(index)
        except NoEntriesError:
            typer.echo("Error: No entries to delete", err=True)
            raise typer.Exit(1)

    single_entry_report("entry to delete", indexed["entry"])

    if not yes and not typer.confirm("Delete this entry?"):
        typer.echo("Deletion cancelled")
        return

    with exit_on_error():
        deleted = services["entry"].delete(index)

    typer.echo(
        f"Deleted: {deleted['description']} ({duration_to_str(deleted['duration_minutes'])})"
    )
    typer.echo("Tip: Use 'did undo' to recover this entry if needed")


def undo() -> None:
    """
    Restore the most recently deleted entry.
    """
    with exit_on_error():
        services = build_services()
        restored = services["entry"].undo()

    typer.echo(
        f"Restored: {format_entry(restored)} ({duration_to_str(restored['duration_minutes'])})"
    )


def purge(
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="skip confirmation prompt")
    ] = False,
) -> None:
    """
    Permanently remove all deleted entries. A backup is taken first.
    """
    if not yes and not typer.confirm(
        "Permanently delete all soft-deleted entries? This cannot be undone."
    ):
        typer.echo("Purge cancelled")
        return

    with exit_on_error():
        services = build_services()
        count = services["retention"].purge_all()

    if count == 0:
        typer.echo("No deleted entries to purge")
    elif count == 1:
        typer.echo("Purged 1 entry")
    else:
        typer.echo(f"Purged {count} entries")


def validate() -> None:
    """
    Check the storage file for corrupted lines.
    """
    with exit_on_error():
        services = build_services()
        health = services["entry_repo"].check()

    storage_health_view(health)
    warnings_view(health["warnings"])
    if health["corrupted_entries"]:
        typer.echo(
            "Hint: 'did backup list' shows snapshots that can be restored", err=True
        )
        raise typer.Exit(1)
