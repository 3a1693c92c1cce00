# SPDX-License-Identifier: MIT

from collections.abc import Iterator
from contextlib import contextmanager

import typer

from did.errors import (
    DidError,
    EntryValidationError,
    IndexOutOfRangeError,
    NoDeletedEntriesError,
    NoEntriesError,
    NoTimerRunningError,
    StorageIOError,
)

HINTS: dict[type[Exception], str] = {
    IndexOutOfRangeError: "List entries with 'did list' to see available indices",
    NoEntriesError: "Create an entry first with 'did add <description> for <duration>'",
    NoDeletedEntriesError: "No entries to restore. Delete an entry first with 'did delete <index>'",
    EntryValidationError: "Usage: did add <description> for <duration>  (e.g. did add feature X for 2h)",
    NoTimerRunningError: "Start a timer with 'did start <description>'",
}


@contextmanager
def exit_on_error() -> Iterator[None]:
    """
    Report domain and storage errors on stderr and exit with status 1.
    """
    try:
        yield
    except (DidError, StorageIOError) as e:
        typer.echo(f"Error: {e}", err=True)
        hint = HINTS.get(type(e))
        if hint is not None:
            typer.echo(f"Hint: {hint}", err=True)
        raise typer.Exit(1)
