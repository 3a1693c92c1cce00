# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from did.terminal.custom_typer import AliasedTyperGroup
from did.terminal.errors import exit_on_error
from did.terminal.services import build_services
from did.view.views.backup import backups_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("list, l")
def list_backups() -> None:
    """Show available backups, most recent first."""
    with exit_on_error():
        backups = build_services()["backup_repo"].list_backups()

    if not backups:
        typer.echo("No backups available")
        return
    backups_view(backups)


@app.command("create, c")
def create() -> None:
    """Snapshot the entries file into backup slot 1."""
    with exit_on_error():
        backup = build_services()["backup_repo"].create_backup()

    if backup is None:
        typer.echo("Nothing to back up yet")
        return
    typer.echo(f"Created backup {backup['number']}: {backup['path']}")


@app.command("restore, r")
def restore(
    slot: Annotated[int, typer.Argument(help="backup number, 1 is the most recent")] = 1,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="skip confirmation prompt")
    ] = False,
) -> None:
    """
    Replace the entries file with a backup. The current file is backed up first.
    """
    if not yes and not typer.confirm(f"Replace all entries with backup {slot}?"):
        typer.echo("Restore cancelled")
        return

    with exit_on_error():
        build_services()["backup_repo"].restore_backup(slot)

    typer.echo(f"Successfully restored from backup {slot}")
