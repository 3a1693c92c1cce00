# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from did import configuration
from did.repository.configuration import ConfigurationRepository
from did.terminal.custom_typer import AliasedTyperGroup
from did.terminal.errors import exit_on_error

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    with exit_on_error():
        config = ConfigurationRepository(configuration.APP_CONFIG_PATH).get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("config_file", str(configuration.APP_CONFIG_PATH))
    table.add_row("entries_file", str(configuration.entries_path(config)))
    table.add_row("data_path", config["data_path"] or "None")
    table.add_row("retention_days", str(config["retention_days"]))
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("timezone", config["timezone"])

    console.print(table)


@app.command("set, s")
def set(
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory for entries.jsonl (default: the config directory)",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the config directory",
        ),
    ] = False,
    retention_days: Annotated[
        Optional[int],
        typer.Option(
            "--retention-days",
            help="Days deleted entries are kept before automatic purge",
        ),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable report headers",
        ),
    ] = None,
    timezone: Annotated[
        Optional[str],
        typer.Option(
            "--timezone",
            help="'local' or an IANA timezone name for display",
        ),
    ] = None,
) -> None:
    """
    Update configuration settings.
    """
    with exit_on_error():
        repository = ConfigurationRepository(configuration.APP_CONFIG_PATH)
        repository.update_config(
            data_path=data_path,
            remove_data_path=remove_data_path,
            retention_days=retention_days,
            show_header=show_header,
            timezone=timezone,
        )
        repository.flush()

    typer.echo("Configuration updated")
