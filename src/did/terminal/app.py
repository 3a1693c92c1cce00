# SPDX-License-Identifier: MIT

import logging
from typing import Annotated

import typer

from did import configuration
from did.repository.configuration import ConfigurationRepository
from did.terminal import backup, export
from did.terminal import configuration as configuration_commands
from did.terminal.custom_typer import OrderedTyperGroup
from did.terminal.entry import add, delete, edit, list_entries, purge, undo, validate
from did.terminal.errors import exit_on_error
from did.terminal.timer import start, status, stop
from did.view import state as view_state

app = typer.Typer(
    cls=OrderedTyperGroup,
    help="did - a personal log of what you did and for how long",
    no_args_is_help=True,
)
app.command(name="add, a")(add)
app.command(name="list, ls")(list_entries)
app.command(name="edit, e")(edit)
app.command(name="delete, d")(delete)
app.command(name="undo, u")(undo)
app.command(name="purge, p")(purge)
app.command(name="start")(start)
app.command(name="stop")(stop)
app.command(name="status")(status)
app.add_typer(
    export.app, name="export, x", help="Write entries as JSON or CSV to stdout"
)
app.add_typer(backup.app, name="backup, b", help="Manage backups of the entries file")
app.command(name="validate, v")(validate)
app.add_typer(
    configuration_commands.app, name="config, c", help="View and change settings"
)


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log storage operations to stderr"),
    ] = False,
) -> None:
    """
    did - a personal log of what you did and for how long

    Global options that apply to all commands.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    with exit_on_error():
        config = ConfigurationRepository(configuration.APP_CONFIG_PATH).get_config()
    view_state.set_show_header(config["show_header"] and not no_header)
    view_state.set_display_tz(config["timezone"])


def run() -> None:
    app()
