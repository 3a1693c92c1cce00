# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from did import time
from did.errors import TimerAlreadyRunningError
from did.terminal.errors import exit_on_error
from did.terminal.services import build_services
from did.view.views.entry import format_entry
from did.view.views.timer import (
    format_timer,
    timer_already_running_view,
    timer_status_view,
)


def start(
    words: Annotated[
        list[str],
        typer.Argument(help="what you are working on, may carry @project and #tags"),
    ],
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="replace a timer that is already running"),
    ] = False,
) -> None:
    """
    Start a timer. 'did stop' logs the elapsed time as an entry.
    """
    with exit_on_error():
        services = build_services()
        try:
            state, replaced = services["timer"].start(" ".join(words), force=force)
        except TimerAlreadyRunningError:
            running = services["timer"].status()
            if running is None:
                raise
            timer_already_running_view(running, time.now_utc())
            raise typer.Exit(1)

    typer.echo(f"Timer started: {format_timer(state)}")
    if replaced is not None:
        typer.echo("(Previous timer was overwritten)")


def stop() -> None:
    """
    Stop the running timer and log it as an entry.
    """
    with exit_on_error():
        entry = build_services()["timer"].stop()

    typer.echo(
        f"Stopped: {format_entry(entry)} ({time.duration_to_str(entry['duration_minutes'])})"
    )


def status() -> None:
    """
    Show the running timer and how long it has been going.
    """
    with exit_on_error():
        state = build_services()["timer"].status()

    if state is None:
        typer.echo("No timer running")
        typer.echo("Start a timer with: did start <description>")
        return
    timer_status_view(state, time.now_utc())
