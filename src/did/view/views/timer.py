# SPDX-License-Identifier: MIT

import pendulum
import typer

from did.model.timer import TimerState
from did.service.timer import elapsed_minutes
from did.time import duration_to_str
from did.view.state import get_display_tz
from did.view.views.entry import format_project_and_tags


def format_timer(state: TimerState) -> str:
    metadata = format_project_and_tags(state["project"], state["tags"])
    if not metadata:
        return state["description"]
    return f"{state['description']} [{metadata}]"


def format_started(state: TimerState, now: pendulum.DateTime) -> str:
    """'today at 3:04 PM' or 'Mon Jan 2 at 3:04 PM' in the display timezone."""
    tz = get_display_tz()
    started = state["started_at"].in_tz(tz)
    started_time = started.format("h:mm A")
    if started.date() == now.in_tz(tz).date():
        return f"today at {started_time}"
    return f"{started.format('ddd MMM D')} at {started_time}"


def timer_status_view(state: TimerState, now: pendulum.DateTime) -> None:
    typer.echo("Timer running:")
    typer.echo(f"  {format_timer(state)}")
    typer.echo(f"  Started: {format_started(state, now)}")
    typer.echo(f"  Elapsed: {duration_to_str(elapsed_minutes(state, now))}")


def timer_already_running_view(state: TimerState, now: pendulum.DateTime) -> None:
    typer.echo("Warning: A timer is already running", err=True)
    typer.echo(f"Current timer: {format_timer(state)}", err=True)
    typer.echo(
        f"Started: {duration_to_str(elapsed_minutes(state, now))} ago", err=True
    )
    typer.echo("", err=True)
    typer.echo("Options:", err=True)
    typer.echo("  - Stop the current timer with 'did stop'", err=True)
    typer.echo("  - Override with 'did start <description> --force'", err=True)
