# SPDX-License-Identifier: MIT

from typing import Annotated, Any, Optional

import typer

from did import time
from did.model.entry import Entry
from did.query.filter import EntryFilter
from did.service.export import export_csv, export_json
from did.terminal.custom_typer import AliasedTyperGroup
from did.terminal.errors import exit_on_error
from did.terminal.parse import parse_date
from did.terminal.services import build_services
from did.view.views.entry import warnings_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

ProjectOption = Annotated[
    Optional[str], typer.Option("--project", "-p", help="only this project")
]
TagOption = Annotated[
    Optional[list[str]],
    typer.Option("--tag", "-t", help="accepts multiple tag options"),
]
SearchOption = Annotated[
    Optional[str], typer.Option("--search", "-s", help="keyword in the description")
]
FromOption = Annotated[
    Optional[str], typer.Option("--from", "-f", help="first day, YYYY-MM-DD")
]
ToOption = Annotated[Optional[str], typer.Option("--to", help="last day, YYYY-MM-DD")]
LastOption = Annotated[
    Optional[int],
    typer.Option("--last", "-l", min=1, help="only the last N days, today included"),
]


def __load_entries(
    project: Optional[str],
    tags: Optional[list[str]],
    search: Optional[str],
    start: Optional[str],
    end: Optional[str],
    last: Optional[int],
) -> tuple[list[Entry], dict[str, Any], str]:
    if last is not None and (start is not None or end is not None):
        typer.echo("Error: Cannot use --last with --from or --to", err=True)
        typer.echo("Use either --last N or --from/--to, not both", err=True)
        raise typer.Exit(1)

    with exit_on_error():
        services = build_services()
        tz = services["config"]["timezone"]
        if last is not None:
            end_date = time.now_utc().in_tz(tz).date()
            start_date = end_date.subtract(days=last - 1)
        else:
            start_date = parse_date(start, tz)
            end_date = parse_date(end, tz)

        entry_filter = EntryFilter(
            project=project,
            tags=tags,
            keyword=search,
            start=start_date,
            end=end_date,
            tz=tz,
        )
        result = services["entry"].list_entries(entry_filter)

    warnings_view(result["warnings"])

    criteria = entry_filter.criteria()
    if last is not None:
        criteria.pop("from", None)
        criteria.pop("to", None)
        criteria["last_days"] = last
    return [ie["entry"] for ie in result["entries"]], criteria, tz


@app.command("json, j")
def json_export(
    project: ProjectOption = None,
    tags: TagOption = None,
    search: SearchOption = None,
    start: FromOption = None,
    end: ToOption = None,
    last: LastOption = None,
) -> None:
    """
    Write active entries as JSON to stdout, with export metadata.
    """
    entries, criteria, _ = __load_entries(project, tags, search, start, end, last)
    typer.echo(export_json(entries, criteria, time.now_utc()), nl=False)


@app.command("csv, c")
def csv_export(
    project: ProjectOption = None,
    tags: TagOption = None,
    search: SearchOption = None,
    start: FromOption = None,
    end: ToOption = None,
    last: LastOption = None,
) -> None:
    """
    Write active entries as CSV to stdout.
    """
    entries, _, tz = __load_entries(project, tags, search, start, end, last)
    typer.echo(export_csv(entries, tz), nl=False)
