# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from did.model.backup import BackupInfo
from did.time import datetime_to_display_local_datetime_str
from did.view.state import get_display_tz
from did.view.views.header import header


def backups_view(backups: list[BackupInfo]) -> None:
    header("backups")
    tz = get_display_tz()

    backups_table = Table(box=box.SIMPLE)
    backups_table.add_column("slot", justify="right")
    backups_table.add_column("taken")
    backups_table.add_column("path")

    for backup in backups:
        slot = str(backup["number"])
        if backup["number"] == 1:
            slot += " (most recent)"
        backups_table.add_row(
            slot,
            datetime_to_display_local_datetime_str(backup["modified"], tz),
            escape(str(backup["path"])),
        )

    console = Console()
    console.print(backups_table)
