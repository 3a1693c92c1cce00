# SPDX-License-Identifier: MIT

from typing import Optional

from rich import print
from rich.markup import escape
from rich.padding import Padding

from did.view.state import get_show_header


def header(sub_header: Optional[str] = None) -> None:
    """Print the application header with an optional report name."""
    if not get_show_header():
        return

    print(Padding("[dark_orange]did[/dark_orange]", (1, 0, 0, 1)))
    if sub_header is not None:
        print(Padding(f"[sandy_brown]{escape(sub_header)}[/sandy_brown]", (0, 1)))
