# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
import typer

from did import time
from did.time import date_from_str


def parse_date(
    date_param: Optional[str],
    tz: str = "local",
    clock: time.Clock = time.now_utc,
) -> Optional[pendulum.Date]:
    """
    'today' and 'yesterday' are calendar days in tz, the zone date filters
    compare entries in.
    """
    if date_param is None:
        return None
    if date_param in ("today", "t"):
        return clock().in_tz(tz).date()
    if date_param in ("yesterday", "y"):
        return clock().in_tz(tz).date().subtract(days=1)
    try:
        return date_from_str(date_param)
    except ValueError:
        raise typer.BadParameter(
            f"Incorrect date format '{date_param}', expected YYYY-MM-DD, today or yesterday"
        )
