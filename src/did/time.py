# SPDX-License-Identifier: MIT

import datetime
from typing import Callable, Optional, TypeAlias

import pendulum

Clock: TypeAlias = Callable[[], pendulum.DateTime]


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_iso_str(value: str) -> pendulum.DateTime:
    """
    Parse an RFC 3339 instant. The offset is mandatory; a naive value is
    rejected rather than silently assumed to be UTC.
    """
    parsed = datetime.datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        raise ValueError(f"instant has no UTC offset: {value!r}")
    return pendulum.instance(parsed)


def datetime_from_iso_str_optional(
    value: Optional[str],
) -> Optional[pendulum.DateTime]:
    if value is None:
        return None
    return datetime_from_iso_str(value)


def datetime_to_display_local_datetime_str(
    datetime: pendulum.DateTime, tz: str = "local"
) -> str:
    return datetime.in_tz(tz).format("YYYY-MM-DD HH:mm")


def datetime_to_display_local_datetime_str_optional(
    datetime: Optional[pendulum.DateTime], tz: str = "local"
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_local_datetime_str(datetime, tz)


def datetime_to_display_local_time_str(
    datetime: pendulum.DateTime, tz: str = "local"
) -> str:
    return datetime.in_tz(tz).format("HH:mm")


def datetime_to_local_date(
    datetime: pendulum.DateTime, tz: str = "local"
) -> pendulum.Date:
    return datetime.in_tz(tz).date()


def date_from_str(date_str: str) -> pendulum.Date:
    """Parse a 'YYYY-MM-DD' string into a calendar date."""
    parsed = pendulum.parse(date_str, exact=True)
    if not isinstance(parsed, pendulum.Date) or isinstance(parsed, pendulum.DateTime):
        raise ValueError(f"expected a YYYY-MM-DD date, got {date_str!r}")
    return parsed


def duration_to_str(minutes: int) -> str:
    """Human display form: 30m, 2h, 1h 30m."""
    if minutes < 60:
        return f"{minutes}m"
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def duration_to_input_str(minutes: int) -> str:
    """Input form accepted by the duration parser: 30m, 2h, 1h30m."""
    if minutes < 60:
        return f"{minutes}m"
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h{mins}m"
