"""Global display state using context variables."""

# SPDX-License-Identifier: MIT

from contextvars import ContextVar

# Default is True (show headers)
_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)

# IANA name or "local", used when rendering timestamps
_display_tz_var: ContextVar[str] = ContextVar("display_tz", default="local")


def set_show_header(value: bool) -> None:
    _show_header_var.set(value)


def get_show_header() -> bool:
    return _show_header_var.get()


def set_display_tz(value: str) -> None:
    _display_tz_var.set(value)


def get_display_tz() -> str:
    return _display_tz_var.get()
