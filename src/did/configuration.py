# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

import pendulum
import platformdirs

from did.errors import ConfigurationError

APP_NAME = "did"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

ENTRIES_FILE_NAME = "entries.jsonl"
TIMER_FILE_NAME = "timer.yaml"


class Configuration(TypedDict):
    data_path: Optional[str]  # Directory holding entries.jsonl, None = CONFIG_PATH
    retention_days: int  # How long deleted entries are kept before purge
    show_header: bool
    timezone: str  # "local" or an IANA name, used for display and date filters


def default_configuration() -> Configuration:
    return {
        "data_path": None,
        "retention_days": 7,
        "show_header": True,
        "timezone": "local",
    }


def validate_configuration(config: Configuration) -> None:
    retention_days = config["retention_days"]
    if (
        not isinstance(retention_days, int)
        or isinstance(retention_days, bool)
        or retention_days < 1
    ):
        raise ConfigurationError(
            f"invalid retention_days: must be a whole number of days >= 1, got {retention_days!r}"
        )
    if not isinstance(config["show_header"], bool):
        raise ConfigurationError(
            f"invalid show_header: must be true or false, got {config['show_header']!r}"
        )
    timezone = config["timezone"]
    if timezone != "local":
        try:
            pendulum.timezone(timezone)
        except Exception as e:
            raise ConfigurationError(
                f"invalid timezone: '{timezone}' is not a valid IANA timezone"
                " (e.g., 'America/New_York', 'Europe/London')"
            ) from e
    if config["data_path"] is not None and not isinstance(config["data_path"], str):
        raise ConfigurationError(
            f"invalid data_path: must be a directory path, got {config['data_path']!r}"
        )


def entries_path(config: Configuration) -> Path:
    data_path = config["data_path"]
    if data_path is not None:
        return Path(data_path).expanduser() / ENTRIES_FILE_NAME
    return CONFIG_PATH / ENTRIES_FILE_NAME


def timer_path() -> Path:
    # Always under the config directory, even when data_path moves the entries
    return CONFIG_PATH / TIMER_FILE_NAME
