# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from did import configuration
from did.repository.backup import BackupRepository
from did.repository.configuration import ConfigurationRepository
from did.repository.entry import EntryRepository
from did.repository.timer import TimerRepository
from did.service.entry import EntryService
from did.service.retention import RetentionService
from did.service.timer import TimerService


class Services(TypedDict):
    config: configuration.Configuration
    entry_repo: EntryRepository
    backup_repo: BackupRepository
    retention: RetentionService
    entry: EntryService
    timer: TimerService


def build_services() -> Services:
    """Wire the store and services for one command invocation."""
    config = ConfigurationRepository(configuration.APP_CONFIG_PATH).get_config()
    path = configuration.entries_path(config)

    entry_repo = EntryRepository(path)
    backup_repo = BackupRepository(path)
    retention = RetentionService(
        entry_repo,
        backup_repo,
        retention=pendulum.duration(days=config["retention_days"]),
    )
    entry_service = EntryService(entry_repo, retention)
    return {
        "config": config,
        "entry_repo": entry_repo,
        "backup_repo": backup_repo,
        "retention": retention,
        "entry": entry_service,
        "timer": TimerService(
            TimerRepository(configuration.timer_path()), entry_service
        ),
    }
