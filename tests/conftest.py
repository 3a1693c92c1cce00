"""
Pytest fixtures shared by the did tests.
"""

from pathlib import Path

import pendulum
import pytest

from did.model.entry import Entry, new_entry
from did.repository.backup import BackupRepository
from did.repository.entry import EntryRepository
from did.repository.timer import TimerRepository
from did.service.entry import EntryService
from did.service.retention import RetentionService
from did.service.timer import TimerService


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: pendulum.DateTime) -> None:
        self.now = now

    def __call__(self) -> pendulum.DateTime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now.add(**kwargs)


def make_entry(description: str = "fix bug", duration_minutes: int = 60, **overrides) -> Entry:
    fields = dict(
        timestamp=pendulum.datetime(2024, 1, 15, 10, 30, tz="UTC"),
        description=description,
        duration_minutes=duration_minutes,
        raw_input=f"{description} for {duration_minutes}m",
    )
    fields.update(overrides)
    return new_entry(**fields)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(pendulum.datetime(2024, 1, 15, 12, 0, tz="UTC"))


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "did" / "entries.jsonl"


@pytest.fixture
def entry_repo(store_path: Path) -> EntryRepository:
    return EntryRepository(store_path)


@pytest.fixture
def backup_repo(store_path: Path) -> BackupRepository:
    return BackupRepository(store_path)


@pytest.fixture
def retention(entry_repo, backup_repo, clock) -> RetentionService:
    return RetentionService(entry_repo, backup_repo, clock=clock)


@pytest.fixture
def entry_service(entry_repo, retention, clock) -> EntryService:
    return EntryService(entry_repo, retention, clock=clock)


@pytest.fixture
def timer_repo(tmp_path: Path) -> TimerRepository:
    return TimerRepository(tmp_path / "config" / "timer.yaml")


@pytest.fixture
def timer_service(timer_repo, entry_service, clock) -> TimerService:
    return TimerService(timer_repo, entry_service, clock=clock)
