# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from did import time
from did.errors import (
    EntryValidationError,
    NoTimerRunningError,
    StorageIOError,
    TimerAlreadyRunningError,
)
from did.model.entry import MAX_DURATION_MINUTES, Entry
from did.model.timer import TimerState
from did.repository.codec import is_utf8_text
from did.repository.timer import TimerRepository
from did.service.entry import EntryService
from did.service.parse import parse_project_and_tags

logger = logging.getLogger(__name__)


def elapsed_minutes(state: TimerState, now: pendulum.DateTime) -> int:
    """Whole minutes since the timer started, rounded down."""
    seconds = (now - state["started_at"]).total_seconds()
    return max(int(seconds // 60), 0)


def stopped_duration_minutes(state: TimerState, now: pendulum.DateTime) -> int:
    """
    Minutes to log for a stopped timer: rounded to the nearest minute, at
    least 1 and at most a full day.
    """
    seconds = (now - state["started_at"]).total_seconds()
    minutes = int(seconds / 60 + 0.5)
    return min(max(minutes, 1), MAX_DURATION_MINUTES)


class TimerService:
    def __init__(
        self,
        timer_repo: TimerRepository,
        entry_service: EntryService,
        clock: time.Clock = time.now_utc,
    ) -> None:
        self.timer_repo = timer_repo
        self.entry_service = entry_service
        self.clock = clock

    def status(self) -> Optional[TimerState]:
        return self.timer_repo.load()

    def start(
        self, description: str, force: bool = False
    ) -> tuple[TimerState, Optional[TimerState]]:
        """
        Start timing a description that may carry @project and #tags.

        Returns the new timer and the one it replaced, if force was needed.
        """
        description = description.strip()
        if not description:
            raise EntryValidationError("description cannot be empty")
        if not is_utf8_text(description):
            raise EntryValidationError("description is not valid UTF-8 text")
        clean_description, project, tags = parse_project_and_tags(description)
        if not clean_description:
            raise EntryValidationError(
                "description cannot be empty (only project/tags provided)"
            )

        running = self.timer_repo.load()
        if running is not None and not force:
            raise TimerAlreadyRunningError(running["description"])

        state: TimerState = {
            "started_at": self.clock(),
            "description": clean_description,
            "project": project,
            "tags": tags,
        }
        self.timer_repo.save(state)
        return state, running

    def stop(self) -> Entry:
        """Log the running timer as an entry ending now and clear it."""
        state = self.timer_repo.load()
        if state is None:
            raise NoTimerRunningError()

        minutes = stopped_duration_minutes(state, self.clock())
        entry = self.entry_service.create_from_parts(
            state["description"], minutes, state["project"], state["tags"]
        )

        # The entry is saved, a stale timer file only needs a warning
        try:
            self.timer_repo.clear()
        except StorageIOError:
            logger.warning("entry saved but the timer state was not cleared", exc_info=True)
        return entry
