# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Any, Optional, cast

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from did import time
from did.errors import StorageIOError, TimerStateError
from did.model.timer import TimerState
from did.repository.entry import atomic_write

logger = logging.getLogger(__name__)


class TimerRepository:
    """The running timer, if any, kept as a small YAML file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Optional[TimerState]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageIOError(f"failed to read timer state ({e})", self.path) from e

        try:
            raw_state = load(text, Loader=Loader)
        except YAMLError as e:
            raise TimerStateError(f"failed to parse timer file {self.path}: {e}") from e
        if raw_state is None:
            return None
        return self.__convert_timer_for_deserialization(raw_state)

    def save(self, state: TimerState) -> None:
        serializable_state = self.__convert_timer_for_serialization(state)
        atomic_write(
            self.path,
            dump(serializable_state, Dumper=Dumper, allow_unicode=True).encode("utf-8"),
        )
        logger.debug("saved timer state to %s", self.path)

    def clear(self) -> bool:
        """Remove the timer file. Returns False when there was none."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageIOError(f"failed to clear timer state ({e})", self.path) from e
        logger.debug("cleared timer state at %s", self.path)
        return True

    def __convert_timer_for_serialization(self, state: TimerState) -> dict[str, Any]:
        serializable_state: dict[str, Any] = {
            "started_at": time.datetime_to_iso_str(state["started_at"]),
            "description": state["description"],
        }
        if state["project"]:
            serializable_state["project"] = state["project"]
        if state["tags"]:
            serializable_state["tags"] = list(state["tags"])
        return serializable_state

    def __convert_timer_for_deserialization(self, raw_state: Any) -> TimerState:
        if not isinstance(raw_state, dict):
            raise TimerStateError(f"timer file {self.path} must contain a mapping")
        raw_state = cast(dict[str, Any], raw_state)

        started_at = raw_state.get("started_at")
        description = raw_state.get("description")
        project = raw_state.get("project")
        tags = raw_state.get("tags")
        if not isinstance(started_at, str) or not isinstance(description, str):
            raise TimerStateError(
                f"timer file {self.path} needs 'started_at' and 'description'"
            )
        if project is not None and not isinstance(project, str):
            raise TimerStateError(f"timer file {self.path}: 'project' must be text")
        if tags is not None and (
            not isinstance(tags, list) or not all(isinstance(t, str) for t in tags)
        ):
            raise TimerStateError(f"timer file {self.path}: 'tags' must be a list")

        try:
            started = time.datetime_from_iso_str(started_at)
        except ValueError as e:
            raise TimerStateError(f"timer file {self.path}: {e}") from e

        return {
            "started_at": started,
            "description": description,
            "project": project or None,
            "tags": list(tags) if tags else None,
        }
