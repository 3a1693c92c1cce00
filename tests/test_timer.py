"""Tests for the start/stop timer and its state file."""

import pendulum
import pytest

from did.errors import (
    EntryValidationError,
    NoTimerRunningError,
    TimerAlreadyRunningError,
    TimerStateError,
)
from did.service.timer import elapsed_minutes, stopped_duration_minutes


def _state(started_at):
    return {
        "started_at": started_at,
        "description": "x",
        "project": None,
        "tags": None,
    }


def test_no_timer_file_means_no_timer(timer_repo):
    assert timer_repo.load() is None
    assert timer_repo.clear() is False


def test_state_round_trips_through_the_file(timer_repo):
    state = {
        "started_at": pendulum.datetime(2024, 1, 15, 9, 0, tz="Europe/Paris"),
        "description": "café review",
        "project": "acme",
        "tags": ["backend", "api"],
    }
    timer_repo.save(state)

    assert timer_repo.load() == state
    assert timer_repo.clear() is True
    assert not timer_repo.path.exists()


@pytest.mark.parametrize(
    "content",
    [
        "started_at: [unclosed\n",
        "- a\n- list\n",
        "description: no start\n",
        "started_at: '2024-01-15T09:00:00'\ndescription: naive\n",
        "started_at: '2024-01-15T09:00:00Z'\ndescription: x\ntags: 5\n",
    ],
)
def test_invalid_timer_file(timer_repo, content):
    timer_repo.path.parent.mkdir(parents=True)
    timer_repo.path.write_text(content)

    with pytest.raises(TimerStateError):
        timer_repo.load()


def test_start_parses_project_and_tags(timer_service, clock):
    state, replaced = timer_service.start("API work @client #backend #api")

    assert replaced is None
    assert state == {
        "started_at": clock.now,
        "description": "API work",
        "project": "client",
        "tags": ["backend", "api"],
    }
    assert timer_service.status() == state


@pytest.mark.parametrize("description", ["", "   ", "@acme #tag"])
def test_start_requires_a_description(timer_service, description):
    with pytest.raises(EntryValidationError):
        timer_service.start(description)


def test_start_rejects_text_that_is_not_utf8(timer_service, timer_repo):
    with pytest.raises(EntryValidationError):
        timer_service.start("bad \udcff bytes")

    assert not timer_repo.path.exists()


def test_start_refuses_to_replace_without_force(timer_service, clock):
    timer_service.start("first")
    clock.advance(minutes=10)

    with pytest.raises(TimerAlreadyRunningError):
        timer_service.start("second")

    state, replaced = timer_service.start("second", force=True)
    assert replaced["description"] == "first"
    assert timer_service.status()["description"] == "second"


def test_stop_logs_an_entry_and_clears_the_timer(
    timer_service, timer_repo, entry_repo, clock
):
    timer_service.start("code review @acme #review")
    clock.advance(hours=1, minutes=29, seconds=40)

    entry = timer_service.stop()

    assert entry["description"] == "code review"
    assert entry["duration_minutes"] == 90
    assert entry["project"] == "acme"
    assert entry["tags"] == ["review"]
    assert entry["raw_input"] == "code review @acme #review for 1h30m"
    assert entry["timestamp"] == clock.now
    assert entry_repo.read_all() == [entry]
    assert timer_repo.load() is None


def test_stop_without_timer(timer_service):
    with pytest.raises(NoTimerRunningError):
        timer_service.stop()


def test_stopped_duration_bounds():
    start = pendulum.datetime(2024, 1, 15, 9, 0, tz="UTC")

    assert stopped_duration_minutes(_state(start), start.add(seconds=10)) == 1
    assert stopped_duration_minutes(_state(start), start.add(seconds=90)) == 2
    assert stopped_duration_minutes(_state(start), start.add(days=2)) == 1440


def test_elapsed_minutes_rounds_down():
    start = pendulum.datetime(2024, 1, 15, 9, 0, tz="UTC")

    assert elapsed_minutes(_state(start), start.add(minutes=5, seconds=59)) == 5
    assert elapsed_minutes(_state(start), start.subtract(minutes=1)) == 0
