"""Tests for the rotating backup slots."""

import os
import stat

import pytest

from did.errors import NoSuchBackupError


def _write_store(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


def test_backup_of_missing_store_is_a_no_op(backup_repo):
    assert backup_repo.create_backup() is None
    assert backup_repo.list_backups() == []


def test_backup_slot_naming(backup_repo, store_path):
    assert backup_repo.backup_path(2) == store_path.parent / "entries.jsonl.bak.2"


def test_rotation_keeps_three_and_evicts_oldest(backup_repo, store_path):
    for version in ("v1", "v2", "v3", "v4"):
        _write_store(store_path, version)
        backup_repo.create_backup()

    backups = backup_repo.list_backups()

    assert [b["number"] for b in backups] == [1, 2, 3]
    assert [b["path"].read_text() for b in backups] == ["v4", "v3", "v2"]
    assert not backup_repo.backup_path(4).exists()


def test_list_backups_most_recent_first(backup_repo, store_path):
    _write_store(store_path, "only")
    info = backup_repo.create_backup()

    assert info is not None
    assert info["number"] == 1
    assert backup_repo.list_backups()[0]["path"] == backup_repo.backup_path(1)


def test_restore_backup_uses_chosen_slot_and_keeps_current(backup_repo, store_path):
    _write_store(store_path, "a")
    backup_repo.create_backup()
    _write_store(store_path, "b")
    backup_repo.create_backup()
    _write_store(store_path, "c")

    backup_repo.restore_backup(2)

    assert store_path.read_text() == "a"
    # The state before the restore becomes the newest backup
    assert backup_repo.backup_path(1).read_text() == "c"
    assert backup_repo.backup_path(2).read_text() == "b"
    assert backup_repo.backup_path(3).read_text() == "a"


def test_restore_backup_when_store_is_missing(backup_repo, store_path):
    _write_store(store_path, "saved")
    backup_repo.create_backup()
    store_path.unlink()

    backup_repo.restore_backup()

    assert store_path.read_text() == "saved"


@pytest.mark.parametrize("slot", [0, 4, -1])
def test_restore_backup_rejects_out_of_range_slots(backup_repo, slot):
    with pytest.raises(NoSuchBackupError) as excinfo:
        backup_repo.restore_backup(slot)

    assert excinfo.value.slot == slot


def test_restore_backup_rejects_empty_slot(backup_repo, store_path):
    _write_store(store_path, "x")
    backup_repo.create_backup()

    with pytest.raises(NoSuchBackupError, match="backup 2 does not exist"):
        backup_repo.restore_backup(2)
    assert store_path.read_text() == "x"


def test_restored_store_has_mode_0644(backup_repo, store_path):
    previous = os.umask(0o022)
    try:
        _write_store(store_path, "snapshot\n")
        backup_repo.create_backup()
        os.chmod(store_path, 0o600)

        backup_repo.restore_backup(1)

        assert stat.S_IMODE(store_path.stat().st_mode) == 0o644
        assert store_path.read_text() == "snapshot\n"
    finally:
        os.umask(previous)
