"""Tests for the single-instance application lock."""

import os

from datadefender.lock import LOCK_DIR_ENV, ApplicationLock


def test_first_instance_is_not_active(lock_dir):
    lock = ApplicationLock("DataDefender", lock_dir=lock_dir)
    try:
        assert not lock.is_app_active()
        assert lock.held
    finally:
        lock.release()


def test_second_instance_sees_active_lock(lock_dir):
    first = ApplicationLock("DataDefender", lock_dir=lock_dir)
    second = ApplicationLock("DataDefender", lock_dir=lock_dir)
    try:
        assert first.acquire()
        assert second.is_app_active()
        assert not second.held
    finally:
        first.release()


def test_release_lets_next_instance_in(lock_dir):
    with ApplicationLock("DataDefender", lock_dir=lock_dir) as first:
        assert first.acquire()
    with ApplicationLock("DataDefender", lock_dir=lock_dir) as second:
        assert not second.is_app_active()


def test_names_are_independent(lock_dir):
    with ApplicationLock("DataDefender", lock_dir=lock_dir) as a, \
            ApplicationLock("Other", lock_dir=lock_dir) as b:
        assert a.acquire()
        assert b.acquire()


def test_lock_file_records_pid(lock_dir):
    with ApplicationLock("DataDefender", lock_dir=lock_dir) as lock:
        lock.acquire()
        with open(lock.path, encoding="utf-8") as f:
            assert f.read() == str(os.getpid())


def test_lock_dir_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(LOCK_DIR_ENV, str(tmp_path / "env-locks"))
    lock = ApplicationLock("DataDefender")
    assert lock.path == os.path.join(str(tmp_path / "env-locks"), "DataDefender.lock")
