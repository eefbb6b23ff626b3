"""Shared fixtures for paperless-copier tests."""

import os

import pytest


@pytest.fixture(autouse=True)
def _no_fatal_delay(monkeypatch):
    """Ensure tests never sit through the fatal-error pause."""
    monkeypatch.setattr("paperless_copier.cli.FATAL_DELAY_SECONDS", 0)


@pytest.fixture(autouse=True)
def _no_audit_log(monkeypatch):
    """Keep a local settings file from pointing tests at a real audit log."""
    monkeypatch.setattr("paperless_copier.cli.AUDIT_LOG_PATH", "")


@pytest.fixture()
def set_atime():
    """Return a helper that sets a file's last-access time (epoch seconds)."""

    def _set(path, atime: float) -> None:
        os.utime(path, (atime, os.stat(path).st_mtime))

    return _set


@pytest.fixture()
def dirs(tmp_path):
    """A source and an empty destination directory."""
    source = tmp_path / "src"
    dest = tmp_path / "dest"
    source.mkdir()
    dest.mkdir()
    return source.resolve(), dest.resolve()
