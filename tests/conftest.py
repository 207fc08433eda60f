"""Shared test fixtures for SensorBuffer tests."""

import logging
from datetime import datetime, timezone

import pytest


class FakeClock:
    """Wall clock under test control, in epoch milliseconds."""

    def __init__(self, now_ms: int):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


def epoch_ms(*args) -> int:
    """Epoch milliseconds of a UTC datetime given as datetime() arguments."""
    return int(datetime(*args, tzinfo=timezone.utc).timestamp() * 1000)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep user config files and SENSORBUFFER_* variables out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for key in ("ROOT_DIR", "TIMEZONE", "SUFFIX_RANGE", "PRETTY_PRINT", "VERBOSITY"):
        monkeypatch.delenv(f"SENSORBUFFER_{key}", raising=False)


@pytest.fixture
def storage_root(tmp_path):
    """An existing, empty storage root."""
    root = tmp_path / "buffer"
    root.mkdir()
    return root


@pytest.fixture
def frozen_clock():
    """Clock stuck at 2024-01-15T10:30:00.000Z."""
    return FakeClock(epoch_ms(2024, 1, 15, 10, 30))


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers and levels installed by setup_logging."""
    yield
    logger = logging.getLogger("sensorbuffer")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
