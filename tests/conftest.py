"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
import os
import time
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from xcleanup.core.config import CleanupConfig, save_config
from xcleanup.core.logger import ROOT_LOGGER

# Well in the past, so min_age checks pass
OLD_MTIME = int(time.time()) - 30 * 86400


class FakeClock:
    """Controllable replacement for time.time."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Fake clock starting at a fixed timestamp."""
    return FakeClock()


@pytest.fixture
def make_file() -> Callable[..., Path]:
    """Factory creating a file with given content and modification time."""

    def _make(path: Path, content: str = "x", mtime: int | None = OLD_MTIME) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _make


@pytest.fixture
def make_dir() -> Callable[..., Path]:
    """Factory creating a directory with a given modification time."""

    def _make(path: Path, mtime: int | None = OLD_MTIME) -> Path:
        path.mkdir(parents=True, exist_ok=True)
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _make


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., CleanupConfig]:
    """Factory building a validated config rooted in tmp_path.

    Sections given as keyword arguments are merged over defaults that keep
    logs and the ledger inside tmp_path.
    """

    def _make(allowed_paths: list[str] | None = None, **sections: Any) -> CleanupConfig:
        data: dict[str, Any] = {
            "disk_check_path": str(tmp_path),
            "paths": {"allowed_paths": allowed_paths or [str(tmp_path / "data")]},
            "cleanup": {},
            "emergency": {},
            "logging": {
                "directory": str(tmp_path / "logs"),
                "state_file": str(tmp_path / "state" / "state.json"),
            },
        }
        for key, value in sections.items():
            if isinstance(value, dict) and isinstance(data.get(key), dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value
        return CleanupConfig.model_validate(data)

    return _make


@pytest.fixture(autouse=True)
def reset_xcleanup_logger() -> Iterator[None]:
    """Detach handlers added to the xcleanup logger during a test."""
    root = logging.getLogger(ROOT_LOGGER)
    before = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in before:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def old_mtime() -> int:
    """Modification time old enough to pass any min_age check in tests."""
    return OLD_MTIME


@pytest.fixture
def write_config(
    tmp_path: Path, make_config: Callable[..., CleanupConfig]
) -> Callable[..., Path]:
    """Factory writing a config TOML (see make_config) and returning its path."""

    def _write(allowed_paths: list[str] | None = None, **sections: Any) -> Path:
        return save_config(make_config(allowed_paths, **sections), tmp_path / "config.toml")

    return _write
