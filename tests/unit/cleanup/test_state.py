"""Unit tests for the recently-deleted ledger.

Tests for CleanupStateStore persistence, locking, and cooldown checks.
"""

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from xcleanup.cleanup.models import CleanupItem, ItemType
from xcleanup.cleanup.state import CleanupStateStore
from xcleanup.core.errors import StorageError


def _item(path: str) -> CleanupItem:
    return CleanupItem(path=path, item_type=ItemType.FILE, size_bytes=1, modified_at=0)


@pytest.fixture
def state_file(tmp_path: Path) -> Path:
    return tmp_path / "state" / "state.json"


class TestLoad:
    """Tests for loading the ledger."""

    def test_missing_file_is_empty(self, state_file: Path) -> None:
        store = CleanupStateStore(state_file)

        assert len(store) == 0
        assert store.last_deleted("/tmp/a") is None

    def test_loads_existing_entries(self, state_file: Path) -> None:
        state_file.parent.mkdir(parents=True)
        state_file.write_text(json.dumps({"/tmp/a": 100, "/tmp/b": 200.7}))

        store = CleanupStateStore(state_file)

        assert len(store) == 2
        assert store.last_deleted("/tmp/a") == 100
        assert store.last_deleted("/tmp/b") == 200

    @pytest.mark.parametrize(
        "contents",
        [
            "{not json",
            "[1, 2, 3]",
            '{"/tmp/a": "yesterday"}',
            '{"/tmp/a": true}',
        ],
    )
    def test_corrupt_file_raises(self, state_file: Path, contents: str) -> None:
        """Unreadable content is fatal rather than silently reset."""
        state_file.parent.mkdir(parents=True)
        state_file.write_text(contents)

        with pytest.raises(StorageError, match="Corrupt state file"):
            CleanupStateStore(state_file)


class TestCooldown:
    """Tests for was_deleted_recently."""

    def test_unknown_path_is_not_recent(self, state_file: Path, clock: Any) -> None:
        store = CleanupStateStore(state_file, clock=clock)

        assert store.was_deleted_recently("/tmp/a", 3600) is False

    def test_window_boundaries(self, state_file: Path, clock: Any) -> None:
        """Inside and at the edge of the window counts as recent; after does not."""
        store = CleanupStateStore(state_file, clock=clock)
        store.record_deleted([_item("/tmp/a")])

        clock.advance(3599)
        assert store.was_deleted_recently("/tmp/a", 3600) is True

        clock.advance(1)
        assert store.was_deleted_recently("/tmp/a", 3600) is True

        clock.advance(1)
        assert store.was_deleted_recently("/tmp/a", 3600) is False


class TestRecordDeleted:
    """Tests for record_deleted and persistence."""

    def test_persists_sorted_json(self, state_file: Path, clock: Any) -> None:
        store = CleanupStateStore(state_file, clock=clock)

        store.record_deleted([_item("/tmp/b"), _item("/tmp/a")])

        data = json.loads(state_file.read_text())
        assert data == {"/tmp/a": int(clock.now), "/tmp/b": int(clock.now)}
        assert list(data) == ["/tmp/a", "/tmp/b"]

    def test_survives_reload(self, state_file: Path, clock: Any) -> None:
        CleanupStateStore(state_file, clock=clock).record_deleted([_item("/tmp/a")])

        reloaded = CleanupStateStore(state_file, clock=clock)

        assert reloaded.last_deleted("/tmp/a") == int(clock.now)

    def test_later_deletion_overwrites_timestamp(self, state_file: Path, clock: Any) -> None:
        store = CleanupStateStore(state_file, clock=clock)
        store.record_deleted([_item("/tmp/a")])
        clock.advance(500)

        store.record_deleted([_item("/tmp/a")])

        assert store.last_deleted("/tmp/a") == int(clock.now)

    def test_lock_file_created_and_no_temp_left(self, state_file: Path) -> None:
        store = CleanupStateStore(state_file)

        store.record_deleted([_item("/tmp/a")])

        assert store.lock_file == state_file.with_name("state.json.lock")
        assert store.lock_file.exists()
        assert list(state_file.parent.glob("*.tmp")) == []

    def test_failed_replace_keeps_previous_ledger(self, state_file: Path, clock: Any) -> None:
        store = CleanupStateStore(state_file, clock=clock)
        store.record_deleted([_item("/tmp/a")])
        before = state_file.read_text()

        with (
            patch("xcleanup.cleanup.state.os.replace", side_effect=OSError("disk full")),
            pytest.raises(StorageError, match="Unable to replace state file"),
        ):
            store.record_deleted([_item("/tmp/b")])

        assert state_file.read_text() == before
        assert list(state_file.parent.glob("*.tmp")) == []

    def test_unwritable_directory_raises(self, state_file: Path) -> None:
        store = CleanupStateStore(state_file)

        with (
            patch("xcleanup.cleanup.state.ensure_dir", side_effect=StorageError("denied")),
            pytest.raises(StorageError, match="denied"),
        ):
            store.record_deleted([_item("/tmp/a")])
