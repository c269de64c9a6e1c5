"""Recently-deleted ledger.

This module provides the CleanupStateStore class, which remembers when
each path was last deleted so that a path is not deleted again inside
a cooldown window.

The ledger is a single JSON object mapping absolute path to an integer
Unix timestamp. Writes are serialized through an exclusive lock on a
sibling ``.lock`` file and land atomically via rename, so readers never
observe a partially written ledger.
"""

import fcntl
import json
import logging
import os
import secrets
import time
from collections.abc import Callable, Iterable
from pathlib import Path

from xcleanup.cleanup.models import CleanupItem
from xcleanup.core.errors import StorageError
from xcleanup.core.paths import ensure_dir

logger = logging.getLogger(__name__)

LOCK_SUFFIX = ".lock"
TMP_SUFFIX = ".tmp"


class CleanupStateStore:
    """Durable mapping of path to last-deleted timestamp.

    The ledger is loaded once at construction and rewritten in full after
    every batch of deletions. Entries are never pruned; they simply stop
    mattering once their cooldown window has passed.

    Attributes:
        state_file: Path of the JSON ledger.
    """

    def __init__(self, state_file: Path, clock: Callable[[], float] = time.time) -> None:
        """Initialize the store and load the ledger.

        Args:
            state_file: Path of the JSON ledger.
            clock: Source of the current Unix time.

        Raises:
            StorageError: If an existing ledger cannot be read or parsed.
        """
        self._state_file = state_file
        self._clock = clock
        self._state: dict[str, int] = self._load()

    @property
    def state_file(self) -> Path:
        return self._state_file

    @property
    def lock_file(self) -> Path:
        return self._state_file.with_name(self._state_file.name + LOCK_SUFFIX)

    def __len__(self) -> int:
        return len(self._state)

    def last_deleted(self, path: str) -> int | None:
        """Return the recorded deletion timestamp for path, if any."""
        return self._state.get(path)

    def was_deleted_recently(self, path: str, window_seconds: int) -> bool:
        """Check whether path was deleted within the last window_seconds.

        Callers treat a non-positive window as "check disabled"; the store
        itself always does the arithmetic.

        Args:
            path: Absolute path.
            window_seconds: Cooldown window in seconds.

        Returns:
            True if a deletion was recorded no more than window_seconds ago.
        """
        timestamp = self.last_deleted(path)
        if timestamp is None:
            return False
        return (int(self._clock()) - timestamp) <= window_seconds

    def record_deleted(self, items: Iterable[CleanupItem]) -> None:
        """Stamp items with the current time and persist the ledger.

        Args:
            items: Successfully deleted items.

        Raises:
            StorageError: If the ledger cannot be written.
        """
        timestamp = int(self._clock())
        for item in items:
            self._state[item.path] = timestamp

        self._persist()

    def _load(self) -> dict[str, int]:
        if not self._state_file.is_file():
            return {}

        try:
            contents = self._state_file.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Unable to read state file {self._state_file}: {e}") from e

        try:
            decoded = json.loads(contents)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt state file {self._state_file}: {e}") from e

        if not isinstance(decoded, dict):
            raise StorageError(f"Corrupt state file {self._state_file}: expected a JSON object")

        state: dict[str, int] = {}
        for path, value in decoded.items():
            if isinstance(value, bool) or not isinstance(value, int | float):
                raise StorageError(
                    f"Corrupt state file {self._state_file}: invalid timestamp for {path}"
                )
            state[path] = int(value)

        logger.debug("Loaded %d ledger entries from %s", len(state), self._state_file)
        return state

    def _persist(self) -> None:
        """Write the full ledger under an exclusive lock.

        Lock, write to a unique temporary file in the same directory,
        fsync, rename over the canonical file, unlock.

        Raises:
            StorageError: On any failure; the canonical file is left untouched.
        """
        ensure_dir(self._state_file.parent, "state")

        encoded = json.dumps(self._state, indent=4, sort_keys=True)

        try:
            lock_handle = open(self.lock_file, "a")  # noqa: SIM115
        except OSError as e:
            raise StorageError(f"Unable to open state lock file {self.lock_file}: {e}") from e

        try:
            try:
                fcntl.flock(lock_handle, fcntl.LOCK_EX)
            except OSError as e:
                raise StorageError(f"Unable to acquire state file lock {self.lock_file}: {e}") from e

            tmp_path = self._state_file.with_name(
                f"{self._state_file.name}.{secrets.token_hex(6)}{TMP_SUFFIX}"
            )
            try:
                with open(tmp_path, "w", encoding="utf-8") as f:
                    f.write(encoded)
                    f.flush()
                    os.fsync(f.fileno())
            except OSError as e:
                tmp_path.unlink(missing_ok=True)
                raise StorageError(f"Unable to write temporary state file {tmp_path}: {e}") from e

            try:
                os.replace(tmp_path, self._state_file)
            except OSError as e:
                tmp_path.unlink(missing_ok=True)
                raise StorageError(f"Unable to replace state file {self._state_file}: {e}") from e
        finally:
            try:
                fcntl.flock(lock_handle, fcntl.LOCK_UN)
            finally:
                lock_handle.close()

        logger.debug("Persisted %d ledger entries to %s", len(self._state), self._state_file)
