"""Cleanup plan execution.

Deletes plan items in order and records the successes in the ledger.
Per-item failures are collected, never raised.
"""

import logging
import os

from xcleanup.cleanup.models import CleanupItem, CleanupPlan, CleanupResult
from xcleanup.cleanup.state import CleanupStateStore
from xcleanup.core.logger import AUDIT_LOGGER

audit = logging.getLogger(AUDIT_LOGGER)

NOT_EMPTY_ERROR = "Directory is not empty"


class CleanupExecutor:
    """Carries out a CleanupPlan.

    Files are unlinked. Directories are re-checked for emptiness right
    before removal and fail instead of being removed if something
    appeared since planning.

    Every outcome goes to the ``xcleanup.audit`` logger. Successful
    deletions are committed to the ledger in a single write at the end.

    Attributes:
        _state_store: Ledger that receives successful deletions.
    """

    def __init__(self, state_store: CleanupStateStore) -> None:
        self._state_store = state_store

    def execute(self, plan: CleanupPlan) -> CleanupResult:
        """Delete every item of the plan.

        Args:
            plan: Plan to execute.

        Returns:
            CleanupResult partitioning the plan items into deleted and failed.

        Raises:
            StorageError: If the ledger cannot be updated afterwards.
        """
        deleted: list[CleanupItem] = []
        failed: list[CleanupItem] = []
        errors: dict[str, str] = {}

        for item in plan.items:
            error = self._delete_file(item) if item.is_file else self._delete_dir(item)
            kind = "file" if item.is_file else "directory"

            if error is None:
                deleted.append(item)
                audit.info("Deleted %s", kind, extra={"path": item.path})
            else:
                failed.append(item)
                errors[item.path] = error
                audit.warning(
                    "Failed to delete %s", kind, extra={"path": item.path, "error": error}
                )

        if deleted:
            self._state_store.record_deleted(deleted)

        return CleanupResult(deleted=tuple(deleted), failed=tuple(failed), errors=errors)

    @staticmethod
    def _delete_file(item: CleanupItem) -> str | None:
        """Unlink a file.

        Returns:
            None on success, the OS error text on failure.
        """
        try:
            os.unlink(item.path)
        except OSError as e:
            return str(e)
        return None

    @staticmethod
    def _delete_dir(item: CleanupItem) -> str | None:
        """Remove a directory if it is still empty.

        Returns:
            None on success, an error description on failure.
        """
        try:
            with os.scandir(item.path) as it:
                if next(it, None) is not None:
                    return NOT_EMPTY_ERROR
            os.rmdir(item.path)
        except OSError as e:
            return str(e)
        return None
