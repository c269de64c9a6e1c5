"""Cleanup planning.

Turns the configured policy and the current filesystem state into an
ordered CleanupPlan. Nothing is deleted here.
"""

import logging
import os
import time
from collections.abc import Callable

from xcleanup.cleanup.models import CleanupItem, CleanupPlan, ItemType
from xcleanup.cleanup.state import CleanupStateStore
from xcleanup.core.config import CleanupConfig
from xcleanup.core.errors import ConfigurationError
from xcleanup.filesystem.matcher import PathMatcher, is_literal_root
from xcleanup.filesystem.models import DiskUsage, ScannedEntry
from xcleanup.filesystem.scanner import FilesystemScanner

logger = logging.getLogger(__name__)

ScannerFactory = Callable[[bool], FilesystemScanner]


def _default_scanner_factory(follow_symlinks: bool) -> FilesystemScanner:
    return FilesystemScanner(follow_symlinks=follow_symlinks)


def is_directory_empty(path: str) -> bool:
    """Check whether a directory has no entries.

    A directory that cannot be listed is reported as non-empty.
    """
    try:
        with os.scandir(path) as it:
            return next(it, None) is None
    except OSError:
        return False


def resolve_root_paths(config: CleanupConfig, emergency: bool) -> list[str]:
    """Choose the scan roots for a run.

    In emergency mode ``emergency.paths`` replaces the allowed paths as
    scan roots, even when it is empty. Only absolute literal paths
    qualify as roots; regex and glob patterns are dropped.

    Args:
        config: Validated configuration.
        emergency: Whether emergency mode is active.

    Returns:
        Root paths to scan. May be empty in emergency mode.

    Raises:
        ConfigurationError: If standard mode yields no usable root.
    """
    if emergency:
        roots = [p for p in config.emergency.paths if is_literal_root(p)]
        if not roots:
            logger.warning("No absolute emergency paths configured; nothing to scan")
        return roots

    roots = [p for p in config.paths.allowed_paths if is_literal_root(p)]
    if not roots:
        raise ConfigurationError("At least one absolute allowed path is required for scanning.")
    return roots


class CleanupPlanner:
    """Builds cleanup plans from policy, scan results, and the ledger.

    Each scanned entry passes through these filters in order:

    1. excluded, or not allowed
    2. deleted within the cooldown window
    3. younger than the minimum age
    4. file deletion disabled (files) / directory deletion disabled or
       directory not empty (directories)

    Collection stops once ``max_items`` candidates have been admitted.

    Attributes:
        _state_store: Ledger consulted for the cooldown window.
        _scanner_factory: Creates a scanner for a follow-symlinks flag.
        _clock: Source of the current Unix time.
    """

    def __init__(
        self,
        state_store: CleanupStateStore,
        scanner_factory: ScannerFactory = _default_scanner_factory,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._state_store = state_store
        self._scanner_factory = scanner_factory
        self._clock = clock

    def plan(self, config: CleanupConfig, disk_usage: DiskUsage, emergency: bool) -> CleanupPlan:
        """Build the cleanup plan.

        Args:
            config: Validated configuration.
            disk_usage: Disk usage snapshot taken before planning.
            emergency: Whether emergency mode is active.

        Returns:
            Immutable CleanupPlan with items in scan order.

        Raises:
            ConfigurationError: If no usable scan root is configured.
        """
        matcher = PathMatcher(config.paths.allowed_paths, config.paths.excluded_paths)
        roots = resolve_root_paths(config, emergency)
        scanner = self._scanner_factory(config.paths.follow_symlinks)

        settings = config.cleanup
        now = int(self._clock())
        items: list[CleanupItem] = []
        scanned = 0

        for entry in scanner.scan(roots):
            scanned += 1
            item = self._evaluate(entry, matcher, now, config)
            if item is None:
                continue

            items.append(item)
            if settings.max_items > 0 and len(items) >= settings.max_items:
                logger.info("Reached max_items=%d, stopping scan", settings.max_items)
                break

        logger.info(
            "Planned %d item(s) from %d scanned entries (mode=%s, roots=%s)",
            len(items),
            scanned,
            "emergency" if emergency else "standard",
            ", ".join(roots) or "-",
        )
        return CleanupPlan(items=tuple(items), disk_usage=disk_usage, emergency=emergency)

    def _evaluate(
        self,
        entry: ScannedEntry,
        matcher: PathMatcher,
        now: int,
        config: CleanupConfig,
    ) -> CleanupItem | None:
        """Apply the filter chain to one entry.

        Returns:
            CleanupItem if the entry is admitted, None otherwise.
        """
        settings = config.cleanup
        path = entry.path

        if not matcher.is_candidate(path):
            logger.debug("Skip %s: not permitted by path policy", path)
            return None

        window = settings.skip_if_deleted_within_seconds
        if window > 0 and self._state_store.was_deleted_recently(path, window):
            logger.debug("Skip %s: deleted within the last %ds", path, window)
            return None

        min_age = settings.min_age_seconds
        if min_age > 0 and (now - entry.modified_at) < min_age:
            logger.debug("Skip %s: younger than %ds", path, min_age)
            return None

        if entry.is_file:
            if not settings.delete_files:
                return None
            return CleanupItem(
                path=path,
                item_type=ItemType.FILE,
                size_bytes=entry.size_bytes,
                modified_at=entry.modified_at,
            )

        if entry.is_dir:
            if not settings.delete_empty_directories:
                return None
            if not is_directory_empty(path):
                logger.debug("Skip %s: directory not empty", path)
                return None
            return CleanupItem(
                path=path,
                item_type=ItemType.DIR,
                size_bytes=0,
                modified_at=entry.modified_at,
            )

        return None
