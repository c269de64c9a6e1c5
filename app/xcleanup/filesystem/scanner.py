"""Recursive filesystem scanner.

Yields every entry under a set of root paths, children before their
parent directory, so that a directory's emptiness is judged only after
all of its descendants have been considered in the same pass.
"""

import logging
import os
import stat
from collections.abc import Iterable, Iterator

from xcleanup.filesystem.models import EntryType, ScannedEntry

logger = logging.getLogger(__name__)


class FilesystemScanner:
    """Lazy, depth-first, post-order scanner.

    For each existing root the root itself is yielded first, then (if it
    is a directory) all of its descendants in post-order. Entries within
    a directory are visited in name order. Missing roots are skipped.

    Args:
        follow_symlinks: Descend into symlinked directories. When False,
            symlinks are yielded as leaf entries.

    Example:
        >>> scanner = FilesystemScanner()
        >>> for entry in scanner.scan(["/tmp/x"]):
        ...     print(entry.path, entry.entry_type.value)
    """

    def __init__(self, *, follow_symlinks: bool = False) -> None:
        self._follow_symlinks = follow_symlinks

    @property
    def follow_symlinks(self) -> bool:
        return self._follow_symlinks

    def scan(self, root_paths: Iterable[str]) -> Iterator[ScannedEntry]:
        """Scan all root paths and yield their entries.

        Args:
            root_paths: Absolute root paths to scan.

        Yields:
            ScannedEntry for each root and each descendant.
        """
        for root in root_paths:
            root = os.path.normpath(root)
            if not os.path.lexists(root):
                logger.debug("Skipping missing root: %s", root)
                continue

            entry = self._build_entry(root)
            if entry is None:
                continue
            yield entry

            if os.path.isdir(root):
                visited: set[tuple[int, int]] = set()
                self._mark_visited(root, visited)
                yield from self._walk(root, visited)

    def _walk(self, directory: str, visited: set[tuple[int, int]]) -> Iterator[ScannedEntry]:
        """Yield descendants of a directory in post-order.

        Args:
            directory: Directory to list.
            visited: (device, inode) pairs already descended into.

        Yields:
            ScannedEntry for every descendant, children first.
        """
        try:
            with os.scandir(directory) as it:
                children = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning("Cannot list directory %s: %s", directory, e)
            return

        for child in children:
            if self._should_descend(child, visited):
                yield from self._walk(child.path, visited)

            entry = self._build_entry(child.path)
            if entry is not None:
                yield entry

    def _should_descend(self, child: os.DirEntry[str], visited: set[tuple[int, int]]) -> bool:
        try:
            if child.is_symlink():
                if not self._follow_symlinks or not child.is_dir(follow_symlinks=True):
                    return False
                # Followed links may loop back into an ancestor
                return self._mark_visited(child.path, visited)
            if not child.is_dir(follow_symlinks=False):
                return False
        except OSError as e:
            logger.warning("Cannot inspect %s: %s", child.path, e)
            return False

        if self._follow_symlinks:
            return self._mark_visited(child.path, visited)
        return True

    @staticmethod
    def _mark_visited(path: str, visited: set[tuple[int, int]]) -> bool:
        """Record a directory identity; False if it was already seen."""
        try:
            st = os.stat(path)
        except OSError:
            return False
        key = (st.st_dev, st.st_ino)
        if key in visited:
            logger.debug("Skipping already visited directory: %s", path)
            return False
        visited.add(key)
        return True

    def _build_entry(self, path: str) -> ScannedEntry | None:
        """Stat a path and convert it into a ScannedEntry.

        Returns:
            ScannedEntry, or None if the path cannot be inspected.
        """
        try:
            lst = os.lstat(path)
        except OSError as e:
            logger.warning("Cannot stat %s: %s", path, e)
            return None

        if not stat.S_ISLNK(lst.st_mode):
            return self._entry_from_stat(path, lst)

        try:
            target: os.stat_result | None = os.stat(path)
        except OSError:
            target = None  # dangling link

        if target is not None and self._follow_symlinks:
            return self._entry_from_stat(path, target)

        target_is_file = target is not None and stat.S_ISREG(target.st_mode)
        if target is not None and target_is_file:
            return ScannedEntry(
                path=path,
                entry_type=EntryType.SYMLINK,
                size_bytes=target.st_size,
                modified_at=int(target.st_mtime),
                target_is_file=True,
            )

        return ScannedEntry(
            path=path,
            entry_type=EntryType.SYMLINK,
            size_bytes=0,
            modified_at=int(lst.st_mtime),
        )

    @staticmethod
    def _entry_from_stat(path: str, st: os.stat_result) -> ScannedEntry:
        if stat.S_ISDIR(st.st_mode):
            entry_type = EntryType.DIRECTORY
            size = 0
        elif stat.S_ISREG(st.st_mode):
            entry_type = EntryType.FILE
            size = st.st_size
        else:
            entry_type = EntryType.OTHER
            size = 0

        return ScannedEntry(
            path=path,
            entry_type=entry_type,
            size_bytes=size,
            modified_at=int(st.st_mtime),
        )
