"""Filesystem domain models.

This module defines the value types produced by scanning and disk
inspection: scanned entries and disk usage snapshots.
"""

from dataclasses import dataclass
from enum import Enum


class EntryType(str, Enum):
    """Type of filesystem entry as seen by the scanner.

    Attributes:
        FILE: Regular file.
        DIRECTORY: Directory (or a symlink to one when following symlinks).
        SYMLINK: Symbolic link yielded as a leaf (not followed).
        OTHER: Sockets, FIFOs and device nodes. Never cleanup candidates.
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class ScannedEntry:
    """A filesystem entry yielded by FilesystemScanner.

    Attributes:
        path: Absolute filesystem path.
        entry_type: Classification of the entry.
        size_bytes: Size in bytes (0 for directories).
        modified_at: Last modification time as a Unix timestamp.
        target_is_file: For unfollowed symlinks, whether the link
            resolves to a regular file.
    """

    path: str
    entry_type: EntryType
    size_bytes: int
    modified_at: int
    target_is_file: bool = False

    def __post_init__(self) -> None:
        """Validate scanned entry data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)

    @property
    def is_file(self) -> bool:
        """True for regular files, including unfollowed links to files."""
        if self.entry_type == EntryType.SYMLINK:
            return self.target_is_file
        return self.entry_type == EntryType.FILE

    @property
    def is_dir(self) -> bool:
        """True for directories. Unfollowed symlinks never count."""
        return self.entry_type == EntryType.DIRECTORY


@dataclass(frozen=True, slots=True)
class DiskUsage:
    """Snapshot of filesystem capacity.

    Attributes:
        total_bytes: Total size of the filesystem in bytes.
        free_bytes: Free bytes available.
    """

    total_bytes: int
    free_bytes: int

    def __post_init__(self) -> None:
        """Validate disk usage values after initialization."""
        if self.total_bytes < 0 or self.free_bytes < 0:
            msg = f"Disk usage cannot be negative: total={self.total_bytes}, free={self.free_bytes}"
            raise ValueError(msg)

    @property
    def free_percent(self) -> float:
        """Free space as a percentage of total (0.0 when total is 0)."""
        if self.total_bytes == 0:
            return 0.0
        return (self.free_bytes / self.total_bytes) * 100.0
