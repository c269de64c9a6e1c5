"""Cleanup plan and result models.

A CleanupPlan is built once per run by the planner and consumed by the
executor and the report renderer. Items keep scan order: children
before parents.
"""

from dataclasses import dataclass, field
from enum import Enum

from xcleanup.filesystem.models import DiskUsage


class ItemType(str, Enum):
    """Kind of cleanup candidate.

    Attributes:
        FILE: A file to unlink.
        DIR: An empty directory to remove.
    """

    FILE = "file"
    DIR = "dir"


@dataclass(frozen=True, slots=True)
class CleanupItem:
    """A single deletion candidate.

    Attributes:
        path: Absolute filesystem path.
        item_type: File or directory.
        size_bytes: Size in bytes (0 for directories).
        modified_at: Last modification time as a Unix timestamp.
    """

    path: str
    item_type: ItemType
    size_bytes: int
    modified_at: int

    def __post_init__(self) -> None:
        """Validate item data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)

    @property
    def is_file(self) -> bool:
        return self.item_type == ItemType.FILE

    @property
    def is_dir(self) -> bool:
        return self.item_type == ItemType.DIR


def _count(items: tuple[CleanupItem, ...], item_type: ItemType) -> int:
    return sum(1 for item in items if item.item_type == item_type)


@dataclass(frozen=True, slots=True)
class CleanupPlan:
    """Ordered deletion candidates for one run.

    Attributes:
        items: Candidates in scan order (children before parents).
        disk_usage: Disk usage snapshot taken before any deletion.
        emergency: Whether the plan was built in emergency mode.
    """

    items: tuple[CleanupItem, ...]
    disk_usage: DiskUsage
    emergency: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total_size_bytes(self) -> int:
        """Sum of all item sizes."""
        return sum(item.size_bytes for item in self.items)

    @property
    def file_count(self) -> int:
        return _count(self.items, ItemType.FILE)

    @property
    def dir_count(self) -> int:
        return _count(self.items, ItemType.DIR)


@dataclass(frozen=True, slots=True)
class CleanupResult:
    """Outcome of executing a plan.

    Every plan item ends up in exactly one of ``deleted`` or ``failed``.

    Attributes:
        deleted: Items removed successfully, in plan order.
        failed: Items that could not be removed, in plan order.
        errors: Error text per failed path.
    """

    deleted: tuple[CleanupItem, ...] = ()
    failed: tuple[CleanupItem, ...] = ()
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)

    @property
    def deleted_size_bytes(self) -> int:
        """Total bytes reclaimed by successful deletions."""
        return sum(item.size_bytes for item in self.deleted)

    @property
    def deleted_file_count(self) -> int:
        return _count(self.deleted, ItemType.FILE)

    @property
    def deleted_dir_count(self) -> int:
        return _count(self.deleted, ItemType.DIR)
