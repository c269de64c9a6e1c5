"""Disk usage inspection."""

import shutil

from xcleanup.core.errors import StorageError
from xcleanup.filesystem.models import DiskUsage


def read_disk_usage(path: str) -> DiskUsage:
    """Read total and free bytes for the filesystem containing path.

    Args:
        path: Any path on the filesystem to inspect.

    Returns:
        DiskUsage snapshot.

    Raises:
        StorageError: If the filesystem cannot be queried.
    """
    try:
        usage = shutil.disk_usage(path)
    except OSError as e:
        raise StorageError(f"Unable to read disk usage for path {path}: {e}") from e

    return DiskUsage(total_bytes=usage.total, free_bytes=usage.free)
