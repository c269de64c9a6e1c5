"""Filesystem scanning, path matching, and disk inspection.

This module provides the leaf components of the cleanup pipeline: the
pattern matcher, the post-order scanner, and the disk usage reader.
"""

from xcleanup.filesystem.disk import read_disk_usage
from xcleanup.filesystem.matcher import PathMatcher, is_literal_root, is_regex_pattern
from xcleanup.filesystem.models import DiskUsage, EntryType, ScannedEntry
from xcleanup.filesystem.scanner import FilesystemScanner

__all__ = [
    "DiskUsage",
    "EntryType",
    "FilesystemScanner",
    "PathMatcher",
    "ScannedEntry",
    "is_literal_root",
    "is_regex_pattern",
    "read_disk_usage",
]
