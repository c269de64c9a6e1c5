"""xcleanup - disk-pressure driven cleanup of stale files and empty directories."""

__version__ = "0.1.0"
