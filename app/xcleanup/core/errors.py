"""Exception hierarchy for xcleanup.

Configuration and storage errors are fatal and abort a run before (or
instead of) touching the filesystem further. Per-item deletion failures
are not exceptions; they are collected into CleanupResult.
"""


class XCleanupError(Exception):
    """Base exception for all xcleanup errors."""


class ConfigurationError(XCleanupError):
    """Raised when the cleanup policy is missing or invalid."""


class ConfigNotFoundError(ConfigurationError):
    """Raised when the configuration file does not exist."""


class ConfigParseError(ConfigurationError):
    """Raised when the configuration file is not valid TOML."""


class ConfigValidationError(ConfigurationError):
    """Raised when the configuration content does not match the schema."""


class StorageError(XCleanupError):
    """Raised when durable state cannot be read or written.

    Covers the deletion ledger, its lock file, report files, log
    directories, and disk usage queries.
    """


class NotificationError(XCleanupError):
    """Raised by a notification channel when delivery fails."""
