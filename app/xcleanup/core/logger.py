"""Logging setup for cleanup runs.

Every module logs through ``logging.getLogger(__name__)``. A run attaches
a single file handler to the ``xcleanup`` logger that writes
``cleanup.log`` in the configured directory, either as plain text or as
JSON lines.
"""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from xcleanup.core.errors import ConfigurationError
from xcleanup.core.paths import ensure_dir

ROOT_LOGGER = "xcleanup"
AUDIT_LOGGER = "xcleanup.audit"
LOG_FILENAME = "cleanup.log"

PLAIN_FORMAT = "[%(asctime)s] %(name)s.%(levelname)s: %(message)s"

# Syslog-style names without a stdlib counterpart
LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "alert": logging.CRITICAL,
    "emergency": logging.CRITICAL,
}

# Keys passed through ``extra=`` that end up in the JSON context
CONTEXT_KEYS: tuple[str, ...] = ("path", "error", "channel")


class JsonLineFormatter(logging.Formatter):
    """Render records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        context = {key: getattr(record, key) for key in CONTEXT_KEYS if hasattr(record, key)}
        if record.exc_info:
            context["exception"] = self.formatException(record.exc_info)

        payload = {
            "datetime": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "channel": record.name,
            "message": record.getMessage(),
            "context": context,
        }
        return json.dumps(payload, ensure_ascii=False)


def resolve_level(level: str) -> int:
    """Map a configured level name to a stdlib logging level.

    Raises:
        ConfigurationError: If the level name is unknown.
    """
    try:
        return LEVELS[level.strip().lower()]
    except KeyError:
        raise ConfigurationError(f"Invalid log level: {level}") from None


def setup_logging(directory: Path, level: str = "info", json_logs: bool = False) -> Path:
    """Attach the run's file handler to the xcleanup logger.

    Handlers installed by an earlier call are removed first, so calling
    this twice does not duplicate output.

    Args:
        directory: Directory for cleanup.log (created if missing).
        level: Level name (see LEVELS).
        json_logs: Emit JSON lines instead of plain text.

    Returns:
        Path to the log file.

    Raises:
        ConfigurationError: If the level name is unknown.
        StorageError: If the directory cannot be created.
    """
    level_value = resolve_level(level)
    ensure_dir(directory, "log")

    log_path = directory / LOG_FILENAME

    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        if getattr(handler, "_xcleanup_owned", False):
            root.removeHandler(handler)
            handler.close()

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setLevel(level_value)
    if json_logs:
        handler.setFormatter(JsonLineFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    handler._xcleanup_owned = True  # type: ignore[attr-defined]

    root.addHandler(handler)
    # Logger level is the most verbose of its handlers
    root.setLevel(min(h.level for h in root.handlers if h.level) if root.handlers else level_value)
    return log_path


def enable_console_logging(level: int = logging.DEBUG) -> None:
    """Mirror xcleanup log records to stderr through Rich."""
    from rich.logging import RichHandler

    from xcleanup.utils.formatting import err_console

    root = logging.getLogger(ROOT_LOGGER)
    if any(isinstance(h, RichHandler) for h in root.handlers):
        return

    handler = RichHandler(console=err_console, show_path=False, rich_tracebacks=False)
    handler.setLevel(level)
    root.addHandler(handler)
    if root.level == logging.NOTSET or root.level > level:
        root.setLevel(level)
