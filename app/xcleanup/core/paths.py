"""XDG-compliant path management for xcleanup.

This module provides the default locations used when the configuration
does not name them explicitly.

XDG defaults:
- Config: ~/.config/xcleanup/config.toml
- State: ~/.local/state/xcleanup/state.json
- Logs: ~/.local/state/xcleanup/logs/
"""

import os
from pathlib import Path

from xcleanup.core.errors import StorageError

# Application identifier for directory naming
APP_NAME = "xcleanup"

CONFIG_FILENAME = "config.toml"
STATE_FILENAME = "state.json"


def _get_xdg_dir(env_var: str, fallback: str) -> Path:
    """Resolve an XDG base directory for xcleanup.

    An empty or unset variable falls back to ``~/<fallback>``.
    """
    base = os.environ.get(env_var) or str(Path.home() / fallback)
    return Path(base) / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/xcleanup/ (or XDG_CONFIG_HOME/xcleanup/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    Returns:
        Path to ~/.local/state/xcleanup/ (or XDG_STATE_HOME/xcleanup/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return get_config_dir() / CONFIG_FILENAME


def get_default_state_file() -> Path:
    """Get the default deletion ledger path."""
    return get_state_dir() / STATE_FILENAME


def get_default_log_dir() -> Path:
    """Get the default log and report directory."""
    return get_state_dir() / "logs"


def ensure_dir(path: Path, name: str, mode: int = 0o750) -> Path:
    """Create a directory (and parents) unless it already exists.

    Args:
        path: Directory to create.
        name: What the directory holds, for the error message.
        mode: Permission bits for newly created directories.

    Raises:
        StorageError: If the directory cannot be created.
    """
    try:
        path.mkdir(mode=mode, parents=True, exist_ok=True)
    except OSError as e:
        reason = "Permission denied" if isinstance(e, PermissionError) else str(e)
        raise StorageError(f"Cannot create {name} directory {path}: {reason}") from e
    return path
