"""Cleanup configuration models and TOML I/O.

The configuration file is validated once at the boundary. Everything
downstream of ``load_config`` sees only the strongly typed
``CleanupConfig`` model.

Configuration is stored in ~/.config/xcleanup/config.toml by default.
"""

import os
import re
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from xcleanup.core.errors import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigurationError,
    ConfigValidationError,
)
from xcleanup.core.paths import get_config_path, get_default_log_dir, get_default_state_file
from xcleanup.filesystem.matcher import is_regex_pattern, regex_body

LogLevel = Literal[
    "debug", "info", "notice", "warning", "error", "critical", "alert", "emergency"
]

SmtpEncryption = Literal["tls", "ssl", "none"]


def _validate_patterns(patterns: list[str], label: str) -> list[str]:
    for index, pattern in enumerate(patterns):
        if not pattern:
            msg = f"{label}[{index}] must be a non-empty string"
            raise ValueError(msg)
        if is_regex_pattern(pattern):
            try:
                re.compile(regex_body(pattern))
            except re.error as e:
                msg = f"{label}[{index}] contains invalid regex: {e}"
                raise ValueError(msg) from None
    return patterns


def _validate_absolute(value: str, label: str) -> str:
    if not os.path.isabs(value):
        msg = f"{label} must be an absolute path, got {value!r}"
        raise ValueError(msg)
    return value


class PathsSettings(BaseModel):
    """Which paths may be scanned and deleted.

    Attributes:
        allowed_paths: Patterns a path must match to be a candidate.
            Absolute literal entries double as scan roots.
        excluded_paths: Patterns that veto a path regardless of allowed_paths.
        follow_symlinks: Descend into symlinked directories while scanning.
    """

    model_config = ConfigDict(extra="forbid")

    allowed_paths: Annotated[
        list[str],
        Field(min_length=1, description="Allowed path patterns"),
    ]
    excluded_paths: Annotated[
        list[str],
        Field(default_factory=list, description="Excluded path patterns"),
    ]
    follow_symlinks: bool = False

    @field_validator("allowed_paths")
    @classmethod
    def validate_allowed(cls, v: list[str]) -> list[str]:
        """Reject empty and uncompilable allowed patterns."""
        return _validate_patterns(v, "paths.allowed_paths")

    @field_validator("excluded_paths")
    @classmethod
    def validate_excluded(cls, v: list[str]) -> list[str]:
        """Reject empty and uncompilable excluded patterns."""
        return _validate_patterns(v, "paths.excluded_paths")


class CleanupSettings(BaseModel):
    """Candidate selection thresholds.

    Attributes:
        min_age_seconds: Skip entries modified more recently than this (0 = off).
        skip_if_deleted_within_seconds: Cooldown window against repeat deletions (0 = off).
        delete_files: Whether files are candidates.
        delete_empty_directories: Whether empty directories are candidates.
        max_items: Maximum number of plan items (0 = unbounded).
    """

    model_config = ConfigDict(extra="forbid")

    min_age_seconds: Annotated[int, Field(ge=0)] = 0
    skip_if_deleted_within_seconds: Annotated[int, Field(ge=0)] = 0
    delete_files: bool = True
    delete_empty_directories: bool = True
    max_items: Annotated[int, Field(ge=0)] = 0


class EmergencySettings(BaseModel):
    """Emergency escalation when free space runs low.

    Any single threshold breach activates emergency mode.

    Attributes:
        enabled: Master switch; when False thresholds are never checked.
        free_percent_threshold: Trigger when free space percent drops below this.
        free_bytes_threshold: Trigger when free bytes drop below this.
        free_bytes_critical_threshold: Stricter free-bytes trigger.
        paths: Root paths scanned instead of allowed_paths in emergency mode.
    """

    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    free_percent_threshold: Annotated[float, Field(ge=0)] = 10.0
    free_bytes_threshold: Annotated[int, Field(ge=0)] = 0
    free_bytes_critical_threshold: Annotated[int, Field(ge=0)] = 0
    paths: Annotated[list[str], Field(default_factory=list)]

    @field_validator("paths")
    @classmethod
    def validate_paths(cls, v: list[str]) -> list[str]:
        """Reject empty and uncompilable emergency patterns."""
        return _validate_patterns(v, "emergency.paths")


class LoggingSettings(BaseModel):
    """Log, report, and ledger locations.

    Attributes:
        directory: Directory for cleanup.log and summary/detail reports.
        level: Minimum log level name.
        json_logs: Emit JSON lines instead of plain text.
        state_file: Path of the recently-deleted ledger.
    """

    model_config = ConfigDict(extra="forbid")

    directory: Annotated[str, Field(default_factory=lambda: str(get_default_log_dir()))]
    level: LogLevel = "info"
    json_logs: bool = False
    state_file: Annotated[str, Field(default_factory=lambda: str(get_default_state_file()))]

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept level names case-insensitively."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("directory")
    @classmethod
    def validate_directory(cls, v: str) -> str:
        """Require an absolute log directory."""
        return _validate_absolute(v, "logging.directory")

    @field_validator("state_file")
    @classmethod
    def validate_state_file(cls, v: str) -> str:
        """Require an absolute state file path."""
        return _validate_absolute(v, "logging.state_file")


class EmailSettings(BaseModel):
    """SMTP notification channel."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    enabled: bool = False
    smtp_host: str = ""
    smtp_port: Annotated[int, Field(gt=0)] = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_encryption: SmtpEncryption = "tls"
    from_address: Annotated[str, Field(alias="from")] = ""
    to: str = ""

    @property
    def is_complete(self) -> bool:
        """Check that all fields required for delivery are populated."""
        return all(
            (self.smtp_host, self.smtp_username, self.smtp_password, self.from_address, self.to)
        )

    @model_validator(mode="after")
    def validate_enabled(self) -> "EmailSettings":
        """Require complete SMTP settings when the channel is enabled."""
        if self.enabled and not self.is_complete:
            msg = "Email notification requires smtp_host, smtp_username, smtp_password, from and to"
            raise ValueError(msg)
        return self


class TelegramSettings(BaseModel):
    """Telegram bot notification channel."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    bot_token: str = ""
    chat_id: str = ""

    @model_validator(mode="after")
    def validate_enabled(self) -> "TelegramSettings":
        """Require token and chat id when the channel is enabled."""
        if self.enabled and (not self.bot_token or not self.chat_id):
            msg = "Telegram notification requires bot_token and chat_id"
            raise ValueError(msg)
        return self


class WebhookSettings(BaseModel):
    """Incoming-webhook notification channel (Slack, Discord)."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    webhook_url: str = ""

    @model_validator(mode="after")
    def validate_enabled(self) -> "WebhookSettings":
        """Require a webhook URL when the channel is enabled."""
        if self.enabled and not self.webhook_url:
            msg = "Webhook notification requires webhook_url"
            raise ValueError(msg)
        return self


class NotificationSettings(BaseModel):
    """Outbound notification channels."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    email: Annotated[EmailSettings, Field(default_factory=EmailSettings)]
    telegram: Annotated[TelegramSettings, Field(default_factory=TelegramSettings)]
    slack: Annotated[WebhookSettings, Field(default_factory=WebhookSettings)]
    discord: Annotated[WebhookSettings, Field(default_factory=WebhookSettings)]


class CleanupConfig(BaseModel):
    """Complete xcleanup configuration.

    Attributes:
        disk_check_path: Path whose filesystem is checked for free space.
        paths: Scan and match policy.
        cleanup: Candidate selection thresholds.
        emergency: Emergency escalation thresholds.
        logging: Log, report, and ledger locations.
        notifications: Outbound notification channels.
    """

    model_config = ConfigDict(extra="forbid")

    disk_check_path: str = "/"
    paths: PathsSettings
    cleanup: Annotated[CleanupSettings, Field(default_factory=CleanupSettings)]
    emergency: Annotated[EmergencySettings, Field(default_factory=EmergencySettings)]
    logging: Annotated[LoggingSettings, Field(default_factory=LoggingSettings)]
    notifications: Annotated[NotificationSettings, Field(default_factory=NotificationSettings)]

    @field_validator("disk_check_path")
    @classmethod
    def validate_disk_check_path(cls, v: str) -> str:
        """Require an absolute disk check path."""
        return _validate_absolute(v, "disk_check_path")


def load_config(path: Path | None = None) -> CleanupConfig:
    """Load and validate configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated CleanupConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
        ConfigurationError: If the file cannot be read.
    """
    config_path = path or get_config_path()

    if not config_path.is_file():
        raise ConfigNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read config: {e}") from e

    try:
        return CleanupConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def save_config(config: CleanupConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The CleanupConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigurationError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    data = config.model_dump(by_alias=True)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigurationError(f"Failed to write config: {e}") from e

    return config_path


def default_config(allowed_paths: list[str] | None = None) -> CleanupConfig:
    """Create a CleanupConfig with default settings.

    Args:
        allowed_paths: Scan roots; defaults to ["/tmp"].

    Returns:
        CleanupConfig with conservative defaults (one day minimum age,
        one hour cooldown, emergency mode off).
    """
    return CleanupConfig(
        paths=PathsSettings(allowed_paths=allowed_paths or ["/tmp"]),
        cleanup=CleanupSettings(min_age_seconds=86400, skip_if_deleted_within_seconds=3600),
    )


def require_config(config_path: Path | None = None) -> CleanupConfig:
    """Load configuration or exit with helpful error message.

    This is a convenience wrapper around load_config() that handles
    common error cases by printing user-friendly messages and exiting.

    Args:
        config_path: Optional custom config path.

    Returns:
        Loaded and validated CleanupConfig.

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    import typer

    from xcleanup.utils.formatting import print_error, print_info

    path = config_path or get_config_path()
    try:
        return load_config(path)
    except ConfigNotFoundError as e:
        print_error(f"Config file not found: {path}")
        print_info("Run 'xcleanup init' to create a default configuration.")
        raise typer.Exit(code=1) from e
    except ConfigurationError as e:
        print_error(f"Failed to load config: {e}")
        raise typer.Exit(code=1) from e
