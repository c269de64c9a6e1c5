"""Unit tests for configuration loading and validation.

Tests for the pydantic config models and the TOML load/save helpers.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
import typer
from pydantic import ValidationError
from xcleanup.core.config import (
    CleanupConfig,
    EmailSettings,
    LoggingSettings,
    PathsSettings,
    default_config,
    load_config,
    require_config,
    save_config,
)
from xcleanup.core.errors import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
)

MINIMAL_TOML = """
[paths]
allowed_paths = ["/tmp/x"]
"""

FULL_TOML = """
disk_check_path = "/srv"

[paths]
allowed_paths = ["/srv/cache", "#\\\\.tmp$#"]
excluded_paths = ["/srv/cache/keep"]
follow_symlinks = true

[cleanup]
min_age_seconds = 3600
skip_if_deleted_within_seconds = 600
delete_files = true
delete_empty_directories = false
max_items = 100

[emergency]
enabled = true
free_percent_threshold = 5.5
free_bytes_threshold = 1073741824
free_bytes_critical_threshold = 536870912
paths = ["/srv/cache/big"]

[logging]
directory = "/var/log/xcleanup"
level = "NOTICE"
json_logs = true
state_file = "/var/lib/xcleanup/state.json"

[notifications]
enabled = true

[notifications.email]
enabled = true
smtp_host = "smtp.example.com"
smtp_port = 465
smtp_username = "robot"
smtp_password = "secret"
smtp_encryption = "ssl"
from = "robot@example.com"
to = "ops@example.com"

[notifications.slack]
enabled = true
webhook_url = "https://hooks.slack.com/services/T/B/X"
"""


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(content)
    return path


class TestLoadConfig:
    """Tests for load_config function."""

    def test_minimal_config_gets_defaults(self, tmp_path: Path) -> None:
        config = load_config(_write(tmp_path, MINIMAL_TOML))

        assert config.paths.allowed_paths == ["/tmp/x"]
        assert config.paths.excluded_paths == []
        assert config.disk_check_path == "/"
        assert config.cleanup.min_age_seconds == 0
        assert config.cleanup.delete_files is True
        assert config.emergency.enabled is False
        assert config.emergency.free_percent_threshold == 10.0
        assert config.logging.level == "info"
        assert config.notifications.enabled is False

    def test_full_config(self, tmp_path: Path) -> None:
        config = load_config(_write(tmp_path, FULL_TOML))

        assert config.disk_check_path == "/srv"
        assert config.paths.allowed_paths == ["/srv/cache", "#\\.tmp$#"]
        assert config.paths.follow_symlinks is True
        assert config.cleanup.delete_empty_directories is False
        assert config.cleanup.max_items == 100
        assert config.emergency.free_bytes_critical_threshold == 536870912
        assert config.logging.level == "notice"
        assert config.logging.json_logs is True
        assert config.notifications.email.from_address == "robot@example.com"
        assert config.notifications.email.smtp_encryption == "ssl"
        assert config.notifications.slack.webhook_url.startswith("https://")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigParseError, match="Invalid TOML"):
            load_config(_write(tmp_path, "[paths\nallowed_paths = "))

    @pytest.mark.parametrize(
        "content",
        [
            "[cleanup]\nmin_age_seconds = 1\n",
            "[paths]\nallowed_paths = []\n",
            '[paths]\nallowed_paths = [""]\n',
            '[paths]\nallowed_paths = ["#[bad#"]\n',
            '[paths]\nallowed_paths = ["/tmp"]\n[cleanup]\nmin_age_seconds = -1\n',
            '[paths]\nallowed_paths = ["/tmp"]\n[cleanup]\nunknown = 1\n',
            '[paths]\nallowed_paths = ["/tmp"]\n[logging]\nlevel = "loud"\n',
            '[paths]\nallowed_paths = ["/tmp"]\n[logging]\ndirectory = "logs"\n',
            'disk_check_path = "relative"\n[paths]\nallowed_paths = ["/tmp"]\n',
        ],
    )
    def test_invalid_content(self, tmp_path: Path, content: str) -> None:
        with pytest.raises(ConfigValidationError, match="Invalid config content"):
            load_config(_write(tmp_path, content))

    def test_default_path_from_xdg(self, tmp_path: Path) -> None:
        config_dir = tmp_path / "xcleanup"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text(MINIMAL_TOML)

        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            config = load_config()

        assert config.paths.allowed_paths == ["/tmp/x"]


class TestModels:
    """Tests for individual settings models."""

    def test_paths_require_allowed(self) -> None:
        with pytest.raises(ValidationError):
            PathsSettings(allowed_paths=[])

    def test_logging_defaults_are_absolute(self) -> None:
        settings = LoggingSettings()

        assert os.path.isabs(settings.directory)
        assert settings.state_file.endswith("state.json")

    def test_email_incomplete_when_enabled(self) -> None:
        with pytest.raises(ValidationError, match="Email notification requires"):
            EmailSettings(enabled=True, smtp_host="smtp.example.com")

    def test_email_disabled_may_be_incomplete(self) -> None:
        settings = EmailSettings(enabled=False, smtp_host="smtp.example.com")

        assert settings.is_complete is False

    def test_webhook_requires_url(self) -> None:
        with pytest.raises(ValidationError, match="webhook_url"):
            CleanupConfig.model_validate(
                {
                    "paths": {"allowed_paths": ["/tmp"]},
                    "notifications": {"discord": {"enabled": True}},
                }
            )

    def test_telegram_requires_token_and_chat(self) -> None:
        with pytest.raises(ValidationError, match="bot_token and chat_id"):
            CleanupConfig.model_validate(
                {
                    "paths": {"allowed_paths": ["/tmp"]},
                    "notifications": {"telegram": {"enabled": True, "bot_token": "t"}},
                }
            )


class TestSaveConfig:
    """Tests for save_config function."""

    def test_round_trip(self, tmp_path: Path) -> None:
        original = load_config(_write(tmp_path, FULL_TOML))
        target = tmp_path / "out" / "config.toml"

        save_config(original, target)

        assert load_config(target) == original

    def test_writes_from_alias(self, tmp_path: Path) -> None:
        original = load_config(_write(tmp_path, FULL_TOML))
        target = tmp_path / "saved.toml"

        save_config(original, target)

        assert 'from = "robot@example.com"' in target.read_text()

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        save_config(default_config(), tmp_path / "config.toml")

        assert list(tmp_path.glob("*.tmp")) == []


class TestDefaultConfig:
    """Tests for default_config function."""

    def test_conservative_defaults(self) -> None:
        config = default_config()

        assert config.paths.allowed_paths == ["/tmp"]
        assert config.cleanup.min_age_seconds == 86400
        assert config.cleanup.skip_if_deleted_within_seconds == 3600
        assert config.emergency.enabled is False

    def test_custom_allowed_paths(self) -> None:
        assert default_config(["/srv/cache"]).paths.allowed_paths == ["/srv/cache"]


class TestRequireConfig:
    """Tests for require_config function."""

    def test_returns_config(self, tmp_path: Path) -> None:
        config = require_config(_write(tmp_path, MINIMAL_TOML))

        assert config.paths.allowed_paths == ["/tmp/x"]

    def test_missing_exits(self, tmp_path: Path) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            require_config(tmp_path / "missing.toml")

        assert exc_info.value.exit_code == 1

    def test_invalid_exits(self, tmp_path: Path) -> None:
        with pytest.raises(typer.Exit):
            require_config(_write(tmp_path, "not toml ["))
