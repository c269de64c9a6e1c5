"""HTTP notification channels: Slack, Discord, and Telegram."""

from typing import Any

import requests

from xcleanup.core.errors import NotificationError
from xcleanup.notifications.base import Notifier

DEFAULT_TIMEOUT = 10.0

TELEGRAM_API_URL = "https://api.telegram.org/bot{token}/sendMessage"


def _compose(subject: str, message: str) -> str:
    return f"{subject}\n\n{message}"


class _JsonPostNotifier(Notifier):
    """Shared POST-a-JSON-payload delivery."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._timeout = timeout

    def _post(self, url: str, payload: dict[str, Any]) -> None:
        try:
            response = requests.post(url, json=payload, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NotificationError(f"{self.name} delivery failed: {e}") from e


class SlackNotifier(_JsonPostNotifier):
    """Posts reports to a Slack incoming webhook."""

    def __init__(self, webhook_url: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        super().__init__(timeout)
        self._webhook_url = webhook_url

    @property
    def name(self) -> str:
        return "slack"

    def send(self, subject: str, message: str) -> None:
        self._post(self._webhook_url, {"text": _compose(subject, message)})


class DiscordNotifier(_JsonPostNotifier):
    """Posts reports to a Discord webhook."""

    def __init__(self, webhook_url: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        super().__init__(timeout)
        self._webhook_url = webhook_url

    @property
    def name(self) -> str:
        return "discord"

    def send(self, subject: str, message: str) -> None:
        self._post(self._webhook_url, {"content": _compose(subject, message)})


class TelegramNotifier(_JsonPostNotifier):
    """Sends reports through the Telegram Bot API."""

    def __init__(self, bot_token: str, chat_id: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        super().__init__(timeout)
        self._bot_token = bot_token
        self._chat_id = chat_id

    @property
    def name(self) -> str:
        return "telegram"

    def send(self, subject: str, message: str) -> None:
        self._post(
            TELEGRAM_API_URL.format(token=self._bot_token),
            {"chat_id": self._chat_id, "text": _compose(subject, message)},
        )
