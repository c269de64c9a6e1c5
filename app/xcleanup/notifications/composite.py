"""Fan-out delivery across all configured notification channels."""

import logging

from xcleanup.core.config import NotificationSettings
from xcleanup.core.errors import NotificationError
from xcleanup.notifications.base import Notifier
from xcleanup.notifications.smtp import EmailNotifier
from xcleanup.notifications.webhook import DiscordNotifier, SlackNotifier, TelegramNotifier

logger = logging.getLogger(__name__)


class NotifierComposite:
    """Dispatches a notification to every channel.

    One channel failing never stops the others; failures are logged.
    """

    def __init__(self, notifiers: list[Notifier]) -> None:
        self._notifiers = list(notifiers)

    def __len__(self) -> int:
        return len(self._notifiers)

    def send_all(self, subject: str, message: str) -> list[str]:
        """Send to all channels.

        Args:
            subject: Subject line.
            message: Full message body.

        Returns:
            Names of the channels that delivered successfully.
        """
        delivered: list[str] = []
        for notifier in self._notifiers:
            try:
                notifier.send(subject, message)
            except NotificationError as e:
                logger.warning(
                    "Notification failed",
                    extra={"channel": notifier.name, "error": str(e)},
                )
                continue
            delivered.append(notifier.name)
        return delivered


def build_notifiers(settings: NotificationSettings) -> list[Notifier]:
    """Create notifiers for every enabled and complete channel.

    Returns an empty list when notifications are disabled globally.
    Enabled channels with missing settings are skipped with a warning.

    Args:
        settings: Notification section of the configuration.

    Returns:
        List of ready-to-use notifiers.
    """
    if not settings.enabled:
        return []

    notifiers: list[Notifier] = []

    email = settings.email
    if email.enabled:
        if email.is_complete:
            notifiers.append(
                EmailNotifier(
                    host=email.smtp_host,
                    port=email.smtp_port,
                    username=email.smtp_username,
                    password=email.smtp_password,
                    encryption=email.smtp_encryption,
                    sender=email.from_address,
                    recipient=email.to,
                )
            )
        else:
            logger.warning("Email notifier enabled but configuration is incomplete.")

    telegram = settings.telegram
    if telegram.enabled:
        if telegram.bot_token and telegram.chat_id:
            notifiers.append(TelegramNotifier(telegram.bot_token, telegram.chat_id))
        else:
            logger.warning("Telegram notifier enabled but configuration is incomplete.")

    if settings.slack.enabled:
        if settings.slack.webhook_url:
            notifiers.append(SlackNotifier(settings.slack.webhook_url))
        else:
            logger.warning("Slack notifier enabled but configuration is incomplete.")

    if settings.discord.enabled:
        if settings.discord.webhook_url:
            notifiers.append(DiscordNotifier(settings.discord.webhook_url))
        else:
            logger.warning("Discord notifier enabled but configuration is incomplete.")

    return notifiers
