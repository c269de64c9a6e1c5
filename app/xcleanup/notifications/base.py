"""Abstract base class for notification channels.

This module defines the Notifier interface that every outbound channel
(email, Slack, Discord, Telegram) implements.
"""

from abc import ABC, abstractmethod


class Notifier(ABC):
    """Abstract base class for all notification channels.

    Notifiers deliver a plain-text subject and message. Delivery failures
    raise NotificationError; NotifierComposite isolates them per channel.

    Example:
        >>> notifier = SlackNotifier("https://hooks.slack.com/services/...")
        >>> notifier.send("Cleanup report", "Deleted files: 3")
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return a short channel name used in logs."""

    @abstractmethod
    def send(self, subject: str, message: str) -> None:
        """Deliver a notification.

        Args:
            subject: Subject line.
            message: Full message body.

        Raises:
            NotificationError: If delivery fails.
        """
