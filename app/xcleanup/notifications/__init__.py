"""Outbound notification channels.

This module provides the Notifier interface, its email and webhook
implementations, and the composite that fans a report out to all
enabled channels.
"""

from xcleanup.notifications.base import Notifier
from xcleanup.notifications.composite import NotifierComposite, build_notifiers
from xcleanup.notifications.smtp import EmailNotifier
from xcleanup.notifications.webhook import DiscordNotifier, SlackNotifier, TelegramNotifier

__all__ = [
    "DiscordNotifier",
    "EmailNotifier",
    "Notifier",
    "NotifierComposite",
    "SlackNotifier",
    "TelegramNotifier",
    "build_notifiers",
]
