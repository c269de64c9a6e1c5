"""SMTP email notification channel."""

import smtplib
from email.message import EmailMessage

from xcleanup.core.errors import NotificationError
from xcleanup.notifications.base import Notifier

DEFAULT_TIMEOUT = 30.0


class EmailNotifier(Notifier):
    """Sends reports by email through an SMTP server.

    Encryption ``ssl`` connects with implicit TLS, ``tls`` upgrades a
    plain connection with STARTTLS, anything else sends in the clear.
    """

    def __init__(
        self,
        *,
        host: str,
        port: int,
        username: str,
        password: str,
        encryption: str,
        sender: str,
        recipient: str,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._encryption = encryption.lower()
        self._sender = sender
        self._recipient = recipient
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "email"

    def send(self, subject: str, message: str) -> None:
        email = EmailMessage()
        email["From"] = self._sender
        email["To"] = self._recipient
        email["Subject"] = subject
        email.set_content(message)

        try:
            if self._encryption == "ssl":
                client: smtplib.SMTP = smtplib.SMTP_SSL(
                    self._host, self._port, timeout=self._timeout
                )
            else:
                client = smtplib.SMTP(self._host, self._port, timeout=self._timeout)

            with client:
                if self._encryption == "tls":
                    client.starttls()
                if self._username:
                    client.login(self._username, self._password)
                client.send_message(email)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"Email delivery to {self._recipient} failed: {e}") from e
