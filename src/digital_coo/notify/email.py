"""SMTP mailer for accounting summaries."""

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr

from ..config import Settings

logger = logging.getLogger(__name__)


class Mailer:
    """Sends plain-text mail through the configured SMTP server."""

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        from_name: str = "XCircle Digital COO",
    ) -> None:
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.from_name = from_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "Mailer | None":
        """Build a mailer, or None when SMTP is not configured."""
        if not (settings.email_host and settings.email_user and settings.email_pass):
            return None
        return cls(
            host=settings.email_host,
            port=settings.email_port,
            user=settings.email_user,
            password=settings.email_pass,
            from_name=settings.email_from_name,
        )

    def build_message(self, to: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = formataddr((self.from_name, self.user))
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)
        return message

    def _send_sync(self, message: EmailMessage) -> None:
        # Port 465 is implicit TLS; everything else upgrades with STARTTLS.
        if self.port == 465:
            with smtplib.SMTP_SSL(self.host, self.port) as smtp:
                smtp.login(self.user, self.password)
                smtp.send_message(message)
        else:
            with smtplib.SMTP(self.host, self.port) as smtp:
                smtp.starttls()
                smtp.login(self.user, self.password)
                smtp.send_message(message)

    async def send(self, to: str, subject: str, body: str) -> None:
        """Send one message without blocking the event loop."""
        message = self.build_message(to, subject, body)
        await asyncio.to_thread(self._send_sync, message)
        logger.info(f"Email sent to {to}: {subject}")
