"""
Email Service

Outgoing mail over SMTP. Sending is skipped (and logged) when no
SMTP_HOST is configured, which is the default for development and tests.

smtplib is blocking, so each send runs in a worker thread.
"""

import asyncio
from email.message import EmailMessage
import smtplib

from studyhub.config.settings import settings
from studyhub.shared.core.logging import logger


class EmailService:
    async def send(self, to: str, subject: str, body: str) -> bool:
        """
        Send a plain-text message.

        Returns:
            True if handed to the SMTP server, False if mail is disabled

        Raises:
            smtplib.SMTPException / OSError on delivery failure
        """
        if not settings.email_enabled:
            logger.info("Email disabled, message not sent", to=to, subject=subject)
            return False

        message = EmailMessage()
        message["From"] = settings.EMAIL_FROM
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        await asyncio.to_thread(_deliver, message)
        logger.info("Email sent", to=to, subject=subject)
        return True

    async def send_password_reset(self, to: str, token: str) -> bool:
        link = f"{settings.FRONTEND_URL.rstrip('/')}/reset-password?token={token}"
        body = (
            "We received a request to reset your StudyHub password.\n\n"
            f"Open this link to choose a new one:\n{link}\n\n"
            f"The link expires in {settings.PASSWORD_RESET_EXPIRE_MINUTES} minutes. "
            "If you did not ask for this, you can ignore this email."
        )
        return await self.send(to, "Reset your StudyHub password", body)


def _deliver(message: EmailMessage) -> None:
    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=10) as smtp:
        if settings.SMTP_USE_TLS:
            smtp.starttls()
        if settings.SMTP_USER:
            smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
        smtp.send_message(message)
