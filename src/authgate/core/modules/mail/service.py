import asyncio
import smtplib
import ssl
from email.message import EmailMessage
from typing import Any
from urllib.parse import urlencode

import structlog
from liquid import Environment
from pymongo.asynchronous.database import AsyncDatabase

from authgate.core.core import Service
from authgate.core.modules.mail import templates
from authgate.utils import redact_email

logger = structlog.get_logger(__name__)


class MailService(Service):
    """Outbound email. Messages are queued on the task service, never sent inline."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._env = Environment()

    @property
    def is_configured(self) -> bool:
        return bool(self.core.config.smtp_host)

    def send_account_register(self, email: str, full_name: str, verification_token: str) -> None:
        """Queue the email carrying the account verification link."""
        query = urlencode({"email": email, "token": verification_token})
        context = {
            "email": email,
            "full_name": full_name,
            "verify_url": f"{self.core.config.frontend_url}/verify-email?{query}",
        }
        message = self.build_message(
            email,
            templates.ACCOUNT_REGISTER_SUBJECT,
            self.render(templates.ACCOUNT_REGISTER_TEXT, context),
            self.render(templates.ACCOUNT_REGISTER_HTML, context),
        )
        self.core.services.task.submit("mail_account_register", self.send(message))

    def render(self, template: str, context: dict[str, Any]) -> str:
        return self._env.from_string(template).render(**context)

    def build_message(self, to_email: str, subject: str, text_body: str, html_body: str) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.core.config.mail_from
        message["To"] = to_email
        message.set_content(text_body)
        message.add_alternative(html_body, subtype="html")
        return message

    async def send(self, message: EmailMessage) -> None:
        to_email = str(message["To"])
        if not self.is_configured:
            logger.info("email_dev_mode", to=redact_email(to_email), subject=message["Subject"])
            return
        await asyncio.to_thread(self._deliver, message)
        logger.info("email_sent", to=redact_email(to_email), subject=message["Subject"])

    def _deliver(self, message: EmailMessage) -> None:
        config = self.core.config
        host = config.smtp_host or ""
        if config.smtp_use_tls:
            with smtplib.SMTP(host, config.smtp_port, timeout=30) as server:
                server.starttls(context=ssl.create_default_context())
                if config.smtp_user and config.smtp_password:
                    server.login(config.smtp_user, config.smtp_password)
                server.send_message(message)
        else:
            with smtplib.SMTP_SSL(host, config.smtp_port, timeout=30, context=ssl.create_default_context()) as server:
                if config.smtp_user and config.smtp_password:
                    server.login(config.smtp_user, config.smtp_password)
                server.send_message(message)
