"""
Email Service.

Renders Jinja2 templates and delivers them over SMTP. Delivery runs in a
worker thread and failures are logged, never raised: a mail that cannot be
sent must not undo the registration that triggered it.
"""

from __future__ import annotations

import asyncio
import smtplib
from email.message import EmailMessage
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from readcycle.core.logging_config import get_logger
from readcycle.server.core.config import MailConfig, settings
from readcycle.server.core.constant import API_V1_STR

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
VERIFY_EMAIL_SUBJECT = "ReadCycle - Verify your email"
VERIFY_EMAIL_TEMPLATE = "verify-email.html"

_environment = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
)


def render_template(template_name: str, context: Dict[str, Any]) -> str:
    return _environment.get_template(template_name).render(**context)


def verification_url(token: str, base_url: Optional[str] = None) -> str:
    base = (base_url or settings.mail.public_base_url).rstrip("/")
    return f"{base}{API_V1_STR}/auth/verify-email?token={token}"


def _deliver(config: MailConfig, message: EmailMessage) -> None:
    with smtplib.SMTP(config.host, config.port, timeout=30) as smtp:
        if config.starttls:
            smtp.starttls()
        if config.username:
            smtp.login(config.username, config.password or "")
        smtp.send_message(message)


class EmailService:
    """Send templated mails."""

    def __init__(self, config: Optional[MailConfig] = None) -> None:
        self.config = config or settings.mail

    async def send(self, to: str, subject: str, template_name: str, context: Dict[str, Any]) -> bool:
        """Render and send one mail.

        Returns:
            True when the mail was handed to the SMTP server
        """
        try:
            body = render_template(template_name, context)
        except Exception:
            logger.error(f"Failed to render mail template {template_name}", exc_info=True)
            return False

        if not self.config.enabled:
            logger.info(f"Mail delivery disabled; '{subject}' for {to} rendered only")
            logger.debug(body)
            return False

        try:
            message = EmailMessage()
            message["Subject"] = subject
            message["From"] = self.config.sender
            message["To"] = to
            message.set_content(body, subtype="html")
            await asyncio.to_thread(_deliver, self.config, message)
        except Exception:
            logger.error(f"Failed to send mail '{subject}' to {to}", exc_info=True)
            return False
        logger.info(f"Mail '{subject}' sent to {to}")
        return True

    async def send_verification_email(
        self, name: str, email: str, token: str, password: Optional[str] = None
    ) -> bool:
        """Send the account verification mail, including a generated password when given."""
        context = {
            "name": name,
            "email": email,
            "password": password,
            "verification_url": verification_url(token, self.config.public_base_url),
        }
        return await self.send(email, VERIFY_EMAIL_SUBJECT, VERIFY_EMAIL_TEMPLATE, context)
