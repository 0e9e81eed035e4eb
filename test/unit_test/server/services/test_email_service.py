"""Unit tests for the email service."""

import smtplib
from unittest.mock import patch

import pytest

from readcycle.server.core.config import MailConfig
from readcycle.server.services.email import (
    VERIFY_EMAIL_SUBJECT,
    EmailService,
    render_template,
    verification_url,
)


def _config(**overrides) -> MailConfig:
    values = {"enabled": True, "host": "smtp.test", "port": 2525, "public_base_url": "https://readcycle.dev/"}
    values.update(overrides)
    return MailConfig(**values)


class TestTemplates:
    """Test template rendering helpers."""

    def test_verification_url(self):
        url = verification_url("abc", "https://readcycle.dev/")

        assert url == "https://readcycle.dev/api/v1/auth/verify-email?token=abc"

    def test_render_with_password(self):
        body = render_template(
            "verify-email.html",
            {"name": "Ann", "email": "ann@readcycle.dev", "password": "p4ss!", "verification_url": "https://x"},
        )

        assert "Ann" in body
        assert "p4ss!" in body
        assert 'href="https://x"' in body

    def test_render_escapes_html(self):
        body = render_template(
            "verify-email.html",
            {"name": "<b>Ann</b>", "email": "ann@readcycle.dev", "password": None, "verification_url": "https://x"},
        )

        assert "&lt;b&gt;Ann&lt;/b&gt;" in body
        assert "temporary password" not in body


@pytest.mark.asyncio
class TestEmailService:
    """Test mail delivery."""

    async def test_disabled_only_logs(self):
        service = EmailService(_config(enabled=False))

        with patch("readcycle.server.services.email._deliver") as mock_deliver:
            sent = await service.send_verification_email("Ann", "ann@readcycle.dev", "token")

        assert sent is False
        mock_deliver.assert_not_called()

    async def test_sends_verification_mail(self):
        service = EmailService(_config())

        with patch("readcycle.server.services.email._deliver") as mock_deliver:
            sent = await service.send_verification_email("Ann", "ann@readcycle.dev", "token", password="p4ss!")

        assert sent is True
        config, message = mock_deliver.call_args[0]
        assert config.host == "smtp.test"
        assert message["To"] == "ann@readcycle.dev"
        assert message["Subject"] == VERIFY_EMAIL_SUBJECT
        assert "https://readcycle.dev/api/v1/auth/verify-email?token=token" in message.get_content()

    async def test_smtp_failure_is_not_raised(self):
        service = EmailService(_config())

        with patch("readcycle.server.services.email._deliver", side_effect=smtplib.SMTPException("down")):
            sent = await service.send("ann@readcycle.dev", "Hi", "verify-email.html", {"name": "Ann"})

        assert sent is False

    async def test_invalid_header_is_not_raised(self):
        service = EmailService(_config())

        with patch("readcycle.server.services.email._deliver") as mock_deliver:
            sent = await service.send(
                "ann@readcycle.dev\r\nBcc: eve@evil.dev", "Hi", "verify-email.html", {"name": "Ann"}
            )

        assert sent is False
        mock_deliver.assert_not_called()

    async def test_unexpected_delivery_error_is_not_raised(self):
        service = EmailService(_config())

        error = UnicodeEncodeError("ascii", "é", 0, 1, "ordinal not in range(128)")
        with patch("readcycle.server.services.email._deliver", side_effect=error):
            sent = await service.send("ann@readcycle.dev", "Hi", "verify-email.html", {"name": "Ann"})

        assert sent is False

    async def test_unknown_template(self):
        service = EmailService(_config())

        with patch("readcycle.server.services.email._deliver") as mock_deliver:
            sent = await service.send("ann@readcycle.dev", "Hi", "missing.html", {})

        assert sent is False
        mock_deliver.assert_not_called()
