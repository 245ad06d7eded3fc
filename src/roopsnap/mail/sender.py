"""
Outbound mail via SMTP (aiosmtplib).

Without SMTP credentials the reset code is written to the server log instead;
that is the development path, not a failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from email.message import EmailMessage
from functools import lru_cache

import aiosmtplib  # type: ignore[import-not-found]

from roopsnap.core.settings import Settings, settings as default_settings
from roopsnap.mail.exceptions import MailDeliveryException

logger = logging.getLogger(__name__)


def build_reset_code_message(
    *, to_email: str, from_email: str, code: str, ttl_minutes: int
) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = from_email
    msg["To"] = to_email
    msg["Subject"] = "Your Roopsnap password reset code"
    msg.set_content(
        f"Your password reset code is: {code}\n\n"
        f"This code expires in {ttl_minutes} minutes.\n"
        "If you did not request a password reset, you can ignore this email."
    )
    msg.add_alternative(
        "<p>Your password reset code is:</p>"
        f"<p><strong style='font-size:24px;letter-spacing:4px'>{code}</strong></p>"
        f"<p>This code expires in <strong>{ttl_minutes} minutes</strong>.</p>"
        "<p style='color:#6b7280;font-size:13px'>"
        "If you did not request a password reset, you can ignore this email.</p>",
        subtype="html",
    )
    return msg


@dataclass(frozen=True)
class MailSender:
    settings: Settings

    def is_configured(self) -> bool:
        s = self.settings
        return bool(s.SMTP_HOST and s.SMTP_USERNAME and s.SMTP_PASSWORD)

    async def send_reset_code(self, *, to_email: str, code: str) -> None:
        ttl_minutes = int(self.settings.AUTH_RESET_CODE_TTL_MINUTES)
        if not self.is_configured():
            logger.warning(
                "SMTP not configured; password reset code for %s: %s (expires in %d minutes)",
                to_email,
                code,
                ttl_minutes,
            )
            return

        msg = build_reset_code_message(
            to_email=to_email,
            from_email=str(self.settings.SMTP_FROM_EMAIL or self.settings.SMTP_USERNAME),
            code=code,
            ttl_minutes=ttl_minutes,
        )
        try:
            await aiosmtplib.send(
                msg,
                hostname=self.settings.SMTP_HOST,
                port=int(self.settings.SMTP_PORT),
                username=self.settings.SMTP_USERNAME,
                password=self.settings.SMTP_PASSWORD,
                start_tls=bool(self.settings.SMTP_START_TLS),
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            raise MailDeliveryException("Failed to send reset code email", str(exc)) from exc


@lru_cache
def get_mail_sender() -> MailSender:
    return MailSender(settings=default_settings)
