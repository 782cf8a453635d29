"""
services.mail_service - Outbound e-mail.

MAIL_BACKEND "smtp" delivers through MAIL_HOST with STARTTLS;
"log" only records the message (development and tests).
"""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from typing import Mapping

logger = logging.getLogger(__name__)


class MailError(Exception):
    """Delivery failed; registration must not complete."""


def send_mail(settings: Mapping, to: str, subject: str, html: str) -> None:
    backend = settings.get("MAIL_BACKEND", "log")
    if backend == "log":
        logger.info(f"Mail (not sent) to {to}: {subject}")
        logger.debug(html)
        return
    if backend != "smtp":
        raise MailError(f"Unknown MAIL_BACKEND {backend!r}")

    msg = EmailMessage()
    msg["From"] = settings.get("MAIL_SENDER") or settings["MAIL_USER"]
    msg["To"] = to
    msg["Subject"] = subject
    msg.set_content("This message requires an HTML-capable mail client.")
    msg.add_alternative(html, subtype="html")

    try:
        with smtplib.SMTP(settings["MAIL_HOST"], settings["MAIL_PORT"], timeout=30) as smtp:
            smtp.starttls()
            if settings.get("MAIL_USER"):
                smtp.login(settings["MAIL_USER"], settings.get("MAIL_PASSWORD", ""))
            smtp.send_message(msg)
    except (smtplib.SMTPException, OSError) as exc:
        logger.error(f"Failed to send mail to {to}: {exc}")
        raise MailError(str(exc)) from exc

    logger.info(f"Mail sent to {to}")
