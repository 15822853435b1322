"""Async SMTP transport wrapping stdlib smtplib with asyncio.to_thread."""

from __future__ import annotations

import asyncio
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Protocol

import structlog

from .config import SmtpConfig
from .models import RenderedMessage

logger = structlog.get_logger()


class DeliveryError(Exception):
    """Raised when the mail server refuses or cannot be reached."""


class MailTransport(Protocol):
    async def send(self, message: RenderedMessage) -> str:
        """Deliver *message* and return its Message-ID, or raise ``DeliveryError``."""
        ...


def build_email(message: RenderedMessage) -> EmailMessage:
    """Convert a rendered message into an RFC 5322 plain-text email."""
    email = EmailMessage()
    email["From"] = message.sender
    email["To"] = message.recipient
    if message.cc:
        email["Cc"] = ", ".join(message.cc)
    email["Reply-To"] = message.reply_to
    email["Subject"] = message.subject
    email["Message-ID"] = make_msgid(domain="design-request")
    email.set_content(message.body, charset="utf-8")
    return email


class SmtpTransport:
    """Async-friendly SMTP sender.

    A connection is opened per message; all blocking ``smtplib`` calls
    run in a worker thread via ``asyncio.to_thread()``.
    """

    def __init__(self, config: SmtpConfig) -> None:
        self._config = config

    @classmethod
    def configure(cls, config: SmtpConfig) -> SmtpTransport:
        return cls(config)

    async def send(self, message: RenderedMessage) -> str:
        email = build_email(message)
        try:
            await asyncio.to_thread(self._send_sync, email)
        except (smtplib.SMTPException, OSError) as exc:
            raise DeliveryError(str(exc) or exc.__class__.__name__) from exc

        message_id = email["Message-ID"]
        logger.debug(
            "smtp_message_delivered",
            host=self._config.host,
            message_id=message_id,
            cc_count=len(message.cc),
        )
        return message_id

    # ------------------------------------------------------------------
    # Synchronous helpers (run in thread)
    # ------------------------------------------------------------------

    def _connect_sync(self) -> smtplib.SMTP:
        cfg = self._config
        context = ssl.create_default_context()
        if cfg.secure:
            return smtplib.SMTP_SSL(cfg.host, cfg.port, timeout=cfg.timeout_seconds, context=context)

        conn = smtplib.SMTP(cfg.host, cfg.port, timeout=cfg.timeout_seconds)
        conn.ehlo()
        if conn.has_extn("starttls"):
            conn.starttls(context=context)
            conn.ehlo()
        return conn

    def _send_sync(self, email: EmailMessage) -> None:
        cfg = self._config
        with self._connect_sync() as conn:
            if cfg.user and cfg.password:
                conn.login(cfg.user, cfg.password.get_secret_value())
            conn.send_message(email)
