"""SubmissionHandler: render form submissions and deliver them on a best-effort basis."""

from __future__ import annotations

import asyncio
from typing import Any

import structlog

from .config import Settings
from .models import (
    DeliveryOutcome,
    DeliveryReport,
    RenderedMessage,
    SubmitDebug,
    SubmitErrorResponse,
    SubmitResponse,
    Submission,
)
from .rendering import build_message
from .transport import DeliveryError, MailTransport

logger = structlog.get_logger()

_CONFIRMATION = {
    "fr": "Votre formulaire a été soumis avec succès. Un courriel de confirmation a été envoyé.",
    "en": "Your form has been submitted successfully. A confirmation email has been sent.",
}

_FAILURE = {
    "fr": "Une erreur s'est produite lors de la soumission du formulaire.",
    "en": "An error occurred while submitting the form.",
}


class SubmissionHandler:
    """Turn one form payload into an email and a JSON acknowledgement.

    Delivery is best effort: once the email renders, the submitter is told
    it succeeded even when the transport is missing or fails. The real
    outcome is logged and, in development mode, echoed in ``debug``.
    """

    def __init__(self, settings: Settings, transport: MailTransport) -> None:
        self._settings = settings
        self._transport = transport

    @property
    def delivery_enabled(self) -> bool:
        return self._settings.smtp.is_configured

    # ------------------------------------------------------------------
    # Request entry point
    # ------------------------------------------------------------------

    async def handle(self, payload: Any) -> tuple[int, dict]:
        """Process a raw JSON payload; return ``(status_code, body)``."""
        lang = payload.get("language", "fr") if isinstance(payload, dict) else None
        with structlog.contextvars.bound_contextvars(language=lang):
            return await self._process(payload, lang)

    async def _process(self, payload: Any, lang: Any) -> tuple[int, dict]:
        try:
            submission = Submission.model_validate(payload)
            logger.info("form_submission_received", requester=submission.requester_email)
            message = build_message(submission, self._settings.smtp.from_address)
        except Exception as exc:
            logger.exception("form_submission_failed")
            failure = SubmitErrorResponse(
                message=_FAILURE["fr" if lang == "fr" else "en"],
                error=str(exc) if self._settings.development else None,
            )
            return 500, failure.model_dump(exclude_none=True)

        report = await self.dispatch(message)

        response = SubmitResponse(
            message=_CONFIRMATION["fr" if submission.language == "fr" else "en"],
        )
        if self._settings.development:
            response.debug = SubmitDebug(
                email_sent=report.email_sent,
                send_error=report.error,
                recipient=message.recipient,
                cc_emails=message.cc,
            )
        body = response.model_dump(by_alias=True)
        if body["debug"] is None:
            del body["debug"]
        return 200, body

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    async def dispatch(self, message: RenderedMessage) -> DeliveryReport:
        """Send *message* if the transport is configured; never raises."""
        if not self.delivery_enabled:
            logger.info(
                "email_not_configured",
                recipient=message.recipient,
                cc=message.cc,
                subject=message.subject,
            )
            return DeliveryReport(DeliveryOutcome.skipped)

        timeout = self._settings.smtp.timeout_seconds
        try:
            message_id = await asyncio.wait_for(self._transport.send(message), timeout)
        except asyncio.TimeoutError:
            # wait_for cannot cancel the to_thread worker; the SMTP session may
            # still finish on its own, bounded by the smtplib socket timeout.
            error = f"Mail transport timed out after {timeout:g}s; delivery outcome unknown"
            logger.warning("email_send_timed_out", error=error, recipient=message.recipient)
            return DeliveryReport(DeliveryOutcome.failed, error)
        except DeliveryError as exc:
            logger.warning("email_send_failed", error=str(exc), recipient=message.recipient)
            return DeliveryReport(DeliveryOutcome.failed, str(exc))
        except Exception as exc:
            logger.exception("email_send_crashed", recipient=message.recipient)
            return DeliveryReport(DeliveryOutcome.failed, str(exc))

        logger.info("email_sent", message_id=message_id, recipient=message.recipient, cc=message.cc)
        return DeliveryReport(DeliveryOutcome.sent)
