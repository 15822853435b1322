"""Design Request Mailer: turn graphic design request forms into bilingual emails."""

from .rendering import build_message, format_date, priority_label, render_email, resolve_recipients
from .service import SubmissionHandler
from .transport import DeliveryError, SmtpTransport

__all__ = [
    "DeliveryError",
    "SmtpTransport",
    "SubmissionHandler",
    "build_message",
    "format_date",
    "priority_label",
    "render_email",
    "resolve_recipients",
]
