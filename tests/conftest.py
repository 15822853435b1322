"""Shared test fixtures for the design request service test suite."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from design_request.app import create_app
from design_request.config import Settings, SmtpConfig
from design_request.models import RenderedMessage
from design_request.transport import DeliveryError


class StubTransport:
    """Records sent messages; optionally raises on every send."""

    def __init__(self, error: Exception | None = None) -> None:
        self.sent: list[RenderedMessage] = []
        self._error = error

    async def send(self, message: RenderedMessage) -> str:
        if self._error is not None:
            raise self._error
        self.sent.append(message)
        return f"<stub-{len(self.sent)}@design-request>"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep developer shells from leaking SMTP settings into tests."""
    for name in (
        "EMAIL_HOST", "EMAIL_PORT", "EMAIL_SECURE", "EMAIL_USER", "EMAIL_PASS",
        "EMAIL_PASSWORD", "EMAIL_FROM", "EMAIL_TIMEOUT_SECONDS", "NODE_ENV", "PORT",
        "DESIGN_REQUEST_ENVIRONMENT", "DESIGN_REQUEST_PORT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def smtp_config() -> SmtpConfig:
    return SmtpConfig(
        host="smtp.test.com",
        port=587,
        secure=False,
        user="mailer",
        password="secret",
        timeout_seconds=1.0,
    )


@pytest.fixture
def settings(smtp_config: SmtpConfig) -> Settings:
    return Settings(environment="production", smtp=smtp_config)


@pytest.fixture
def dev_settings(smtp_config: SmtpConfig) -> Settings:
    return Settings(environment="development", smtp=smtp_config)


@pytest.fixture
def unconfigured_settings() -> Settings:
    return Settings(environment="development", smtp=SmtpConfig())


@pytest.fixture
def transport() -> StubTransport:
    return StubTransport()


@pytest.fixture
def failing_transport() -> StubTransport:
    return StubTransport(error=DeliveryError("550 mailbox unavailable"))


def make_client(settings: Settings, transport) -> AsyncClient:
    app = create_app(settings, transport)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


# ------------------------------------------------------------------
# Sample form payload (web form output)
# ------------------------------------------------------------------


def make_payload(
    *,
    language: str = "fr",
    title: str = "Affiche colloque",
    requester_name: str = "Marie Tremblay",
    requester_email: str = "marie.tremblay@example.com",
    context: str | None = "Promouvoir le colloque annuel",
    delivery_date: str | None = "2024-03-05",
    priority: str | None = "high",
    options: str | None = "single",
    guidelines: str | None = "Couleurs de l'institution",
    material_dates: dict | None = None,
    materials_list: list[str] | None = None,
    text_content: dict | None = None,
    cc_emails: list | None = None,
) -> dict:
    """Build a submission dict matching what the web form posts."""
    return {
        "title": title,
        "requesterName": requester_name,
        "requesterEmail": requester_email,
        "context": context,
        "deliveryDate": delivery_date,
        "priority": priority,
        "options": options,
        "guidelines": guidelines,
        "language": language,
        "materialDates": material_dates if material_dates is not None else {},
        "materialsList": materials_list if materials_list is not None else ["Affiche", "Bannière web"],
        "textContent": text_content if text_content is not None else {
            "titleFr": "Colloque 2024",
            "textFr": "Inscrivez-vous dès maintenant",
            "titleEn": "2024 Symposium",
            "textEn": "Register now",
        },
        "ccEmails": cc_emails if cc_emails is not None else [],
    }
