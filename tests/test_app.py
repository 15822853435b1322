"""Tests for the HTTP endpoints."""

from __future__ import annotations

import pytest

from design_request.config import Settings
from design_request.rendering import MAIN_RECIPIENT

from tests.conftest import StubTransport, make_client, make_payload


@pytest.mark.asyncio
async def test_health_ok_with_transport(settings, transport):
    async with make_client(settings, transport) as client:
        resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "message": "Server is running"}


@pytest.mark.asyncio
async def test_health_ok_without_transport(unconfigured_settings, transport):
    async with make_client(unconfigured_settings, transport) as client:
        resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_submit_form_sends_email(settings, transport):
    async with make_client(settings, transport) as client:
        resp = await client.post("/api/submit-form", json=make_payload(language="en"))
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert "debug" not in data
    assert len(transport.sent) == 1
    assert transport.sent[0].subject == "Graphic Design Request — Affiche colloque"


@pytest.mark.asyncio
async def test_submit_form_without_smtp_skips_send(unconfigured_settings, transport):
    async with make_client(unconfigured_settings, transport) as client:
        resp = await client.post(
            "/api/submit-form",
            json=make_payload(cc_emails=["a@x.com", "", "  ", "b@y.com"]),
        )
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["debug"] == {
        "emailSent": True,
        "sendError": None,
        "recipient": MAIN_RECIPIENT,
        "ccEmails": ["a@x.com", "b@y.com"],
    }
    assert transport.sent == []


@pytest.mark.asyncio
async def test_submit_form_transport_failure_still_succeeds(dev_settings, failing_transport):
    async with make_client(dev_settings, failing_transport) as client:
        resp = await client.post("/api/submit-form", json=make_payload())
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["debug"]["sendError"] == "550 mailbox unavailable"


@pytest.mark.asyncio
async def test_submit_form_invalid_payload_returns_500(settings, transport):
    payload = make_payload(language="en")
    payload["materialDates"] = {"Poster": None}
    async with make_client(settings, transport) as client:
        resp = await client.post("/api/submit-form", json=payload)
    assert resp.status_code == 500
    assert resp.json() == {
        "success": False,
        "message": "An error occurred while submitting the form.",
    }


@pytest.mark.asyncio
async def test_submit_form_minimal_payload(settings, transport):
    payload = {
        "title": "Flyer",
        "requesterName": "Sam",
        "requesterEmail": "sam@example.com",
    }
    async with make_client(settings, transport) as client:
        resp = await client.post("/api/submit-form", json=payload)
    assert resp.status_code == 200
    body = transport.sent[0].body
    assert body.startswith("Demande de design graphique\n")
    assert "(Non fourni)" in body
    assert "(Aucun sélectionné)" in body


@pytest.mark.asyncio
async def test_cors_headers(settings, transport):
    async with make_client(settings, transport) as client:
        resp = await client.get("/api/health", headers={"Origin": "https://forms.example.org"})
    assert resp.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_index_served(settings, transport):
    async with make_client(settings, transport) as client:
        resp = await client.get("/")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert "/api/submit-form" in resp.text


@pytest.mark.asyncio
async def test_index_missing_returns_404(tmp_path, smtp_config):
    settings = Settings(smtp=smtp_config, static_dir=tmp_path)
    async with make_client(settings, StubTransport()) as client:
        resp = await client.get("/")
    assert resp.status_code == 404
