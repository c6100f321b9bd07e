"""
Tests for the wizard HTTP API.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from wizard_fakes import CONTACT_FIELDS, NOTIFICATION_FIELDS, SERVICE_FIELDS, build_use_case, dog_fields

from signup_wizard.core.config import settings
from signup_wizard.main import app
from signup_wizard.wiring.dependencies import get_backend_client, get_wizard_use_case


@pytest.fixture
def wizard():
    uc, ports = build_use_case()
    app.dependency_overrides[get_wizard_use_case] = lambda: uc
    with TestClient(app) as client:
        yield client, ports
    app.dependency_overrides.clear()


def test_health(wizard):
    client, _ = wizard
    assert client.get("/health").json() == {"status": "ok"}


def test_start_session_has_options_and_progress(wizard):
    client, _ = wizard

    resp = client.post("/wizard/sessions")

    assert resp.status_code == 201
    body = resp.json()
    assert body["step"] == "zip"
    assert body["progress"] == {"number": 1, "total": 8, "label": "Location", "percent": 12.5}
    assert {"value": "once_a_week", "label": "Weekly"} in body["options"]["frequency"]


def test_full_signup_over_http(wizard):
    client, ports = wizard
    session_id = client.post("/wizard/sessions").json()["session_id"]
    base = f"/wizard/sessions/{session_id}"

    body = client.post(f"{base}/zip", json={"zip_code": "91701"}).json()
    assert body["step"] == "service"
    assert body["zip_message"] == "Great news! We service your area."

    body = client.post(f"{base}/service", json=SERVICE_FIELDS).json()
    assert body["step"] == "quote"
    assert body["quote_summary"] == "Your weekly service for 2 dogs."
    assert body["pricing"]["recurring_price"] == 18.0
    # Background task ran after the response
    assert len(ports["quote_lead"].leads) == 1

    assert client.post(f"{base}/quote/continue").json()["step"] == "contact"

    body = client.post(f"{base}/contact", json=CONTACT_FIELDS).json()
    assert body["step"] == "dogs"
    assert body["dogs"]["index"] == 0
    assert body["dogs"]["count"] == 2

    client.post(f"{base}/dogs/next", json=dog_fields("Biscuit"))
    body = client.post(f"{base}/dogs/next", json=dog_fields("Pepper", is_safe="no")).json()
    assert body["step"] == "notifications"

    body = client.post(f"{base}/notifications", json=NOTIFICATION_FIELDS).json()
    assert body["step"] == "payment"
    assert body["payment_can_continue"] is False

    body = client.post(f"{base}/payment/card-state", json={"complete": True}).json()
    assert body["payment_can_continue"] is True

    body = client.post(
        f"{base}/payment",
        json={
            "name_on_card": "Jamie Rivera",
            "terms_accepted": True,
            "card": {"complete": True, "token": "tok_visa"},
        },
    ).json()
    assert body["step"] == "review"
    assert body["has_payment_token"] is True

    body = client.post(f"{base}/submit").json()
    assert body["step"] == "success"
    assert body["progress"] is None
    assert ports["registration"].submissions[0]["dogs"][1]["safe_dog"] == "no"

    assert client.get(base).status_code == 404


def test_zip_field_error(wizard):
    client, ports = wizard
    session_id = client.post("/wizard/sessions").json()["session_id"]

    body = client.post(f"/wizard/sessions/{session_id}/zip", json={"zip_code": "9170"}).json()

    assert body["action"] == "invalid"
    assert body["field_errors"] == {"zip_code": "Please enter a valid 5-digit ZIP code"}
    assert ports["service_area"].calls == []


def test_unknown_session_is_404(wizard):
    client, _ = wizard

    assert client.post("/wizard/sessions/nope/zip", json={"zip_code": "91701"}).status_code == 404
    assert client.delete("/wizard/sessions/nope").status_code == 404


def test_out_of_order_step_is_409(wizard):
    client, _ = wizard
    session_id = client.post("/wizard/sessions").json()["session_id"]

    resp = client.post(f"/wizard/sessions/{session_id}/contact", json=CONTACT_FIELDS)

    assert resp.status_code == 409


def test_abandon(wizard):
    client, ports = wizard
    session_id = client.post("/wizard/sessions").json()["session_id"]

    assert client.delete(f"/wizard/sessions/{session_id}").status_code == 204
    assert len(ports["store"]) == 0


def test_shutdown_closes_backend_client(monkeypatch):
    monkeypatch.setattr(settings, "BACKEND_BASE_URL", "https://backend.test")
    get_backend_client.cache_clear()
    backend = get_backend_client()

    with TestClient(app):
        assert not backend.is_closed

    assert backend.is_closed
    assert get_backend_client.cache_info().currsize == 0
