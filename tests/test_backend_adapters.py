"""
Tests for the HTTP adapters against a mocked quote backend.
"""

from __future__ import annotations

import json

import httpx
import pytest

from signup_wizard.application.exceptions import BackendContractError, BackendUpstreamError
from signup_wizard.domain.entities.service_selection import ServiceSelection
from signup_wizard.infrastructure.backend.backend_client import BackendClient
from signup_wizard.infrastructure.backend.form_options import HttpFormOptions
from signup_wizard.infrastructure.backend.pricing import HttpPricing
from signup_wizard.infrastructure.backend.quote_lead import HttpQuoteLead
from signup_wizard.infrastructure.backend.registration import HttpRegistration
from signup_wizard.infrastructure.backend.service_area import HttpServiceArea


def make_client(handler) -> BackendClient:
    transport = httpx.MockTransport(handler)
    return BackendClient(
        base_url="http://backend.test",
        client=httpx.Client(base_url="http://backend.test", transport=transport),
    )


def test_check_zip_posts_zip_code():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"inServiceArea": True, "message": "Great news!"})

    result = HttpServiceArea(make_client(handler)).check_zip("91701")

    assert seen == {"path": "/check-zip", "body": {"zipCode": "91701"}}
    assert result.in_service_area is True
    assert result.message == "Great news!"


def test_check_zip_missing_flag_is_contract_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"message": "ok"})

    with pytest.raises(BackendContractError):
        HttpServiceArea(make_client(handler)).check_zip("91701")


def test_pricing_success():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/get-pricing"
        assert request.url.params["numberOfDogs"] == "2"
        assert request.url.params["lastCleaned"] == "two_weeks"
        return httpx.Response(
            200,
            json={
                "success": True,
                "pricing": {
                    "basePrice": 18,
                    "recurringPrice": 18,
                    "monthlyPrice": 77.94,
                    "initialCleanupFee": 99,
                    "billingInterval": "monthly",
                    "category": "prepaid",
                },
            },
        )

    quote = HttpPricing(make_client(handler)).get_pricing("91701", "2", "once_a_week", "two_weeks")

    assert quote.recurring_price == 18.0
    assert quote.monthly_price == 77.94
    assert quote.initial_cleanup_fee == 99.0
    assert quote.billing_interval == "monthly"
    assert quote.shows_monthly_total is True


def test_pricing_error_body_means_no_quote():
    """A 500 carrying {success: false} is a missing price, not a transport failure."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"success": False, "error": "No pricing for zone"})

    assert HttpPricing(make_client(handler)).get_pricing("91701", "2", "once_a_week", "two_weeks") is None


def test_pricing_gateway_error_is_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    with pytest.raises(BackendUpstreamError):
        HttpPricing(make_client(handler)).get_pricing("91701", "2", "once_a_week", "two_weeks")


def test_connection_error_is_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BackendUpstreamError):
        HttpServiceArea(make_client(handler)).check_zip("91701")


def test_non_json_success_is_contract_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="OK")

    with pytest.raises(BackendContractError):
        HttpRegistration(make_client(handler)).submit_quote({"zipCode": "91701"})


def test_submit_quote_reports_backend_error():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/submit-quote"
        return httpx.Response(400, json={"success": False, "error": "card declined"})

    result = HttpRegistration(make_client(handler)).submit_quote({"zipCode": "91701"})

    assert result.success is False
    assert result.error == "card declined"


def test_quote_lead_ignores_response():
    sent = []

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(json.loads(request.content))
        return httpx.Response(500, json={"success": False})

    selection = ServiceSelection("Jamie", "6265550100", "2", "once_a_week", "two_weeks")
    HttpQuoteLead(make_client(handler)).submit_free_quote("91701", selection)

    assert sent == [
        {
            "zipCode": "91701",
            "firstName": "Jamie",
            "phone": "6265550100",
            "numberOfDogs": "2",
            "frequency": "once_a_week",
            "lastCleaned": "two_weeks",
        }
    ]


def test_form_options_by_slug():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "success": True,
                "formOptions": {
                    "form_fields": [
                        {"slug": "number_of_dogs", "value": "1,2,3"},
                        {"slug": "gate_location", "value": None},
                    ]
                },
            },
        )

    fields = HttpFormOptions(make_client(handler)).fetch_form_fields()

    assert fields == {"number_of_dogs": "1,2,3", "gate_location": None}


def test_form_options_unsuccessful_is_contract_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": False})

    with pytest.raises(BackendContractError):
        HttpFormOptions(make_client(handler)).fetch_form_fields()
