from __future__ import annotations

import logging
from typing import Any

from signup_wizard.application.ports.form_options import FormOptionsPort
from signup_wizard.application.ports.pricing import PricingPort
from signup_wizard.application.ports.quote_lead import QuoteLeadPort
from signup_wizard.application.ports.registration import RegistrationPort
from signup_wizard.application.ports.service_area import ServiceAreaPort
from signup_wizard.domain.entities.pricing_quote import PricingQuote
from signup_wizard.domain.entities.registration import RegistrationResult
from signup_wizard.domain.entities.service_selection import ServiceSelection
from signup_wizard.domain.entities.zip_check import ZipCheckResult

VISITS_PER_MONTH = {
    "two_times_a_week": 8.67,
    "once_a_week": 4.33,
    "bi_weekly": 2.17,
    "once_a_month": 1,
    "one_time": 1,
}

PER_VISIT_BY_DOGS = {1: 15.0, 2: 18.0, 3: 21.0, 4: 24.0}


class MockServiceArea(ServiceAreaPort):
    def __init__(self, zip_codes: set[str]) -> None:
        self._zip_codes = set(zip_codes)
        self.calls: list[str] = []

    def check_zip(self, zip_code: str) -> ZipCheckResult:
        self.calls.append(zip_code)
        if zip_code in self._zip_codes:
            return ZipCheckResult(in_service_area=True, message="Great news! We service your area.")
        return ZipCheckResult(in_service_area=False, message="We don't currently serve this area, but we're expanding!")


class MockPricing(PricingPort):
    """Per-visit table by dog count, monthly estimate from visits per month."""

    def __init__(self) -> None:
        self.calls: list[dict[str, str]] = []

    def get_pricing(
        self,
        zip_code: str,
        number_of_dogs: str,
        frequency: str,
        last_cleaned: str,
    ) -> PricingQuote | None:
        self.calls.append(
            {"zip_code": zip_code, "number_of_dogs": number_of_dogs, "frequency": frequency, "last_cleaned": last_cleaned}
        )
        dogs = ServiceSelection("", "", number_of_dogs, frequency, last_cleaned).dog_count
        if dogs > max(PER_VISIT_BY_DOGS):
            # Large packs get a custom quote
            return PricingQuote(
                recurring_price=0.0,
                initial_cleanup_fee=0.0,
                price_not_configured=True,
                custom_price_description="We'll provide a personalized quote based on your yard size and needs.",
            )

        per_visit = PER_VISIT_BY_DOGS[dogs]
        visits = VISITS_PER_MONTH.get(frequency, 4.33)
        return PricingQuote(
            recurring_price=per_visit,
            monthly_price=round(per_visit * visits, 2),
            initial_cleanup_fee=0.0 if last_cleaned == "one_week" else 99.0,
            billing_interval="per_visit",
            category="prepaid",
            base_price=per_visit,
        )


class MockQuoteLead(QuoteLeadPort):
    def __init__(self) -> None:
        self.leads: list[dict[str, str]] = []
        self._logger = logging.getLogger(__name__)

    def submit_free_quote(self, zip_code: str, selection: ServiceSelection) -> None:
        self.leads.append({"zip_code": zip_code, "first_name": selection.first_name, "phone": selection.phone})
        self._logger.info("Mock quote lead recorded", extra={"zip_code": zip_code})


class MockRegistration(RegistrationPort):
    def __init__(self) -> None:
        self.submissions: list[dict[str, Any]] = []
        self._logger = logging.getLogger(__name__)

    def submit_quote(self, payload: dict[str, Any]) -> RegistrationResult:
        self.submissions.append(payload)
        self._logger.info("Mock registration recorded", extra={"zip_code": payload.get("zipCode")})
        return RegistrationResult(success=True)


class MockFormOptions(FormOptionsPort):
    def __init__(self, form_fields: dict[str, str] | None = None) -> None:
        self._form_fields = form_fields or {}

    def fetch_form_fields(self) -> dict[str, str]:
        return dict(self._form_fields)
