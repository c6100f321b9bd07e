from __future__ import annotations

import logging

from pydantic import ValidationError

from signup_wizard.application.exceptions import BackendContractError
from signup_wizard.application.ports.pricing import PricingPort
from signup_wizard.domain.entities.pricing_quote import PricingQuote
from signup_wizard.infrastructure.backend.backend_client import BackendClient
from signup_wizard.infrastructure.backend.dto import PricingResponseDTO


class HttpPricing(PricingPort):
    def __init__(self, client: BackendClient) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    def get_pricing(
        self,
        zip_code: str,
        number_of_dogs: str,
        frequency: str,
        last_cleaned: str,
    ) -> PricingQuote | None:
        params = {
            "zipCode": zip_code,
            "numberOfDogs": number_of_dogs,
            "frequency": frequency,
            "lastCleaned": last_cleaned,
        }
        body = self._client.get_json("/get-pricing", params=params, allow_error_body=True)
        try:
            dto = PricingResponseDTO.model_validate(body)
        except ValidationError as e:
            raise BackendContractError(f"Unexpected get-pricing response: {e}") from e

        if not dto.success or dto.pricing is None:
            self._logger.warning("Pricing not available", extra={"zip_code": zip_code, "reason": body.get("error")})
            return None

        p = dto.pricing
        return PricingQuote(
            recurring_price=p.recurring_price,
            monthly_price=p.monthly_price,
            initial_cleanup_fee=p.initial_cleanup_fee,
            billing_interval=p.billing_interval or "per_visit",
            category=p.category or "",
            price_not_configured=p.price_not_configured,
            base_price=p.base_price,
            custom_price_description=p.custom_price_description or "",
            tax_rate=p.tax_rate,
        )
