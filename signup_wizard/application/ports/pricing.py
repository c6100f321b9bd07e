from __future__ import annotations

from abc import ABC, abstractmethod

from signup_wizard.domain.entities.pricing_quote import PricingQuote


class PricingPort(ABC):
    @abstractmethod
    def get_pricing(
        self,
        zip_code: str,
        number_of_dogs: str,
        frequency: str,
        last_cleaned: str,
    ) -> PricingQuote | None:
        """Return the quote, or None when the service reports it could not price the request."""
        raise NotImplementedError
