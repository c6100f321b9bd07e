from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PricingQuote:
    recurring_price: float
    initial_cleanup_fee: float
    billing_interval: str = "per_visit"  # "per_visit" | "monthly" | ...
    category: str = ""
    monthly_price: float | None = None
    # True when the backend has no fixed number; show the custom quote text instead
    price_not_configured: bool = False
    base_price: float = 0.0
    custom_price_description: str = ""
    tax_rate: float = 0.0

    @property
    def shows_monthly_total(self) -> bool:
        return bool(self.monthly_price) and self.monthly_price != self.recurring_price
