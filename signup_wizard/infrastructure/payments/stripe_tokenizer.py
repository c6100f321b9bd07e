from __future__ import annotations

import logging

import stripe

from signup_wizard.application.exceptions import BackendUpstreamError, TokenizationError
from signup_wizard.application.ports.payment_tokenizer import PaymentTokenizerPort
from signup_wizard.core.config import settings

CARD_ERROR = "An error occurred with your card."
USED_TOKEN_ERROR = "This card entry was already used. Please re-enter your card details."
NAME_MISMATCH_ERROR = "The name on card does not match the card details."


class StripePaymentTokenizer(PaymentTokenizerPort):
    """
    Confirms tokens created in the browser by Stripe Elements.
    Card numbers never pass through this service; only the token id does.
    """

    def __init__(self, api_key: str | None = None) -> None:
        self._api_key = api_key or settings.STRIPE_SECRET_KEY
        self._logger = logging.getLogger(__name__)

        if not self._api_key:
            raise ValueError("STRIPE_SECRET_KEY is required for Stripe tokenization")

    def confirm_token(self, token: str, name_on_card: str) -> str:
        try:
            minted = stripe.Token.retrieve(token, api_key=self._api_key)
        except stripe.InvalidRequestError as e:
            # Unknown or malformed token id
            self._logger.info("Stripe token rejected", extra={"reason": str(e)})
            raise TokenizationError(CARD_ERROR) from e
        except stripe.StripeError as e:
            self._logger.error("Stripe token lookup failed", extra={"reason": str(e)})
            raise BackendUpstreamError(f"Stripe token lookup failed: {e}") from e

        if getattr(minted, "type", "card") != "card":
            raise TokenizationError(CARD_ERROR)
        if getattr(minted, "used", False):
            raise TokenizationError(USED_TOKEN_ERROR)

        card_name = getattr(getattr(minted, "card", None), "name", None) or ""
        if card_name and card_name.strip().lower() != name_on_card.strip().lower():
            raise TokenizationError(NAME_MISMATCH_ERROR)

        self._logger.info("Card token confirmed", extra={"action": "stripe_token"})
        return minted.id
