from __future__ import annotations

import logging

from signup_wizard.application.exceptions import TokenizationError
from signup_wizard.application.ports.payment_tokenizer import PaymentTokenizerPort

# Stripe's documented test token for a generic decline
DECLINED_TOKENS = {"tok_chargeDeclined"}


class MockPaymentTokenizer(PaymentTokenizerPort):
    """Accepts any tok_ id except the decline test token."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self._logger = logging.getLogger(__name__)

    def confirm_token(self, token: str, name_on_card: str) -> str:
        self.calls.append(token)
        if not token.startswith("tok_"):
            raise TokenizationError("An error occurred with your card.")
        if token in DECLINED_TOKENS:
            raise TokenizationError("Your card was declined.")
        self._logger.info("Mock card token accepted", extra={"action": token})
        return token
