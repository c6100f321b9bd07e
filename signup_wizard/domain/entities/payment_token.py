from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentToken:
    token: str
    name_on_card: str
    revision: int  # session revision the token was created for
