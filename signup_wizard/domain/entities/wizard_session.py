from __future__ import annotations

from dataclasses import dataclass, field

from signup_wizard.domain.entities.contact_info import ContactInfo
from signup_wizard.domain.entities.dog_record import DogRecord
from signup_wizard.domain.entities.form_option import FormOptions
from signup_wizard.domain.entities.notification_prefs import NotificationPrefs
from signup_wizard.domain.entities.payment_token import PaymentToken
from signup_wizard.domain.entities.pricing_quote import PricingQuote
from signup_wizard.domain.entities.service_selection import ServiceSelection
from signup_wizard.domain.entities.step import DogsStep, Step


@dataclass(frozen=True)
class WizardSession:
    session_id: str
    form_options: FormOptions
    position: Step | DogsStep = Step.ZIP
    zip_code: str = ""
    in_service_area: bool | None = None  # unset until a check succeeds
    zip_message: str | None = None
    service_selection: ServiceSelection | None = None
    contact_info: ContactInfo | None = None
    dog_records: tuple[DogRecord, ...] = ()
    notification_prefs: NotificationPrefs | None = None
    pricing_quote: PricingQuote | None = None
    payment_token: PaymentToken | None = None
    waitlisted: bool = False
    card_complete: bool = False  # last state reported by the card widget
    # Step-scoped feedback, replaced on every transition
    error: str | None = None
    field_errors: dict[str, str] = field(default_factory=dict)
    in_flight: frozenset[str] = frozenset()
    revision: int = 0

    @property
    def step(self) -> Step:
        if isinstance(self.position, DogsStep):
            return Step.DOGS
        return self.position
