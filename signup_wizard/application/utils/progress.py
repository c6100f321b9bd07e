from __future__ import annotations

from dataclasses import dataclass

from signup_wizard.domain.entities.step import Step
from signup_wizard.domain.entities.wizard_session import WizardSession

# Steps shown in the progress indicator, in order
VISIBLE_STEPS: tuple[tuple[Step, str], ...] = (
    (Step.ZIP, "Location"),
    (Step.SERVICE, "Service"),
    (Step.QUOTE, "Quote"),
    (Step.CONTACT, "Contact"),
    (Step.DOGS, "Dogs"),
    (Step.NOTIFICATIONS, "Notifications"),
    (Step.PAYMENT, "Payment"),
    (Step.REVIEW, "Review"),
)


@dataclass(frozen=True)
class Progress:
    number: int  # 1-based
    total: int
    label: str
    percent: float


def progress(session: WizardSession) -> Progress | None:
    """None on out-of-area and success, where the indicator is hidden."""
    for index, (step, label) in enumerate(VISIBLE_STEPS):
        if step == session.step:
            total = len(VISIBLE_STEPS)
            return Progress(number=index + 1, total=total, label=label, percent=round((index + 1) / total * 100, 1))
    return None


def quote_summary(session: WizardSession) -> str | None:
    """One-line description of the priced service, e.g. "Your weekly service for 2 dogs."."""
    selection = session.service_selection
    if selection is None or session.pricing_quote is None or session.pricing_quote.price_not_configured:
        return None
    frequency = session.form_options.label_for("frequency", selection.frequency).lower()
    count = selection.dog_count
    return f"Your {frequency} service for {selection.number_of_dogs} dog{'s' if count > 1 else ''}."
