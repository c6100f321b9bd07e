"""
Pure step transitions for the signup wizard.

Every function takes the current WizardSession and returns the next one. None
of them perform I/O; the controller in wizard.py wraps the steps that need an
external call. Validation failures raise StepValidationError and illegal moves
raise WizardTransitionError, leaving the caller's session untouched.
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Any, Callable

from signup_wizard.application.exceptions import StepValidationError, WizardBusyError, WizardTransitionError
from signup_wizard.application.use_cases.dogs import dog_previous, enter_dogs, resume_dogs
from signup_wizard.application.utils.step_schemas import (
    ContactStepSchema,
    NotificationsStepSchema,
    ServiceStepSchema,
    validate_step,
)
from signup_wizard.domain.entities.contact_info import ContactInfo
from signup_wizard.domain.entities.notification_prefs import NotificationPrefs
from signup_wizard.domain.entities.payment_token import PaymentToken
from signup_wizard.domain.entities.pricing_quote import PricingQuote
from signup_wizard.domain.entities.service_selection import ServiceSelection
from signup_wizard.domain.entities.step import DogsStep, Step
from signup_wizard.domain.entities.wizard_session import WizardSession
from signup_wizard.domain.entities.zip_check import ZipCheckResult

# ASCII digits only, no surrounding whitespace
ZIP_PATTERN = re.compile(r"[0-9]{5}")

ZIP_FORMAT_ERROR = "Please enter a valid 5-digit ZIP code"
IN_AREA_MESSAGE = "Great news! We service your area."
OUT_OF_AREA_MESSAGE = "We don't currently serve this area."
REENTER_CARD_ERROR = "Please re-enter your card details to complete your registration."

# Data each step needs before the session may sit on it
PREREQUISITES: dict[Step, Callable[[WizardSession], bool]] = {
    Step.ZIP: lambda s: True,
    Step.OUT_OF_AREA: lambda s: s.in_service_area is False,
    Step.SERVICE: lambda s: s.in_service_area is True,
    Step.QUOTE: lambda s: s.service_selection is not None and s.pricing_quote is not None,
    Step.CONTACT: lambda s: s.service_selection is not None and s.pricing_quote is not None,
    Step.DOGS: lambda s: s.contact_info is not None,
    Step.NOTIFICATIONS: lambda s: (
        s.contact_info is not None
        and len(s.dog_records) == s.service_selection.dog_count
        and all(d.name for d in s.dog_records)
    ),
    Step.PAYMENT: lambda s: s.notification_prefs is not None,
    Step.REVIEW: lambda s: s.notification_prefs is not None,
    Step.SUCCESS: lambda s: s.notification_prefs is not None,
}


def require_step(session: WizardSession, *steps: Step) -> None:
    if session.step not in steps:
        allowed = ", ".join(s.value for s in steps)
        raise WizardTransitionError(f"Action not available on step {session.step.value!r} (expected {allowed})")


def move_to(session: WizardSession, step: Step, **changes: Any) -> WizardSession:
    """Move to a plain step, clearing step-scoped feedback. Enforces prerequisites."""
    moved = replace(session, position=step, error=None, field_errors={}, **changes)
    if not PREREQUISITES[step](moved):
        raise WizardTransitionError(f"Step {step.value!r} is missing prerequisite data")
    return moved


def with_error(session: WizardSession, error: str | None = None, field_errors: dict[str, str] | None = None) -> WizardSession:
    return replace(session, error=error, field_errors=dict(field_errors or {}))


def begin_action(session: WizardSession, action: str) -> WizardSession:
    if action in session.in_flight:
        raise WizardBusyError(f"{action} already in progress")
    return replace(session, in_flight=session.in_flight | {action})


def end_action(session: WizardSession, action: str) -> WizardSession:
    return replace(session, in_flight=session.in_flight - {action})


def set_card_complete(session: WizardSession, complete: bool) -> WizardSession:
    return replace(session, card_complete=complete)


def payment_can_continue(session: WizardSession) -> bool:
    """The payment step's continue control is enabled only for a complete card."""
    return session.step == Step.PAYMENT and session.card_complete and "tokenize" not in session.in_flight


# ---- zip ----

def validate_zip(zip_code: str | None) -> str:
    zip_code = zip_code or ""
    if not ZIP_PATTERN.fullmatch(zip_code):
        raise StepValidationError({"zip_code": ZIP_FORMAT_ERROR})
    return zip_code


def apply_zip_result(session: WizardSession, zip_code: str, result: ZipCheckResult) -> WizardSession:
    message = result.message or (IN_AREA_MESSAGE if result.in_service_area else OUT_OF_AREA_MESSAGE)
    checked = replace(
        session,
        zip_code=zip_code,
        in_service_area=result.in_service_area,
        zip_message=message,
        waitlisted=False,
        revision=session.revision + 1,
    )
    if zip_code != session.zip_code:
        # A quote is priced for one ZIP only
        checked = replace(checked, pricing_quote=None)
    return move_to(checked, Step.SERVICE if result.in_service_area else Step.OUT_OF_AREA)


# ---- service / quote ----

def select_service(session: WizardSession, fields: dict[str, Any]) -> WizardSession:
    """Store validated service details. Any resubmission drops the cached quote."""
    data = validate_step(
        ServiceStepSchema,
        fields,
        allowed={
            "number_of_dogs": session.form_options.values("number_of_dogs"),
            "frequency": session.form_options.values("frequency"),
            "last_cleaned": session.form_options.values("last_cleaned"),
        },
    )
    selection = ServiceSelection(
        first_name=data.first_name,
        phone=data.phone,
        number_of_dogs=data.number_of_dogs,
        frequency=data.frequency,
        last_cleaned=data.last_cleaned,
    )
    return replace(
        session,
        service_selection=selection,
        pricing_quote=None,
        revision=session.revision + 1,
        error=None,
        field_errors={},
    )


def apply_pricing(session: WizardSession, quote: PricingQuote) -> WizardSession:
    return move_to(session, Step.QUOTE, pricing_quote=quote)


def continue_from_quote(session: WizardSession) -> WizardSession:
    require_step(session, Step.QUOTE)
    return move_to(session, Step.CONTACT)


# ---- contact ----

def submit_contact(session: WizardSession, fields: dict[str, Any]) -> WizardSession:
    require_step(session, Step.CONTACT)
    data = validate_step(
        ContactStepSchema,
        fields,
        allowed={"gate_location": session.form_options.values("gate_location")},
    )
    contact = ContactInfo(
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        phone=data.phone,
        address=data.address,
        city=data.city,
        gate_location=data.gate_location,
        gate_code=data.gate_code or "",
    )
    return enter_dogs(replace(session, contact_info=contact, revision=session.revision + 1))


# ---- notifications ----

def submit_notifications(session: WizardSession, fields: dict[str, Any]) -> WizardSession:
    require_step(session, Step.NOTIFICATIONS)
    data = validate_step(
        NotificationsStepSchema,
        fields,
        allowed={
            "notification_types": session.form_options.values("notification_types"),
            "notification_channel": session.form_options.values("notification_channels"),
        },
    )
    prefs = NotificationPrefs(
        notification_types=tuple(data.notification_types),
        notification_channel=data.notification_channel,
    )
    return move_to(session, Step.PAYMENT, notification_prefs=prefs, revision=session.revision + 1)


# ---- payment / review ----

def apply_payment_token(session: WizardSession, token: str, name_on_card: str) -> WizardSession:
    minted = PaymentToken(token=token, name_on_card=name_on_card, revision=session.revision)
    return move_to(session, Step.REVIEW, payment_token=minted)


def has_fresh_token(session: WizardSession) -> bool:
    token = session.payment_token
    return token is not None and token.revision == session.revision


def require_retokenization(session: WizardSession) -> WizardSession:
    """Send the customer back to re-enter the card; a used or stale token is never resubmitted."""
    moved = move_to(session, Step.PAYMENT, payment_token=None, card_complete=False)
    return with_error(moved, REENTER_CARD_ERROR)


def registration_failed(session: WizardSession, error: str) -> WizardSession:
    """Stay on review with the error; the token used for the attempt is spent."""
    return replace(session, payment_token=None, error=error, field_errors={})


def registration_succeeded(session: WizardSession) -> WizardSession:
    return move_to(session, Step.SUCCESS)


def build_registration_payload(session: WizardSession, state: str = "CA") -> dict[str, Any]:
    """Compose the final registration body from every collected step."""
    selection = session.service_selection
    contact = session.contact_info
    prefs = session.notification_prefs
    token = session.payment_token
    quote = session.pricing_quote

    return {
        "firstName": contact.first_name,
        "lastName": contact.last_name,
        "email": contact.email,
        "phone": contact.phone,
        "address": contact.address,
        "city": contact.city,
        "gateLocation": contact.gate_location,
        "gateCode": contact.gate_code,
        "numberOfDogs": selection.number_of_dogs,
        "frequency": selection.frequency,
        "lastCleaned": selection.last_cleaned,
        "zipCode": session.zip_code,
        "state": state,
        "inServiceArea": True,
        "initialCleanupRequired": selection.initial_cleanup_required,
        "dogs": [
            {
                "name": dog.name,
                "breed": dog.breed or "",
                "safe_dog": dog.is_safe,
                "comments": dog.comments or "",
            }
            for dog in session.dog_records
        ],
        "cleanupNotificationType": list(prefs.notification_types),
        "cleanupNotificationChannel": prefs.notification_channel,
        "creditCardToken": token.token,
        "nameOnCard": token.name_on_card,
        "termsAccepted": True,
        "billingInterval": (quote.billing_interval if quote else None) or "per_visit",
        "category": (quote.category if quote else None) or "prepaid",
    }


def build_out_of_area_payload(session: WizardSession, lead: dict[str, str]) -> dict[str, Any]:
    return {
        "firstName": lead["first_name"],
        "lastName": lead["last_name"],
        "email": lead["email"],
        "phone": lead["phone"],
        "zipCode": session.zip_code,
        "inServiceArea": False,
    }


# ---- back ----

PREDECESSORS: dict[Step, Step] = {
    Step.OUT_OF_AREA: Step.ZIP,
    Step.SERVICE: Step.ZIP,
    Step.QUOTE: Step.SERVICE,
    Step.CONTACT: Step.QUOTE,
    Step.PAYMENT: Step.NOTIFICATIONS,
    Step.REVIEW: Step.PAYMENT,
}


def step_back(session: WizardSession) -> WizardSession:
    """
    Move to the logical predecessor without validation or losing saved data.
    Bumps the revision, so a call still in flight for the step being left is
    discarded when it returns.
    """
    if isinstance(session.position, DogsStep):
        moved = dog_previous(session)
    elif session.step == Step.NOTIFICATIONS:
        moved = resume_dogs(session)
    else:
        target = PREDECESSORS.get(session.step)
        if target is None:
            raise WizardTransitionError(f"No step before {session.step.value!r}")
        moved = move_to(session, target)
    return replace(moved, revision=session.revision + 1)


def clear_zip_feedback(session: WizardSession) -> WizardSession:
    """Drop the previous check's message. Eligibility stays as it was until a new result is applied."""
    return replace(session, zip_message=None, error=None, field_errors={})


def mark_waitlisted(session: WizardSession) -> WizardSession:
    return replace(session, waitlisted=True, error=None, field_errors={})
