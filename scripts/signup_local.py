#!/usr/bin/env python3
"""
Interactive local signup harness (no HTTP, no browser).

Usage:
  python3 scripts/signup_local.py

What it does:
- Starts one wizard session through the same WizardUseCase the API uses
- Prompts for each step's fields and prints the resulting step, errors and quote
- Uses the dev mocks unless BACKEND_BASE_URL / STRIPE_SECRET_KEY are set
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from signup_wizard.application.use_cases.wizard import WizardResult, WizardUseCase  # noqa: E402
from signup_wizard.application.utils.progress import progress, quote_summary  # noqa: E402
from signup_wizard.domain.entities.card_input import CardInput  # noqa: E402
from signup_wizard.domain.entities.step import Step  # noqa: E402
from signup_wizard.wiring.dependencies import get_wizard_use_case  # noqa: E402


def _ask(label: str, default: str = "") -> str:
    value = input(f"{label}{f' [{default}]' if default else ''}: ").strip()
    return value or default


def _choose(label: str, options) -> str:
    print(f"{label}:")
    for opt in options:
        print(f"  {opt.value:<20} {opt.label}")
    return _ask("  choice", options[0].value)


def _show(result: WizardResult) -> None:
    session = result.session
    step_progress = progress(session)
    header = f"[{step_progress.number}/{step_progress.total}] " if step_progress else ""
    print(f"\n{header}step={session.step.value} action={result.action}")
    if session.zip_message:
        print(f"  {session.zip_message}")
    if session.error:
        print(f"  ERROR: {session.error}")
    for name, message in session.field_errors.items():
        print(f"  {name}: {message}")
    for effect in result.side_effects:
        effect.run()


def _fill_step(uc: WizardUseCase, session_id: str) -> WizardResult | None:
    session = uc.get(session_id)
    options = session.form_options
    step = session.step

    if step == Step.ZIP:
        return uc.check_zip(session_id, _ask("ZIP code", "91701"))
    if step == Step.OUT_OF_AREA:
        if _ask("Join the waitlist? (y/n)", "n").lower() == "y":
            return uc.submit_out_of_area_lead(
                session_id,
                {
                    "first_name": _ask("First name"),
                    "last_name": _ask("Last name"),
                    "email": _ask("Email"),
                    "phone": _ask("Phone"),
                },
            )
        return uc.back(session_id)
    if step == Step.SERVICE:
        return uc.submit_service(
            session_id,
            {
                "first_name": _ask("First name", "Jamie"),
                "phone": _ask("Phone", "6265550100"),
                "number_of_dogs": _choose("Number of dogs", options.number_of_dogs),
                "frequency": _choose("Frequency", options.frequency),
                "last_cleaned": _choose("Last cleaned", options.last_cleaned),
            },
        )
    if step == Step.QUOTE:
        quote = session.pricing_quote
        if quote.price_not_configured:
            print(f"  {quote.custom_price_description}")
        else:
            print(f"  {quote_summary(session)} ${quote.recurring_price:.2f} per visit")
            if quote.shows_monthly_total:
                print(f"  about ${quote.monthly_price:.2f} per month")
            print(f"  initial cleanup: ${quote.initial_cleanup_fee:.2f}")
        return uc.continue_from_quote(session_id)
    if step == Step.CONTACT:
        return uc.submit_contact(
            session_id,
            {
                "first_name": session.service_selection.first_name,
                "last_name": _ask("Last name", "Rivera"),
                "email": _ask("Email", "jamie@example.com"),
                "phone": session.service_selection.phone,
                "address": _ask("Street address", "123 Orange Grove Ave"),
                "city": _ask("City", "Chino Hills"),
                "gate_location": _choose("Gate location", options.gate_location),
                "gate_code": _ask("Gate code"),
            },
        )
    if step == Step.DOGS:
        position = session.position
        print(f"  Dog {position.index + 1} of {len(position.records)}")
        return uc.dog_next(
            session_id,
            {
                "name": _ask("Dog name", position.current.name),
                "breed": _ask("Breed", position.current.breed),
                "is_safe": _ask("Safe around strangers? (yes/no)", position.current.is_safe),
                "comments": _ask("Comments", position.current.comments),
            },
        )
    if step == Step.NOTIFICATIONS:
        types = _ask("Notification types (comma separated)", "completed")
        return uc.submit_notifications(
            session_id,
            {
                "notification_types": [t.strip() for t in types.split(",") if t.strip()],
                "notification_channel": _choose("Channel", options.notification_channels),
            },
        )
    if step == Step.PAYMENT:
        # Stand-in for the browser widget, which tokenizes the card itself
        card = CardInput(complete=True, token=_ask("Card token from the widget", "tok_visa"))
        return uc.submit_payment(
            session_id,
            _ask("Name on card", "Jamie Rivera"),
            card,
            _ask("Accept terms? (y/n)", "y").lower() == "y",
        )
    if step == Step.REVIEW:
        return uc.submit_registration(session_id)
    return None


def main() -> None:
    uc = get_wizard_use_case()
    session_id = uc.start().session_id
    print("\nLocal Signup Harness")
    print("-" * 60)
    print(f"session_id: {session_id}")
    print("Press Ctrl+C to quit.")
    print("-" * 60)

    while True:
        try:
            result = _fill_step(uc, session_id)
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return
        if result is None:
            return
        _show(result)
        if result.session.step == Step.SUCCESS or result.session.waitlisted:
            print("\nDone.")
            return


if __name__ == "__main__":
    main()
