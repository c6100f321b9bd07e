from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable

from signup_wizard.application.exceptions import (
    BackendContractError,
    BackendUpstreamError,
    StepValidationError,
    TokenizationError,
    WizardTransitionError,
)
from signup_wizard.application.ports.payment_tokenizer import PaymentTokenizerPort
from signup_wizard.application.ports.pricing import PricingPort
from signup_wizard.application.ports.quote_lead import QuoteLeadPort
from signup_wizard.application.ports.registration import RegistrationPort
from signup_wizard.application.ports.service_area import ServiceAreaPort
from signup_wizard.application.ports.session_store import WizardSessionStorePort
from signup_wizard.application.use_cases.dogs import dog_next, dog_previous
from signup_wizard.application.use_cases.form_options import LoadFormOptionsUseCase
from signup_wizard.application.use_cases.transitions import (
    apply_payment_token,
    apply_pricing,
    apply_zip_result,
    begin_action,
    build_out_of_area_payload,
    build_registration_payload,
    clear_zip_feedback,
    continue_from_quote,
    end_action,
    has_fresh_token,
    mark_waitlisted,
    move_to,
    registration_failed,
    registration_succeeded,
    require_retokenization,
    require_step,
    select_service,
    set_card_complete,
    step_back,
    submit_contact,
    submit_notifications,
    validate_zip,
    with_error,
)
from signup_wizard.application.utils.step_schemas import OutOfAreaLeadSchema, validate_step
from signup_wizard.domain.entities.card_input import CardInput
from signup_wizard.domain.entities.step import DogsStep, Step
from signup_wizard.domain.entities.wizard_session import WizardSession

ZIP_CHECK_ERROR = "Unable to check your ZIP code. Please try again."
PRICING_ERROR = "Unable to fetch pricing. Please try again."
NAME_ON_CARD_ERROR = "Please enter the name on your card."
CARD_INCOMPLETE_ERROR = "Please complete your card details."
TERMS_ERROR = "Please accept the terms of service to continue."
CARD_ERROR = "An error occurred with your card."
TOKENIZATION_ERROR = "Failed to process card information. Please try again."
SUBMIT_ERROR = "Something went wrong. Please try again."
SUBMIT_TRANSPORT_ERROR = "Unable to complete your registration. Please try again."
WAITLIST_ERROR = "Unable to submit. Please try again later."


@dataclass(frozen=True)
class BestEffort:
    """
    A side effect whose outcome never reaches the customer.
    run() logs and swallows every failure so it cannot block or fail the flow.
    """

    name: str
    call: Callable[[], None]

    def run(self) -> None:
        try:
            self.call()
        except Exception as e:
            logging.getLogger(__name__).warning(
                "Best-effort side effect failed", extra={"action": self.name, "reason": str(e)}
            )


@dataclass(frozen=True)
class WizardResult:
    action: str  # "advanced", "invalid", "failed", "blocked", "unchanged"
    session: WizardSession
    side_effects: tuple[BestEffort, ...] = field(default_factory=tuple)


class WizardUseCase:
    """
    Drives one wizard session through its steps.

    Pure moves are delegated to transitions.py and dogs.py. The four external
    calls (zip check, pricing, tokenization, registration) and the waitlist
    submit run through _guarded, which marks the action in flight, rejects a
    duplicate trigger, and only applies the result if the session was not
    changed by another transition while the call was running.
    """

    def __init__(
        self,
        store: WizardSessionStorePort,
        form_options: LoadFormOptionsUseCase,
        service_area: ServiceAreaPort,
        pricing: PricingPort,
        quote_lead: QuoteLeadPort,
        tokenizer: PaymentTokenizerPort,
        registration: RegistrationPort,
        service_state: str = "CA",
    ) -> None:
        self._store = store
        self._form_options = form_options
        self._service_area = service_area
        self._pricing = pricing
        self._quote_lead = quote_lead
        self._tokenizer = tokenizer
        self._registration = registration
        self._service_state = service_state
        self._logger = logging.getLogger(__name__)

    # ---- session lifecycle ----

    def start(self) -> WizardSession:
        session = WizardSession(session_id=uuid.uuid4().hex, form_options=self._form_options.execute())
        self._logger.info("Wizard session started", extra={"session_id": session.session_id})
        return self._store.create(session)

    def get(self, session_id: str) -> WizardSession:
        return self._store.get(session_id)

    def abandon(self, session_id: str) -> None:
        self._store.get(session_id)
        self._store.delete(session_id)
        self._logger.info("Wizard session abandoned", extra={"session_id": session_id})

    # ---- helpers ----

    def _transition(self, session_id: str, mutate: Callable[[WizardSession], WizardSession]) -> WizardResult:
        """Run a pure transition; validation failures are kept on the session as field errors."""
        try:
            session = self._store.update(session_id, mutate)
        except StepValidationError as e:
            session = self._store.update(session_id, lambda s: with_error(s, field_errors=e.field_errors))
            return WizardResult(action="invalid", session=session)
        self._logger.info("Wizard step", extra={"session_id": session_id, "step": session.step.value})
        return WizardResult(action="advanced", session=session)

    def _fail(
        self,
        session_id: str,
        *,
        error: str | None = None,
        field_errors: dict[str, str] | None = None,
        action: str = "failed",
    ) -> WizardResult:
        session = self._store.update(session_id, lambda s: with_error(s, error, field_errors))
        return WizardResult(action=action, session=session)

    def _guarded(
        self,
        session_id: str,
        action: str,
        run: Callable[[WizardSession], WizardResult],
        prepare: Callable[[WizardSession], WizardSession] = with_error,
    ) -> WizardResult:
        session = self._store.update(session_id, lambda s: begin_action(prepare(s), action))
        try:
            outcome = run(session)
        finally:
            released = self._store.update(session_id, lambda s: end_action(s, action))
        return WizardResult(action=outcome.action, session=released, side_effects=outcome.side_effects)

    def _apply_if_current(
        self,
        session_id: str,
        revision: int,
        mutate: Callable[[WizardSession], WizardSession],
    ) -> WizardResult:
        current = self._store.get(session_id)
        if current.revision != revision:
            self._logger.info(
                "Discarding superseded result",
                extra={"session_id": session_id, "reason": f"revision {revision} -> {current.revision}"},
            )
            return WizardResult(action="unchanged", session=current)
        return WizardResult(action="advanced", session=self._store.update(session_id, mutate))

    # ---- zip ----

    def check_zip(self, session_id: str, zip_code: str | None) -> WizardResult:
        # Also reachable from service ("Change") and out_of_area ("try a different ZIP")
        require_step(self._store.get(session_id), Step.ZIP, Step.SERVICE, Step.OUT_OF_AREA)
        try:
            zip_code = validate_zip(zip_code)
        except StepValidationError as e:
            # Rejected locally, no call made
            return self._fail(session_id, field_errors=e.field_errors, action="invalid")

        def run(session: WizardSession) -> WizardResult:
            try:
                result = self._service_area.check_zip(zip_code)
            except (BackendUpstreamError, BackendContractError) as e:
                self._logger.error(
                    "ZIP check failed",
                    extra={"session_id": session_id, "zip_code": zip_code, "reason": str(e)},
                )
                # Eligibility unknown, so the customer is back on the zip step
                failed = self._store.update(
                    session_id,
                    lambda s: with_error(move_to(s, Step.ZIP, in_service_area=None, zip_message=None), ZIP_CHECK_ERROR),
                )
                return WizardResult(action="failed", session=failed)
            return self._apply_if_current(session_id, session.revision, lambda s: apply_zip_result(s, zip_code, result))

        outcome = self._guarded(session_id, "check_zip", run, prepare=clear_zip_feedback)
        self._logger.info(
            "ZIP checked",
            extra={"session_id": session_id, "zip_code": zip_code, "step": outcome.session.step.value},
        )
        return outcome

    # ---- service / pricing ----

    def submit_service(self, session_id: str, fields: dict[str, Any]) -> WizardResult:
        """
        Validate service details, then price them. The quote lead goes out as a
        best-effort side effect, and only after pricing succeeded.
        """
        session = self._store.get(session_id)
        require_step(session, Step.SERVICE)
        try:
            select_service(session, fields)
        except StepValidationError as e:
            return self._fail(session_id, field_errors=e.field_errors, action="invalid")

        def run(session: WizardSession) -> WizardResult:
            selection = session.service_selection
            try:
                quote = self._pricing.get_pricing(
                    zip_code=session.zip_code,
                    number_of_dogs=selection.number_of_dogs,
                    frequency=selection.frequency,
                    last_cleaned=selection.last_cleaned,
                )
            except (BackendUpstreamError, BackendContractError) as e:
                self._logger.error("Pricing failed", extra={"session_id": session_id, "reason": str(e)})
                quote = None

            if quote is None:
                return self._fail(session_id, error=PRICING_ERROR)

            outcome = self._apply_if_current(session_id, session.revision, lambda s: apply_pricing(s, quote))
            if outcome.action != "advanced":
                return outcome

            zip_code = session.zip_code
            lead = BestEffort(
                name="quote_lead",
                call=lambda: self._quote_lead.submit_free_quote(zip_code, selection),
            )
            return WizardResult(action="advanced", session=outcome.session, side_effects=(lead,))

        return self._guarded(session_id, "pricing", run, prepare=lambda s: select_service(s, fields))

    def continue_from_quote(self, session_id: str) -> WizardResult:
        return self._transition(session_id, continue_from_quote)

    # ---- contact / dogs / notifications ----

    def submit_contact(self, session_id: str, fields: dict[str, Any]) -> WizardResult:
        return self._transition(session_id, lambda s: submit_contact(s, fields))

    @staticmethod
    def _require_dogs(session: WizardSession) -> WizardSession:
        if not isinstance(session.position, DogsStep):
            raise WizardTransitionError(f"Action not available on step {session.step.value!r} (expected 'dogs')")
        return session

    def dog_next(self, session_id: str, fields: dict[str, Any]) -> WizardResult:
        return self._transition(session_id, lambda s: dog_next(self._require_dogs(s), fields))

    def dog_previous(self, session_id: str, fields: dict[str, Any] | None = None) -> WizardResult:
        return self._transition(session_id, lambda s: dog_previous(self._require_dogs(s), fields))

    def submit_notifications(self, session_id: str, fields: dict[str, Any]) -> WizardResult:
        return self._transition(session_id, lambda s: submit_notifications(s, fields))

    # ---- payment ----

    def report_card_state(self, session_id: str, complete: bool) -> WizardSession:
        def mutate(s: WizardSession) -> WizardSession:
            require_step(s, Step.PAYMENT)
            return set_card_complete(s, complete)

        return self._store.update(session_id, mutate)

    def submit_payment(
        self,
        session_id: str,
        name_on_card: str | None,
        card: CardInput,
        terms_accepted: bool,
    ) -> WizardResult:
        self.report_card_state(session_id, card.complete)

        if not card.complete:
            # Continue is disabled for an incomplete card; nothing is sent
            return self._fail(session_id, field_errors={"card": CARD_INCOMPLETE_ERROR}, action="blocked")

        name_on_card = (name_on_card or "").strip()
        if not name_on_card:
            return self._fail(session_id, field_errors={"name_on_card": NAME_ON_CARD_ERROR}, action="invalid")

        if not terms_accepted:
            return self._fail(session_id, error=TERMS_ERROR, action="invalid")

        if card.error or not card.token:
            # The widget could not tokenize; its message is written for the cardholder
            return self._fail(session_id, field_errors={"card": card.error or CARD_ERROR}, action="invalid")

        def run(session: WizardSession) -> WizardResult:
            try:
                token = self._tokenizer.confirm_token(card.token, name_on_card)
            except TokenizationError as e:
                self._logger.info("Card rejected", extra={"session_id": session_id, "reason": str(e)})
                return self._fail(session_id, field_errors={"card": str(e) or CARD_ERROR})
            except BackendUpstreamError as e:
                self._logger.error("Tokenization failed", extra={"session_id": session_id, "reason": str(e)})
                return self._fail(session_id, error=TOKENIZATION_ERROR)
            return self._apply_if_current(
                session_id, session.revision, lambda s: apply_payment_token(s, token, name_on_card)
            )

        return self._guarded(session_id, "tokenize", run)

    # ---- review / submit ----

    def submit_registration(self, session_id: str) -> WizardResult:
        session = self._store.get(session_id)
        require_step(session, Step.REVIEW)

        if not has_fresh_token(session):
            self._logger.info("Card token spent or stale, asking for card again", extra={"session_id": session_id})
            return WizardResult(action="blocked", session=self._store.update(session_id, require_retokenization))

        def run(session: WizardSession) -> WizardResult:
            payload = build_registration_payload(session, state=self._service_state)
            try:
                result = self._registration.submit_quote(payload)
            except (BackendUpstreamError, BackendContractError) as e:
                self._logger.error("Registration failed", extra={"session_id": session_id, "reason": str(e)})
                failed = self._store.update(session_id, lambda s: registration_failed(s, SUBMIT_TRANSPORT_ERROR))
                return WizardResult(action="failed", session=failed)

            if not result.success:
                self._logger.warning("Registration rejected", extra={"session_id": session_id, "reason": result.error})
                error = result.error or SUBMIT_ERROR
                failed = self._store.update(session_id, lambda s: registration_failed(s, error))
                return WizardResult(action="failed", session=failed)

            return WizardResult(action="advanced", session=self._store.update(session_id, registration_succeeded))

        outcome = self._guarded(session_id, "register", run)
        if outcome.action == "advanced":
            self._store.delete(session_id)
            self._logger.info("Registration complete", extra={"session_id": session_id})
        return outcome

    # ---- navigation / out of area ----

    def back(self, session_id: str) -> WizardResult:
        return self._transition(session_id, step_back)

    def submit_out_of_area_lead(self, session_id: str, fields: dict[str, Any]) -> WizardResult:
        session = self._store.get(session_id)
        require_step(session, Step.OUT_OF_AREA)
        try:
            lead = validate_step(OutOfAreaLeadSchema, fields)
        except StepValidationError as e:
            return self._fail(session_id, field_errors=e.field_errors, action="invalid")

        def run(session: WizardSession) -> WizardResult:
            payload = build_out_of_area_payload(session, lead.model_dump())
            try:
                result = self._registration.submit_quote(payload)
            except (BackendUpstreamError, BackendContractError) as e:
                self._logger.error("Waitlist submit failed", extra={"session_id": session_id, "reason": str(e)})
                return self._fail(session_id, error=WAITLIST_ERROR)

            if not result.success:
                return self._fail(session_id, error=result.error or SUBMIT_ERROR)
            return WizardResult(action="advanced", session=self._store.update(session_id, mark_waitlisted))

        return self._guarded(session_id, "waitlist", run)
