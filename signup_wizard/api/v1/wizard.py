from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response

from signup_wizard.api.v1.schemas import (
    CardStateRequestSchema,
    ContactRequestSchema,
    DogRequestSchema,
    DogsProgressSchema,
    NotificationsRequestSchema,
    OptionSchema,
    OutOfAreaLeadRequestSchema,
    PaymentRequestSchema,
    ProgressSchema,
    ServiceRequestSchema,
    WizardViewSchema,
    ZipRequestSchema,
)
from signup_wizard.application.exceptions import SessionNotFoundError, WizardBusyError, WizardTransitionError
from signup_wizard.application.use_cases.transitions import payment_can_continue
from signup_wizard.application.use_cases.wizard import WizardResult, WizardUseCase
from signup_wizard.application.utils.option_labels import CATEGORIES
from signup_wizard.application.utils.progress import progress, quote_summary
from signup_wizard.domain.entities.card_input import CardInput
from signup_wizard.domain.entities.step import DogsStep
from signup_wizard.domain.entities.wizard_session import WizardSession
from signup_wizard.wiring.dependencies import get_wizard_use_case

router = APIRouter()
logger = logging.getLogger(__name__)


def to_view(session: WizardSession, action: str | None = None) -> WizardViewSchema:
    position = session.position
    dogs = None
    if isinstance(position, DogsStep):
        dogs = DogsProgressSchema(
            index=position.index,
            count=len(position.records),
            current=asdict(position.current),
            records=[asdict(r) for r in position.records],
        )

    step_progress = progress(session)
    return WizardViewSchema(
        session_id=session.session_id,
        step=session.step.value,
        action=action,
        zip_code=session.zip_code,
        in_service_area=session.in_service_area,
        zip_message=session.zip_message,
        service=asdict(session.service_selection) if session.service_selection else None,
        pricing=asdict(session.pricing_quote) if session.pricing_quote else None,
        quote_summary=quote_summary(session),
        contact=asdict(session.contact_info) if session.contact_info else None,
        dogs=dogs,
        dog_records=[asdict(r) for r in session.dog_records],
        notifications=asdict(session.notification_prefs) if session.notification_prefs else None,
        has_payment_token=session.payment_token is not None,
        payment_can_continue=payment_can_continue(session),
        waitlisted=session.waitlisted,
        error=session.error,
        field_errors=session.field_errors,
        busy=sorted(session.in_flight),
        progress=ProgressSchema(**asdict(step_progress)) if step_progress else None,
        options={
            category: [OptionSchema(value=o.value, label=o.label) for o in getattr(session.form_options, category)]
            for category in CATEGORIES
        },
    )


def _respond(result: WizardResult, background_tasks: BackgroundTasks | None = None) -> WizardViewSchema:
    if background_tasks is not None:
        for effect in result.side_effects:
            background_tasks.add_task(effect.run)
    return to_view(result.session, result.action)


def _guard(call):
    try:
        return call()
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Wizard session not found")
    except WizardBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except WizardTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/sessions", response_model=WizardViewSchema, status_code=201)
def start_session(uc: WizardUseCase = Depends(get_wizard_use_case)):
    return to_view(uc.start())


@router.get("/sessions/{session_id}", response_model=WizardViewSchema)
def get_session(session_id: str, uc: WizardUseCase = Depends(get_wizard_use_case)):
    return _guard(lambda: to_view(uc.get(session_id)))


@router.delete("/sessions/{session_id}", status_code=204)
def abandon_session(session_id: str, uc: WizardUseCase = Depends(get_wizard_use_case)) -> Response:
    _guard(lambda: uc.abandon(session_id))
    return Response(status_code=204)


@router.post("/sessions/{session_id}/zip", response_model=WizardViewSchema)
def check_zip(session_id: str, req: ZipRequestSchema, uc: WizardUseCase = Depends(get_wizard_use_case)):
    return _guard(lambda: _respond(uc.check_zip(session_id, req.zip_code)))


@router.post("/sessions/{session_id}/service", response_model=WizardViewSchema)
def submit_service(
    session_id: str,
    req: ServiceRequestSchema,
    background_tasks: BackgroundTasks,
    uc: WizardUseCase = Depends(get_wizard_use_case),
):
    return _guard(lambda: _respond(uc.submit_service(session_id, req.model_dump()), background_tasks))


@router.post("/sessions/{session_id}/quote/continue", response_model=WizardViewSchema)
def continue_from_quote(session_id: str, uc: WizardUseCase = Depends(get_wizard_use_case)):
    return _guard(lambda: _respond(uc.continue_from_quote(session_id)))


@router.post("/sessions/{session_id}/contact", response_model=WizardViewSchema)
def submit_contact(session_id: str, req: ContactRequestSchema, uc: WizardUseCase = Depends(get_wizard_use_case)):
    return _guard(lambda: _respond(uc.submit_contact(session_id, req.model_dump())))


@router.post("/sessions/{session_id}/dogs/next", response_model=WizardViewSchema)
def dog_next(session_id: str, req: DogRequestSchema, uc: WizardUseCase = Depends(get_wizard_use_case)):
    return _guard(lambda: _respond(uc.dog_next(session_id, req.model_dump())))


@router.post("/sessions/{session_id}/dogs/previous", response_model=WizardViewSchema)
def dog_previous(session_id: str, req: DogRequestSchema, uc: WizardUseCase = Depends(get_wizard_use_case)):
    return _guard(lambda: _respond(uc.dog_previous(session_id, req.model_dump())))


@router.post("/sessions/{session_id}/notifications", response_model=WizardViewSchema)
def submit_notifications(
    session_id: str,
    req: NotificationsRequestSchema,
    uc: WizardUseCase = Depends(get_wizard_use_case),
):
    return _guard(lambda: _respond(uc.submit_notifications(session_id, req.model_dump())))


@router.post("/sessions/{session_id}/payment/card-state", response_model=WizardViewSchema)
def report_card_state(
    session_id: str,
    req: CardStateRequestSchema,
    uc: WizardUseCase = Depends(get_wizard_use_case),
):
    return _guard(lambda: to_view(uc.report_card_state(session_id, req.complete)))


@router.post("/sessions/{session_id}/payment", response_model=WizardViewSchema)
def submit_payment(session_id: str, req: PaymentRequestSchema, uc: WizardUseCase = Depends(get_wizard_use_case)):
    card = CardInput(**req.card.model_dump())
    return _guard(
        lambda: _respond(uc.submit_payment(session_id, req.name_on_card, card, req.terms_accepted))
    )


@router.post("/sessions/{session_id}/submit", response_model=WizardViewSchema)
def submit_registration(session_id: str, uc: WizardUseCase = Depends(get_wizard_use_case)):
    return _guard(lambda: _respond(uc.submit_registration(session_id)))


@router.post("/sessions/{session_id}/back", response_model=WizardViewSchema)
def back(session_id: str, uc: WizardUseCase = Depends(get_wizard_use_case)):
    return _guard(lambda: _respond(uc.back(session_id)))


@router.post("/sessions/{session_id}/out-of-area/lead", response_model=WizardViewSchema)
def submit_out_of_area_lead(
    session_id: str,
    req: OutOfAreaLeadRequestSchema,
    uc: WizardUseCase = Depends(get_wizard_use_case),
):
    return _guard(lambda: _respond(uc.submit_out_of_area_lead(session_id, req.model_dump())))
