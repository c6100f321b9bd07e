from __future__ import annotations

from dataclasses import replace
from typing import Any

from signup_wizard.application.utils.step_schemas import DogStepSchema, validate_step
from signup_wizard.domain.entities.dog_record import DogRecord
from signup_wizard.domain.entities.step import DogsStep, Step
from signup_wizard.domain.entities.wizard_session import WizardSession


def enter_dogs(session: WizardSession) -> WizardSession:
    """
    Start the sub-wizard at the first dog. Records are sized to the selected
    dog count; records from an earlier pass are kept when the count still matches.
    """
    count = session.service_selection.dog_count
    if len(session.dog_records) == count:
        records = session.dog_records
    else:
        records = tuple(DogRecord() for _ in range(count))
    return replace(session, position=DogsStep(index=0, records=records), error=None, field_errors={})


def resume_dogs(session: WizardSession) -> WizardSession:
    """Re-enter at the last dog, used when stepping back from notifications."""
    records = session.dog_records
    return replace(session, position=DogsStep(index=len(records) - 1, records=records), error=None, field_errors={})


def _record_from_fields(fields: dict[str, Any], fallback: DogRecord) -> DogRecord:
    return DogRecord(
        name=fields.get("name") if fields.get("name") is not None else fallback.name,
        breed=fields.get("breed") if fields.get("breed") is not None else fallback.breed,
        is_safe=fields.get("is_safe") if fields.get("is_safe") is not None else fallback.is_safe,
        comments=fields.get("comments") if fields.get("comments") is not None else fallback.comments,
    )


def _with_record(position: DogsStep, record: DogRecord) -> tuple[DogRecord, ...]:
    records = list(position.records)
    records[position.index] = record
    return tuple(records)


def dog_next(session: WizardSession, fields: dict[str, Any]) -> WizardSession:
    """
    Validate and store the current dog. Advances to the next dog, or after the
    last one writes the full sequence to the session and moves to notifications.
    Raises StepValidationError when the dog form is invalid.
    """
    position = session.position
    data = validate_step(DogStepSchema, fields)
    record = DogRecord(
        name=data.name,
        breed=data.breed or "",
        is_safe=data.is_safe,
        comments=data.comments or "",
    )
    records = _with_record(position, record)

    if not position.is_last:
        return replace(
            session,
            position=DogsStep(index=position.index + 1, records=records),
            error=None,
            field_errors={},
        )

    return replace(
        session,
        position=Step.NOTIFICATIONS,
        dog_records=records,
        revision=session.revision + 1,
        error=None,
        field_errors={},
    )


def dog_previous(session: WizardSession, fields: dict[str, Any] | None = None) -> WizardSession:
    """
    Keep the current dog's in-progress edits without validating them, then step
    back one dog. From the first dog this returns to the contact step.
    """
    position = session.position
    record = _record_from_fields(fields or {}, position.current)
    records = _with_record(position, record)

    if position.index == 0:
        # Keep the partial records so a return from contact with the same count resumes them
        return replace(session, position=Step.CONTACT, dog_records=records, error=None, field_errors={})

    return replace(
        session,
        position=DogsStep(index=position.index - 1, records=records),
        error=None,
        field_errors={},
    )
