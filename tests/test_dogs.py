"""
Tests for the per-dog sub-wizard.
"""

from __future__ import annotations

import pytest

from wizard_fakes import CONTACT_FIELDS, SERVICE_FIELDS, advance_to, build_use_case, dog_fields

from signup_wizard.application.exceptions import StepValidationError
from signup_wizard.application.use_cases.dogs import dog_next, dog_previous, enter_dogs
from signup_wizard.domain.entities.dog_record import DogRecord
from signup_wizard.domain.entities.service_selection import ServiceSelection
from signup_wizard.domain.entities.step import DogsStep, Step


def test_three_dogs_walk_to_notifications():
    """Three dogs selected: three empty records, index 0, then notifications after three valid forms."""
    uc, _ = build_use_case()
    session_id = advance_to(uc, Step.CONTACT, service_fields={**SERVICE_FIELDS, "number_of_dogs": "3"})

    entered = uc.submit_contact(session_id, CONTACT_FIELDS).session
    assert isinstance(entered.position, DogsStep)
    assert entered.position.index == 0
    assert entered.position.records == (DogRecord(), DogRecord(), DogRecord())

    for i, name in enumerate(["Biscuit", "Pepper", "Moose"]):
        session = uc.dog_next(session_id, dog_fields(name, breed="Lab")).session
        if i < 2:
            assert session.position.index == i + 1

    assert session.step == Step.NOTIFICATIONS
    assert [d.name for d in session.dog_records] == ["Biscuit", "Pepper", "Moose"]


def test_invalid_dog_stays_on_same_index():
    uc, _ = build_use_case()
    session_id = advance_to(uc, Step.DOGS)

    result = uc.dog_next(session_id, {"name": "", "is_safe": "maybe"})

    assert result.action == "invalid"
    assert result.session.position.index == 0
    assert result.session.field_errors == {
        "name": "Dog name is required",
        "is_safe": "Please indicate if dog is safe",
    }


def test_previous_keeps_unvalidated_edits():
    """Going back keeps what was typed for the current dog, then shows the earlier one."""
    uc, _ = build_use_case()
    session_id = advance_to(uc, Step.DOGS)

    uc.dog_next(session_id, dog_fields("Biscuit"))
    back = uc.dog_previous(session_id, {"name": "Pep"}).session

    assert back.position.index == 0
    assert back.position.current.name == "Biscuit"
    assert back.position.records[1].name == "Pep"

    forward = uc.dog_next(session_id, dog_fields("Biscuit")).session
    assert forward.position.current.name == "Pep"


def test_previous_from_first_dog_returns_to_contact():
    uc, _ = build_use_case()
    session_id = advance_to(uc, Step.DOGS)

    result = uc.dog_previous(session_id, {"name": "Bis"})

    assert result.session.step == Step.CONTACT
    assert result.session.dog_records[0].name == "Bis"

    # Same count on re-entry resumes the partial records
    again = uc.submit_contact(session_id, CONTACT_FIELDS).session
    assert again.position.index == 0
    assert again.position.current.name == "Bis"


def test_changed_dog_count_resets_records():
    uc, _ = build_use_case()
    session_id = advance_to(uc, Step.NOTIFICATIONS)

    uc.back(session_id)  # dogs, last index
    uc.dog_previous(session_id)
    uc.dog_previous(session_id)  # contact
    uc.back(session_id)  # quote
    uc.back(session_id)  # service
    uc.submit_service(session_id, {**SERVICE_FIELDS, "number_of_dogs": "1"})
    uc.continue_from_quote(session_id)

    entered = uc.submit_contact(session_id, CONTACT_FIELDS).session
    assert entered.position.records == (DogRecord(),)


def test_dog_number_parsing():
    """A dog count like "5+" still yields a usable number of records."""
    selection = ServiceSelection("Jamie", "6265550100", "5+", "once_a_week", "one_week")
    assert selection.dog_count == 5
    assert ServiceSelection("Jamie", "6265550100", "", "once_a_week", "one_week").dog_count == 1


def test_pure_dog_transitions_do_not_mutate_input():
    uc, _ = build_use_case()
    session_id = advance_to(uc, Step.DOGS)
    session = uc.get(session_id)

    with pytest.raises(StepValidationError):
        dog_next(session, {"name": "", "is_safe": "yes"})

    moved = dog_next(session, dog_fields("Biscuit"))
    assert moved.position.index == 1
    assert session.position.index == 0
    assert session.position.current == DogRecord()

    assert dog_previous(session).step == Step.CONTACT
    assert enter_dogs(session).position.index == 0
