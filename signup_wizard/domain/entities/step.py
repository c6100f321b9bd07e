from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from signup_wizard.domain.entities.dog_record import DogRecord


class Step(str, Enum):
    ZIP = "zip"
    OUT_OF_AREA = "out_of_area"
    SERVICE = "service"
    QUOTE = "quote"
    CONTACT = "contact"
    DOGS = "dogs"
    NOTIFICATIONS = "notifications"
    PAYMENT = "payment"
    REVIEW = "review"
    SUCCESS = "success"


@dataclass(frozen=True)
class DogsStep:
    """Position inside the per-dog sub-wizard. Carries its own records so the
    outer step and the dog index can never disagree."""

    index: int
    records: tuple[DogRecord, ...]

    @property
    def current(self) -> DogRecord:
        return self.records[self.index]

    @property
    def is_last(self) -> bool:
        return self.index == len(self.records) - 1
