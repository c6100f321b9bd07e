from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FormOption:
    value: str
    label: str


@dataclass(frozen=True)
class FormOptions:
    number_of_dogs: tuple[FormOption, ...]
    frequency: tuple[FormOption, ...]
    last_cleaned: tuple[FormOption, ...]
    gate_location: tuple[FormOption, ...]
    notification_types: tuple[FormOption, ...]
    notification_channels: tuple[FormOption, ...]

    def values(self, category: str) -> set[str]:
        return {opt.value for opt in getattr(self, category)}

    def label_for(self, category: str, value: str) -> str:
        for opt in getattr(self, category):
            if opt.value == value:
                return opt.label
        return value.replace("_", " ")
