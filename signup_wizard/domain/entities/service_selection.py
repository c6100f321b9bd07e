import re
from dataclasses import dataclass


@dataclass(frozen=True)
class ServiceSelection:
    first_name: str
    phone: str
    number_of_dogs: str  # option token, e.g. "3" or "5+"
    frequency: str  # e.g. "once_a_week"
    last_cleaned: str  # e.g. "one_week"

    @property
    def dog_count(self) -> int:
        match = re.match(r"\s*(\d+)", self.number_of_dogs or "")
        if not match or int(match.group(1)) < 1:
            return 1
        return int(match.group(1))

    @property
    def initial_cleanup_required(self) -> bool:
        return self.last_cleaned != "one_week"
