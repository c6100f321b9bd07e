from abc import ABC, abstractmethod
from typing import Any

from signup_wizard.domain.entities.registration import RegistrationResult


class RegistrationPort(ABC):
    @abstractmethod
    def submit_quote(self, payload: dict[str, Any]) -> RegistrationResult:
        raise NotImplementedError
