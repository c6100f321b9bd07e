from abc import ABC, abstractmethod
from typing import Callable

from signup_wizard.domain.entities.wizard_session import WizardSession


class WizardSessionStorePort(ABC):
    @abstractmethod
    def create(self, session: WizardSession) -> WizardSession:
        raise NotImplementedError

    @abstractmethod
    def get(self, session_id: str) -> WizardSession:
        """Raises SessionNotFoundError for unknown or discarded sessions."""
        raise NotImplementedError

    @abstractmethod
    def update(self, session_id: str, mutate: Callable[[WizardSession], WizardSession]) -> WizardSession:
        """
        Atomically replace the session with mutate(session).
        Exceptions raised by mutate leave the stored session untouched.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: str) -> None:
        raise NotImplementedError
