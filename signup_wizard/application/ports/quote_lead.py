from abc import ABC, abstractmethod

from signup_wizard.domain.entities.service_selection import ServiceSelection


class QuoteLeadPort(ABC):
    @abstractmethod
    def submit_free_quote(self, zip_code: str, selection: ServiceSelection) -> None:
        """Notify sales of a priced quote. Callers treat failures as non-fatal."""
        raise NotImplementedError
