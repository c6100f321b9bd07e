from abc import ABC, abstractmethod


class FormOptionsPort(ABC):
    @abstractmethod
    def fetch_form_fields(self) -> dict[str, str]:
        """Return raw comma-separated option values keyed by field slug."""
        raise NotImplementedError
