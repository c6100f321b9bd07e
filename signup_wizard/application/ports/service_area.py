from abc import ABC, abstractmethod

from signup_wizard.domain.entities.zip_check import ZipCheckResult


class ServiceAreaPort(ABC):
    @abstractmethod
    def check_zip(self, zip_code: str) -> ZipCheckResult:
        """Check whether a 5-digit ZIP is inside the service area."""
        raise NotImplementedError
