from abc import ABC, abstractmethod


class PaymentTokenizerPort(ABC):
    @abstractmethod
    def confirm_token(self, token: str, name_on_card: str) -> str:
        """
        Check a single-use token minted by the card widget and return the id
        to send with the final registration.
        Raises TokenizationError for card problems the customer can fix.
        """
        raise NotImplementedError
