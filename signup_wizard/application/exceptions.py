class BackendUpstreamError(RuntimeError):
    """Raised when a backend endpoint fails (timeouts, network errors, 5xx)."""
    pass


class BackendContractError(RuntimeError):
    """Raised when a backend endpoint answers with a body we cannot interpret."""
    pass


class TokenizationError(RuntimeError):
    """Raised by the payment tokenizer; the message is safe to show the customer."""
    pass


class StepValidationError(ValueError):
    def __init__(self, field_errors: dict[str, str]) -> None:
        super().__init__(", ".join(f"{k}: {v}" for k, v in field_errors.items()))
        self.field_errors = field_errors


class WizardTransitionError(RuntimeError):
    """Raised when a transition is requested from a step that does not allow it."""
    pass


class WizardBusyError(RuntimeError):
    """Raised when an action is triggered while the same action is still in flight."""
    pass


class SessionNotFoundError(KeyError):
    pass
