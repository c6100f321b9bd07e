from dataclasses import dataclass


@dataclass(frozen=True)
class RegistrationResult:
    success: bool
    error: str | None = None
