from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from signup_wizard.application.exceptions import BackendContractError
from signup_wizard.application.ports.registration import RegistrationPort
from signup_wizard.domain.entities.registration import RegistrationResult
from signup_wizard.infrastructure.backend.backend_client import BackendClient
from signup_wizard.infrastructure.backend.dto import SubmitResponseDTO


class HttpRegistration(RegistrationPort):
    def __init__(self, client: BackendClient) -> None:
        self._client = client

    def submit_quote(self, payload: dict[str, Any]) -> RegistrationResult:
        body = self._client.post_json("/submit-quote", payload, allow_error_body=True)
        try:
            dto = SubmitResponseDTO.model_validate(body)
        except ValidationError as e:
            raise BackendContractError(f"Unexpected submit-quote response: {e}") from e
        return RegistrationResult(success=dto.success, error=dto.error)
