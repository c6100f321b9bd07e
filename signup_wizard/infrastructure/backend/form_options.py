from __future__ import annotations

from pydantic import ValidationError

from signup_wizard.application.exceptions import BackendContractError
from signup_wizard.application.ports.form_options import FormOptionsPort
from signup_wizard.infrastructure.backend.backend_client import BackendClient
from signup_wizard.infrastructure.backend.dto import FormOptionsResponseDTO


class HttpFormOptions(FormOptionsPort):
    def __init__(self, client: BackendClient) -> None:
        self._client = client

    def fetch_form_fields(self) -> dict[str, str]:
        body = self._client.get_json("/get-form-options")
        try:
            dto = FormOptionsResponseDTO.model_validate(body)
        except ValidationError as e:
            raise BackendContractError(f"Unexpected get-form-options response: {e}") from e

        if not dto.success or dto.form_options is None:
            raise BackendContractError("get-form-options reported no options")
        return {f.slug: f.value for f in dto.form_options.form_fields}
