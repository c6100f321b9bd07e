from __future__ import annotations

from pydantic import ValidationError

from signup_wizard.application.exceptions import BackendContractError
from signup_wizard.application.ports.service_area import ServiceAreaPort
from signup_wizard.domain.entities.zip_check import ZipCheckResult
from signup_wizard.infrastructure.backend.backend_client import BackendClient
from signup_wizard.infrastructure.backend.dto import ZipCheckResponseDTO


class HttpServiceArea(ServiceAreaPort):
    def __init__(self, client: BackendClient) -> None:
        self._client = client

    def check_zip(self, zip_code: str) -> ZipCheckResult:
        body = self._client.post_json("/check-zip", {"zipCode": zip_code})
        try:
            dto = ZipCheckResponseDTO.model_validate(body)
        except ValidationError as e:
            raise BackendContractError(f"Unexpected check-zip response: {e}") from e
        return ZipCheckResult(in_service_area=dto.in_service_area, message=dto.message)
