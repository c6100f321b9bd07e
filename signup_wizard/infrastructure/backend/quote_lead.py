from __future__ import annotations

import logging

from signup_wizard.application.ports.quote_lead import QuoteLeadPort
from signup_wizard.domain.entities.service_selection import ServiceSelection
from signup_wizard.infrastructure.backend.backend_client import BackendClient


class HttpQuoteLead(QuoteLeadPort):
    def __init__(self, client: BackendClient) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    def submit_free_quote(self, zip_code: str, selection: ServiceSelection) -> None:
        payload = {
            "zipCode": zip_code,
            "firstName": selection.first_name,
            "phone": selection.phone,
            "numberOfDogs": selection.number_of_dogs,
            "frequency": selection.frequency,
            "lastCleaned": selection.last_cleaned,
        }
        # Response body is not used
        self._client.post_json("/submit-free-quote", payload, allow_error_body=True)
        self._logger.info("Quote lead sent", extra={"zip_code": zip_code})
