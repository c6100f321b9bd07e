from __future__ import annotations

import logging
from typing import Any

import httpx

from signup_wizard.application.exceptions import BackendContractError, BackendUpstreamError


class BackendClient:
    """JSON over HTTP to the quote backend (check-zip, get-pricing, submit-quote...)."""

    def __init__(self, base_url: str, timeout: float = 10.0, client: httpx.Client | None = None) -> None:
        self._client = client or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def get_json(self, path: str, params: dict[str, Any] | None = None, allow_error_body: bool = False) -> dict[str, Any]:
        return self._request("GET", path, params=params, allow_error_body=allow_error_body)

    def post_json(self, path: str, payload: dict[str, Any], allow_error_body: bool = False) -> dict[str, Any]:
        return self._request("POST", path, json=payload, allow_error_body=allow_error_body)

    def _request(self, method: str, path: str, allow_error_body: bool = False, **kwargs: Any) -> dict[str, Any]:
        """
        Send a request and return the decoded JSON object.
        With allow_error_body, a 4xx/5xx whose body is a JSON object is returned
        as-is so callers can read {"success": false, "error": ...}.
        """
        try:
            resp = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            self._logger.error("Backend request failed", extra={"action": f"{method} {path}", "reason": str(e)})
            raise BackendUpstreamError(f"{method} {path} failed: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            body = None

        if resp.status_code >= 400:
            self._logger.error(
                "Backend error response",
                extra={"action": f"{method} {path}", "status": resp.status_code, "reason": resp.text[:200]},
            )
            if allow_error_body and isinstance(body, dict):
                return body
            raise BackendUpstreamError(f"{method} {path} returned {resp.status_code}")

        if not isinstance(body, dict):
            raise BackendContractError(f"{method} {path} returned a non-object body")
        return body

    def close(self) -> None:
        self._client.close()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed
