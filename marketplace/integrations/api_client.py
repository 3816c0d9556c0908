"""
API GATEWAY

Purpose:
- Single HTTP entrypoint to the marketplace backend
- Attach the bearer credential when signed in
- Unwrap the uniform {ok, data, error} envelope

Requirements:
• Timeout protection (config.API_TIMEOUT)
• Any non-ok envelope or non-2xx status is a failure
• Failures surface as ApiError with a human-readable message
• No automatic retries
"""

import logging
from typing import Any, Callable, Dict, Optional

import requests

from marketplace import config

logger = logging.getLogger(__name__)

DEFAULT_ERROR = "Request failed"


class ApiError(Exception):
    """Raised when the backend rejects a request or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiClient:
    """Thin requests wrapper that unwraps the backend envelope."""

    def __init__(
        self,
        base_url: str = config.API_URL,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        timeout: float = config.API_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self, has_body: bool) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if has_body:
            headers["Content-Type"] = "application/json"
        token = self.token_provider() if self.token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Perform a request and return the envelope's ``data``.

        Raises:
            ApiError: transport failure, unreadable body or ok=false
        """
        url = f"{self.base_url}{path}"
        logger.info(f"{method} {path}")

        try:
            response = self.session.request(
                method,
                url,
                json=body,
                params=params,
                headers=self._headers(body is not None),
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            logger.error(f"Timeout calling {method} {path}")
            raise ApiError("The server took too long to respond")
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error calling {method} {path}: {str(e)}")
            raise ApiError("Could not reach the server")

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not isinstance(payload, dict):
            logger.error(f"{method} {path} returned a non-envelope body ({response.status_code})")
            raise ApiError(DEFAULT_ERROR, response.status_code)

        if not response.ok or not payload.get("ok"):
            message = payload.get("error") or DEFAULT_ERROR
            logger.error(f"{method} {path} failed ({response.status_code}): {message}")
            raise ApiError(message, response.status_code)

        return payload.get("data")

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("POST", path, body=body)

    def put(self, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("PUT", path, body=body)

    def patch(self, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("PATCH", path, body=body)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
