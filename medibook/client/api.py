"""
HTTP layer of the client.

Wraps an ``httpx.Client``: injects the cached token, stores tokens the server
hands back, retries once through the refresh endpoint on a 401, and turns
failures into ``ApiError`` so callers only see message strings.
"""
from typing import Any, Dict, Optional
import logging

import httpx

from .constants import (
    ADMIN, ADMIN_COOKIE, API_BASE_PATH, DEFAULT_TIMEOUT, NETWORK_ERROR_MESSAGE,
    PATIENT_COOKIE, SESSION_EXPIRED_MESSAGE, Endpoints
)
from .storage import AuthStore

logger = logging.getLogger(__name__)

NETWORK_ERROR = "NETWORK_ERROR"
API_ERROR = "API_ERROR"


class ApiError(Exception):
    def __init__(self, message: str, status: Optional[int] = None, error_type: str = API_ERROR):
        super().__init__(message)
        self.message = message
        self.status = status
        self.type = error_type


class SessionExpired(ApiError):
    def __init__(self, message: str = SESSION_EXPIRED_MESSAGE):
        super().__init__(message, status=401, error_type="SESSION_EXPIRED")


class ApiClient:
    def __init__(
        self,
        http: httpx.Client,
        store: Optional[AuthStore] = None,
        base_path: str = API_BASE_PATH
    ):
        self.http = http
        self.store = store if store is not None else AuthStore()
        self.base_path = base_path.rstrip("/")

    @classmethod
    def connect(
        cls,
        base_url: str,
        store: Optional[AuthStore] = None,
        timeout: float = DEFAULT_TIMEOUT
    ) -> "ApiClient":
        """Client for a server at ``base_url``, e.g. ``http://localhost:8000``."""
        return cls(httpx.Client(base_url=base_url, timeout=timeout), store)

    def close(self) -> None:
        self.http.close()

    def restore_session_cookie(self, role: str) -> None:
        """Put the cached token back into the cookie jar for the role's routes."""
        token = self.store.get_token()
        if token:
            name = ADMIN_COOKIE if role == ADMIN else PATIENT_COOKIE
            self.http.cookies.set(name, token)

    # Generic API methods
    def get(self, endpoint: str, **kwargs) -> Dict[str, Any]:
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, json: Any = None, **kwargs) -> Dict[str, Any]:
        return self.request("POST", endpoint, json=json if json is not None else {}, **kwargs)

    def put(self, endpoint: str, json: Any = None, **kwargs) -> Dict[str, Any]:
        return self.request("PUT", endpoint, json=json if json is not None else {}, **kwargs)

    def delete(self, endpoint: str, **kwargs) -> Dict[str, Any]:
        return self.request("DELETE", endpoint, **kwargs)

    def post_file(self, endpoint: str, data: Dict[str, Any], files: Dict[str, Any]) -> Dict[str, Any]:
        """Multipart POST; httpx sets the multipart content type and boundary."""
        return self.request("POST", endpoint, data=data, files=files)

    def request(self, method: str, endpoint: str, **kwargs) -> Dict[str, Any]:
        response = self._send(method, endpoint, **kwargs)

        if response.status_code == 401:
            self._refresh()
            response = self._send(method, endpoint, **kwargs)

        return self._handle(response)

    def _send(self, method: str, endpoint: str, **kwargs) -> httpx.Response:
        headers = dict(kwargs.pop("headers", None) or {})
        token = self.store.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            return self.http.request(method, self.base_path + endpoint, headers=headers, **kwargs)
        except httpx.TransportError as e:
            logger.warning(f"{method} {endpoint} failed: {e}")
            raise ApiError(NETWORK_ERROR_MESSAGE, error_type=NETWORK_ERROR) from e

    def _refresh(self) -> str:
        """One refresh attempt; on failure all cached auth state is dropped."""
        try:
            response = self._send("POST", Endpoints.REFRESH_TOKEN, json={})
            token = response.json().get("token") if response.is_success else None
        except (ApiError, ValueError) as e:
            logger.info(f"Token refresh failed: {e}")
            token = None

        if not token:
            self.store.clear()
            raise SessionExpired()

        self.store.set_token(token)
        return token

    def _handle(self, response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {"data": body}

        if response.is_success:
            if body.get("token"):
                self.store.set_token(body["token"])
            return body

        raise ApiError(
            body.get("message") or "An error occurred",
            status=response.status_code,
            error_type=API_ERROR,
        )
