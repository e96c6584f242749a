"""Akeneo HTTP client.

Low-level client for the Akeneo REST API. Handles the OAuth2 password grant,
authorization headers, JSON encoding and error translation. There is no retry
or pagination logic: every call maps to exactly one HTTP request (plus a token
request when the cached token is missing or about to expire).
"""

import base64
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Optional, Tuple
from urllib.error import HTTPError, URLError

from ansible.module_utils.urls import ConnectionError as UrlsConnectionError
from ansible.module_utils.urls import open_url

logger = logging.getLogger(__name__)

TOKEN_PATH = "/api/oauth/v1/token"

# Tokens are refreshed this many seconds before Akeneo would expire them.
TOKEN_EXPIRY_MARGIN = 300

DEFAULT_TIMEOUT = 30


class AkeneoApiError(Exception):
    """Base exception for Akeneo API errors."""

    def __init__(self, message: str, status_code: int = 0, response_body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class AkeneoAuthenticationError(AkeneoApiError):
    """Authentication failed (401/403)."""


class AkeneoNotFoundError(AkeneoApiError):
    """Resource not found (404)."""


class AkeneoConnectionError(AkeneoApiError):
    """The server could not be reached."""


@dataclass(frozen=True)
class Connector:
    """Credentials of an Akeneo API connection."""

    client_id: str
    secret: str
    username: str
    password: str

    def __repr__(self) -> str:
        return f"Connector(client_id={self.client_id!r}, username={self.username!r})"


class AkeneoClient:
    """
    HTTP client for the Akeneo REST API.

    Usage:
        client = AkeneoClient(connector, "https://pim.example.com")
        attribute = client.get("/api/rest/v1/attributes/color")
        client.patch("/api/rest/v1/attributes/color", {"code": "color", ...})
    """

    def __init__(
        self,
        connector: Connector,
        base_url: str,
        timeout: int = DEFAULT_TIMEOUT,
        validate_certs: bool = True,
    ):
        if not base_url:
            raise ValueError("A base URL is required to create an Akeneo client")
        for name in ("client_id", "secret", "username", "password"):
            if not getattr(connector, name):
                raise ValueError(f"Connector field '{name}' must not be empty")

        self.connector = connector
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.validate_certs = validate_certs
        self._access_token: Optional[str] = None
        self._token_expires_at = 0.0

    def get(self, path: str) -> Any:
        body, _ = self._send_request("GET", path)
        return body

    def post(self, path: str, data: Any) -> Any:
        body, _ = self._send_request("POST", path, data=data)
        return body

    def patch(self, path: str, data: Any) -> Any:
        body, _ = self._send_request("PATCH", path, data=data)
        return body

    def _ensure_token(self) -> str:
        if self._access_token and time.monotonic() < self._token_expires_at:
            return self._access_token

        credentials = f"{self.connector.client_id}:{self.connector.secret}"
        basic = base64.b64encode(credentials.encode()).decode()
        payload = {
            "grant_type": "password",
            "username": self.connector.username,
            "password": self.connector.password,
        }
        logger.debug("Requesting Akeneo access token from %s", self.base_url)
        token, _ = self._send_request(
            "POST",
            TOKEN_PATH,
            data=payload,
            authorization=f"Basic {basic}",
        )
        if not token or "access_token" not in token:
            raise AkeneoAuthenticationError(
                "Akeneo token endpoint did not return an access token"
            )

        self._access_token = token["access_token"]
        expires_in = int(token.get("expires_in", 3600))
        self._token_expires_at = (
            time.monotonic() + max(expires_in - TOKEN_EXPIRY_MARGIN, 0)
        )
        return self._access_token

    def _send_request(
        self,
        method: str,
        path: str,
        data: Any = None,
        authorization: Optional[str] = None,
    ) -> Tuple[Any, int]:
        """
        Sends one request and decodes the JSON response.

        Returns:
            A tuple of the decoded body (`None` for empty bodies such as
            `204 No Content`) and the HTTP status code.

        Raises:
            AkeneoApiError: On any non-2xx status or an undecodable body.
            AkeneoConnectionError: When the server cannot be reached.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        if authorization is None:
            authorization = f"Bearer {self._ensure_token()}"

        body = json.dumps(data) if data is not None else None
        logger.debug("%s %s", method, url)

        try:
            response = open_url(
                url,
                data=body,
                headers={
                    "Authorization": authorization,
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                method=method,
                timeout=self.timeout,
                validate_certs=self.validate_certs,
            )
        except HTTPError as e:
            raise self._translate_http_error(method, url, e) from e
        except (URLError, UrlsConnectionError, OSError) as e:
            raise AkeneoConnectionError(f"Request to {url} failed: {e}") from e

        status_code = response.getcode()
        content = response.read()
        if not content:
            return None, status_code

        try:
            return json.loads(content), status_code
        except json.JSONDecodeError as e:
            raise AkeneoApiError(
                f"API returned a success status ({status_code}) but the response was not valid JSON.",
                status_code,
                content.decode(errors="ignore"),
            ) from e

    @staticmethod
    def _translate_http_error(method: str, url: str, error: HTTPError) -> AkeneoApiError:
        raw = b""
        try:
            raw = error.read() or b""
        except (OSError, AttributeError):
            pass
        body = raw.decode(errors="ignore") if isinstance(raw, bytes) else str(raw)

        details = ""
        if body:
            try:
                details = f" API Response: {json.dumps(json.loads(body), indent=2)}"
            except json.JSONDecodeError:
                details = f" API Response (raw): {body}"

        message = (
            f"{method} request to {url} failed. Status: {error.code}. "
            f"Message: {error.reason}.{details}"
        )
        if error.code in (401, 403):
            return AkeneoAuthenticationError(message, error.code, body)
        if error.code == 404:
            return AkeneoNotFoundError(message, error.code, body)
        return AkeneoApiError(message, error.code, body)
