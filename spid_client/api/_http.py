"""
Base HTTP client for the SPiD API.

Handles session management, authentication and error handling. This is the
transport the endpoint bindings delegate to.
"""

import logging
import time
from typing import Optional, Dict, Any, List, Union
from urllib.parse import urljoin

import requests

from .. import __version__
from ..config import SpidConfig, get_config
from ..exceptions import (
    APIError,
    AuthenticationError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class HTTPClient:
    """
    Base HTTP client for the SPiD API.

    Handles:
    - Session management
    - Authentication headers
    - Token acquisition and refresh
    - Error response handling

    Not thread-safe: the session and the token stored on the config are
    shared by every request made through one instance.
    """

    def __init__(self, config: Optional[SpidConfig] = None, auto_refresh: bool = True):
        """
        Initialize the HTTP client.

        Args:
            config: Optional configuration. Uses global config if not provided.
            auto_refresh: Obtain a new token when it is missing, expired or rejected
        """
        self.config = config or get_config()
        self.auto_refresh = auto_refresh
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        """Get or create HTTP session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({
                "User-Agent": f"spid-client/{__version__}",
                "Accept": "application/json",
            })

        return self._session

    @property
    def base_url(self) -> str:
        """Get the base URL for API requests."""
        return self.config.server_url

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authentication."""
        headers = {}

        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"

        return headers

    def _handle_response(
        self,
        response: requests.Response,
        expected_status: Union[int, List[int]] = (200, 201),
    ) -> Dict[str, Any]:
        """Handle API response and raise appropriate exceptions."""
        if isinstance(expected_status, int):
            expected_status = [expected_status]

        logger.debug(f"Request: {response.request.method} {response.request.url}")
        logger.debug(f"Response: {response.status_code}")

        if response.status_code in expected_status or response.status_code == 204:
            if response.status_code == 204:
                return {"success": True}
            try:
                return response.json()
            except ValueError:
                return {"success": True, "content": response.content}

        try:
            error_data = response.json()
            if not isinstance(error_data, dict):
                error_data = {"data": error_data}
            error_msg = self._extract_error_message(error_data)
        except ValueError:
            error_msg = response.text or f"HTTP {response.status_code}"
            error_data = {}

        logger.error(
            "API error [%s %s] status=%d",
            response.request.method,
            response.request.url,
            response.status_code,
        )

        if response.status_code == 401:
            raise AuthenticationError(
                "Authentication failed: " + (error_msg or "Please check your credentials."),
                details=error_msg,
                response_data=error_data
            )
        elif response.status_code == 403:
            raise PermissionDeniedError(
                "Permission denied: " + (error_msg or "You don't have access to this resource."),
                status_code=response.status_code,
                response_data=error_data
            )
        elif response.status_code == 404:
            raise NotFoundError(
                "Resource not found: " + (error_msg or "The requested resource does not exist."),
                status_code=response.status_code,
                response_data=error_data
            )
        elif response.status_code in (400, 422):
            raise ValidationError(
                f"Invalid request: {error_msg}",
                status_code=response.status_code,
                response_data=error_data,
                details=str(error_data)
            )
        else:
            raise APIError(
                f"API request failed: {error_msg}",
                status_code=response.status_code,
                response_data=error_data
            )

    def _extract_error_message(self, error_data: Dict[str, Any]) -> str:
        """Extract error message from the SPiD error envelope."""
        error = error_data.get("error")

        if isinstance(error, dict):
            description = error.get("description") or error.get("message") or ""
            error_type = error.get("type")
            if error_type and description:
                return f"[{error_type}] {description}"
            return description or str(error)
        if isinstance(error, str):
            return error_data.get("error_description") or error
        if "message" in error_data:
            return str(error_data["message"])
        if "data" in error_data:
            return str(error_data["data"])
        return str(error_data)

    def _try_refresh_token(self) -> bool:
        """
        Obtain a new access token.

        Uses the refresh token first and falls back to the client credentials
        grant when the refresh is rejected.
        """
        if not (self.config.has_refresh_token() or self.config.has_client_credentials()):
            logger.debug("No refresh token or client credentials available")
            return False

        logger.info("Access token missing or expired, requesting a new one...")

        from ..auth import SpidAuthClient

        result = None
        with SpidAuthClient(self.config) as auth_client:
            if self.config.has_refresh_token():
                try:
                    result = auth_client.refresh_token(self.config.refresh_token)
                except APIError as e:
                    logger.warning(f"Token refresh failed: {e}")

            if result is None and self.config.has_client_credentials():
                try:
                    result = auth_client.client_credentials()
                except APIError as e:
                    logger.warning(f"Client credentials grant failed: {e}")

        if result is None:
            return False

        self.config.token = result["access_token"]
        if result.get("refresh_token"):
            self.config.refresh_token = result["refresh_token"]
        if result.get("expires_in"):
            self.config.token_expires_at = int(time.time()) + int(result["expires_in"])

        return True

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
        expected_status: Union[int, List[int]] = (200, 201),
    ) -> Dict[str, Any]:
        """
        Make an API request.

        Args:
            method: HTTP method
            endpoint: API path, e.g. /api/2/user/123
            params: Query parameters (None values are dropped)
            json_data: JSON body data, sent as is (None becomes null)
            expected_status: Expected status code(s)

        Returns:
            Parsed response data
        """
        if self.auto_refresh and (not self.config.token or self.config.is_token_expired()):
            self._try_refresh_token()

        url = urljoin(self.base_url, endpoint)
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            response = self._send(method, url, params, json_data)

            if response.status_code == 401 and self.auto_refresh:
                if self._try_refresh_token():
                    response = self._send(method, url, params, json_data)

        except requests.exceptions.ConnectionError as e:
            raise APIError(f"Connection failed: {e}")
        except requests.exceptions.Timeout as e:
            raise APIError(f"Request timed out: {e}")
        except requests.exceptions.RequestException as e:
            raise APIError(f"Request failed: {e}")

        return self._handle_response(response, expected_status)

    def _send(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]],
        json_data: Optional[Dict[str, Any]],
    ) -> requests.Response:
        return self.session.request(
            method=method,
            url=url,
            params=params,
            json=json_data,
            headers=self._get_headers(),
            timeout=self.config.timeout,
            verify=self.config.verify_ssl,
        )

    def get(self, path: str, query: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Issue a GET request with an optional query mapping."""
        return self.request("GET", path, params=query)

    def post(self, path: str, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Issue a POST request with an optional JSON body."""
        return self.request("POST", path, json_data=body)

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
