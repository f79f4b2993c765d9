"""
Authentication module for the SPiD client.

Obtains OAuth2 access tokens from the SPiD token endpoint.
"""

import logging
from typing import Optional, Dict, Any
from urllib.parse import urljoin

import requests

from . import __version__
from .config import SpidConfig
from .exceptions import AuthenticationError, APIError, ConfigurationError

logger = logging.getLogger(__name__)


class SpidAuthClient:
    """
    Authentication client for obtaining access tokens.

    Supports:
    - Client credentials grant
    - Token refresh
    """

    TOKEN_ENDPOINT = "/oauth/token"

    def __init__(self, config: SpidConfig):
        """
        Initialize authentication client.

        Args:
            config: SPiD configuration
        """
        self.config = config
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
    def token_url(self) -> str:
        return urljoin(self.config.server_url, self.TOKEN_ENDPOINT)

    def client_credentials(self) -> Dict[str, Any]:
        """
        Obtain a server token with the client credentials grant.

        Returns:
            Dict containing access_token and optionally refresh_token

        Raises:
            ConfigurationError: If client id or secret is missing
            AuthenticationError: If the server rejects the credentials
        """
        if not self.config.has_client_credentials():
            raise ConfigurationError("client_id and client_secret are required to obtain a token")

        return self._request_token({
            "grant_type": "client_credentials",
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
        })

    def refresh_token(self, refresh_token: str) -> Dict[str, Any]:
        """
        Refresh an access token using a refresh token.

        Args:
            refresh_token: The refresh token

        Returns:
            New token data
        """
        return self._request_token({
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
        })

    def _request_token(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug(f"Requesting {payload['grant_type']} token from {self.token_url}")

        try:
            response = self.session.post(
                self.token_url,
                data=payload,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.exceptions.RequestException as e:
            raise APIError(f"Token request failed: {e}")

        return self._handle_auth_response(response)

    def _handle_auth_response(self, response: requests.Response) -> Dict[str, Any]:
        """
        Handle token endpoint response.

        Raises:
            AuthenticationError: On 400/401 or a response without a token
            APIError: On any other unexpected status
        """
        if response.status_code == 200:
            try:
                data = response.json()
            except ValueError as e:
                raise AuthenticationError(f"Invalid response format: {e}")

            token = data.get("access_token")
            if not token:
                raise AuthenticationError("Authentication succeeded but no token in response")

            return {
                "access_token": token,
                "refresh_token": data.get("refresh_token"),
                "expires_in": data.get("expires_in"),
                "token_type": data.get("token_type", "Bearer"),
            }

        if response.status_code in (400, 401):
            try:
                error_data = response.json()
                msg = (
                    error_data.get("error_description") or
                    error_data.get("error") or
                    "Invalid credentials"
                )
            except ValueError:
                msg = response.text or "Invalid credentials"

            raise AuthenticationError(f"Authentication failed: {msg}", status_code=response.status_code)

        raise APIError(
            f"Unexpected response: HTTP {response.status_code}",
            status_code=response.status_code
        )

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "SpidAuthClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
