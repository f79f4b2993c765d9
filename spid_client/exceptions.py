"""
Exceptions raised by the SPiD client.

Only the transport and the authentication client raise these. Endpoint
bindings let them propagate untouched.
"""

from typing import Optional, Dict, Any


class SpidError(Exception):
    """Base exception for all SPiD client errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ConfigurationError(SpidError):
    """Raised when the client configuration is missing or invalid."""


class APIError(SpidError):
    """Raised when an API request fails."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
        details: Optional[str] = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code
        self.response_data = response_data or {}


class AuthenticationError(APIError):
    """Raised on HTTP 401 or when a token cannot be obtained."""

    def __init__(self, message: str, details: Optional[str] = None, **kwargs):
        kwargs.setdefault("status_code", 401)
        super().__init__(message, details=details, **kwargs)


class PermissionDeniedError(APIError):
    """Raised on HTTP 403."""


class NotFoundError(APIError):
    """Raised on HTTP 404."""


class ValidationError(APIError):
    """Raised on HTTP 400 and 422."""
