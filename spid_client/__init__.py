"""
SPiD Client - Python client for the SPiD identity and user-management API.

Usage:
    from spid_client import SpidClient

    with SpidClient() as client:
        me = client.user.me()
        client.user.signin("user@example.com")
        products = client.product.get_all({"limit": 10})
"""

__version__ = "1.0.0"

from .config import SpidConfig, ConfigManager, get_config, get_config_manager
from .exceptions import (
    SpidError,
    ConfigurationError,
    APIError,
    AuthenticationError,
    PermissionDeniedError,
    NotFoundError,
    ValidationError,
)
from .auth import SpidAuthClient
from .api import (
    SpidClient,
    HTTPClient,
    Transport,
    UserAPI,
    CampaignAPI,
    PaylinkAPI,
    ProductAPI,
    SubscriptionAPI,
    VoucherAPI,
    merge_params,
)

__all__ = [
    "__version__",
    # Client
    "SpidClient",
    "HTTPClient",
    "Transport",
    "SpidAuthClient",
    # Resources
    "UserAPI",
    "CampaignAPI",
    "PaylinkAPI",
    "ProductAPI",
    "SubscriptionAPI",
    "VoucherAPI",
    "merge_params",
    # Configuration
    "SpidConfig",
    "ConfigManager",
    "get_config",
    "get_config_manager",
    # Errors
    "SpidError",
    "ConfigurationError",
    "APIError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "ValidationError",
]
