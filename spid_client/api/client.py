"""
SPiD API Client - Main facade grouping every resource API.
"""

from typing import Optional

from ..config import SpidConfig, get_config
from ._base import Transport
from ._http import HTTPClient
from .user import UserAPI
from .campaign import CampaignAPI
from .paylink import PaylinkAPI
from .product import ProductAPI
from .subscription import SubscriptionAPI
from .voucher import VoucherAPI


class SpidClient:
    """
    Client for the SPiD API.

    Each resource group is a namespaced attribute sharing one transport:

        with SpidClient() as client:
            user = client.user.get("123")
            client.user.signin("user@example.com")
            products = client.product.get_all({"limit": 10})
    """

    def __init__(self, config: Optional[SpidConfig] = None, http: Optional[Transport] = None):
        """
        Initialize the API client.

        Args:
            config: Optional configuration. Falls back to the transport's
                config, then to the global config.
            http: Optional transport exposing get/post. Built from config if
                not provided.
        """
        if http is None:
            http = HTTPClient(config)
        self._http = http
        self._config = config or getattr(http, "config", None) or get_config()
        redirect_uri = self._config.redirect_uri or None

        self.user = UserAPI(self._http, redirect_uri)
        self.campaign = CampaignAPI(self._http, redirect_uri)
        self.paylink = PaylinkAPI(self._http, redirect_uri)
        self.product = ProductAPI(self._http, redirect_uri)
        self.subscription = SubscriptionAPI(self._http, redirect_uri)
        self.voucher = VoucherAPI(self._http, redirect_uri)

    @property
    def config(self) -> SpidConfig:
        """Get the configuration."""
        return self._config

    @property
    def resources(self):
        """All resource groups, for updating shared defaults."""
        return (self.user, self.campaign, self.paylink, self.product, self.subscription, self.voucher)

    def set_redirect_uri(self, redirect_uri: Optional[str]) -> None:
        """Change the default redirect URI used by every resource group."""
        self.config.redirect_uri = redirect_uri or ""
        for resource in self.resources:
            resource.redirect_uri = redirect_uri

    def close(self) -> None:
        """Close the transport, if it has anything to close."""
        close = getattr(self._http, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "SpidClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def get_client(config: Optional[SpidConfig] = None) -> SpidClient:
    """Get a configured API client."""
    return SpidClient(config)
