"""
SPiD API Client Package.

Structure:
    - client.py: SpidClient facade exposing each resource group
    - _http.py: HTTP transport with session, auth, and error handling
    - _base.py: Transport protocol, ResourceAPI base and merge_params
    - user.py: Sign-in, sign-up and user management
    - campaign.py, paylink.py, product.py, subscription.py, voucher.py:
      one module per resource

Usage:
    from spid_client.api import SpidClient

    client = SpidClient()
    me = client.user.me()
    client.voucher.handout("group-1", user_id="123")
"""

from .client import SpidClient, get_client
from ._http import HTTPClient
from ._base import Transport, ResourceAPI, merge_params
from .user import UserAPI
from .campaign import CampaignAPI
from .paylink import PaylinkAPI
from .product import ProductAPI
from .subscription import SubscriptionAPI
from .voucher import VoucherAPI

__all__ = [
    # Main client
    "SpidClient",
    "get_client",
    # Transport
    "HTTPClient",
    "Transport",
    "ResourceAPI",
    "merge_params",
    # Resource APIs
    "UserAPI",
    "CampaignAPI",
    "PaylinkAPI",
    "ProductAPI",
    "SubscriptionAPI",
    "VoucherAPI",
]
