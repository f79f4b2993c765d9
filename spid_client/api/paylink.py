"""
Paylink API - One-off payment links.
"""

from typing import Optional, Dict, Any, List

from ._base import ResourceAPI, merge_params


class PaylinkAPI(ResourceAPI):
    """API for creating and looking up paylinks."""

    def create(
        self,
        title: str,
        items: List[Dict[str, Any]],
        redirect_uri: Optional[str] = None,
        cancel_uri: Optional[str] = None,
        client_reference: Optional[str] = None,
        purchase_flow: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Create a paylink.

        Args:
            title: Title shown on the checkout page
            items: Line items (description, price, vat, quantity, ...)
            redirect_uri: Where to send the user after paying.
                Defaults to the client's redirect URI.
            cancel_uri: Where to send the user on cancel
            client_reference: Your own order reference
            purchase_flow: AUTHORIZE or SALE
        """
        return self._http.post("/api/2/paylink", {
            "title": title,
            "items": items,
            "redirectUri": self._redirect_uri(redirect_uri),
            "cancelUri": cancel_uri,
            "clientReference": client_reference,
            "purchaseFlow": purchase_flow,
        })

    def get(self, paylink_id: str) -> Dict[str, Any]:
        """Get paylink by ID."""
        return self._http.get(f"/api/2/paylink/{paylink_id}")

    def get_all(
        self,
        criteria: Optional[Dict[str, Any]] = None,
        filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """List paylinks. filters override criteria on the same key."""
        return self._http.get("/api/2/paylinks", merge_params(criteria, filters))
