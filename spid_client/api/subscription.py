"""
Subscription API - User subscriptions to products.
"""

from typing import Optional, Dict, Any

from ._base import ResourceAPI, merge_params


class SubscriptionAPI(ResourceAPI):
    """API for subscription operations."""

    def get_all(
        self,
        criteria: Optional[Dict[str, Any]] = None,
        filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """List all subscriptions for the client. filters override criteria."""
        return self._http.get("/api/2/subscriptions", merge_params(criteria, filters))

    def get_for_user(self, user_id: str) -> Dict[str, Any]:
        """List a user's subscriptions."""
        return self._http.get(f"/api/2/user/{user_id}/subscriptions")

    def get(self, user_id: str, subscription_id: str) -> Dict[str, Any]:
        """Get one of a user's subscriptions."""
        return self._http.get(f"/api/2/user/{user_id}/subscription/{subscription_id}")

    def create(
        self,
        user_id: str,
        product_id: str,
        properties: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Subscribe a user to a product.

        Args:
            user_id: The user's userId or uuid
            product_id: Subscription product
            properties: Extra fields such as expires or autoRenew
        """
        return self._http.post(
            f"/api/2/user/{user_id}/subscription",
            merge_params(properties, {"productId": product_id})
        )

    def update(
        self,
        user_id: str,
        subscription_id: str,
        properties: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Update a user's subscription."""
        return self._http.post(
            f"/api/2/user/{user_id}/subscription/{subscription_id}",
            properties
        )
