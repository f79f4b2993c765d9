"""
Campaign API - Campaign management operations.
"""

from typing import Optional, Dict, Any

from ._base import ResourceAPI, merge_params


class CampaignAPI(ResourceAPI):
    """
    API for campaign operations.

    Handles:
    - Campaign listing and lookup
    - Campaign create/update
    - Products attached to a campaign
    """

    def get_all(
        self,
        criteria: Optional[Dict[str, Any]] = None,
        filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """List campaigns. filters override criteria on the same key."""
        return self._http.get("/api/2/campaigns", merge_params(criteria, filters))

    def get(self, campaign_id: str) -> Dict[str, Any]:
        """Get campaign by ID."""
        return self._http.get(f"/api/2/campaign/{campaign_id}")

    def create(self, properties: Dict[str, Any]) -> Dict[str, Any]:
        """Create a campaign."""
        return self._http.post("/api/2/campaign", properties)

    def update(self, campaign_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        """Update a campaign."""
        return self._http.post(f"/api/2/campaign/{campaign_id}", properties)

    def get_products(self, campaign_id: str) -> Dict[str, Any]:
        return self._http.get(f"/api/2/campaign/{campaign_id}/products")

    def add_product(self, campaign_id: str, product_id: str) -> Dict[str, Any]:
        """Attach an existing product to the campaign."""
        return self._http.post(f"/api/2/campaign/{campaign_id}/product", {"productId": product_id})
