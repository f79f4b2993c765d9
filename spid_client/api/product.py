"""
Product API - Product catalogue operations.
"""

from typing import Optional, Dict, Any

from ._base import ResourceAPI, merge_params


class ProductAPI(ResourceAPI):
    """
    API for product operations.

    Handles:
    - Product listing and lookup
    - Product create/update
    - Child products of a bundle
    """

    def get_all(
        self,
        criteria: Optional[Dict[str, Any]] = None,
        filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        List products.

        Args:
            criteria: Query parameters
            filters: Query parameters, overriding criteria on the same key
        """
        return self._http.get("/api/2/products", merge_params(criteria, filters))

    def get(self, product_id: str) -> Dict[str, Any]:
        """Get product by ID."""
        return self._http.get(f"/api/2/product/{product_id}")

    def create(self, properties: Dict[str, Any]) -> Dict[str, Any]:
        """Create a product."""
        return self._http.post("/api/2/product", properties)

    def update(self, product_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        """Update a product."""
        return self._http.post(f"/api/2/product/{product_id}", properties)

    def get_children(self, product_id: str) -> Dict[str, Any]:
        """List products bundled under a parent product."""
        return self._http.get(f"/api/2/product/{product_id}/children")
