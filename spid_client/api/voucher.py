"""
Voucher API - Vouchers and voucher groups.
"""

from typing import Optional, Dict, Any

from ._base import ResourceAPI


class VoucherAPI(ResourceAPI):
    """
    API for voucher operations.

    Handles:
    - Voucher lookup by code
    - Voucher groups
    - Handing out vouchers
    """

    def get(self, voucher_code: str) -> Dict[str, Any]:
        """Get voucher by code."""
        return self._http.get(f"/api/2/voucher/{voucher_code}")

    def get_group(self, voucher_group_id: str) -> Dict[str, Any]:
        return self._http.get(f"/api/2/voucher_group/{voucher_group_id}")

    def create_group(self, properties: Dict[str, Any]) -> Dict[str, Any]:
        """Create a voucher group."""
        return self._http.post("/api/2/voucher_group", properties)

    def handout(
        self,
        voucher_group_id: str,
        user_id: Optional[str] = None,
        email: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Hand out one voucher from a group.

        Args:
            voucher_group_id: Voucher group to draw from
            user_id: Recipient userId
            email: Recipient email, when the user id is unknown
        """
        return self._http.post(f"/api/2/voucher_handout/{voucher_group_id}", {
            "userId": user_id,
            "email": email,
        })

    def handout_multiple(self, voucher_group_id: str, count: int) -> Dict[str, Any]:
        """Hand out several unassigned vouchers from a group."""
        return self._http.post(f"/api/2/voucher_handouts/{voucher_group_id}", {"count": count})
