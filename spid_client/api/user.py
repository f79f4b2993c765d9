"""
User API - Sign-in, sign-up and user management operations.
"""

from typing import Optional, Dict, Any

from ._base import ResourceAPI, merge_params


class UserAPI(ResourceAPI):
    """
    API for user operations.

    Handles:
    - Current user and passwordless sign-in
    - Sign-up (regular and third-party JWT)
    - User CRUD and search
    - Email triggers, mail history, verification level
    - Terms & Conditions agreements
    """

    def me(self) -> Dict[str, Any]:
        """Get the currently logged in user."""
        return self._http.get("/me")

    def signin(
        self,
        identifier: str,
        redirect_uri: Optional[str] = None,
        context: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Email the user a one-time sign-in token (valid for five minutes).

        Only one token per user is active at a time, and the user does not
        have to be registered beforehand.

        Args:
            identifier: User email
            redirect_uri: Where to send the user after signing in.
                Defaults to the client's redirect URI.
            context: Optional string (may be serialized JSON) passed back
                to the site on redirect
        """
        return self._http.post("/api/2/signin", {
            "identifier": identifier,
            "redirectUri": self._redirect_uri(redirect_uri),
            "context": context,
        })

    def create(self, properties: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a new user. Not available to mobile clients, use signup there.

        Only an unused email address is required. Without a password the
        server generates one and emails it to the user.
        """
        return self._http.post("/api/2/user", properties)

    def signup(
        self,
        email: str,
        password: Optional[str] = None,
        redirect_uri: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Create a user with minimal data, normally from mobile clients.

        Args:
            email: Email of the user, unique across SPiD
            password: Desired password
            redirect_uri: Where to send the user after completing signup.
                Defaults to the client's redirect URI.
        """
        return self._http.post("/api/2/signup", {
            "email": email,
            "password": password,
            "redirectUri": self._redirect_uri(redirect_uri),
        })

    def signup_jwt(self, jwt: str) -> Dict[str, Any]:
        """Create a user logging in through a third party (Facebook, Google) from its JWT."""
        return self._http.post("/api/2/signup_jwt", {"jwt": jwt})

    def get(self, user_id: str) -> Dict[str, Any]:
        """Get user by userId or uuid (not the deprecated id)."""
        return self._http.get(f"/api/2/user/{user_id}")

    def update(self, user_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update a user.

        Password, emails and phone numbers can't be changed through the API.
        """
        return self._http.post(f"/api/2/user/{user_id}", properties)

    def get_all(
        self,
        criteria: Optional[Dict[str, Any]] = None,
        filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        List users.

        Args:
            criteria: Query parameters
            filters: Query parameters, overriding criteria on the same key
        """
        return self._http.get("/api/2/users", merge_params(criteria, filters))

    def search(self, query: Dict[str, Any]) -> Dict[str, Any]:
        """Search users. Faster than get_all, normally used to find one user."""
        return self._http.get("/api/2/search/users", query)

    def search_full_text(self, query: str) -> Dict[str, Any]:
        """Full-text user search."""
        return self._http.get(f"/api/2/search/users/{query}")

    def trigger_verify(
        self,
        user_id: str,
        trigger: str,
        redirect_uri: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Send a new-password or verify-email message to the user's primary address.

        Args:
            user_id: The user's userId or uuid
            trigger: 'emailverification' or 'newpassword' (link valid 24 hours)
            redirect_uri: Where to send the user afterwards.
                Defaults to the client's redirect URI.
        """
        return self._http.get(f"/user/{user_id}/trigger/{trigger}", {
            "redirectUri": self._redirect_uri(redirect_uri),
        })

    def get_mail_history(
        self,
        id: Optional[str] = None,
        email: Optional[str] = None
    ) -> Dict[str, Any]:
        """List mail history and events for a user, by id and/or email."""
        return self._http.get("/mail", {"id": id, "email": email})

    def get_level(self, user_id: str) -> Dict[str, Any]:
        """
        Get the user's verification level.

        eID verified users are level 5. Unverified users get a 404.
        """
        return self._http.get(f"/user/{user_id}/level")

    def is_connected(self, user_id: str) -> Dict[str, Any]:
        """Check if the client behind the token is connected to the user."""
        return self._http.get(f"/user/{user_id}/connected")

    def get_all_agreements(self, user_id: str) -> Dict[str, Any]:
        """List platform and client Terms & Conditions acceptance status."""
        return self._http.get(f"/api/2/user/{user_id}/agreements")

    def accept_agreements(self, user_id: str) -> Dict[str, Any]:
        """Accept platform and client Terms & Conditions for the user."""
        return self._http.post(f"/user/{user_id}/agreements/accept")
