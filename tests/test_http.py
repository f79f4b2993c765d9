"""
Tests for the HTTP transport.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from spid_client.api import HTTPClient, SpidClient, Transport, UserAPI
from spid_client.config import SpidConfig
from spid_client.exceptions import (
    APIError,
    AuthenticationError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)


def make_response(status_code=200, json_data=None, text=""):
    """Create a mock requests response."""
    response = MagicMock()
    response.status_code = status_code
    response.request.method = "GET"
    response.request.url = "https://spid.test/api/2/x"
    response.text = text
    response.content = text.encode()
    if json_data is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def config():
    """Create a configuration with a valid token."""
    return SpidConfig(server_url="https://spid.test", token="test-token", timeout=10)


@pytest.fixture
def client(config):
    """Create an HTTP client with a mock session."""
    http = HTTPClient(config)
    http._session = MagicMock()
    return http


class TestRequests:
    """Tests for request building."""

    def test_is_transport(self, client):
        assert isinstance(client, Transport)

    def test_get_builds_url_and_query(self, client):
        """Test GET joins the path and drops None query values."""
        client.session.request.return_value = make_response(json_data={"data": {"id": 1}})

        result = client.get("/api/2/users", {"limit": 10, "email": None})

        assert result == {"data": {"id": 1}}
        kwargs = client.session.request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["url"] == "https://spid.test/api/2/users"
        assert kwargs["params"] == {"limit": 10}
        assert kwargs["json"] is None
        assert kwargs["timeout"] == 10
        assert kwargs["headers"]["Authorization"] == "Bearer test-token"

    def test_post_sends_body_unchanged(self, client):
        """Test POST keeps None values in the JSON body."""
        client.session.request.return_value = make_response(201, {"data": {}})

        client.post("/api/2/signin", {"identifier": "a@b.com", "context": None})

        kwargs = client.session.request.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["json"] == {"identifier": "a@b.com", "context": None}

    def test_update_can_clear_field(self, client):
        """Test an explicit None in update properties reaches the wire as null."""
        client.session.request.return_value = make_response(json_data={"data": {}})

        UserAPI(client).update("u1", {"phoneNumber": None, "displayName": "A"})

        kwargs = client.session.request.call_args.kwargs
        assert kwargs["url"] == "https://spid.test/api/2/user/u1"
        assert kwargs["json"] == {"phoneNumber": None, "displayName": "A"}

    def test_post_without_body(self, client):
        client.session.request.return_value = make_response(json_data={"data": True})

        client.post("/user/u1/agreements/accept")

        assert client.session.request.call_args.kwargs["json"] is None

    def test_no_content(self, client):
        """Test 204 returns a success marker."""
        client.session.request.return_value = make_response(204)
        assert client.get("/me") == {"success": True}

    def test_non_json_body(self, client):
        client.session.request.return_value = make_response(200, text="OK")
        assert client.get("/me") == {"success": True, "content": b"OK"}

    def test_session_headers(self, config):
        """Test the real session carries user agent and accept headers."""
        http = HTTPClient(config)
        assert http.session.headers["Accept"] == "application/json"
        assert http.session.headers["User-Agent"].startswith("spid-client/")
        http.close()
        assert http._session is None


class TestErrors:
    """Tests for error mapping."""

    @pytest.mark.parametrize("status, exc", [
        (403, PermissionDeniedError),
        (404, NotFoundError),
        (400, ValidationError),
        (422, ValidationError),
        (500, APIError),
    ])
    def test_status_mapping(self, client, status, exc):
        error_body = {"error": {"code": status, "type": "ApiException", "description": "Nope"}}
        client.session.request.return_value = make_response(status, error_body)

        with pytest.raises(exc) as exc_info:
            client.get("/api/2/user/u1")

        assert "[ApiException] Nope" in str(exc_info.value)
        assert exc_info.value.status_code == status
        assert exc_info.value.response_data == error_body

    def test_unauthorized_without_credentials(self, client):
        """Test 401 with nothing to refresh raises AuthenticationError."""
        client.session.request.return_value = make_response(401, {"error": "invalid_token"})

        with pytest.raises(AuthenticationError):
            client.get("/me")

        assert client.session.request.call_count == 1

    def test_plain_text_error(self, client):
        client.session.request.return_value = make_response(502, text="Bad Gateway")

        with pytest.raises(APIError, match="Bad Gateway"):
            client.get("/me")

    def test_connection_error(self, client):
        client.session.request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(APIError, match="Connection failed"):
            client.get("/me")

    def test_timeout(self, client):
        client.session.request.side_effect = requests.exceptions.Timeout("slow")

        with pytest.raises(APIError, match="timed out"):
            client.get("/me")


class TestTokenRefresh:
    """Tests for automatic token acquisition."""

    def test_fetches_token_when_missing(self):
        """Test a client-credentials token is requested before the first call."""
        config = SpidConfig(server_url="https://spid.test", client_id="id", client_secret="secret")
        http = HTTPClient(config)
        http._session = MagicMock()
        http.session.request.return_value = make_response(json_data={"data": {}})

        with patch("spid_client.auth.SpidAuthClient") as mock_auth:
            auth_instance = MagicMock()
            auth_instance.__enter__ = MagicMock(return_value=auth_instance)
            auth_instance.__exit__ = MagicMock(return_value=False)
            auth_instance.client_credentials.return_value = {
                "access_token": "fresh",
                "refresh_token": None,
                "expires_in": 3600,
            }
            mock_auth.return_value = auth_instance

            http.get("/me")

        assert config.token == "fresh"
        assert config.token_expires_at > 0
        headers = http.session.request.call_args.kwargs["headers"]
        assert headers["Authorization"] == "Bearer fresh"

    def test_replays_once_after_401(self):
        """Test a 401 triggers one refresh and one replay."""
        config = SpidConfig(
            server_url="https://spid.test",
            token="stale",
            refresh_token="r1",
            client_id="id",
            client_secret="secret",
        )
        http = HTTPClient(config)
        http._session = MagicMock()
        http.session.request.side_effect = [
            make_response(401, {"error": "expired"}),
            make_response(json_data={"data": "ok"}),
        ]

        with patch("spid_client.auth.SpidAuthClient") as mock_auth:
            auth_instance = MagicMock()
            auth_instance.__enter__ = MagicMock(return_value=auth_instance)
            auth_instance.__exit__ = MagicMock(return_value=False)
            auth_instance.refresh_token.return_value = {
                "access_token": "new",
                "refresh_token": "r2",
                "expires_in": None,
            }
            mock_auth.return_value = auth_instance

            result = http.get("/me")

        assert result == {"data": "ok"}
        assert http.session.request.call_count == 2
        auth_instance.refresh_token.assert_called_once_with("r1")
        assert config.token == "new"
        assert config.refresh_token == "r2"

    def test_falls_back_to_client_credentials(self):
        """Test a rejected refresh token falls back to the client credentials grant."""
        config = SpidConfig(
            server_url="https://spid.test",
            token="stale",
            refresh_token="dead",
            client_id="id",
            client_secret="secret",
        )
        http = HTTPClient(config)
        http._session = MagicMock()
        http.session.request.side_effect = [
            make_response(401, {"error": "expired"}),
            make_response(json_data={"data": "ok"}),
        ]

        with patch("spid_client.auth.SpidAuthClient") as mock_auth:
            auth_instance = MagicMock()
            auth_instance.__enter__ = MagicMock(return_value=auth_instance)
            auth_instance.__exit__ = MagicMock(return_value=False)
            auth_instance.refresh_token.side_effect = AuthenticationError("Authentication failed: invalid_grant")
            auth_instance.client_credentials.return_value = {
                "access_token": "server-token",
                "refresh_token": None,
                "expires_in": None,
            }
            mock_auth.return_value = auth_instance

            result = http.get("/me")

        assert result == {"data": "ok"}
        auth_instance.client_credentials.assert_called_once()
        assert config.token == "server-token"
        headers = http.session.request.call_args.kwargs["headers"]
        assert headers["Authorization"] == "Bearer server-token"

    def test_auto_refresh_disabled(self):
        """Test no token is requested when auto_refresh is off."""
        config = SpidConfig(server_url="https://spid.test", client_id="id", client_secret="secret")
        http = HTTPClient(config, auto_refresh=False)
        http._session = MagicMock()
        http.session.request.return_value = make_response(401, {"error": "no token"})

        with patch("spid_client.auth.SpidAuthClient") as mock_auth:
            with pytest.raises(AuthenticationError):
                http.get("/me")

        mock_auth.assert_not_called()
        assert http.session.request.call_count == 1


class TestSpidClient:
    """Tests for the SpidClient facade."""

    def test_resource_groups_share_transport(self, config):
        config.redirect_uri = "https://x"
        client = SpidClient(config)

        for resource in client.resources:
            assert resource._http is client._http
            assert resource.redirect_uri == "https://x"

    def test_signin_through_facade(self, config):
        """Test a facade call reaches the wire with the configured redirect."""
        config.redirect_uri = "https://x"
        with SpidClient(config) as client:
            client._http._session = MagicMock()
            client._http.session.request.return_value = make_response(201, {"data": {}})

            client.user.signin("a@b.com")

            kwargs = client._http.session.request.call_args.kwargs
            assert kwargs["url"] == "https://spid.test/api/2/signin"
            assert kwargs["json"] == {
                "identifier": "a@b.com",
                "redirectUri": "https://x",
                "context": None,
            }

    def test_empty_redirect_is_none(self, config):
        client = SpidClient(config)
        assert client.user.redirect_uri is None

    def test_set_redirect_uri(self, config):
        client = SpidClient(config)
        client.set_redirect_uri("https://new")
        assert config.redirect_uri == "https://new"
        assert all(r.redirect_uri == "https://new" for r in client.resources)

    def test_close(self, config):
        client = SpidClient(config)
        session = MagicMock()
        client._http._session = session
        client.close()
        session.close.assert_called_once()

    def test_explicit_config_wins_over_transport_config(self):
        """Test the config argument seeds the default redirect, not the transport's."""
        http = HTTPClient(SpidConfig(redirect_uri="https://from-http"))
        client = SpidClient(SpidConfig(redirect_uri="https://passed"), http=http)

        assert client.config.redirect_uri == "https://passed"
        assert client.user.redirect_uri == "https://passed"

    def test_transport_config_used_when_no_config(self):
        http = HTTPClient(SpidConfig(redirect_uri="https://from-http"))
        client = SpidClient(http=http)

        assert client.user.redirect_uri == "https://from-http"

    def test_bare_transport(self):
        """Test any get/post object works as the transport and results pass through."""

        class AwaitableTransport:
            def __init__(self):
                self.calls = []

            def get(self, path, query=None):
                self.calls.append(("GET", path, query))
                return ("pending", path)

            def post(self, path, body=None):
                self.calls.append(("POST", path, body))
                return ("pending", path)

        transport = AwaitableTransport()
        client = SpidClient(SpidConfig(redirect_uri="https://x"), http=transport)

        result = client.user.signin("a@b.com")

        assert result == ("pending", "/api/2/signin")
        assert transport.calls == [("POST", "/api/2/signin", {
            "identifier": "a@b.com",
            "redirectUri": "https://x",
            "context": None,
        })]
        with client:
            pass
