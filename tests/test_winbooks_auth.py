"""
Unit tests for the HTTP transport and the token exchange client.
"""
import base64

import httpx
import pytest

from winbooks.integrations.transport import HttpTransport, decode_json
from winbooks.integrations.winbooks_auth import AuthClient, basic_auth_header
from winbooks.utils.errors import (
    HttpStatusError,
    MalformedResponseError,
    TransportConnectionError,
)


class TestHttpTransport:

    def test_prefixes_base_url(self, transport, stub_api):
        stub_api.data(200, {"ok": True})

        response = transport.send("GET", "app/Sale/Folder/DEMO")

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert str(stub_api.requests[0].url) == "https://api.test/wow/v2/app/Sale/Folder/DEMO"

    def test_base_url_gets_trailing_slash(self):
        assert HttpTransport("https://api.test/wow/v2").base_url == "https://api.test/wow/v2/"

    @pytest.mark.parametrize("status", [204, 302])
    def test_non_error_statuses_are_returned(self, transport, stub_api, status):
        stub_api.data(status)
        assert transport.send("GET", "app/x").status_code == status

    @pytest.mark.parametrize("status", [400, 401, 404, 500])
    def test_error_statuses_raise(self, transport, stub_api, status):
        stub_api.data(status, b"nope")

        with pytest.raises(HttpStatusError) as exc_info:
            transport.send("GET", "app/x")

        assert exc_info.value.status_code == status
        assert exc_info.value.body == b"nope"

    def test_connection_errors_are_wrapped(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        transport = HttpTransport("https://api.test/", client=client)

        with pytest.raises(TransportConnectionError):
            transport.send("GET", "app/x")

    def test_decode_json_rejects_garbage(self):
        with pytest.raises(MalformedResponseError):
            decode_json(b"<html>")


class TestAuthClient:

    def test_basic_header_encodes_email_only(self):
        expected = base64.b64encode(b"user@example.com").decode()
        assert basic_auth_header("user@example.com") == f"Basic {expected}"

    def test_exchange_token_request(self, transport, stub_api, mock_token_response):
        stub_api.token(200, mock_token_response)

        tokens = AuthClient(transport).get_access_token("user@example.com", "EXCH123")

        assert tokens.access_token == "A1"
        assert tokens.refresh_token == "R1"

        request = stub_api.token_requests[0]
        assert request.method == "POST"
        assert request.headers["Authorization"] == basic_auth_header("user@example.com")
        assert request.headers["Accept"] == "application/json"
        assert stub_api.form(request) == {"grant_type": "exchange_token", "code": "EXCH123"}

    def test_refresh_request(self, transport, stub_api, mock_token_response):
        stub_api.token(200, mock_token_response)

        AuthClient(transport).refresh("user@example.com", "R0")

        assert stub_api.form(stub_api.token_requests[0]) == {
            "grant_type": "refresh_token",
            "code": "R0",
        }

    def test_rejected_exchange_propagates(self, transport, stub_api):
        stub_api.token(400, {"error": "invalid_grant"})

        with pytest.raises(HttpStatusError) as exc_info:
            AuthClient(transport).get_access_token("user@example.com", "bad")

        assert exc_info.value.status_code == 400
        assert len(stub_api.token_requests) == 1

    @pytest.mark.parametrize("payload", [{"access_token": "A1"}, [1, 2], b"not json"])
    def test_malformed_token_response(self, transport, stub_api, payload):
        stub_api.token(200, payload)

        with pytest.raises(MalformedResponseError):
            AuthClient(transport).get_access_token("user@example.com", "EXCH123")
