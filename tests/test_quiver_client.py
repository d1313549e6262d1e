"""Tests for the upstream QuiverQuant client."""

from __future__ import annotations

import httpx
import pytest

from quiver_mcp import __version__
from quiver_mcp.infrastructure.http import TRANSPORT_FAILURE_STATUS


class TestRequest:
    @pytest.mark.asyncio
    async def test_success_returns_data_and_status(self, quiver_client, upstream):
        upstream.add("/beta/companies", [{"ticker": "AAPL"}])
        response = await quiver_client.request("/beta/companies")

        assert response.is_error is False
        assert response.status == 200
        assert response.data == [{"ticker": "AAPL"}]

    @pytest.mark.asyncio
    async def test_sends_auth_and_user_agent_headers(self, quiver_client, upstream):
        upstream.add("/beta/companies", [])
        await quiver_client.request("/beta/companies")

        headers = upstream.last_request.headers
        assert headers["Authorization"] == "Token test-token"
        assert headers["Content-Type"] == "application/json"
        assert headers["User-Agent"] == f"QuiverMCP/{__version__}"

    @pytest.mark.asyncio
    async def test_none_params_are_dropped(self, quiver_client, upstream):
        upstream.add("/beta/live/congresstrading", [])
        await quiver_client.request("/beta/live/congresstrading", params={"normalized": True, "page": None})

        params = upstream.last_request.url.params
        assert params["normalized"] == "true"
        assert "page" not in params

    @pytest.mark.asyncio
    async def test_http_error_uses_message_field(self, quiver_client, upstream):
        upstream.add("/beta/companies", {"message": "Invalid token"}, status=403)
        response = await quiver_client.request("/beta/companies")

        assert response.is_error is True
        assert response.status == 403
        assert response.error == "Invalid token"
        assert response.data is None

    @pytest.mark.asyncio
    async def test_http_error_falls_back_to_detail(self, quiver_client, upstream):
        upstream.add("/beta/funds", {"detail": "Upgrade your plan"}, status=402)
        response = await quiver_client.request("/beta/funds")
        assert response.error == "Upgrade your plan"

    @pytest.mark.asyncio
    async def test_http_error_without_json_message(self, quiver_client, upstream):
        upstream.add("/beta/funds", ["unexpected"], status=500)
        response = await quiver_client.request("/beta/funds")
        assert response.status == 500
        assert "500" in response.error

    @pytest.mark.asyncio
    async def test_transport_failure_becomes_status_500(self, quiver_client, upstream):
        upstream.fail("/beta/companies", httpx.ConnectTimeout)
        response = await quiver_client.request("/beta/companies")

        assert response.status == TRANSPORT_FAILURE_STATUS
        assert response.error == "upstream unreachable"

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self, quiver_client, upstream):
        upstream.add("/beta/custom", {"ok": True})
        response = await quiver_client.request("/beta/custom", method="POST", body={"q": 1})

        assert response.data == {"ok": True}
        assert upstream.last_request.method == "POST"
        assert upstream.last_request.content == b'{"q":1}' or upstream.last_request.content == b'{"q": 1}'

    @pytest.mark.asyncio
    async def test_aclose_is_idempotent(self, quiver_client, upstream):
        upstream.add("/beta/companies", [])
        await quiver_client.request("/beta/companies")
        await quiver_client.aclose()
        await quiver_client.aclose()
