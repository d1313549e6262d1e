"""Tests for the gateway and one-shot JSON-RPC dispatch."""

from __future__ import annotations

import json

import pytest

from quiver_mcp.schemas import PaginationInfo, ResponseSummary, ShapedResponse
from quiver_mcp.server.dispatch import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PROTOCOL_VERSION,
    Gateway,
    tool_result_content,
)
from quiver_mcp.tools import ToolFailure, ToolRegistry, ToolSuccess, build_tool_catalog


def _rpc(method, params=None, request_id=1):
    message = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return message


class ExplodingClient:
    async def request(self, path, method="GET", params=None, body=None):
        raise RuntimeError("client exploded")

    async def aclose(self):
        pass


# ---------------------------------------------------------------------------
# Tool result serialization
# ---------------------------------------------------------------------------


class TestToolResultContent:
    def test_success_has_data_and_metadata(self):
        shaped = ShapedResponse(
            data=[{"a": 1}],
            pagination=PaginationInfo(1, 50, 1, 1, False, False),
            summary=ResponseSummary(1, ["all"], "detailed", "json"),
        )
        content = tool_result_content(ToolSuccess(shaped))

        assert [c.type for c in content] == ["text", "text"]
        assert content[0].text == '[{"a":1}]'
        metadata = json.loads(content[1].text)
        assert metadata["pagination"]["total_pages"] == 1
        assert metadata["summary"]["fields_included"] == ["all"]

    def test_string_data_is_not_re_encoded(self):
        shaped = ShapedResponse(data="| a |", summary=ResponseSummary(1, ["all"], "detailed", "table"))
        content = tool_result_content(ToolSuccess(shaped))
        assert content[0].text == "| a |"
        assert "pagination" not in json.loads(content[1].text)

    def test_failure(self):
        content = tool_result_content(ToolFailure(error="Not found", status=404))
        assert len(content) == 1
        assert content[0].text == "Error: Not found (Status: 404)"


# ---------------------------------------------------------------------------
# Gateway catalog operations
# ---------------------------------------------------------------------------


class TestGateway:
    def test_lists(self, gateway):
        assert len(gateway.list_tools()) == 21
        assert len(gateway.list_prompts()) == 4
        assert len(gateway.list_resources()) == 6

    def test_get_prompt(self, gateway):
        result = gateway.get_prompt("optimize-query-strategy", {"data_type": "congress"})
        assert len(result.messages) == 2
        assert result.description

    def test_read_resource(self, gateway):
        assert gateway.read_resource("quiver://reference/response-modes").startswith("# Response Modes")

    @pytest.mark.asyncio
    async def test_call_tool(self, gateway, upstream):
        upstream.add("/beta/live/legislation", [{"bill": "H.R.1"}])
        result = await gateway.call_tool("get_recent_legislation", {"format": "csv"})
        assert result.response.data == "bill\nH.R.1"


# ---------------------------------------------------------------------------
# JSON-RPC
# ---------------------------------------------------------------------------


class TestHandleJsonrpc:
    @pytest.mark.asyncio
    async def test_initialize(self, gateway):
        response = await gateway.handle_jsonrpc(_rpc("initialize", {}))
        result = response["result"]
        assert response["id"] == 1
        assert result["protocolVersion"] == PROTOCOL_VERSION
        assert result["serverInfo"]["name"] == "quiver-mcp-server"
        assert "tools" in result["capabilities"]
        assert result["instructions"].startswith("# Quiver")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["initialized", "ping", "$/cancelRequest"])
    async def test_empty_results(self, gateway, method):
        response = await gateway.handle_jsonrpc(_rpc(method, request_id="abc"))
        assert response == {"jsonrpc": "2.0", "id": "abc", "result": {}}

    @pytest.mark.asyncio
    async def test_notifications_get_no_response(self, gateway):
        message = {"jsonrpc": "2.0", "method": "notifications/initialized"}
        assert await gateway.handle_jsonrpc(message) is None

    @pytest.mark.asyncio
    async def test_tools_list(self, gateway):
        response = await gateway.handle_jsonrpc(_rpc("tools/list"))
        tools = response["result"]["tools"]
        assert len(tools) == 21
        assert "inputSchema" in tools[0]

    @pytest.mark.asyncio
    async def test_tools_call_success(self, gateway, upstream, rows):
        upstream.add("/beta/live/congresstrading", rows(5))
        response = await gateway.handle_jsonrpc(
            _rpc("tools/call", {"name": "get_recent_congress_trading", "arguments": {"limit": 2}})
        )
        result = response["result"]
        assert "isError" not in result
        assert len(json.loads(result["content"][0]["text"])) == 2
        metadata = json.loads(result["content"][1]["text"])
        assert metadata["pagination"]["total_items"] == 2
        assert metadata["summary"]["total_items"] == 5

    @pytest.mark.asyncio
    async def test_tools_call_upstream_failure(self, gateway, upstream):
        upstream.add("/beta/funds", {"message": "Invalid token"}, status=403)
        response = await gateway.handle_jsonrpc(_rpc("tools/call", {"name": "get_funds"}))
        result = response["result"]
        assert result["isError"] is True
        assert result["content"][0]["text"] == "Error: Invalid token (Status: 403)"

    @pytest.mark.asyncio
    async def test_tools_call_missing_parameter(self, gateway, upstream):
        response = await gateway.handle_jsonrpc(
            _rpc("tools/call", {"name": "get_ticker_data", "arguments": {}})
        )
        result = response["result"]
        assert result["isError"] is True
        assert result["content"][0]["text"] == "Error: ticker parameter is required"
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_unknown_tool(self, gateway):
        response = await gateway.handle_jsonrpc(_rpc("tools/call", {"name": "get_secrets"}))
        assert response["error"] == {"code": METHOD_NOT_FOUND, "message": "Unknown tool: get_secrets"}

    @pytest.mark.asyncio
    async def test_unknown_method(self, gateway):
        response = await gateway.handle_jsonrpc(_rpc("sampling/createMessage"))
        assert response["error"]["code"] == METHOD_NOT_FOUND
        assert response["error"]["message"] == "Unknown method: sampling/createMessage"

    @pytest.mark.asyncio
    async def test_resources(self, gateway):
        listed = await gateway.handle_jsonrpc(_rpc("resources/list"))
        assert listed["result"]["resources"][0]["uri"] == "quiver://server/instructions"

        read = await gateway.handle_jsonrpc(_rpc("resources/read", {"uri": "quiver://docs/field-reference"}))
        contents = read["result"]["contents"][0]
        assert contents["mimeType"] == "text/markdown"
        assert contents["text"].startswith("# Field Reference")

    @pytest.mark.asyncio
    async def test_unknown_resource(self, gateway):
        response = await gateway.handle_jsonrpc(_rpc("resources/read", {"uri": "quiver://missing"}))
        assert response["error"]["code"] == METHOD_NOT_FOUND

    @pytest.mark.asyncio
    async def test_prompts(self, gateway):
        listed = await gateway.handle_jsonrpc(_rpc("prompts/list"))
        assert len(listed["result"]["prompts"]) == 4

        got = await gateway.handle_jsonrpc(
            _rpc("prompts/get", {"name": "company-deep-dive", "arguments": {"ticker": "AAPL"}})
        )
        messages = got["result"]["messages"]
        assert messages[0]["role"] == "user"
        assert messages[0]["content"]["type"] == "text"

    @pytest.mark.asyncio
    async def test_prompt_missing_argument(self, gateway):
        response = await gateway.handle_jsonrpc(_rpc("prompts/get", {"name": "company-deep-dive"}))
        assert response["error"]["code"] == INVALID_PARAMS

    @pytest.mark.asyncio
    async def test_unknown_prompt(self, gateway):
        response = await gateway.handle_jsonrpc(_rpc("prompts/get", {"name": "nope"}))
        assert response["error"] == {"code": METHOD_NOT_FOUND, "message": "Unknown prompt: nope"}

    @pytest.mark.asyncio
    async def test_invalid_request(self, gateway):
        assert (await gateway.handle_jsonrpc([1, 2]))["error"]["code"] == INVALID_REQUEST
        assert (await gateway.handle_jsonrpc({"id": 3}))["error"]["code"] == INVALID_REQUEST
        bad_params = await gateway.handle_jsonrpc(_rpc("tools/list", params=[1]))
        assert bad_params["error"]["code"] == INVALID_PARAMS

    @pytest.mark.asyncio
    async def test_handler_exception_is_internal_error(self):
        gateway = Gateway(ToolRegistry(ExplodingClient(), build_tool_catalog()))
        response = await gateway.handle_jsonrpc(_rpc("tools/call", {"name": "get_companies"}))
        assert response["error"] == {"code": INTERNAL_ERROR, "message": "client exploded"}
