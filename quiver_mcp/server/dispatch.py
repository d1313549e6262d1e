"""
Dispatch Layer - the one place where exceptions become transport errors

``Gateway`` holds the three immutable catalogs and is shared by every
transport binding (MCP SDK over stdio/SSE, one-shot HTTP JSON-RPC, REST).
"""

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence

from mcp.types import GetPromptResult, Prompt, Resource, TextContent, Tool

from quiver_mcp import SERVER_NAME, __version__
from quiver_mcp.catalog import PROMPTS, RESOURCES, SERVER_INSTRUCTIONS, PromptDefinition, ResourceDefinition
from quiver_mcp.catalog.resources import MARKDOWN, read_resource
from quiver_mcp.config.settings import Settings
from quiver_mcp.infrastructure.metrics import ToolCallMetrics
from quiver_mcp.infrastructure.quiver_client import QuiverClient
from quiver_mcp.observability.logging import LogContext, LogModule, get_module_logger
from quiver_mcp.tools import ToolRegistry, ToolResult, ToolSuccess, build_tool_catalog
from quiver_mcp.utils.exceptions import ToolValidationError, UnknownIdentifierError

logger = get_module_logger(LogModule.TRANSPORT)

PROTOCOL_VERSION = "2024-11-05"
JSONRPC_VERSION = "2.0"

# JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

SERVER_CAPABILITIES = {
    "tools": {"listChanged": True},
    "prompts": {"listChanged": True},
    "resources": {"listChanged": True, "subscribe": True},
}


def to_json_text(data: Any) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False, default=str)


def tool_result_content(result: ToolResult) -> List[TextContent]:
    """
    Text content for a tool result

    Success yields two items: the data (as-is when already a string) and the
    JSON metadata block. Failure yields ``Error: <error> (Status: <status>)``.
    """
    if not isinstance(result, ToolSuccess):
        return [TextContent(type="text", text=result.message())]

    shaped = result.response
    data = shaped.data if isinstance(shaped.data, str) else to_json_text(shaped.data)
    return [
        TextContent(type="text", text=data),
        TextContent(type="text", text=to_json_text(shaped.metadata())),
    ]


def _dump(model: Any) -> Dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def _error(request_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": {"code": code, "message": message}}


def _result(request_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


class Gateway:
    """Routes calls to the tool registry and the prompt/resource catalogs"""

    def __init__(
        self,
        registry: ToolRegistry,
        prompts: Sequence[PromptDefinition] = PROMPTS,
        resources: Sequence[ResourceDefinition] = RESOURCES,
        name: str = SERVER_NAME,
        version: str = __version__,
    ):
        self.registry = registry
        self.prompts = tuple(prompts)
        self.resources = tuple(resources)
        self.name = name
        self.version = version

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        metrics: Optional[ToolCallMetrics] = None,
        client: Optional[QuiverClient] = None,
    ) -> "Gateway":
        client = client or QuiverClient(settings.quiver)
        registry = ToolRegistry(client, build_tool_catalog(), metrics=metrics)
        return cls(registry, name=settings.server.name, version=settings.server.version)

    async def aclose(self) -> None:
        await self.registry.aclose()

    # =========================================================================
    # Catalog operations
    # =========================================================================

    def list_tools(self) -> List[Tool]:
        return [tool.to_mcp_tool() for tool in self.registry.tools]

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        return await self.registry.call(name, arguments)

    def list_prompts(self) -> List[Prompt]:
        return [prompt.to_mcp_prompt() for prompt in self.prompts]

    def get_prompt(self, name: str, arguments: Optional[Mapping[str, str]] = None) -> GetPromptResult:
        prompt = next((p for p in self.prompts if p.name == name), None)
        if prompt is None:
            raise UnknownIdentifierError("prompt", name)
        return GetPromptResult(description=prompt.description, messages=prompt.render(arguments))

    def list_resources(self) -> List[Resource]:
        return [resource.to_mcp_resource() for resource in self.resources]

    def read_resource(self, uri: str) -> str:
        uri = str(uri)
        if not any(r.uri == uri for r in self.resources):
            raise UnknownIdentifierError("resource", uri)
        return read_resource(uri, self.registry.tools)

    def server_info(self) -> Dict[str, Any]:
        return {"name": self.name, "version": self.version}

    # =========================================================================
    # One-shot JSON-RPC
    # =========================================================================

    async def handle_jsonrpc(self, message: Any) -> Optional[Dict[str, Any]]:
        """
        Answer one JSON-RPC request

        Returns None for notifications (``notifications/*``), otherwise a
        response object. Never raises.
        """
        if not isinstance(message, dict) or not isinstance(message.get("method"), str):
            return _error(message.get("id") if isinstance(message, dict) else None,
                          INVALID_REQUEST, "Invalid Request")

        request_id = message.get("id")
        method = message["method"]
        params = message.get("params") or {}
        if not isinstance(params, dict):
            return _error(request_id, INVALID_PARAMS, "params must be an object")

        if method.startswith("notifications/"):
            logger.debug(f"Notification received: {method}")
            return None

        with LogContext(request_id=str(request_id) if request_id is not None else None):
            try:
                return _result(request_id, await self._route(method, params))
            except UnknownIdentifierError as e:
                return _error(request_id, METHOD_NOT_FOUND, e.message)
            except ToolValidationError as e:
                return _error(request_id, INVALID_PARAMS, e.message)
            except Exception as e:
                logger.error(f"JSON-RPC {method} failed: {e}", exc_info=True)
                return _error(request_id, INTERNAL_ERROR, str(e))

    async def _route(self, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        if method == "initialize":
            return {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": SERVER_CAPABILITIES,
                "serverInfo": self.server_info(),
                "instructions": SERVER_INSTRUCTIONS,
            }
        if method in ("initialized", "ping", "$/cancelRequest"):
            return {}
        if method == "tools/list":
            return {"tools": [_dump(tool) for tool in self.list_tools()]}
        if method == "tools/call":
            return await self._call_tool_result(params.get("name"), params.get("arguments"))
        if method == "resources/list":
            return {"resources": [_dump(resource) for resource in self.list_resources()]}
        if method == "resources/read":
            uri = params.get("uri")
            text = self.read_resource(uri)
            return {"contents": [{"uri": uri, "mimeType": MARKDOWN, "text": text}]}
        if method == "prompts/list":
            return {"prompts": [_dump(prompt) for prompt in self.list_prompts()]}
        if method == "prompts/get":
            return _dump(self.get_prompt(params.get("name"), params.get("arguments")))
        raise UnknownIdentifierError("method", method)

    async def _call_tool_result(self, name: Any, arguments: Any) -> Dict[str, Any]:
        """CallToolResult payload; bad tool arguments become an isError result"""
        try:
            result = await self.call_tool(name, arguments)
        except ToolValidationError as e:
            return {"content": [{"type": "text", "text": f"Error: {e.message}"}], "isError": True}

        payload: Dict[str, Any] = {"content": [_dump(item) for item in tool_result_content(result)]}
        if result.is_error:
            payload["isError"] = True
        return payload


__all__ = [
    "Gateway",
    "PROTOCOL_VERSION",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    "tool_result_content",
    "to_json_text",
]
