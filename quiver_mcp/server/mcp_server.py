"""
MCP SDK binding

Registers the gateway's operations on a low-level ``mcp.server.Server``.
The same server instance backs the stdio transport and the SSE endpoint.
"""

from typing import Dict, List, Optional

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.types import GetPromptResult, Prompt, Resource, TextContent, Tool
from pydantic import AnyUrl

from quiver_mcp.catalog import SERVER_INSTRUCTIONS
from quiver_mcp.catalog.resources import MARKDOWN
from quiver_mcp.observability.logging import LogModule, get_module_logger
from quiver_mcp.server.dispatch import Gateway, tool_result_content
from quiver_mcp.tools import ToolSuccess

logger = get_module_logger(LogModule.TRANSPORT)


class ToolCallFailed(Exception):
    """Raised inside the SDK handler so the result is flagged isError"""


def create_mcp_server(gateway: Gateway) -> Server:
    """Create and configure the MCP server instance."""
    server = Server(gateway.name, version=gateway.version, instructions=SERVER_INSTRUCTIONS)

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        return gateway.list_tools()

    @server.call_tool()
    async def call_tool(name: str, arguments: Optional[dict]) -> List[TextContent]:
        logger.info(f"Calling tool: {name} with arguments: {arguments}")
        result = await gateway.call_tool(name, arguments or {})
        if not isinstance(result, ToolSuccess):
            # the SDK turns handler exceptions into an isError result with this text
            raise ToolCallFailed(result.message())
        return tool_result_content(result)

    @server.list_prompts()
    async def list_prompts() -> List[Prompt]:
        return gateway.list_prompts()

    @server.get_prompt()
    async def get_prompt(name: str, arguments: Optional[Dict[str, str]]) -> GetPromptResult:
        return gateway.get_prompt(name, arguments)

    @server.list_resources()
    async def list_resources() -> List[Resource]:
        return gateway.list_resources()

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> List[ReadResourceContents]:
        return [ReadResourceContents(content=gateway.read_resource(str(uri)), mime_type=MARKDOWN)]

    return server


async def run_stdio(gateway: Gateway) -> None:
    """Serve MCP over stdin/stdout until the client disconnects."""
    server = create_mcp_server(gateway)
    logger.info(f"{gateway.name} running on stdio with {len(gateway.registry)} tools")
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        await gateway.aclose()
