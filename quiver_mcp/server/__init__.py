from .dispatch import Gateway, tool_result_content
from .http_app import create_starlette_app, run_http
from .mcp_server import create_mcp_server, run_stdio

__all__ = [
    "Gateway",
    "tool_result_content",
    "create_starlette_app",
    "run_http",
    "create_mcp_server",
    "run_stdio",
]
