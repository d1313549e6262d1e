"""
HTTP binding (Starlette)

Routes:
    GET  /health     liveness and tool count
    GET  /mcp        server info and tool list
    POST /message    one-shot JSON-RPC
    GET  /tools      tool list
    POST /call       REST tool call returning the shaped envelope
    GET  /sse        MCP SSE transport (+ POST /messages/)
    GET  /metrics    Prometheus exposition
"""

import contextlib
import json
from datetime import datetime, timezone
from typing import Optional

from mcp.server.sse import SseServerTransport
from prometheus_client import CONTENT_TYPE_LATEST
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Mount, Route

from quiver_mcp.config.settings import Settings, get_settings
from quiver_mcp.infrastructure.metrics import ToolCallMetrics, get_metrics
from quiver_mcp.observability.logging import LogModule, get_module_logger
from quiver_mcp.server.dispatch import PARSE_ERROR, Gateway
from quiver_mcp.server.mcp_server import create_mcp_server
from quiver_mcp.tools import ToolSuccess
from quiver_mcp.utils.exceptions import ToolValidationError, UnknownIdentifierError

logger = get_module_logger(LogModule.TRANSPORT)


def create_starlette_app(
    gateway: Gateway,
    settings: Optional[Settings] = None,
    metrics: Optional[ToolCallMetrics] = None,
) -> Starlette:
    """Create Starlette application with JSON-RPC, REST and SSE endpoints."""
    settings = settings or get_settings()
    metrics = metrics or get_metrics()
    mcp_server = create_mcp_server(gateway)
    sse_transport = SseServerTransport("/messages/")

    def _tools_payload():
        return [
            {"name": t.name, "description": t.description, "inputSchema": t.inputSchema}
            for t in gateway.list_tools()
        ]

    async def handle_sse(request: Request):
        async with sse_transport.connect_sse(
            request.scope,
            request.receive,
            request._send,
        ) as streams:
            await mcp_server.run(
                streams[0],
                streams[1],
                mcp_server.create_initialization_options(),
            )
        return Response()

    async def handle_health(request: Request):
        return JSONResponse({
            "status": "ok",
            "server": gateway.name,
            "version": gateway.version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "tools_count": len(gateway.registry),
        })

    async def handle_info(request: Request):
        return JSONResponse({
            "name": gateway.name,
            "version": gateway.version,
            "description": "MCP server for QuiverQuant financial data",
            "tools": [
                {"name": t["name"], "description": t["description"], "parameters": t["inputSchema"]}
                for t in _tools_payload()
            ],
        })

    async def handle_tools_list(request: Request):
        tools = _tools_payload()
        return JSONResponse({"tools": tools, "count": len(tools)})

    async def handle_message(request: Request):
        try:
            message = json.loads(await request.body())
        except (ValueError, UnicodeDecodeError) as e:
            logger.warning(f"Malformed JSON-RPC body: {e}")
            return JSONResponse({
                "jsonrpc": "2.0",
                "id": None,
                "error": {"code": PARSE_ERROR, "message": "Parse error"},
            }, status_code=400)

        response = await gateway.handle_jsonrpc(message)
        if response is None:
            return Response(status_code=202)
        return JSONResponse(response)

    async def handle_call(request: Request):
        """
        REST tool call

        Request:  {"tool": "get_companies", "arguments": {"limit": 10}}
        Response: {"success": true, "result": {"data": ..., "summary": ...}}
        """
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse({"success": False, "error": "Invalid JSON body"}, status_code=400)

        tool_name = body.get("tool") if isinstance(body, dict) else None
        arguments = (body.get("arguments") or {}) if isinstance(body, dict) else {}
        if not tool_name:
            return JSONResponse({"success": False, "error": "Missing 'tool' parameter"}, status_code=400)

        logger.info(f"REST API calling tool: {tool_name} with args: {arguments}")
        try:
            result = await gateway.call_tool(tool_name, arguments)
        except UnknownIdentifierError as e:
            return JSONResponse({"success": False, "error": e.message}, status_code=404)
        except ToolValidationError as e:
            return JSONResponse({"success": False, "error": e.message, "tool": tool_name}, status_code=400)
        except Exception as e:
            logger.error(f"Tool {tool_name} failed: {e}", exc_info=True)
            return JSONResponse({"success": False, "error": str(e), "tool": tool_name}, status_code=500)

        if isinstance(result, ToolSuccess):
            return JSONResponse({"success": True, "result": result.to_dict()})
        return JSONResponse({"success": False, "result": result.to_dict()}, status_code=502)

    async def handle_metrics(request: Request):
        return Response(content=metrics.export(), media_type=CONTENT_TYPE_LATEST)

    routes = [
        Route("/health", handle_health, methods=["GET"]),
        Route("/mcp", handle_info, methods=["GET"]),
        Route("/message", handle_message, methods=["POST"]),
        Route("/tools", handle_tools_list, methods=["GET"]),
        Route("/call", handle_call, methods=["POST"]),
        Route("/metrics", handle_metrics, methods=["GET"]),
        Route("/sse", handle_sse, methods=["GET"]),
        Mount("/messages/", app=sse_transport.handle_post_message),
    ]

    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=[o.strip() for o in settings.server.cors_origin.split(",") if o.strip()],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        ),
    ]

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        yield
        await gateway.aclose()

    return Starlette(routes=routes, middleware=middleware, lifespan=lifespan)


def run_http(gateway: Gateway, settings: Settings, metrics: Optional[ToolCallMetrics] = None) -> None:
    """Serve the HTTP binding with uvicorn (blocking)."""
    import uvicorn

    app = create_starlette_app(gateway, settings, metrics)
    host, port = settings.server.host, settings.server.port

    logger.info(f"Starting {gateway.name} on {host}:{port}")
    logger.info(f"JSON-RPC endpoint: http://{host}:{port}/message")
    logger.info(f"SSE endpoint: http://{host}:{port}/sse")
    logger.info(f"Health check: http://{host}:{port}/health")

    uvicorn.run(app, host=host, port=port, log_config=None)
