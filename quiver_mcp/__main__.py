"""
Command line entry point

    python -m quiver_mcp                      # stdio (default)
    python -m quiver_mcp --transport http     # Starlette + uvicorn
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from quiver_mcp import SERVER_NAME, __version__
from quiver_mcp.config.settings import Settings, get_settings, set_settings
from quiver_mcp.infrastructure.metrics import get_metrics
from quiver_mcp.observability.logging import configure_logging, get_logger
from quiver_mcp.server import Gateway, run_http, run_stdio
from quiver_mcp.utils.exceptions import ConfigException

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiver-mcp",
        description="MCP gateway for QuiverQuant financial data",
    )
    parser.add_argument("--transport", choices=["stdio", "http"], help="Transport to serve (default: stdio)")
    parser.add_argument("--host", help="HTTP bind host")
    parser.add_argument("--port", type=int, help="HTTP bind port")
    parser.add_argument("--version", action="version", version=f"{SERVER_NAME} {__version__}")
    return parser


def apply_arguments(settings: Settings, args: argparse.Namespace) -> Settings:
    """Command line flags win over environment variables."""
    if args.transport:
        settings.server.transport = args.transport
    if args.host:
        settings.server.host = args.host
    if args.port is not None:
        settings.server.port = args.port
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = apply_arguments(get_settings(), args)
        settings.validate()
    except ConfigException as e:
        sys.stderr.write(f"{e.message}\n")
        return 1

    set_settings(settings)
    configure_logging(settings.logging)

    logger.info(f"Base URL: {settings.quiver.base_url}")
    metrics = get_metrics()
    gateway = Gateway.from_settings(settings, metrics=metrics)

    if settings.server.transport == "http":
        run_http(gateway, settings, metrics)
    else:
        asyncio.run(run_stdio(gateway))
    return 0


if __name__ == "__main__":
    sys.exit(main())
