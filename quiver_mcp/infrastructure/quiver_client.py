"""
QuiverQuant API client

Thin upstream collaborator: one request per tool call, token auth,
fixed timeout, result-or-error envelope.
"""

from typing import Any, Dict, Optional

import httpx

from quiver_mcp.config.settings import QuiverAPIConfig
from quiver_mcp.infrastructure.http.base_client import BaseHTTPClient
from quiver_mcp.schemas.envelope import APIResponse


class QuiverClient(BaseHTTPClient):
    """Async client for https://api.quiverquant.com"""

    def __init__(
        self,
        config: QuiverAPIConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(timeout=config.timeout, transport=transport)
        self.config = config

    def _get_base_url(self) -> str:
        return self.config.base_url.rstrip("/")

    def _get_default_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Token {self.config.api_token}",
            "Content-Type": "application/json",
            "User-Agent": self.config.user_agent,
        }

    async def request(
        self,
        path: str,
        method: str = "GET",
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Any] = None,
    ) -> APIResponse:
        """Issue one upstream call. Query params go on GET, the body on anything else."""
        if method.upper() == "GET":
            return await self.arequest("GET", path, params=params)
        return await self.arequest(method, path, json=body)
