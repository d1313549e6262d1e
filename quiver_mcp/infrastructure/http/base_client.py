"""
Base async HTTP client with timeout and error normalization.

Unlike a general-purpose client this one never retries and never raises
for HTTP or transport failures: every outcome is folded into an
``APIResponse`` so the caller can hand it straight to the response shaper.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from quiver_mcp.observability.logging import LogModule, get_module_logger
from quiver_mcp.schemas.envelope import APIResponse

logger = get_module_logger(LogModule.UPSTREAM)

TRANSPORT_FAILURE_STATUS = 500


class BaseHTTPClient(ABC):
    """
    Abstract base class for upstream API clients.

    Subclasses implement `_get_base_url()` and optionally override
    `_get_default_headers()` and `_extract_error_message()`.

    Example:
        class MyAPIClient(BaseHTTPClient):
            def _get_base_url(self) -> str:
                return "https://api.example.com"

            def _get_default_headers(self) -> Dict[str, str]:
                return {"Authorization": f"Bearer {self.api_key}"}
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the HTTP client.

        Args:
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (tests inject a MockTransport).
        """
        self.timeout = timeout
        self._transport = transport
        self._async_client: Optional[httpx.AsyncClient] = None

    @abstractmethod
    def _get_base_url(self) -> str:
        """Return the base URL for this client."""
        pass

    def _get_default_headers(self) -> Dict[str, str]:
        """Return default headers for requests. Override in subclasses."""
        return {"Content-Type": "application/json"}

    def _get_async_client(self) -> httpx.AsyncClient:
        """Get or create the shared async HTTP client."""
        if self._async_client is None:
            self._async_client = httpx.AsyncClient(
                base_url=self._get_base_url(),
                timeout=self.timeout,
                headers=self._get_default_headers(),
                transport=self._transport,
            )
        return self._async_client

    def _extract_error_message(self, response: httpx.Response, error: Exception) -> str:
        """Pick the most useful error text from a failed response."""
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            for key in ("message", "detail", "error"):
                if payload.get(key):
                    return str(payload[key])
        return str(error)

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def arequest(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> APIResponse:
        """
        Make a single asynchronous request.

        Args:
            method: HTTP method (GET, POST)
            path: URL path (appended to base URL)
            params: Query parameters; None values are dropped
            json: JSON body for non-GET requests

        Returns:
            APIResponse with ``data`` on 2xx, otherwise ``error`` and the
            upstream status (500 when the request never completed)
        """
        client = self._get_async_client()
        method = method.upper()
        query = {k: v for k, v in (params or {}).items() if v is not None}
        logger.info(f"Making request to: {method} {path}")

        try:
            response = await client.request(
                method,
                path,
                params=query or None,
                json=json if method != "GET" else None,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = self._extract_error_message(e.response, e)
            logger.error(f"API Error: {status} - {e.response.reason_phrase}")
            return APIResponse(status=status, error=message)
        except httpx.HTTPError as e:
            logger.error(f"API request failed: {method} {path} - {type(e).__name__}: {e}")
            return APIResponse(status=TRANSPORT_FAILURE_STATUS, error=str(e) or type(e).__name__)

        return APIResponse(status=response.status_code, data=self._decode_body(response))

    async def aclose(self) -> None:
        """Close async client."""
        if self._async_client is not None:
            await self._async_client.aclose()
            self._async_client = None


__all__ = ["BaseHTTPClient", "TRANSPORT_FAILURE_STATUS"]
