"""Shared test fixtures for quiver_mcp tests."""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import httpx
import pytest
from prometheus_client import CollectorRegistry

from quiver_mcp.config.settings import QuiverAPIConfig, Settings, set_settings
from quiver_mcp.infrastructure.metrics import ToolCallMetrics
from quiver_mcp.infrastructure.quiver_client import QuiverClient
from quiver_mcp.server.dispatch import Gateway
from quiver_mcp.tools import ToolRegistry, build_tool_catalog

BASE_URL = "https://api.quiver.test"
TOKEN = "test-token"

ENV_VARS = (
    "QUIVER_BASE_URL",
    "QUIVER_API_TOKEN",
    "QUIVER_TIMEOUT",
    "QUIVER_MCP_HOST",
    "QUIVER_MCP_PORT",
    "PORT",
    "QUIVER_MCP_CORS_ORIGIN",
    "QUIVER_MCP_TRANSPORT",
    "QUIVER_MCP_LOG_LEVEL",
    "QUIVER_MCP_LOG_DIR",
    "LOG_LEVEL",
)


class FakeUpstream:
    """Canned QuiverQuant responses keyed by URL path, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.routes: Dict[str, Tuple[int, Any]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, path: str, payload: Any = None, status: int = 200) -> None:
        self.routes[path] = (status, payload)

    def fail(self, path: str, exc_type: type = httpx.ConnectTimeout) -> None:
        self.routes[path] = (0, exc_type)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path not in self.routes:
            return httpx.Response(404, json={"message": "Not found"})
        status, payload = self.routes[request.url.path]
        if isinstance(payload, type) and issubclass(payload, Exception):
            raise payload("upstream unreachable", request=request)
        return httpx.Response(status, json=payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Isolate every test from the developer's environment and cached settings."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("QUIVER_MCP_LOGGING_ENABLED", "false")
    set_settings(None)
    yield
    set_settings(None)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def api_config() -> QuiverAPIConfig:
    return QuiverAPIConfig(base_url=BASE_URL, api_token=TOKEN)


@pytest.fixture
def quiver_client(api_config: QuiverAPIConfig, upstream: FakeUpstream) -> QuiverClient:
    return QuiverClient(api_config, transport=upstream.transport)


@pytest.fixture
def metrics() -> ToolCallMetrics:
    """Metrics bound to a private registry so tests never share counters."""
    return ToolCallMetrics(registry=CollectorRegistry())


@pytest.fixture
def registry(quiver_client: QuiverClient, metrics: ToolCallMetrics) -> ToolRegistry:
    return ToolRegistry(quiver_client, build_tool_catalog(), metrics=metrics)


@pytest.fixture
def gateway(registry: ToolRegistry) -> Gateway:
    return Gateway(registry)


@pytest.fixture
def settings(api_config: QuiverAPIConfig) -> Settings:
    return Settings(quiver=api_config)


def make_records(count: int) -> List[Dict[str, Any]]:
    """Congress-trading shaped rows: ticker, representative, amount, transaction_type."""
    return [
        {
            "ticker": f"T{i}",
            "representative": f"Rep {i}",
            "amount": i * 1000,
            "transaction_type": "Purchase" if i % 2 else "Sale",
        }
        for i in range(count)
    ]


@pytest.fixture
def rows():
    """Factory for congress-trading shaped rows."""
    return make_records
