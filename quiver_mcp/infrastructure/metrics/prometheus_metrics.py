"""
Prometheus metrics for tool calls and upstream requests

NOTE: labels are restricted to the tool name (a fixed catalog) and the
outcome. Tickers and argument values must never become labels.
"""

from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

from quiver_mcp.observability.logging import get_logger

logger = get_logger(__name__)

OUTCOME_SUCCESS = "success"
OUTCOME_UPSTREAM_ERROR = "upstream_error"
OUTCOME_VALIDATION_ERROR = "validation_error"


class ToolCallMetrics:
    """Tool call counters and upstream latency

    Args:
        registry: Prometheus registry; the default global registry when None
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry

        kwargs = {"registry": registry} if registry is not None else {}

        self.tool_calls_total = Counter(
            'quiver_mcp_tool_calls_total',
            'Total number of tool calls',
            ['tool', 'outcome'],
            **kwargs
        )

        self.upstream_request_seconds = Histogram(
            'quiver_mcp_upstream_request_seconds',
            'Latency of upstream QuiverQuant API requests',
            ['tool'],
            buckets=[0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30],
            **kwargs
        )

        self.shaped_items = Histogram(
            'quiver_mcp_shaped_items',
            'Number of upstream items seen by the response shaper',
            ['tool'],
            buckets=[0, 1, 10, 50, 100, 500, 1000, 5000],
            **kwargs
        )

    def record_call(self, tool: str, outcome: str) -> None:
        self.tool_calls_total.labels(tool=tool, outcome=outcome).inc()

    def record_upstream_latency(self, tool: str, seconds: float) -> None:
        self.upstream_request_seconds.labels(tool=tool).observe(max(0.0, seconds))

    def record_items(self, tool: str, count: int) -> None:
        self.shaped_items.labels(tool=tool).observe(count)

    def export(self) -> bytes:
        """Render the registry in the Prometheus text format"""
        if self.registry is None:
            return generate_latest()
        return generate_latest(self.registry)


_metrics: Optional[ToolCallMetrics] = None


def get_metrics() -> ToolCallMetrics:
    """Return the process-wide metrics bound to the default registry"""
    global _metrics
    if _metrics is None:
        _metrics = ToolCallMetrics()
        logger.debug("Initialized tool call metrics")
    return _metrics
