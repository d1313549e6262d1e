"""
Tool Registry - executes catalog entries

Stateless single-shot pipeline per call:

    validate -> call upstream -> (optional) section-select -> shape
"""

import time
from dataclasses import replace
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional

from quiver_mcp.infrastructure.metrics import (
    OUTCOME_SUCCESS,
    OUTCOME_UPSTREAM_ERROR,
    OUTCOME_VALIDATION_ERROR,
    ToolCallMetrics,
)
from quiver_mcp.infrastructure.quiver_client import QuiverClient
from quiver_mcp.observability.logging import LogContext, LogModule, get_module_logger
from quiver_mcp.shaping import ShapingOptions, select_sections, shape
from quiver_mcp.tools.base import (
    ToolDefinition,
    ToolFailure,
    ToolResult,
    ToolSuccess,
    parse_sections,
)
from quiver_mcp.utils.exceptions import ToolValidationError, UnknownIdentifierError

logger = get_module_logger(LogModule.TOOLS)


class ToolRegistry:
    """Immutable name -> ToolDefinition table bound to one upstream client"""

    def __init__(
        self,
        client: QuiverClient,
        tools: Iterable[ToolDefinition],
        metrics: Optional[ToolCallMetrics] = None,
    ):
        table: Dict[str, ToolDefinition] = {}
        for tool in tools:
            if tool.name in table:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            table[tool.name] = tool
        self._tools = MappingProxyType(table)
        self._client = client
        self._metrics = metrics

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    @property
    def tools(self) -> List[ToolDefinition]:
        return list(self._tools.values())

    def get(self, name: str) -> ToolDefinition:
        """
        Raises:
            UnknownIdentifierError: no tool with that name
        """
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownIdentifierError("tool", name)
        return tool

    async def aclose(self) -> None:
        await self._client.aclose()

    def _record(self, tool: str, outcome: str) -> None:
        if self._metrics is not None:
            self._metrics.record_call(tool, outcome)

    async def call(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        """
        Execute one tool call

        Upstream failures come back as ``ToolFailure``; only bad input
        raises.

        Raises:
            UnknownIdentifierError: unknown tool name
            ToolValidationError: missing required parameter or bad option
        """
        tool = self.get(name)
        arguments = dict(arguments or {})

        with LogContext(tool=name, ticker=arguments.get("ticker")):
            try:
                path, params = tool.build_request(arguments)
                options = ShapingOptions.from_arguments(arguments, tool.defaults)
                sections = parse_sections(arguments.get("sections")) if tool.supports_sections else None
            except ToolValidationError as e:
                logger.warning(f"Rejected call to {name}: {e.message}")
                self._record(name, OUTCOME_VALIDATION_ERROR)
                raise

            if tool.upstream_pagination:
                # The upstream already returned the requested page
                options = options.without_pagination()

            started = time.perf_counter()
            response = await self._client.request(path, params=params)
            if self._metrics is not None:
                self._metrics.record_upstream_latency(name, time.perf_counter() - started)

            if response.is_error:
                logger.warning(f"Upstream error for {name}: {response.status} {response.error}")
                self._record(name, OUTCOME_UPSTREAM_ERROR)
                return ToolFailure(error=response.error, status=response.status)

            if sections is not None:
                response = replace(response, data=select_sections(response.data, sections))

            shaped = shape(response, options)
            self._record(name, OUTCOME_SUCCESS)
            if self._metrics is not None and shaped.summary is not None:
                self._metrics.record_items(name, shaped.summary.total_items)
            logger.info(
                f"Tool {name} returned {shaped.summary.total_items if shaped.summary else 0} items "
                f"(mode={options.mode.value}, format={options.format.value})"
            )
            return ToolSuccess(response=shaped)


__all__ = ["ToolRegistry"]
