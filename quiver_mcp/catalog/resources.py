"""
Markdown documentation resources

Static guides plus a field reference generated from the tool catalog, so
the documented defaults can never drift from the ones actually applied.
"""

import json
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple

from mcp.types import Resource

from quiver_mcp.catalog.instructions import SERVER_INSTRUCTIONS
from quiver_mcp.shaping.sections import SECTION_DESCRIPTIONS, SECTION_MAP
from quiver_mcp.tools.base import ToolDefinition
from quiver_mcp.tools.catalog import build_tool_catalog
from quiver_mcp.utils.exceptions import UnknownIdentifierError

MARKDOWN = "text/markdown"


@dataclass(frozen=True)
class ResourceDefinition:
    uri: str
    name: str
    description: str
    builder: Callable[[Sequence[ToolDefinition]], str]
    mime_type: str = MARKDOWN

    def to_mcp_resource(self) -> Resource:
        return Resource(
            uri=self.uri,
            name=self.name,
            description=self.description,
            mimeType=self.mime_type,
        )


# =============================================================================
# Content builders
# =============================================================================

def _instructions(_tools: Sequence[ToolDefinition]) -> str:
    return SERVER_INSTRUCTIONS


def _optimization_guide(_tools: Sequence[ToolDefinition]) -> str:
    return """# Token Optimization Guide

## Quick Checklist
1. **Pick a mode**: `summary` to explore, `compact` to process, `detailed` only when needed
2. **Select fields**: `fields: ["ticker", "amount"]` drops every other key
3. **Cap results**: `limit: 50` for exploration
4. **Pick a format**: `table` for reading numbers, `csv` for the smallest output

## Large Datasets
Congress trading and bulk data can return thousands of rows:
- start with `mode: "summary"` to learn the size and field names
- narrow `get_bulk_congress_trading` with `transaction_date_gte`, `ticker` or `representative`
- then page through with `page` and `page_size`

## Progressive Analysis
1. Exploration: summary mode, limit 25-50
2. Investigation: selected fields, table format
3. Deep dive: detailed mode on a narrow slice

## Common Pitfalls
- Asking for `detailed` on a bulk endpoint without a limit
- Repeating a query without `fields` when only two columns matter
- Forgetting that tool default limits truncate silently
"""


def _field_reference(tools: Sequence[ToolDefinition]) -> str:
    lines = ["# Field Reference", "", "## Tools", ""]
    lines.append("| Tool | Default limit | Key fields |")
    lines.append("| --- | --- | --- |")
    for tool in tools:
        limit = str(tool.defaults.limit) if tool.defaults.limit is not None else "none"
        fields = ", ".join(tool.defaults.fields) if tool.defaults.fields else "all"
        lines.append(f"| `{tool.name}` | {limit} | {fields} |")

    lines += ["", "## Ticker Data Sections (`get_ticker_data`)", ""]
    for name, keys in SECTION_MAP.items():
        lines.append(f"### {name}")
        lines.append(SECTION_DESCRIPTIONS[name])
        lines.append("")
        lines.append("Keys: " + ", ".join(sorted(keys)))
        lines.append("")

    lines += [
        "## Notes",
        "- Key fields are documentation only; pass `fields` to project",
        "- A record that has none of the requested fields is returned whole",
        "- `fields` accepts a list or a comma-separated string",
    ]
    return "\n".join(lines) + "\n"


def _congress_examples(_tools: Sequence[ToolDefinition]) -> str:
    example = json.dumps
    return f"""# Congressional Trading Analysis Examples

## Recent Activity Overview
`get_recent_congress_trading`
```json
{example({"mode": "summary", "limit": 100})}
```

## One Representative
`get_bulk_congress_trading`
```json
{example({"representative": "Pelosi", "mode": "detailed", "format": "table",
          "fields": ["ticker", "transaction_date", "amount", "transaction_type"]})}
```

## All Congressional Interest in One Stock
`get_historical_congress_trading`
```json
{example({"ticker": "NVDA", "fields": ["representative", "transaction_date", "amount"]})}
```

## Large-Scale Pattern Search
`get_bulk_congress_trading`
```json
{example({"transaction_date_gte": "2024-01-01", "amount_gte": 100000,
          "mode": "summary", "page_size": 100})}
```

## Workflow
1. Exploration: summary mode over recent trades
2. Investigation: filter by ticker or representative, table format
3. Deep dive: detailed records for the handful of trades that matter
"""


def _company_examples(_tools: Sequence[ToolDefinition]) -> str:
    example = json.dumps
    return f"""# Company Research Examples

## Quick Overview
`get_ticker_data`
```json
{example({"ticker": "AAPL", "sections": ["basic", "trading"]})}
```

## Government Relationships
1. `get_historical_gov_contracts` {example({"ticker": "LMT", "mode": "summary"})}
2. `get_historical_lobbying` {example({"ticker": "LMT", "page_size": 30})}
3. `get_historical_congress_trading` {example({"ticker": "LMT", "format": "table"})}

## Sentiment Check
`get_ticker_data`
```json
{example({"ticker": "TSLA", "sections": ["sentiment"]})}
```

## Comparing Companies
Run the same shaped query per ticker, e.g.
`get_historical_gov_contracts` with `fields: ["amount", "date"]` and
`format: "csv"`, then compare side by side.
"""


def _response_modes(_tools: Sequence[ToolDefinition]) -> str:
    sample = [{"ticker": "AAPL", "amount": 15000}, {"ticker": "MSFT", "amount": 50000}]
    summary = {"type": "array", "count": 2, "sample": sample, "fields": ["ticker", "amount"]}
    return f"""# Response Modes Reference

| Mode | Output | Use for |
| --- | --- | --- |
| detailed | the data unchanged | final analysis |
| summary | count, first 5 items, field names | exploring large datasets |
| compact | one-line JSON string | machine processing |

## Detailed
```json
{json.dumps(sample, indent=2)}
```

## Summary
```json
{json.dumps(summary, indent=2)}
```
A single object becomes `{{"type": "object", "preview": ...}}`.

## Compact
```
{json.dumps(sample, separators=(",", ":"))}
```

## Combining with Format
Mode is applied before format: `mode: "summary"` with `format: "table"`
renders the summary object as a one-row table. `compact` has no effect on
`table` and `csv` output.

## Metadata
Every successful call also returns
`{{"summary": {{"total_items", "fields_included", "mode", "format"}}}}`, plus a
`pagination` block when `page`, `page_size` or `limit` was passed.
"""


# =============================================================================
# Catalog
# =============================================================================

RESOURCES: Tuple[ResourceDefinition, ...] = (
    ResourceDefinition(
        uri="quiver://server/instructions",
        name="Server Usage Instructions",
        description="Guide for using the Quiver financial data server effectively",
        builder=_instructions,
    ),
    ResourceDefinition(
        uri="quiver://docs/optimization-guide",
        name="Token Optimization Guide",
        description="Best practices for reducing token usage while keeping data quality",
        builder=_optimization_guide,
    ),
    ResourceDefinition(
        uri="quiver://docs/field-reference",
        name="Field Reference Guide",
        description="Default limits and key fields for each tool",
        builder=_field_reference,
    ),
    ResourceDefinition(
        uri="quiver://examples/congress-analysis",
        name="Congressional Trading Analysis Examples",
        description="Example queries and workflows for congressional trading",
        builder=_congress_examples,
    ),
    ResourceDefinition(
        uri="quiver://examples/company-research",
        name="Company Research Examples",
        description="Step-by-step examples for company analysis",
        builder=_company_examples,
    ),
    ResourceDefinition(
        uri="quiver://reference/response-modes",
        name="Response Modes Reference",
        description="How the summary, compact and detailed modes shape output",
        builder=_response_modes,
    ),
)

_RESOURCES_BY_URI: Dict[str, ResourceDefinition] = {r.uri: r for r in RESOURCES}


def get_resource(uri: str) -> ResourceDefinition:
    """
    Raises:
        UnknownIdentifierError: no resource with that URI
    """
    resource = _RESOURCES_BY_URI.get(str(uri))
    if resource is None:
        raise UnknownIdentifierError("resource", str(uri))
    return resource


def read_resource(uri: str, tools: Optional[Sequence[ToolDefinition]] = None) -> str:
    """Render a resource's Markdown content"""
    resource = get_resource(uri)
    return resource.builder(tools if tools is not None else build_tool_catalog())
