"""
Guided-analysis prompts

Each prompt renders a user/assistant message pair that walks the client
through a multi-tool workflow with sensible shaping arguments.
"""

import json
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from mcp.types import Prompt, PromptArgument, PromptMessage, TextContent

from quiver_mcp.tools.catalog import DEFAULT_FIELDS
from quiver_mcp.utils.exceptions import ToolValidationError, UnknownIdentifierError

PromptArgs = Mapping[str, str]


@dataclass(frozen=True)
class PromptDefinition:
    name: str
    description: str
    arguments: Tuple[PromptArgument, ...]
    builder: Callable[[PromptArgs], Tuple[str, str]]

    def to_mcp_prompt(self) -> Prompt:
        return Prompt(name=self.name, description=self.description, arguments=list(self.arguments))

    def render(self, arguments: Optional[PromptArgs] = None) -> List[PromptMessage]:
        arguments = dict(arguments or {})
        for arg in self.arguments:
            if arg.required and not arguments.get(arg.name):
                raise ToolValidationError(
                    f"{arg.name} argument is required for prompt {self.name}",
                    {"prompt": self.name, "argument": arg.name},
                )
        user_text, assistant_text = self.builder(arguments)
        return [
            PromptMessage(role="user", content=TextContent(type="text", text=user_text)),
            PromptMessage(role="assistant", content=TextContent(type="text", text=assistant_text)),
        ]


# =============================================================================
# Builders
# =============================================================================

def _congress_trading(args: PromptArgs) -> Tuple[str, str]:
    ticker = args.get("ticker")
    representative = args.get("representative")
    timeframe = args.get("timeframe") or "both recent and historical"

    subject = ""
    if ticker:
        subject += f" for {ticker}"
    if representative:
        subject += f" by {representative}"
    user = (
        f"I want to analyze congressional trading patterns{subject}. "
        f"Please help me conduct a comprehensive analysis using {timeframe} data."
    )

    if ticker:
        history = f'Use `get_historical_congress_trading` with ticker="{ticker}"'
    else:
        history = "Use `get_bulk_congress_trading` with appropriate filters"
    if representative:
        history += f'\n- representative: "{representative}" (bulk endpoint filter)'

    assistant = f"""I'll help you analyze congressional trading patterns. Here's a structured approach:

**Step 1: Recent Activity**
Use `get_recent_congress_trading` with:
- mode: "summary" for an overview, "detailed" for full records
- fields: {json.dumps(list(DEFAULT_FIELDS["congress_trading"]))}
- limit: 50-100 to start with manageable data

**Step 2: Historical Context**
{history}
- mode: "summary" to avoid large responses
- transaction_date_gte / transaction_date_lte to bound the period

**Step 3: Analysis Focus**
- Transaction patterns and timing
- Buy vs sell ratios
- Transaction amounts and frequency
- Correlation with market events

Would you like me to start with recent trading activity?"""
    return user, assistant


def _company_deep_dive(args: PromptArgs) -> Tuple[str, str]:
    ticker = args["ticker"]
    focus_areas = args.get("focus_areas") or "all available data"

    user = (
        f"I want to conduct a comprehensive analysis of {ticker}. "
        f"Please guide me through a deep dive focusing on {focus_areas}."
    )
    assistant = f"""I'll guide you through a comprehensive analysis of {ticker}:

**Step 1: Company Overview**
`get_ticker_data` with ticker: "{ticker}", sections: ["basic", "trading"]

**Step 2: Congressional Activity**
`get_historical_congress_trading` with:
- ticker: "{ticker}"
- fields: ["representative", "transaction_date", "amount", "transaction_type"]

**Step 3: Government Relationships**
`get_historical_gov_contracts` and `get_historical_lobbying` with:
- ticker: "{ticker}"
- mode: "summary" (contracts can be large datasets)

**Step 4: Market Sentiment**
`get_ticker_data` with sections: ["sentiment"] for social sentiment and options flow

**Step 5: Synthesis**
- Compare congressional trading with stock performance
- Relate lobbying spend to contract awards
- Look for timing patterns around major events

Tip: format "table" makes numerical data easier to scan.

Which area would you like to start with?"""
    return user, assistant


def _government_influence(args: PromptArgs) -> Tuple[str, str]:
    sector = args.get("sector")
    timeframe = args.get("timeframe") or "recent data"

    scope = f"in the {sector} sector" if sector else "across all sectors"
    user = f"I want to analyze government influence on markets {scope} using {timeframe}."

    query_line = f'\n- query: "{sector}"' if sector else ""
    assistant = f"""I'll help you analyze government influence on markets:

**Step 1: Government Contracts**
`get_recent_gov_contracts_all` with:
- mode: "summary" (large dataset)
- page_size: 50
- format: "table"{query_line}

**Step 2: Lobbying Activity**
`get_recent_lobbying` with:
- fields: {json.dumps(list(DEFAULT_FIELDS["lobbying"]))}
- page_size: 30{query_line}

**Step 3: Congressional Trading**
`get_recent_congress_trading` with:
- fields: ["ticker", "representative", "amount", "transaction_type"]
- limit: 100

**Step 4: Cross-Reference**
- Companies receiving major contracts
- Congressional trades around contract announcements
- Lobbying spend vs contract awards

Would you like to start with government contracts?"""
    return user, assistant


_DATA_TYPE_FIELDS = {
    "congress": "congress_trading",
    "lobbying": "lobbying",
    "contracts": "gov_contracts",
    "companies": "companies",
    "funds": "funds",
}

_DATA_TYPE_TIPS = {
    "congress": "- Use transaction_date_gte/lte to limit timeframes\n"
                "- Filter by ticker or representative\n"
                "- Start with limit: 100 for recent data, 50 for historical",
    "lobbying": "- Use query to filter by topic or industry\n"
                "- Set page_size: 30 (lobbying records are verbose)\n"
                "- Consider client_name or registrant_name filters",
    "contracts": "- Contract data can be large, always set a limit\n"
                 "- query filters by keyword",
    "ticker_data": "- Use sections: [\"basic\", \"trading\", \"congress\", \"sentiment\", \"contracts\"]\n"
                   "- Start with sections: [\"basic\"] for an overview",
}


def _goal_tip(goal: str) -> str:
    goal = goal.lower()
    if "overview" in goal or "summary" in goal:
        return 'Use mode: "summary" and limit: 20-50 for quick insights'
    if "trend" in goal or "pattern" in goal:
        return 'Focus on date fields with time filters; format: "table" helps spot patterns'
    if "specific" in goal or "detailed" in goal:
        return "Use targeted filters (ticker, representative) and detailed mode only for the final pass"
    return "Start with summary mode and drill down to detailed data as needed"


def _optimize_query(args: PromptArgs) -> Tuple[str, str]:
    data_type = args["data_type"]
    goal = args.get("analysis_goal") or "general analysis"

    family = _DATA_TYPE_FIELDS.get(data_type)
    fields = list(DEFAULT_FIELDS[family]) if family else []
    tips = _DATA_TYPE_TIPS.get(
        data_type,
        "- Apply filters for your data type\n- Start with small limits and increase as needed",
    )
    starting_query = json.dumps({"mode": "summary", "limit": 25, "fields": fields}, indent=2)

    user = (
        f"I want to optimize my queries for {data_type} data. My goal is {goal}. "
        f"How can I reduce token usage while getting the data I need?"
    )
    assistant = f"""Optimization strategies for {data_type} data:

**Response Mode**
- `mode: "summary"`: overview with a 5-item sample
- `mode: "compact"`: single-line JSON string
- `mode: "detailed"`: full data, only when needed

**Field Selection**
- Key fields for {data_type}: {", ".join(fields) if fields else "essential fields only"}

**Pagination and Limits**
- `limit`: cap total results (50 for exploration)
- `page_size`: 20-50 per page
- `page`: process data in batches

**Format**
- `table` for numerical data, `csv` for the most compact output

**Data Type Tips**
{tips}

**Recommended Starting Query**
```json
{starting_query}
```

**For "{goal}"**
{_goal_tip(goal)}"""
    return user, assistant


# =============================================================================
# Catalog
# =============================================================================

PROMPTS: Tuple[PromptDefinition, ...] = (
    PromptDefinition(
        name="analyze-congress-trading",
        description="Guide analysis of congressional trading patterns for a ticker or representative",
        arguments=(
            PromptArgument(name="ticker", description="Stock ticker symbol to analyze", required=False),
            PromptArgument(name="representative", description="Representative name to analyze", required=False),
            PromptArgument(name="timeframe", description="recent, historical, or both", required=False),
        ),
        builder=_congress_trading,
    ),
    PromptDefinition(
        name="company-deep-dive",
        description="Comprehensive analysis workflow for a specific company",
        arguments=(
            PromptArgument(name="ticker", description="Stock ticker symbol to analyze", required=True),
            PromptArgument(
                name="focus_areas",
                description="Areas to focus on: trading, government, lobbying, sentiment",
                required=False,
            ),
        ),
        builder=_company_deep_dive,
    ),
    PromptDefinition(
        name="government-influence-analysis",
        description="Analyze government influence on markets through contracts and lobbying",
        arguments=(
            PromptArgument(name="sector", description="Industry sector to focus on", required=False),
            PromptArgument(name="timeframe", description="Time period for analysis", required=False),
        ),
        builder=_government_influence,
    ),
    PromptDefinition(
        name="optimize-query-strategy",
        description="Guide on shaping queries to reduce token usage",
        arguments=(
            PromptArgument(
                name="data_type",
                description="Type of data being queried (congress, lobbying, contracts, ...)",
                required=True,
            ),
            PromptArgument(name="analysis_goal", description="What the analysis should achieve", required=False),
        ),
        builder=_optimize_query,
    ),
)

_PROMPTS_BY_NAME: Dict[str, PromptDefinition] = {p.name: p for p in PROMPTS}


def get_prompt(name: str, arguments: Optional[PromptArgs] = None) -> List[PromptMessage]:
    """
    Render a prompt by name

    Raises:
        UnknownIdentifierError: no prompt with that name
        ToolValidationError: a required prompt argument is missing
    """
    prompt = _PROMPTS_BY_NAME.get(name)
    if prompt is None:
        raise UnknownIdentifierError("prompt", name)
    return prompt.render(arguments)
