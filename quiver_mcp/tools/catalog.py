"""
QuiverQuant tool catalog

One ``ToolDefinition`` per exposed endpoint. Default limits are sized to
the typical payload of each endpoint family; default field lists only
document the most useful keys and never project data on their own.
"""

from typing import Dict, List, Optional, Tuple

from quiver_mcp.shaping.options import ResponseMode, ToolDefaults
from quiver_mcp.tools.base import ToolDefinition, ToolParameter

# =============================================================================
# Defaults per endpoint family
# =============================================================================

DEFAULT_FIELDS: Dict[str, Tuple[str, ...]] = {
    "companies": ("ticker", "name", "exchange", "market_cap"),
    "funds": ("fund_name", "cik", "total_value", "filing_date"),
    "congress_trading": ("ticker", "representative", "transaction_date", "amount", "transaction_type"),
    "congress_holdings": ("ticker", "representative", "value", "shares"),
    "lobbying": ("client_name", "registrant_name", "amount", "date"),
    "gov_contracts": ("ticker", "amount", "date", "description"),
}

DEFAULT_LIMITS: Dict[str, int] = {
    "companies": 100,
    "funds": 50,
    "congress_trading": 200,
    "congress_holdings": 100,
    "lobbying": 50,
    "gov_contracts": 50,
    "bulk_data": 1000,
}


def _defaults(family: str, limit_key: Optional[str] = None, mode: ResponseMode = ResponseMode.DETAILED) -> ToolDefaults:
    return ToolDefaults(
        mode=mode,
        limit=DEFAULT_LIMITS[limit_key or family],
        fields=DEFAULT_FIELDS.get(family, ()),
    )


# =============================================================================
# Shared parameters
# =============================================================================

TICKER = ToolParameter("ticker", "string", "Stock ticker symbol", required=True)
NORMALIZED = ToolParameter("normalized", "boolean", "Whether to normalize the data")
QUERY = ToolParameter("query", "string", "Free-text query to filter results")
CLIENT_NAME = ToolParameter("client_name", "string", "Client name filter")
REGISTRANT_NAME = ToolParameter("registrant_name", "string", "Registrant name filter")


def build_tool_catalog() -> List[ToolDefinition]:
    """Build the immutable list of exposed tools"""
    return [
        # ---------------------------------------------------------------------
        # Reference data
        # ---------------------------------------------------------------------
        ToolDefinition(
            name="get_companies",
            description="Get list of companies tracked by QuiverQuant.",
            path="/beta/companies",
            defaults=_defaults("companies"),
        ),
        ToolDefinition(
            name="get_funds",
            description="Get fund information from SEC 13F filings.",
            path="/beta/funds",
            defaults=_defaults("funds"),
        ),
        # ---------------------------------------------------------------------
        # Congress
        # ---------------------------------------------------------------------
        ToolDefinition(
            name="get_recent_congress_trading",
            description="Get the most recent stock transactions by members of U.S. Congress.",
            path="/beta/live/congresstrading",
            parameters=(NORMALIZED,),
            defaults=_defaults("congress_trading"),
        ),
        ToolDefinition(
            name="get_congress_holdings",
            description="Get live stock holdings of members of U.S. Congress.",
            path="/beta/live/congressholdings",
            defaults=_defaults("congress_holdings"),
        ),
        ToolDefinition(
            name="get_historical_congress_trading",
            description="Get all stock transactions by members of U.S. Congress for a ticker.",
            path="/beta/historical/congresstrading/{ticker}",
            parameters=(TICKER, NORMALIZED),
            defaults=_defaults("congress_trading"),
        ),
        ToolDefinition(
            name="get_recent_house_trading",
            description="Get the most recent transactions by U.S. Representatives.",
            path="/beta/live/housetrading",
            parameters=(NORMALIZED,),
            defaults=_defaults("congress_trading"),
        ),
        ToolDefinition(
            name="get_recent_senate_trading",
            description="Get the most recent transactions by U.S. Senators.",
            path="/beta/live/senatetrading",
            parameters=(NORMALIZED,),
            defaults=_defaults("congress_trading"),
        ),
        ToolDefinition(
            name="get_historical_house_trading",
            description="Get all stock transactions by U.S. Representatives for a ticker.",
            path="/beta/historical/housetrading/{ticker}",
            parameters=(TICKER,),
            defaults=_defaults("congress_trading"),
        ),
        ToolDefinition(
            name="get_historical_senate_trading",
            description="Get all stock transactions by U.S. Senators for a ticker.",
            path="/beta/historical/senatetrading/{ticker}",
            parameters=(TICKER,),
            defaults=_defaults("congress_trading"),
        ),
        ToolDefinition(
            name="get_bulk_congress_trading",
            description="Get the full history of transactions by members of U.S. Congress. "
                        "Large dataset: narrow it with filters and prefer summary mode first.",
            path="/beta/bulk/congresstrading",
            parameters=(
                ToolParameter("ticker", "string", "Filter by ticker symbol"),
                ToolParameter("representative", "string", "Filter by representative name"),
                ToolParameter("transaction_date_gte", "string", "Transaction date on or after (YYYY-MM-DD)"),
                ToolParameter("transaction_date_lte", "string", "Transaction date on or before (YYYY-MM-DD)"),
                ToolParameter("amount_gte", "number", "Minimum transaction amount"),
                ToolParameter("amount_lte", "number", "Maximum transaction amount"),
                ToolParameter("transaction_type", "string", "Filter by transaction type (Purchase, Sale)"),
            ),
            defaults=_defaults("congress_trading", "bulk_data", mode=ResponseMode.SUMMARY),
            upstream_pagination=True,
        ),
        # ---------------------------------------------------------------------
        # Legislation
        # ---------------------------------------------------------------------
        ToolDefinition(
            name="get_recent_bill_summaries",
            description="Get recent bill summaries.",
            path="/beta/live/bill_summaries",
            parameters=(
                ToolParameter("query", "string", "Query to match a specific issue or summary"),
                ToolParameter("summary_limit", "number", "Maximum length of each bill summary"),
            ),
            upstream_pagination=True,
        ),
        ToolDefinition(
            name="get_recent_legislation",
            description="Get recent legislation data.",
            path="/beta/live/legislation",
        ),
        # ---------------------------------------------------------------------
        # Ticker aggregate
        # ---------------------------------------------------------------------
        ToolDefinition(
            name="get_ticker_data",
            description="Get comprehensive data for one ticker: price, congress activity, "
                        "sentiment, contracts and lobbying. Use sections to keep only what you need.",
            path="/beta/mobile/ticker/{ticker}",
            parameters=(
                TICKER,
                ToolParameter("days", "number", "Number of days of data to retrieve"),
            ),
            supports_sections=True,
        ),
        # ---------------------------------------------------------------------
        # Government contracts
        # ---------------------------------------------------------------------
        ToolDefinition(
            name="get_recent_gov_contracts",
            description="Get last quarter government contract amounts for all companies.",
            path="/beta/live/govcontracts",
            defaults=_defaults("gov_contracts"),
        ),
        ToolDefinition(
            name="get_recent_gov_contracts_all",
            description="Get recently announced government contracts across all companies.",
            path="/beta/live/govcontractsall",
            parameters=(QUERY,),
            defaults=_defaults("gov_contracts"),
            upstream_pagination=True,
        ),
        ToolDefinition(
            name="get_historical_gov_contracts",
            description="Get historical quarterly government contract amounts for a ticker.",
            path="/beta/historical/govcontracts/{ticker}",
            parameters=(TICKER,),
            defaults=_defaults("gov_contracts"),
        ),
        ToolDefinition(
            name="get_historical_gov_contracts_all",
            description="Get all historical government contracts awarded to a ticker.",
            path="/beta/historical/govcontractsall/{ticker}",
            parameters=(TICKER,),
            defaults=_defaults("gov_contracts"),
        ),
        # ---------------------------------------------------------------------
        # Lobbying
        # ---------------------------------------------------------------------
        ToolDefinition(
            name="get_recent_lobbying",
            description="Get the most recent lobbying spending instances across all companies.",
            path="/beta/live/lobbying",
            parameters=(QUERY, CLIENT_NAME, REGISTRANT_NAME),
            defaults=_defaults("lobbying"),
            upstream_pagination=True,
        ),
        ToolDefinition(
            name="get_historical_lobbying",
            description="Get all lobbying spending instances for a ticker.",
            path="/beta/historical/lobbying/{ticker}",
            parameters=(TICKER, QUERY, CLIENT_NAME),
            defaults=_defaults("lobbying"),
            upstream_pagination=True,
        ),
        # ---------------------------------------------------------------------
        # Off-exchange
        # ---------------------------------------------------------------------
        ToolDefinition(
            name="get_live_off_exchange",
            description="Get yesterday's off-exchange (dark pool) activity across all companies.",
            path="/beta/live/offexchange",
            upstream_pagination=True,
        ),
        ToolDefinition(
            name="get_historical_off_exchange",
            description="Get daily historical off-exchange activity for a ticker.",
            path="/beta/historical/offexchange/{ticker}",
            parameters=(TICKER,),
        ),
    ]
