"""Usage guide advertised to clients at MCP initialization."""

SERVER_INSTRUCTIONS = """# Quiver Financial Data Server - Usage Guide

## Overview
This server exposes QuiverQuant alternative financial data: congressional
trading, government contracts, lobbying, legislation, off-exchange activity
and per-ticker aggregates. Every tool shares the same response shaping
arguments so large datasets can be kept small.

## Response Shaping (every tool)
- `mode`: `summary` (count, 5-item sample, field names), `compact`
  (single-line JSON string) or `detailed` (full data, the default)
- `format`: `json` (default), `table` (Markdown) or `csv`
- `fields`: only keep these keys on each record, e.g.
  `["ticker", "representative", "amount"]`
- `limit`: cap the number of records before pagination
- `page` / `page_size`: 1-based page and page size (default 50)

Tools have default limits sized to their endpoint (congress trading 200,
companies 100, lobbying 50, bulk data 1000). Default limits truncate
silently; pass `limit` yourself to get pagination metadata back.

## Search Strategy
The `query` parameter uses partial text matching:
- search distinctive keywords ("Infrastructure"), not full bill titles
- use last names for representatives ("Pelosi")
- use common company names or tickers ("Apple", "AAPL")
If a search returns nothing, shorten it and drop formal prefixes
(Rep., Sen., H.R.).

## Core Workflows
### Congressional trading
1. `get_recent_congress_trading` (mode summary) for the overall picture
2. `get_recent_house_trading` / `get_recent_senate_trading` per chamber
3. `get_historical_congress_trading` for one ticker
4. `get_bulk_congress_trading` with date and amount filters for full history

### Government influence
1. `get_recent_gov_contracts_all` with a `query` for a sector
2. `get_recent_lobbying` filtered by `client_name` or `query`
3. cross-reference with congressional trades on the same tickers

### Company research
1. `get_ticker_data` with `sections: ["basic", "trading"]`
2. `get_historical_gov_contracts` and `get_historical_lobbying`
3. `get_historical_off_exchange` for dark pool context

## Data Considerations
- Congressional trades are disclosed with up to a 45-day delay
- Lobbying data follows quarterly reporting
- Upstream errors are returned as `Error: <message> (Status: <code>)`

## Prompts and Resources
Prompts: `analyze-congress-trading`, `company-deep-dive`,
`government-influence-analysis`, `optimize-query-strategy`.
Resources under `quiver://` document response modes, field names and
worked examples.
"""
