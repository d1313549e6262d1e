"""Tests for tool definitions and the static catalog."""

from __future__ import annotations

import pytest

from quiver_mcp.shaping import SHAPING_ARGUMENT_NAMES, ResponseMode
from quiver_mcp.tools import DEFAULT_LIMITS, ToolDefinition, ToolParameter, build_tool_catalog, parse_sections
from quiver_mcp.utils.exceptions import ToolValidationError

EXPECTED_TOOLS = {
    "get_companies",
    "get_funds",
    "get_recent_congress_trading",
    "get_congress_holdings",
    "get_recent_bill_summaries",
    "get_historical_congress_trading",
    "get_ticker_data",
    "get_recent_house_trading",
    "get_recent_senate_trading",
    "get_recent_gov_contracts",
    "get_recent_gov_contracts_all",
    "get_recent_lobbying",
    "get_recent_legislation",
    "get_live_off_exchange",
    "get_historical_gov_contracts",
    "get_historical_gov_contracts_all",
    "get_historical_house_trading",
    "get_historical_senate_trading",
    "get_historical_lobbying",
    "get_historical_off_exchange",
    "get_bulk_congress_trading",
}


@pytest.fixture
def catalog():
    return {tool.name: tool for tool in build_tool_catalog()}


class TestCatalog:
    def test_tool_names(self, catalog):
        assert set(catalog) == EXPECTED_TOOLS
        assert len(build_tool_catalog()) == 21

    def test_every_schema_carries_common_arguments(self, catalog):
        for tool in catalog.values():
            properties = tool.input_schema["properties"]
            assert set(SHAPING_ARGUMENT_NAMES) <= set(properties), tool.name

    def test_ticker_tools_require_ticker(self, catalog):
        for tool in catalog.values():
            if "{ticker}" in tool.path:
                assert tool.input_schema["required"] == ["ticker"], tool.name
            else:
                assert tool.input_schema["required"] == [], tool.name

    def test_default_limits(self, catalog):
        assert catalog["get_companies"].defaults.limit == DEFAULT_LIMITS["companies"] == 100
        assert catalog["get_funds"].defaults.limit == 50
        assert catalog["get_recent_congress_trading"].defaults.limit == 200
        assert catalog["get_congress_holdings"].defaults.limit == 100
        assert catalog["get_recent_lobbying"].defaults.limit == 50
        assert catalog["get_recent_gov_contracts"].defaults.limit == 50
        assert catalog["get_bulk_congress_trading"].defaults.limit == 1000

    def test_bulk_defaults_to_summary(self, catalog):
        assert catalog["get_bulk_congress_trading"].defaults.mode is ResponseMode.SUMMARY

    def test_only_ticker_data_supports_sections(self, catalog):
        with_sections = [t.name for t in catalog.values() if t.supports_sections]
        assert with_sections == ["get_ticker_data"]
        assert "sections" in catalog["get_ticker_data"].input_schema["properties"]

    def test_description_mentions_default_limit(self, catalog):
        assert "Default limit: 100 items." in catalog["get_companies"].full_description()

    def test_mcp_tool_conversion(self, catalog):
        tool = catalog["get_historical_lobbying"].to_mcp_tool()
        assert tool.name == "get_historical_lobbying"
        assert tool.inputSchema["properties"]["client_name"]["type"] == "string"


class TestBuildRequest:
    def test_path_placeholder_is_filled_and_quoted(self, catalog):
        path, params = catalog["get_historical_congress_trading"].build_request({"ticker": "BRK/B"})
        assert path == "/beta/historical/congresstrading/BRK%2FB"
        assert params == {}

    def test_declared_filters_are_forwarded(self, catalog):
        path, params = catalog["get_recent_lobbying"].build_request(
            {"query": "defense", "client_name": "Lockheed", "mode": "summary", "fields": ["amount"], "junk": 1}
        )
        assert path == "/beta/live/lobbying"
        assert params == {"query": "defense", "client_name": "Lockheed"}

    def test_upstream_pagination_forwards_page(self, catalog):
        _, params = catalog["get_recent_bill_summaries"].build_request({"page": 2, "page_size": 10})
        assert params == {"page": 2, "page_size": 10}

    def test_local_pagination_does_not_forward_page(self, catalog):
        _, params = catalog["get_companies"].build_request({"page": 2, "page_size": 10, "limit": 5})
        assert params == {}

    def test_missing_ticker_raises(self, catalog):
        with pytest.raises(ToolValidationError, match="ticker parameter is required"):
            catalog["get_ticker_data"].build_request({})

    def test_blank_ticker_raises(self, catalog):
        with pytest.raises(ToolValidationError):
            catalog["get_historical_lobbying"].build_request({"ticker": "  "})

    def test_bulk_ticker_is_an_optional_filter(self, catalog):
        path, params = catalog["get_bulk_congress_trading"].build_request({"ticker": "NVDA"})
        assert path == "/beta/bulk/congresstrading"
        assert params == {"ticker": "NVDA"}


def test_custom_definition_schema():
    tool = ToolDefinition(
        name="get_thing",
        description="Thing.",
        path="/beta/thing/{id}",
        parameters=(ToolParameter("id", "string", "Thing id", required=True),),
    )
    assert tool.path_parameters == ["id"]
    assert tool.query_parameters == []
    assert tool.input_schema["required"] == ["id"]


def test_parse_sections():
    assert parse_sections(None) is None
    assert parse_sections("basic, trading") == ["basic", "trading"]
    assert parse_sections(["congress"]) == ["congress"]
    with pytest.raises(ToolValidationError):
        parse_sections(5)
